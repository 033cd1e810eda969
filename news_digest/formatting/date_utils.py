"""Date handling utilities."""
from datetime import datetime
from typing import Optional
from dateutil import tz as dateutil_tz
from news_digest.config.settings import SYSTEM_SETTINGS
from news_digest.core.constants import PT_MONTHS, PT_WEEKDAYS

# Email dates are shown in Portuguese local time
LISBON = dateutil_tz.gettz(SYSTEM_SETTINGS.get("timezone", "Europe/Lisbon"))

def to_lisbon(now: Optional[datetime] = None) -> datetime:
    """Convert to Lisbon time; naive datetimes are taken as UTC."""
    if now is None:
        return datetime.now(LISBON)
    if now.tzinfo is None:
        now = now.replace(tzinfo=dateutil_tz.UTC)
    return now.astimezone(LISBON)

def format_pt_long_date(now: Optional[datetime] = None) -> str:
    """e.g. 'sábado, 18 de outubro de 2026 às 07:05'"""
    local = to_lisbon(now)
    weekday = PT_WEEKDAYS[local.weekday()]
    month = PT_MONTHS[local.month - 1]
    return f"{weekday}, {local.day} de {month} de {local.year} às {local:%H:%M}"

def format_short_date(now: Optional[datetime] = None) -> str:
    """Day and month as dd/mm, used in the subject line."""
    return to_lisbon(now).strftime('%d/%m')
