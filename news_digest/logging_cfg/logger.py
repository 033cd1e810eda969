import logging
import os
import sys
from concurrent_log_handler import ConcurrentRotatingFileHandler
from datetime import datetime
from typing import Dict, Any
from dateutil import tz as dateutil_tz
from news_digest.config.settings import SYSTEM_SETTINGS

# Email dates and log timestamps are shown in Portuguese local time
LISBON = dateutil_tz.gettz(SYSTEM_SETTINGS.get("timezone", "Europe/Lisbon"))

def _default_metrics() -> Dict[str, Any]:
    return {
        'sources_checked': 0,
        'successful_sources': 0,
        'failed_sources': [],
        'empty_sources': [],
        'total_articles': 0,
        'games_fetched': 0,
        'boxscore_failures': [],
        'processing_time': 0,
    }

# Metrics for the current run
FETCH_METRICS = _default_metrics()

def update_metrics(metric_name: str, value: Any) -> None:
    """Update the metrics dictionary with a new value."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        if metric_name not in FETCH_METRICS:
            FETCH_METRICS[metric_name] = 0
        FETCH_METRICS[metric_name] += value
    elif isinstance(value, (list, set)):
        if metric_name not in FETCH_METRICS:
            FETCH_METRICS[metric_name] = []
        FETCH_METRICS[metric_name].extend(value)
    elif isinstance(value, dict):
        if metric_name not in FETCH_METRICS:
            FETCH_METRICS[metric_name] = {}
        FETCH_METRICS[metric_name].update(value)
    else:
        FETCH_METRICS[metric_name] = value

def get_metrics() -> Dict:
    """Get the current metrics."""
    return FETCH_METRICS

def reset_metrics() -> None:
    """Reset all metrics to their default values."""
    FETCH_METRICS.clear()
    FETCH_METRICS.update(_default_metrics())

def print_metrics_summary() -> str:
    """Build a summary of the metrics from the current run."""
    stats = []

    stats.append("📊 Digest Run Summary:")
    stats.append(f"├─ Sources checked: {FETCH_METRICS['sources_checked']}")
    stats.append(f"├─ Successful sources: {FETCH_METRICS['successful_sources']}")
    stats.append(f"├─ Total articles: {FETCH_METRICS['total_articles']}")
    stats.append(f"├─ NBA games: {FETCH_METRICS['games_fetched']}")
    stats.append(f"└─ Processing time: {FETCH_METRICS['processing_time']:.2f}s")

    if FETCH_METRICS['failed_sources']:
        stats.append(f"\n❌ Failed Sources ({len(FETCH_METRICS['failed_sources'])}):")
        for source in FETCH_METRICS['failed_sources']:
            stats.append(f"├─ {source}")

    if FETCH_METRICS['empty_sources']:
        stats.append(f"\n⚠️ Empty Sources: {', '.join(FETCH_METRICS['empty_sources'])}")

    if FETCH_METRICS['boxscore_failures']:
        stats.append(f"\n🏀 Box score failures: {', '.join(FETCH_METRICS['boxscore_failures'])}")

    return "\n".join(stats)

def setup_logger(name='news_digest', level=None):
    """
    Set up and configure the logger with both console and file handlers.

    Args:
        name (str): Logger name
        level (str): Log level (DEBUG, INFO, WARNING, ERROR)

    Returns:
        logging.Logger: Configured logger instance
    """
    log_dir = SYSTEM_SETTINGS.get('log_dir', 'logs')
    os.makedirs(log_dir, exist_ok=True)

    logger = logging.getLogger(name)

    # Avoid duplicate handlers if logger was already set up
    if logger.handlers:
        return logger

    if level is None:
        level = SYSTEM_SETTINGS.get('log_level', logging.INFO)
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logger.setLevel(level)

    class TimeZoneFormatter(logging.Formatter):
        def converter(self, timestamp):
            dt = datetime.fromtimestamp(timestamp, dateutil_tz.UTC)
            return dt.astimezone(LISBON)

        def formatTime(self, record, datefmt=None):
            dt = self.converter(record.created)
            if datefmt:
                return dt.strftime(datefmt)
            return dt.strftime('%Y-%m-%d %H:%M:%S,') + f"{dt.microsecond // 1000:03d} " + dt.strftime('%Z')

    formatter = TimeZoneFormatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # One rotating file per day
    today = datetime.now(LISBON).strftime('%Y%m%d')
    log_filename = os.path.join(log_dir, f'digest_{today}.log')

    # ConcurrentRotatingFileHandler tolerates the thread pool writing at once
    file_handler = ConcurrentRotatingFileHandler(
        log_filename,
        maxBytes=10*1024*1024,  # 10MB
        backupCount=5,
        encoding='utf-8'
    )
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    return logger
