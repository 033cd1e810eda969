"""Digest email composition: headline selection, subject and bodies."""
from datetime import datetime
from typing import Any, Dict, List, Optional
from news_digest.config.settings import EMAIL_SETTINGS
from news_digest.core.constants import TOP_HEADLINES_COUNT
from news_digest.core.types import Article, NBAScores, SourceDigest
from news_digest.formatting.date_utils import format_pt_long_date, format_short_date, to_lisbon
from news_digest.formatting.template_renderer import render_template
from news_digest.logging_cfg.logger import setup_logger

logger = setup_logger()

DEFAULT_SUBJECT_TITLE = 'Your news digest is ready'
FOOTER_NOTE = 'Este digest é gerado automaticamente 4 vezes por dia.'

def get_top_headlines(digests: List[SourceDigest], count: int = TOP_HEADLINES_COUNT) -> List[Article]:
    """Highest-priority articles across all sources, each tagged with its source."""
    all_articles = [
        {**article, 'source': digest['source']}
        for digest in digests
        for article in digest['articles']
    ]
    # sorted() is stable, so equal priorities keep source order
    return sorted(all_articles, key=lambda a: a['priority'], reverse=True)[:count]

def get_time_of_day(hour: int) -> str:
    if 6 <= hour < 12:
        return 'Manhã'
    if 12 <= hour < 14:
        return 'Meio-dia'
    if 14 <= hour < 19:
        return 'Tarde'
    return 'Noite'

def build_subject(digests: List[SourceDigest], now: Optional[datetime] = None) -> str:
    """e.g. '📰 Manhã (18/10): <top headline>'"""
    local = to_lisbon(now)
    top = get_top_headlines(digests, 1)
    title = top[0]['title'] if top else DEFAULT_SUBJECT_TITLE

    limit = EMAIL_SETTINGS.get('subject_title_length', 60)
    if len(title) > limit:
        title = title[:limit] + '...'

    return f"📰 {get_time_of_day(local.hour)} ({format_short_date(local)}): {title}"

def _context(digests: List[SourceDigest], nba_scores: Optional[NBAScores], now: Optional[datetime]) -> Dict[str, Any]:
    return {
        'digests': digests,
        'top_headlines': get_top_headlines(digests, EMAIL_SETTINGS.get('top_headlines', TOP_HEADLINES_COUNT)),
        'nba': nba_scores,
        'date': format_pt_long_date(now),
        'sources': [d['source'] for d in digests],
        'footer_note': FOOTER_NOTE,
    }

def build_digest_html(digests: List[SourceDigest], nba_scores: Optional[NBAScores] = None,
                      now: Optional[datetime] = None) -> str:
    html = render_template('digest.html', _context(digests, nba_scores, now))
    logger.debug(f"Rendered HTML digest ({len(html)} chars)")
    return html

def build_digest_text(digests: List[SourceDigest], nba_scores: Optional[NBAScores] = None,
                      now: Optional[datetime] = None) -> str:
    return render_template('digest.txt', _context(digests, nba_scores, now))
