"""Root package exports."""
from news_digest.core.types import Article, SourceDigest, NBAScores
from news_digest.feeds import scrape_all_sources, run_digest
from news_digest.scrapers import scrape_source, get_enabled_scrapers
from news_digest.sports import fetch_nba_scores, is_morning_digest
from news_digest.formatting import (
    normalize_text,
    escape_html,
    build_digest_html,
    build_digest_text
)
from news_digest.email.sender import send_digest_email, EmailConfigurationError

__all__ = [
    'Article',
    'SourceDigest',
    'NBAScores',
    'scrape_all_sources',
    'run_digest',
    'scrape_source',
    'get_enabled_scrapers',
    'fetch_nba_scores',
    'is_morning_digest',
    'normalize_text',
    'escape_html',
    'build_digest_html',
    'build_digest_text',
    'send_digest_email',
    'EmailConfigurationError'
]
