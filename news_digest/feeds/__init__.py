"""Digest collection across all sources."""
from news_digest.feeds.fetcher import scrape_all_sources, run_digest

__all__ = [
    'scrape_all_sources',
    'run_digest',
]
