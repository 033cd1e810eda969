"""News site scrapers."""
from news_digest.scrapers.accumulator import ArticleAccumulator
from news_digest.scrapers.base import scrape_source, extract_articles
from news_digest.scrapers.http import create_session
from news_digest.scrapers.sources import (
    scrape_expresso,
    scrape_publico,
    scrape_zerozero,
    scrape_guardian,
    scrape_observador,
    scrape_nyt,
    get_enabled_scrapers,
)

__all__ = [
    'ArticleAccumulator',
    'scrape_source',
    'extract_articles',
    'create_session',
    'scrape_expresso',
    'scrape_publico',
    'scrape_zerozero',
    'scrape_guardian',
    'scrape_observador',
    'scrape_nyt',
    'get_enabled_scrapers',
]
