"""Named entry points for each configured news source."""
from typing import Callable, List, Tuple
from news_digest.config.settings import NEWS_SOURCES, SOURCE_SETTINGS
from news_digest.core.types import SourceDigest
from news_digest.scrapers.base import scrape_source

def scrape_expresso(session=None) -> SourceDigest:
    return scrape_source(NEWS_SOURCES['expresso'], session=session)

def scrape_publico(session=None) -> SourceDigest:
    return scrape_source(NEWS_SOURCES['publico'], session=session)

def scrape_zerozero(session=None) -> SourceDigest:
    return scrape_source(NEWS_SOURCES['zerozero'], session=session)

def scrape_guardian(session=None) -> SourceDigest:
    return scrape_source(NEWS_SOURCES['guardian'], session=session)

def scrape_observador(session=None) -> SourceDigest:
    return scrape_source(NEWS_SOURCES['observador'], session=session)

def scrape_nyt(session=None) -> SourceDigest:
    return scrape_source(NEWS_SOURCES['nyt'], session=session)

SCRAPERS = {
    'expresso': scrape_expresso,
    'publico': scrape_publico,
    'zerozero': scrape_zerozero,
    'guardian': scrape_guardian,
    'observador': scrape_observador,
    'nyt': scrape_nyt,
}

def get_enabled_scrapers() -> List[Tuple[str, Callable[..., SourceDigest]]]:
    """(name, scraper) pairs for the sources switched on in SOURCE_SETTINGS, in config order."""
    return [
        (NEWS_SOURCES[key]['name'], SCRAPERS[key])
        for key, enabled in SOURCE_SETTINGS.items()
        if enabled and key in SCRAPERS
    ]
