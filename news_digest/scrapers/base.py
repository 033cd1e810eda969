import time
from datetime import datetime, timezone
from typing import Optional
import requests
from bs4 import BeautifulSoup
from news_digest.core.types import SourceConfig, SourceDigest
from news_digest.logging_cfg.logger import setup_logger, update_metrics
from news_digest.scrapers.accumulator import ArticleAccumulator
from news_digest.scrapers.http import create_session, fetch_html
from news_digest.scrapers.strategies import STRATEGIES

logger = setup_logger()

def _digest(source: SourceConfig, articles, error: Optional[str] = None) -> SourceDigest:
    return {
        'source': source.get('name', source.get('key', '')),
        'source_url': source.get('url', ''),
        'articles': articles,
        'scraped_at': datetime.now(timezone.utc),
        'error': error,
    }

def extract_articles(soup: BeautifulSoup, source: SourceConfig, strategies=None):
    """Run the extraction cascade over a parsed page and return the accepted articles."""
    accumulator = ArticleAccumulator(source)
    for strategy in strategies or STRATEGIES:
        if accumulator.is_full:
            break
        for candidate in strategy(soup, source):
            accumulator.offer(candidate)
            if accumulator.is_full:
                break
        logger.debug(f"[{source.get('name')}] {strategy.__name__}: {len(accumulator.articles)} articles so far")
    return accumulator.articles

def scrape_source(source: SourceConfig, session=None, timeout=None) -> SourceDigest:
    """
    Scrape one news landing page into a SourceDigest.

    Never raises: network, HTTP and parse failures are logged and reported
    in the digest's error field with an empty article list.

    Args:
        source: Source configuration from NEWS_SOURCES
        session: Optional requests session, one is created when omitted
        timeout: Request timeout in seconds

    Returns:
        SourceDigest with the articles in extraction order
    """
    name = source.get('name', source.get('key', 'unknown'))
    start_time = time.time()
    logger.info(f"Scraping {name}: {source.get('url')}")

    owns_session = session is None
    if owns_session:
        session = create_session(source.get('accept_language'))

    try:
        html = fetch_html(session, source['url'], timeout=timeout, encoding=source.get('encoding'))
        soup = BeautifulSoup(html, 'html.parser')
        articles = extract_articles(soup, source)
    except requests.Timeout as e:
        logger.error(f"Timeout scraping {name}: {e}")
        update_metrics('failed_sources', [name])
        return _digest(source, [], str(e) or 'Timeout')
    except requests.RequestException as e:
        logger.error(f"Request error scraping {name}: {e}")
        update_metrics('failed_sources', [name])
        return _digest(source, [], str(e) or e.__class__.__name__)
    except Exception as e:
        logger.error(f"Error parsing {name}: {e}", exc_info=True)
        update_metrics('failed_sources', [name])
        return _digest(source, [], str(e) or e.__class__.__name__)
    finally:
        if owns_session:
            session.close()

    elapsed = time.time() - start_time
    logger.info(f"✓ {name}: {len(articles)} articles in {elapsed:.2f}s")
    return _digest(source, articles)
