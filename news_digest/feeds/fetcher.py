import concurrent.futures
import time
from datetime import datetime, timezone
from typing import Callable, List, Optional, Tuple
from news_digest.config.settings import SYSTEM_SETTINGS
from news_digest.core.types import NBAScores, SourceDigest
from news_digest.logging_cfg.logger import setup_logger, update_metrics, get_metrics
from news_digest.scrapers.sources import get_enabled_scrapers
from news_digest.sports.nba import fetch_nba_scores, is_morning_digest

logger = setup_logger()

ScraperEntry = Tuple[str, Callable[[], SourceDigest]]

def _error_digest(name: str, error: Exception) -> SourceDigest:
    return {
        'source': name,
        'source_url': '',
        'articles': [],
        'scraped_at': datetime.now(timezone.utc),
        'error': str(error) or error.__class__.__name__,
    }

def _run_scraper(name: str, scraper: Callable[[], SourceDigest]) -> SourceDigest:
    """Call a scraper, turning anything it raises into an error digest."""
    try:
        return scraper()
    except Exception as e:
        logger.error(f"Scraper {name} raised: {e}", exc_info=True)
        update_metrics('failed_sources', [name])
        return _error_digest(name, e)

def _record(digest: SourceDigest) -> None:
    update_metrics('sources_checked', 1)
    count = len(digest['articles'])
    if digest['error']:
        logger.warning(f"✗ {digest['source']}: {digest['error']}")
        return
    update_metrics('successful_sources', 1)
    update_metrics('total_articles', count)
    if count == 0:
        logger.warning(f"⚠️ {digest['source']}: no articles found")
        update_metrics('empty_sources', [digest['source']])

def scrape_all_sources(scrapers: Optional[List[ScraperEntry]] = None,
                       parallel: Optional[bool] = None,
                       max_workers: Optional[int] = None) -> List[SourceDigest]:
    """
    Run every enabled scraper and collect one digest per source.

    Args:
        scrapers: (name, callable) pairs, defaults to get_enabled_scrapers()
        parallel: Use a thread pool, defaults to SYSTEM_SETTINGS['parallel_scraping']
        max_workers: Pool size, defaults to SYSTEM_SETTINGS['max_parallel_workers']

    Returns:
        Digests in the same order as the scrapers, whatever order they finish in
    """
    if scrapers is None:
        scrapers = get_enabled_scrapers()
    if parallel is None:
        parallel = SYSTEM_SETTINGS.get('parallel_scraping', False)

    if not parallel or len(scrapers) < 2:
        digests = []
        for name, scraper in scrapers:
            logger.info(f"Scraping {name}...")
            digests.append(_run_scraper(name, scraper))
    else:
        max_workers = max_workers or SYSTEM_SETTINGS.get('max_parallel_workers', 4)
        logger.info(f"Scraping {len(scrapers)} sources with {max_workers} workers")
        with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = [executor.submit(_run_scraper, name, scraper) for name, scraper in scrapers]
            digests = [future.result() for future in futures]

    for digest in digests:
        _record(digest)
    return digests

def run_digest(now: Optional[datetime] = None,
               include_sports: Optional[bool] = None,
               parallel: Optional[bool] = None) -> Tuple[List[SourceDigest], Optional[NBAScores]]:
    """
    Collect everything that goes into one email.

    NBA scores are fetched when include_sports is True or, when it is None,
    for the morning digest only.
    """
    start_time = time.time()
    digests = scrape_all_sources(parallel=parallel)

    total_articles = sum(len(d['articles']) for d in digests)
    logger.info(f"Total articles scraped: {total_articles} from {len(digests)} sources")
    if total_articles == 0:
        logger.warning("No articles found from any source, the email will only carry notices")

    if include_sports is None:
        include_sports = is_morning_digest(now)

    nba_scores = None
    if include_sports:
        logger.info("Fetching NBA scores...")
        nba_scores = fetch_nba_scores(now=now)
        if nba_scores['error']:
            logger.warning(f"NBA scores unavailable: {nba_scores['error']}")
        else:
            logger.info(f"NBA: {len(nba_scores['games'])} games")

    get_metrics()['processing_time'] = time.time() - start_time
    return digests, nba_scores
