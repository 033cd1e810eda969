import requests
from requests.adapters import HTTPAdapter
import certifi
from typing import Optional
from news_digest.config.settings import DEFAULT_HEADERS, SYSTEM_SETTINGS
from news_digest.logging_cfg.logger import setup_logger

logger = setup_logger()

def create_session(accept_language: Optional[str] = None, accept: Optional[str] = None):
    """Create a requests session with browser headers and certifi verification.

    A failed attempt is final, so the adapter is mounted without retries.
    """
    session = requests.Session()

    # Use certifi's CA bundle for SSL verification
    session.verify = certifi.where()

    adapter = HTTPAdapter(
        max_retries=0,
        pool_connections=10,
        pool_maxsize=10,
        pool_block=False
    )
    session.mount("http://", adapter)
    session.mount("https://", adapter)

    session.headers.update(DEFAULT_HEADERS)
    if accept_language:
        session.headers['Accept-Language'] = accept_language
    if accept:
        session.headers['Accept'] = accept

    return session

def fetch_html(session, url: str, timeout: Optional[float] = None, encoding: Optional[str] = None) -> str:
    """GET a page and return its decoded body.

    Args:
        session: requests session to use
        url: Page to fetch
        timeout: Seconds before giving up, defaults to SYSTEM_SETTINGS['http_timeout']
        encoding: Charset to force before decoding; UTF-8 when not given

    Raises:
        requests.RequestException: On network errors, timeouts and HTTP error statuses
    """
    timeout = timeout or SYSTEM_SETTINGS.get('http_timeout', 15)
    response = session.get(url, timeout=timeout)
    response.raise_for_status()

    # requests guesses ISO-8859-1 for text/html without a charset; be explicit
    response.encoding = encoding or 'utf-8'
    logger.debug(f"Fetched {url} ({len(response.content)} bytes, {response.encoding})")
    return response.text

def fetch_json(session, url: str, params=None, timeout: Optional[float] = None):
    """GET a JSON document, raising for HTTP errors."""
    timeout = timeout or SYSTEM_SETTINGS.get('http_timeout', 15)
    response = session.get(url, params=params, timeout=timeout)
    response.raise_for_status()
    return response.json()
