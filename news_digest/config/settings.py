# Configuration file for News Digest
# This file contains configurable settings for the digest system

import os
from typing import Dict, Any
from dotenv import load_dotenv
from news_digest.core.constants import MAX_ARTICLES_PER_SOURCE, NON_ARTICLE_PATH_SEGMENTS

# Load environment variables
load_dotenv()

# --- System Settings ---
# General system configuration options
SYSTEM_SETTINGS = {
    "log_level": os.getenv("NEWS_DIGEST_LOG_LEVEL", "INFO"),  # DEBUG, INFO, WARNING, ERROR
    "log_dir": os.getenv("NEWS_DIGEST_LOG_DIR", "logs"),
    "output_dir": "output",                # Where --dry-run writes rendered HTML
    "http_timeout": 15,                    # Per-request timeout for news homepages (seconds)
    "max_articles_per_source": MAX_ARTICLES_PER_SOURCE,  # Articles kept per source
    "parallel_scraping": False,            # Scrape sources through a thread pool
    "max_parallel_workers": 4,             # Worker count when parallel_scraping is on
    "timezone": "Europe/Lisbon",           # Timezone for email dates and log timestamps
}

# Browser-like identity for every outbound request
USER_AGENT = (
    'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 '
    '(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36'
)

DEFAULT_HEADERS = {
    'User-Agent': USER_AGENT,
    'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8',
    'Accept-Language': 'pt-PT,pt;q=0.9,en;q=0.8',
}

# --- Source Toggles ---
# Control which sources are scraped on each run
SOURCE_SETTINGS = {
    "expresso": True,
    "publico": True,
    "zerozero": True,
    "guardian": True,
    "observador": False,   # Disabled by default
    "nyt": False,          # Disabled by default (paywall markup changes often)
}

# --- Source Definitions ---
# Selectors are tried as listed; edit here when a site changes its markup.
DEFAULT_SOURCE_CONFIG = {
    "accept_language": "pt-PT,pt;q=0.9,en;q=0.8",
    "encoding": None,
    "headline_selectors": 'h1 a, a h1',
    "card_selectors": 'article',
    "card_title_selectors": 'h2, h3, h4, [class*="title"]',
    "summary_selectors": '[class*="excerpt"], [class*="summary"], [class*="lead"], [class*="description"]',
    "category_selectors": '[class*="category"], [class*="section"]',
    "headline_text_selectors": '',
    "kicker_selectors": '',
    "article_link_patterns": [],
    "fallback_title_selectors": 'h1, h2, h3, h4',
    "excluded_path_segments": NON_ARTICLE_PATH_SEGMENTS,
    "default_category": None,
    "min_title_length": {"headline": 10, "card": 10, "fallback": 15},
    "max_articles": SYSTEM_SETTINGS["max_articles_per_source"],
}

NEWS_SOURCES = {
    "expresso": {
        **DEFAULT_SOURCE_CONFIG,
        "key": "expresso",
        "name": "Expresso",
        "url": "https://expresso.pt",
        "base_url": "https://expresso.pt",
        "card_selectors": 'article, .article, [class*="article"], [class*="headline"], [class*="news-item"]',
        "card_title_selectors": 'h1, h2, h3, h4, [class*="title"]',
        "article_link_patterns": [r'/\d{4}-\d{2}-\d{2}-'],
    },
    "publico": {
        **DEFAULT_SOURCE_CONFIG,
        "key": "publico",
        "name": "Público",
        "url": "https://www.publico.pt",
        "base_url": "https://www.publico.pt",
        "card_selectors": 'article, .card, [class*="headline"], [class*="story"], [class*="article"]',
        "card_title_selectors": 'h1, h2, h3, h4, .headline, [class*="title"]',
        "summary_selectors": '.lead, .summary, .excerpt, [class*="lead"]',
        "category_selectors": '[class*="section"], [class*="category"]',
        "article_link_patterns": [r'/noticia/', r'/opiniao/', r'/local/'],
    },
    "zerozero": {
        **DEFAULT_SOURCE_CONFIG,
        "key": "zerozero",
        "name": "ZeroZero",
        "url": "https://www.zerozero.pt",
        "base_url": "https://www.zerozero.pt",
        "encoding": "iso-8859-1",
        "card_selectors": '.news, .noticia, [class*="news"], article, .box_news, .item',
        "card_title_selectors": 'h1, h2, h3, h4, .title, [class*="title"], .headline',
        "article_link_patterns": [r'/noticias/', r'/noticia/'],
        "default_category": "Desporto",
    },
    "guardian": {
        **DEFAULT_SOURCE_CONFIG,
        "key": "guardian",
        "name": "The Guardian",
        "url": "https://www.theguardian.com/international",
        "base_url": "https://www.theguardian.com",
        "accept_language": "en-GB,en;q=0.9",
        "card_selectors": '[data-link-name*="article"], [class*="fc-item"], [class*="card"], article',
        "card_title_selectors": 'h2, h3, h4, [class*="headline"], span[class*="title"]',
        "summary_selectors": '[class*="standfirst"], [class*="trail"], [class*="description"]',
        "category_selectors": '[class*="kicker"], [class*="section"]',
        "headline_text_selectors": '.headline-text, [class*="headline-text"]',
        "kicker_selectors": '[class*="kicker"], [class*="label"], [class*="section-label"], figcaption, [class*="caption"]',
        "article_link_patterns": [r'/20\d{2}/'],
        "fallback_title_selectors": 'h2, h3, h4, span',
    },
    "observador": {
        **DEFAULT_SOURCE_CONFIG,
        "key": "observador",
        "name": "Observador",
        "url": "https://observador.pt",
        "base_url": "https://observador.pt",
        "card_selectors": 'article, .article, [class*="article"], [class*="post"], [class*="story"], [class*="headline"], [class*="news-item"]',
        "card_title_selectors": 'h2, h3, h4, [class*="title"], [class*="headline"]',
        "summary_selectors": '[class*="excerpt"], [class*="summary"], [class*="lead"], [class*="description"], p',
        "category_selectors": '[class*="category"], [class*="section"], [class*="tag"]',
        "article_link_patterns": [r'/noticia/', r'/artigo/', r'/opiniao/'],
    },
    "nyt": {
        **DEFAULT_SOURCE_CONFIG,
        "key": "nyt",
        "name": "The New York Times",
        "url": "https://www.nytimes.com",
        "base_url": "https://www.nytimes.com",
        "accept_language": "en-US,en;q=0.9",
        "card_selectors": '[class*="story"], article, [data-testid="block-link"]',
        "card_title_selectors": 'h1, h2, h3, h4, [class*="headline"], p[class*="heading"]',
        "summary_selectors": '[class*="summary"], [class*="description"]',
        "category_selectors": '[class*="section"], [data-testid="section"]',
        "article_link_patterns": [r'/20\d{2}/\d{2}/\d{2}/'],
    },
}

# --- NBA Settings ---
NBA_SETTINGS = {
    "scoreboard_url": "https://site.api.espn.com/apis/site/v2/sports/basketball/nba/scoreboard",
    "summary_url": "https://site.api.espn.com/apis/site/v2/sports/basketball/nba/summary",
    "scoreboard_timeout": 15,
    "boxscore_timeout": 10,
    "max_boxscore_workers": 8,
    # Sports section is included when the UTC hour is in [start, end)
    "morning_window_utc": (5, 8),
    "featured_player": {
        "display_name": "Neemias Queta",
        "pattern": "queta",
        "mode": "substring",       # exact, substring or fuzzy
        "fuzzy_threshold": 0.85,
    },
    # Column offsets used when the feed does not label its stat arrays:
    # MIN, PTS, FG, 3PT, FT, REB, AST, TO, STL, BLK, OREB, DREB, PF, +/-
    "boxscore_stat_layout": {
        "minutes": 0,
        "points": 1,
        "rebounds": 5,
        "assists": 6,
        "steals": 8,
        "blocks": 9,
    },
}

# --- Email Settings ---
EMAIL_SETTINGS = {
    "smtp_host": os.getenv("SMTP_HOST", "smtp.gmail.com"),
    "smtp_port": int(os.getenv("SMTP_PORT", "587")),
    "smtp_secure": os.getenv("SMTP_SECURE", "false").lower() == "true",
    "smtp_user": os.getenv("SMTP_USER", ""),
    "smtp_pass": os.getenv("SMTP_PASS", ""),
    "sender_name": "News Digest",
    "recipient": os.getenv("RECIPIENT_EMAIL", ""),
    "top_headlines": 5,
    "subject_title_length": 60,
}

def get_settings() -> Dict[str, Any]:
    """Returns all settings as a dictionary."""
    return {
        'system': SYSTEM_SETTINGS,
        'sources': SOURCE_SETTINGS,
        'news_sources': NEWS_SOURCES,
        'nba': NBA_SETTINGS,
        'email': EMAIL_SETTINGS,
    }
