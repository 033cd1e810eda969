"""Type definitions for articles, source digests and NBA results."""
from typing import TypedDict, Optional, List
from datetime import datetime

class Article(TypedDict):
    title: str
    url: str
    summary: Optional[str]
    category: Optional[str]
    image_url: Optional[str]
    priority: int  # 1-10, higher = more important
    is_headline: bool  # Extracted from a main heading on the page
    source: Optional[str]

class SourceDigest(TypedDict):
    source: str
    source_url: str
    articles: List[Article]  # Extraction order, capped per source
    scraped_at: datetime
    error: Optional[str]

class SourceConfig(TypedDict, total=False):
    """Scraping configuration for one news site."""
    key: str
    name: str
    url: str
    base_url: str
    accept_language: str
    encoding: Optional[str]  # Forced response encoding, e.g. 'iso-8859-1'
    headline_selectors: str
    card_selectors: str
    card_title_selectors: str
    summary_selectors: str
    category_selectors: str
    headline_text_selectors: str
    kicker_selectors: str
    article_link_patterns: List[str]
    fallback_title_selectors: str
    excluded_path_segments: List[str]
    default_category: Optional[str]
    min_title_length: dict  # Per tier; titles must be longer than the floor
    max_articles: int

class Candidate(TypedDict):
    """Raw extraction result before validation and scoring."""
    title: str
    href: str
    summary: Optional[str]
    category: Optional[str]
    image_url: Optional[str]
    has_image: bool
    is_headline: bool
    tier: str

class PlayerStat(TypedDict):
    name: str
    value: str  # Display-ready, e.g. "24 PTS"

class NBAGame(TypedDict):
    game_id: str
    home_team: str
    away_team: str
    home_score: int
    away_score: int
    winner: str  # 'home' or 'away'
    matchup: str
    home_top_scorer: PlayerStat
    away_top_scorer: PlayerStat
    home_top_rebounder: PlayerStat
    away_top_rebounder: PlayerStat
    home_top_assists: PlayerStat
    away_top_assists: PlayerStat
    home_top_steals: PlayerStat
    away_top_steals: PlayerStat
    home_top_blocks: PlayerStat
    away_top_blocks: PlayerStat
    home_top_game_score: PlayerStat
    away_top_game_score: PlayerStat
    ap_article_url: str

class PlayerGameStats(TypedDict):
    name: str
    team: str
    points: int
    rebounds: int
    assists: int
    steals: int
    blocks: int
    matchup: str

class PlayerOfTheNight(TypedDict):
    name: str
    team: str
    points: int
    rebounds: int
    assists: int
    steals: int
    blocks: int
    game_score: float
    matchup: str

class FeaturedPlayerStats(TypedDict):
    name: str
    team: str
    points: int
    rebounds: int
    assists: int
    steals: int
    blocks: int
    minutes: str
    matchup: str
    did_play: bool

class NBAScores(TypedDict):
    games: List[NBAGame]
    date: str
    player_of_the_night: Optional[PlayerOfTheNight]
    featured_player: Optional[FeaturedPlayerStats]
    error: Optional[str]
