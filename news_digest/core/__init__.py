"""Core package exports."""
from news_digest.core.types import (
    Article,
    SourceDigest,
    SourceConfig,
    Candidate,
    PlayerStat,
    NBAGame,
    NBAScores,
    PlayerOfTheNight,
    FeaturedPlayerStats
)
from news_digest.core.constants import (
    MAX_ARTICLES_PER_SOURCE,
    TOP_HEADLINES_COUNT,
    NON_ARTICLE_PATH_SEGMENTS,
    Tier,
    NBA_TEAM_NAMES
)

__all__ = [
    'Article',
    'SourceDigest',
    'SourceConfig',
    'Candidate',
    'PlayerStat',
    'NBAGame',
    'NBAScores',
    'PlayerOfTheNight',
    'FeaturedPlayerStats',
    'MAX_ARTICLES_PER_SOURCE',
    'TOP_HEADLINES_COUNT',
    'NON_ARTICLE_PATH_SEGMENTS',
    'Tier',
    'NBA_TEAM_NAMES'
]
