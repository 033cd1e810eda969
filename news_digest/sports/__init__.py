"""Sports results included in the morning digest."""
from news_digest.sports.matching import PlayerMatcher
from news_digest.sports.nba import (
    calculate_game_score,
    fetch_nba_scores,
    is_morning_digest,
    build_ap_news_url,
)

__all__ = [
    'PlayerMatcher',
    'calculate_game_score',
    'fetch_nba_scores',
    'is_morning_digest',
    'build_ap_news_url',
]
