"""Ranking package exports."""
from news_digest.ranking.priority import calculate_priority, position_bonus

__all__ = [
    'calculate_priority',
    'position_bonus'
]
