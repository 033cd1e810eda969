"""Editorial priority scoring.

Deterministic, stateless heuristic mapping extraction signals to a
1-10 importance score (higher is more important). Used by every scraper
at the moment an article is accepted.
"""

BASE_PRIORITY = 5
MIN_PRIORITY = 1
MAX_PRIORITY = 10

# Titles in this open range read as full headlines rather than teasers
SUBSTANTIVE_TITLE_RANGE = (40, 120)


def position_bonus(position: int) -> int:
    """Bonus for where the article sat on the page (0 = first)."""
    if position == 0:
        return 3
    if position == 1:
        return 2
    if 2 <= position <= 4:
        return 1
    return 0


def calculate_priority(
    position: int,
    is_main_headline: bool,
    has_image: bool,
    title_length: int,
    has_summary: bool,
) -> int:
    priority = BASE_PRIORITY + position_bonus(position)

    if is_main_headline:
        priority += 2

    if has_image:
        priority += 1

    low, high = SUBSTANTIVE_TITLE_RANGE
    if low < title_length < high:
        priority += 1

    # A dek/standfirst signals editorial investment
    if has_summary:
        priority += 1

    return min(MAX_PRIORITY, max(MIN_PRIORITY, priority))
