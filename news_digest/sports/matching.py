from difflib import SequenceMatcher
from typing import Optional
from news_digest.config.settings import NBA_SETTINGS

MATCH_MODES = ('exact', 'substring', 'fuzzy')

class PlayerMatcher:
    """
    Decides whether a box-score display name is the tracked player.

    Modes:
        exact: case-insensitive equality with the pattern
        substring: pattern appears anywhere in the name (case-insensitive)
        fuzzy: SequenceMatcher ratio against the pattern, or any single
            name token, reaches the threshold
    """

    def __init__(self, pattern: str, mode: str = 'substring', threshold: float = 0.85):
        if mode not in MATCH_MODES:
            raise ValueError(f"Unknown match mode '{mode}', expected one of {', '.join(MATCH_MODES)}")
        self.pattern = (pattern or '').strip().lower()
        self.mode = mode
        self.threshold = threshold

    @classmethod
    def from_settings(cls, settings: Optional[dict] = None) -> 'PlayerMatcher':
        settings = settings or NBA_SETTINGS['featured_player']
        return cls(
            settings.get('pattern') or settings.get('display_name', ''),
            mode=settings.get('mode', 'substring'),
            threshold=settings.get('fuzzy_threshold', 0.85),
        )

    def matches(self, name: str) -> bool:
        if not name or not self.pattern:
            return False
        candidate = name.strip().lower()

        if self.mode == 'exact':
            return candidate == self.pattern
        if self.mode == 'substring':
            return self.pattern in candidate

        if SequenceMatcher(None, candidate, self.pattern).ratio() >= self.threshold:
            return True
        return any(
            SequenceMatcher(None, token, self.pattern).ratio() >= self.threshold
            for token in candidate.split()
        )

    def __repr__(self):
        return f"PlayerMatcher({self.pattern!r}, mode={self.mode!r})"
