from typing import List, Optional, Set
from urllib.parse import urljoin, urlparse
from news_digest.core.constants import MAX_ARTICLES_PER_SOURCE, NON_ARTICLE_PATH_SEGMENTS
from news_digest.core.types import Article, Candidate, SourceConfig
from news_digest.ranking.priority import calculate_priority
from news_digest.logging_cfg.logger import setup_logger

logger = setup_logger()

class ArticleAccumulator:
    """
    Collects validated articles for a single source.

    Keeps the titles already accepted and the acceptance position, which
    is shared across all extraction tiers and feeds the priority score.
    """

    def __init__(self, source: SourceConfig):
        self.source = source
        self.base_url = source.get('base_url') or source.get('url', '')
        self.max_articles = source.get('max_articles', MAX_ARTICLES_PER_SOURCE)
        self.excluded_segments = source.get('excluded_path_segments', NON_ARTICLE_PATH_SEGMENTS)
        self.min_title_length = source.get('min_title_length', {})
        self.articles: List[Article] = []
        self.seen_titles: Set[str] = set()
        self.rejected = 0

    @property
    def is_full(self) -> bool:
        return len(self.articles) >= self.max_articles

    @property
    def position(self) -> int:
        return len(self.articles)

    def resolve_url(self, href: str) -> Optional[str]:
        """Absolute http(s) URL for href, or None if it can't be an article."""
        if not href:
            return None
        try:
            url = urljoin(self.base_url, href.strip())
            scheme = urlparse(url).scheme
        except ValueError as e:
            logger.debug(f"[{self.source.get('name')}] unparseable link {href!r}: {e}")
            return None
        if scheme not in ('http', 'https'):
            return None
        if any(segment in url for segment in self.excluded_segments):
            return None
        return url

    def offer(self, candidate: Candidate) -> bool:
        """Validate a candidate and keep it as an article. Returns True if accepted."""
        if self.is_full:
            return False

        title = candidate['title']
        floor = self.min_title_length.get(candidate['tier'], 10)
        if not title or len(title) <= floor:
            self.rejected += 1
            return False

        if title in self.seen_titles:
            self.rejected += 1
            return False

        url = self.resolve_url(candidate['href'])
        if url is None:
            self.rejected += 1
            return False

        summary = candidate.get('summary')
        if summary == title:
            summary = None

        category = candidate.get('category') or self.source.get('default_category')

        article: Article = {
            'title': title,
            'url': url,
            'summary': summary,
            'category': category,
            'image_url': candidate.get('image_url'),
            'priority': calculate_priority(
                self.position,
                candidate['is_headline'],
                candidate['has_image'],
                len(title),
                bool(summary),
            ),
            'is_headline': candidate['is_headline'],
            'source': self.source.get('name'),
        }

        self.seen_titles.add(title)
        self.articles.append(article)
        logger.debug(f"[{self.source.get('name')}] accepted {candidate['tier']} #{len(self.articles)}: {title[:60]}")
        return True
