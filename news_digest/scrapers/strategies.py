"""Extraction strategies for news landing pages.

Each strategy takes a parsed page and a source configuration and yields
Candidate dicts in document order. Strategies are run in cascade order by
scrape_source until the accumulator is full.
"""
import copy
import re
from typing import Iterator, List, Optional
from bs4 import BeautifulSoup, Tag
from news_digest.core.constants import Tier
from news_digest.core.types import Candidate, SourceConfig
from news_digest.formatting.text_utils import normalize_text

# Ancestors that describe a story block around a link or heading
CARD_CONTAINER_SELECTOR = (
    'article, [class*="card"], [class*="story"], [class*="article"], '
    '[class*="fc-item"], [class*="news"]'
)

def _text(element: Optional[Tag]) -> str:
    if element is None:
        return ''
    return normalize_text(element.get_text(' ', strip=True))

def _select_first(element: Tag, selectors: str) -> Optional[Tag]:
    if not selectors:
        return None
    return element.select_one(selectors)

def _closest_card(element: Tag) -> Optional[Tag]:
    return element.css.closest(CARD_CONTAINER_SELECTOR)

def _find_image(container: Optional[Tag]) -> Optional[str]:
    if container is None:
        return None
    img = container.find('img')
    if img is None:
        return None
    # Lazy-loaded images keep the real source in a data attribute
    return img.get('src') or img.get('data-src') or img.get('data-srcset') or ''

def _link_for(element: Tag) -> Optional[Tag]:
    if element.name == 'a' and element.get('href'):
        return element
    link = element.find('a', href=True)
    if link is not None:
        return link
    parent_link = element.find_parent('a', href=True)
    return parent_link

def headline_text(element: Tag, source: SourceConfig) -> str:
    """
    Read the visible headline from a heading or link.

    Prefers the source's dedicated headline span. Otherwise kicker labels,
    captions and one-word section tags are removed from a copy of the
    element before its text is read.
    """
    preferred = _select_first(element, source.get('headline_text_selectors', ''))
    if preferred is not None:
        text = _text(preferred)
        if text:
            return text

    kicker_selectors = source.get('kicker_selectors', '')
    if not kicker_selectors:
        return _text(element)

    cleaned = copy.copy(element)
    for kicker in cleaned.select(kicker_selectors):
        kicker.decompose()
    for div in cleaned.find_all('div'):
        if len(div.get_text(strip=True).split()) <= 1:
            div.decompose()
    return _text(cleaned)

def _card_details(container: Optional[Tag], source: SourceConfig):
    """Summary, category and image for the story block around an element."""
    if container is None:
        return None, None, None
    summary = _text(_select_first(container, source.get('summary_selectors', ''))) or None
    category = _text(_select_first(container, source.get('category_selectors', ''))) or None
    image_url = _find_image(container)
    return summary, category, image_url

def _candidate(title, href, summary, category, image_url, is_headline, tier) -> Candidate:
    return {
        'title': title,
        'href': href,
        'summary': summary,
        'category': category,
        'image_url': image_url or None,
        'has_image': image_url is not None,
        'is_headline': is_headline,
        'tier': tier.value,
    }

def extract_headlines(soup: BeautifulSoup, source: SourceConfig) -> Iterator[Candidate]:
    """Main headings that carry (or sit inside) a link."""
    selectors = source.get('headline_selectors') or 'h1 a, a h1'
    for element in soup.select(selectors):
        link = _link_for(element)
        if link is None:
            continue

        # 'h1 a' matches the link, 'a h1' the heading; read the heading either way
        heading = element if element.name == 'h1' else (element.find_parent('h1') or element)
        title = headline_text(heading, source) or _text(link)
        summary, category, image_url = _card_details(_closest_card(element), source)
        yield _candidate(title, link['href'], summary, category, image_url, True, Tier.HEADLINE)

def extract_cards(soup: BeautifulSoup, source: SourceConfig) -> Iterator[Candidate]:
    """Story cards: one link, one title, optional summary, category and image."""
    selectors = source.get('card_selectors')
    if not selectors:
        return
    for card in soup.select(selectors):
        link = _link_for(card)
        if link is None:
            continue

        title_element = _select_first(card, source.get('card_title_selectors', ''))
        if title_element is not None:
            title = headline_text(title_element, source)
        else:
            title = _text(link)

        summary, category, image_url = _card_details(card, source)
        is_headline = title_element is not None and title_element.name == 'h2'
        yield _candidate(title, link['href'], summary, category, image_url, is_headline, Tier.CARD)

def compile_link_patterns(patterns: List[str]) -> List[re.Pattern]:
    return [re.compile(p) for p in patterns or []]

def extract_article_links(soup: BeautifulSoup, source: SourceConfig) -> Iterator[Candidate]:
    """Any link whose path looks like an article on this site."""
    patterns = compile_link_patterns(source.get('article_link_patterns', []))
    if not patterns:
        return
    title_selectors = source.get('fallback_title_selectors') or 'h1, h2, h3, h4'
    for link in soup.select('a[href]'):
        href = link['href']
        if not any(p.search(href) for p in patterns):
            continue

        heading = link.select_one(title_selectors)
        title = _text(heading) if heading is not None else _text(link)
        container = _closest_card(link)
        summary = None
        if container is not None:
            summary = _text(_select_first(container, source.get('summary_selectors', ''))) or None
        yield _candidate(title, href, summary, None, None, False, Tier.FALLBACK)

# Cascade order
STRATEGIES = [extract_headlines, extract_cards, extract_article_links]
