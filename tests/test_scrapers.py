"""Tests for page extraction, the article accumulator and scrape_source."""
import unittest
from unittest.mock import MagicMock, patch
import requests
from bs4 import BeautifulSoup
from news_digest.config.settings import NEWS_SOURCES
from news_digest.logging_cfg.logger import get_metrics, reset_metrics
from news_digest.scrapers.accumulator import ArticleAccumulator
from news_digest.scrapers.base import extract_articles, scrape_source
from news_digest.scrapers.sources import get_enabled_scrapers
from news_digest.scrapers.strategies import (
    extract_article_links,
    extract_cards,
    extract_headlines,
    headline_text
)

EXPRESSO_HTML = """
<html><body>
  <h1><a href="/2026-10-18-governo-aprova-orcamento">Governo aprova orçamento do Estado para 2027</a></h1>
  <article class="card">
    <a href="https://expresso.pt/economia/2026-10-18-bolsa-fecha-em-alta"><h2>Bolsa de Lisboa fecha em alta pela terceira sessão</h2></a>
    <p class="summary">PSI ganhou 1,2% numa sessão animada.</p>
    <span class="category">Economia</span>
    <img src="https://img.expresso.pt/bolsa.jpg">
  </article>
  <article>
    <a href="/video/2026-10-18-votacao"><h3>Vídeo: o momento da votação no parlamento</h3></a>
  </article>
  <article>
    <a href="/2026-10-18-curto"><h3>Curto</h3></a>
  </article>
  <a href="/2026-10-17-fallback-noticia">Notícia encontrada apenas pelo padrão do link</a>
  <a href="javascript:void(0)">Link que não leva a lado nenhum mesmo</a>
</body></html>
"""

def make_candidate(title, href='/2026-10-18-x', tier='card', **overrides):
    candidate = {
        'title': title,
        'href': href,
        'summary': None,
        'category': None,
        'image_url': None,
        'has_image': False,
        'is_headline': False,
        'tier': tier,
    }
    candidate.update(overrides)
    return candidate

def mock_session(text='', side_effect=None):
    session = MagicMock()
    response = MagicMock()
    response.text = text
    response.content = text.encode('utf-8')
    session.get.return_value = response
    if side_effect is not None:
        session.get.side_effect = side_effect
    return session, response

class TestStrategies(unittest.TestCase):
    def setUp(self):
        self.source = NEWS_SOURCES['expresso']
        self.soup = BeautifulSoup(EXPRESSO_HTML, 'html.parser')

    def test_headline_tier(self):
        candidates = list(extract_headlines(self.soup, self.source))
        self.assertEqual(len(candidates), 1)
        self.assertEqual(candidates[0]['title'], 'Governo aprova orçamento do Estado para 2027')
        self.assertTrue(candidates[0]['is_headline'])
        self.assertEqual(candidates[0]['tier'], 'headline')

    def test_card_tier(self):
        candidates = list(extract_cards(self.soup, self.source))
        first = candidates[0]
        self.assertEqual(first['title'], 'Bolsa de Lisboa fecha em alta pela terceira sessão')
        self.assertEqual(first['summary'], 'PSI ganhou 1,2% numa sessão animada.')
        self.assertEqual(first['category'], 'Economia')
        self.assertEqual(first['image_url'], 'https://img.expresso.pt/bolsa.jpg')
        self.assertTrue(first['has_image'])
        # Title element is an h2
        self.assertTrue(first['is_headline'])
        self.assertFalse(candidates[1]['is_headline'])

    def test_link_fallback_tier(self):
        candidates = list(extract_article_links(self.soup, self.source))
        hrefs = [c['href'] for c in candidates]
        self.assertIn('/2026-10-17-fallback-noticia', hrefs)
        self.assertNotIn('javascript:void(0)', hrefs)
        self.assertTrue(all(not c['is_headline'] and not c['has_image'] for c in candidates))

    def test_headline_text_prefers_inner_span(self):
        html = ('<h3><span class="fc-item__kicker">Live</span>'
                '<span class="headline-text">Ceasefire talks resume in Cairo</span></h3>')
        heading = BeautifulSoup(html, 'html.parser').h3
        self.assertEqual(headline_text(heading, NEWS_SOURCES['guardian']), 'Ceasefire talks resume in Cairo')

    def test_headline_text_strips_kicker(self):
        html = '<h3><span class="kicker">Exclusive</span> Minister resigns over leaked memo</h3>'
        heading = BeautifulSoup(html, 'html.parser').h3
        source = {'kicker_selectors': '[class*="kicker"]', 'headline_text_selectors': ''}
        self.assertEqual(headline_text(heading, source), 'Minister resigns over leaked memo')
        # The page itself is untouched
        self.assertIn('Exclusive', heading.get_text())

class TestArticleAccumulator(unittest.TestCase):
    def setUp(self):
        self.source = NEWS_SOURCES['expresso']

    def test_resolves_relative_urls(self):
        acc = ArticleAccumulator(self.source)
        self.assertTrue(acc.offer(make_candidate('Um título suficientemente longo', href='/2026-10-18-a')))
        self.assertEqual(acc.articles[0]['url'], 'https://expresso.pt/2026-10-18-a')
        self.assertEqual(acc.articles[0]['source'], 'Expresso')

    def test_rejections(self):
        acc = ArticleAccumulator(self.source)
        self.assertFalse(acc.offer(make_candidate('Curtinho!!')))  # exactly 10 chars
        self.assertFalse(acc.offer(make_candidate('Um vídeo com título comprido', href='/video/2026-10-18-v')))
        self.assertFalse(acc.offer(make_candidate('Um link javascript comprido', href='javascript:void(0)')))
        self.assertFalse(acc.offer(make_candidate('Um link de email comprido', href='mailto:a@b.pt')))
        self.assertTrue(acc.offer(make_candidate('Título aceite na primeira vez')))
        self.assertFalse(acc.offer(make_candidate('Título aceite na primeira vez', href='/2026-10-18-y')))
        self.assertEqual(len(acc.articles), 1)

    def test_unparseable_href_rejected(self):
        acc = ArticleAccumulator(self.source)
        self.assertIsNone(acc.resolve_url('http://[broken-ipv6/2026-10-18-x'))
        self.assertFalse(acc.offer(make_candidate('Link com endereço IPv6 partido', href='http://[broken-ipv6/2026-10-18-x')))
        self.assertEqual(acc.rejected, 1)
        self.assertTrue(acc.offer(make_candidate('Artigo seguinte ainda aceite')))

    def test_fallback_tier_needs_longer_titles(self):
        acc = ArticleAccumulator(self.source)
        self.assertFalse(acc.offer(make_candidate('Quinze letras!!', tier='fallback')))
        self.assertTrue(acc.offer(make_candidate('Dezasseis letras!', tier='fallback')))

    def test_summary_equal_to_title_dropped(self):
        acc = ArticleAccumulator(self.source)
        acc.offer(make_candidate('Título igual ao resumo', summary='Título igual ao resumo'))
        self.assertIsNone(acc.articles[0]['summary'])

    def test_default_category(self):
        acc = ArticleAccumulator(NEWS_SOURCES['zerozero'])
        acc.offer(make_candidate('Benfica vence no Dragão', href='/noticia/1'))
        acc.offer(make_candidate('Sporting empata em casa', href='/noticia/2', category='Futebol'))
        self.assertEqual(acc.articles[0]['category'], 'Desporto')
        self.assertEqual(acc.articles[1]['category'], 'Futebol')

    def test_priority_uses_acceptance_position(self):
        acc = ArticleAccumulator(self.source)
        acc.offer(make_candidate('Curto'))  # rejected, does not take a position
        acc.offer(make_candidate('Primeiro artigo aceite'))
        acc.offer(make_candidate('Segundo artigo aceite'))
        self.assertEqual(acc.articles[0]['priority'], 8)  # 5 + 3
        self.assertEqual(acc.articles[1]['priority'], 7)  # 5 + 2

    def test_capped_at_fifteen(self):
        acc = ArticleAccumulator(self.source)
        for i in range(20):
            acc.offer(make_candidate(f'Artigo número {i:02d} do dia', href=f'/2026-10-18-{i}'))
        self.assertEqual(len(acc.articles), 15)
        self.assertTrue(acc.is_full)
        self.assertEqual(len({a['title'] for a in acc.articles}), 15)

class TestExtractArticles(unittest.TestCase):
    def test_cascade(self):
        soup = BeautifulSoup(EXPRESSO_HTML, 'html.parser')
        articles = extract_articles(soup, NEWS_SOURCES['expresso'])

        self.assertEqual([a['title'] for a in articles], [
            'Governo aprova orçamento do Estado para 2027',
            'Bolsa de Lisboa fecha em alta pela terceira sessão',
            'Notícia encontrada apenas pelo padrão do link',
        ])
        self.assertEqual(articles[0]['url'], 'https://expresso.pt/2026-10-18-governo-aprova-orcamento')
        self.assertTrue(articles[0]['is_headline'])
        self.assertEqual(articles[0]['priority'], 10)
        self.assertFalse(articles[2]['is_headline'])

    def test_later_strategies_skipped_when_full(self):
        cards = ''.join(
            f'<article><a href="/2026-10-18-{i}"><h3>Artigo de teste número {i:02d}</h3></a></article>'
            for i in range(20)
        )
        soup = BeautifulSoup(f'<html><body>{cards}</body></html>', 'html.parser')
        fallback = MagicMock(return_value=iter([]))
        fallback.__name__ = 'fallback'
        articles = extract_articles(soup, NEWS_SOURCES['expresso'], strategies=[extract_cards, fallback])
        self.assertEqual(len(articles), 15)
        fallback.assert_not_called()

class TestScrapeSource(unittest.TestCase):
    def setUp(self):
        reset_metrics()

    def test_success(self):
        session, _ = mock_session(EXPRESSO_HTML)
        digest = scrape_source(NEWS_SOURCES['expresso'], session=session)

        self.assertIsNone(digest['error'])
        self.assertEqual(digest['source'], 'Expresso')
        self.assertEqual(digest['source_url'], 'https://expresso.pt')
        self.assertEqual(len(digest['articles']), 3)
        self.assertIsNotNone(digest['scraped_at'].tzinfo)
        session.get.assert_called_once_with('https://expresso.pt', timeout=15)

    def test_broken_link_does_not_fail_source(self):
        html = """
        <html><body>
          <h1><a href="/2026-10-18-governo-aprova-orcamento">Governo aprova orçamento do Estado para 2027</a></h1>
          <article><a href="/2026-10-18-bolsa"><h3>Bolsa de Lisboa fecha em alta pela terceira sessão</h3></a></article>
          <article><a href="http://[broken-ipv6/2026-10-18-x"><h3>Notícia com um link partido no meio da página</h3></a></article>
        </body></html>
        """
        session, _ = mock_session(html)
        digest = scrape_source(NEWS_SOURCES['expresso'], session=session)

        self.assertIsNone(digest['error'])
        self.assertEqual([a['title'] for a in digest['articles']], [
            'Governo aprova orçamento do Estado para 2027',
            'Bolsa de Lisboa fecha em alta pela terceira sessão',
        ])

    @patch('news_digest.scrapers.base.create_session')
    def test_own_session_closed(self, mock_create):
        session, _ = mock_session(side_effect=requests.ConnectionError('Connection refused'))
        mock_create.return_value = session
        scrape_source(NEWS_SOURCES['expresso'])
        session.close.assert_called_once()

    def test_caller_session_left_open(self):
        session, _ = mock_session(EXPRESSO_HTML)
        scrape_source(NEWS_SOURCES['expresso'], session=session)
        session.close.assert_not_called()

    def test_forced_encoding(self):
        session, response = mock_session('<html></html>')
        scrape_source(NEWS_SOURCES['zerozero'], session=session)
        self.assertEqual(response.encoding, 'iso-8859-1')

    def test_default_encoding_is_utf8(self):
        session, response = mock_session('<html></html>')
        scrape_source(NEWS_SOURCES['publico'], session=session)
        self.assertEqual(response.encoding, 'utf-8')

    def test_unreachable_host(self):
        session, _ = mock_session(side_effect=requests.ConnectionError('Failed to establish a new connection'))
        digest = scrape_source(NEWS_SOURCES['guardian'], session=session)

        self.assertEqual(digest['articles'], [])
        self.assertEqual(digest['error'], 'Failed to establish a new connection')
        self.assertIn('The Guardian', get_metrics()['failed_sources'])

    def test_timeout(self):
        session, _ = mock_session(side_effect=requests.Timeout())
        digest = scrape_source(NEWS_SOURCES['publico'], session=session)
        self.assertEqual(digest['articles'], [])
        self.assertEqual(digest['error'], 'Timeout')

    def test_http_error(self):
        session, response = mock_session('')
        response.raise_for_status.side_effect = requests.HTTPError('503 Server Error')
        digest = scrape_source(NEWS_SOURCES['expresso'], session=session)
        self.assertEqual(digest['articles'], [])
        self.assertEqual(digest['error'], '503 Server Error')

    def test_no_matches_is_not_an_error(self):
        session, _ = mock_session('<html><body><p>Sem notícias</p></body></html>')
        digest = scrape_source(NEWS_SOURCES['expresso'], session=session)
        self.assertIsNone(digest['error'])
        self.assertEqual(digest['articles'], [])

class TestEnabledScrapers(unittest.TestCase):
    def test_default_sources(self):
        names = [name for name, _ in get_enabled_scrapers()]
        self.assertEqual(names, ['Expresso', 'Público', 'ZeroZero', 'The Guardian'])

if __name__ == '__main__':
    unittest.main()
