"""Tests for digest email composition."""
import unittest
from datetime import datetime, timezone
from news_digest.formatting.date_utils import format_pt_long_date, format_short_date
from news_digest.formatting.render import (
    build_digest_html,
    build_digest_text,
    build_subject,
    get_time_of_day,
    get_top_headlines
)

# 07:05 in Lisbon (WEST, UTC+1)
NOW = datetime(2026, 10, 17, 6, 5, tzinfo=timezone.utc)

def article(title, priority, **extra):
    data = {
        'title': title,
        'url': 'https://example.pt/' + str(abs(hash(title))),
        'summary': None,
        'category': None,
        'image_url': None,
        'priority': priority,
        'is_headline': False,
        'source': None,
    }
    data.update(extra)
    return data

def digest(source, articles, error=None):
    return {
        'source': source,
        'source_url': f'https://{source.lower()}.pt',
        'articles': articles,
        'scraped_at': NOW,
        'error': error,
    }

class TestHeadlinesAndSubject(unittest.TestCase):
    def setUp(self):
        self.digests = [
            digest('Expresso', [article('Expresso sete', 7), article('Expresso nove', 9)]),
            digest('Publico', [article('Publico nove', 9), article('Publico dez', 10)]),
        ]

    def test_top_headlines_sorted_and_tagged(self):
        top = get_top_headlines(self.digests, 3)
        self.assertEqual([a['title'] for a in top], ['Publico dez', 'Expresso nove', 'Publico nove'])
        self.assertEqual(top[0]['source'], 'Publico')
        self.assertEqual(top[1]['source'], 'Expresso')

    def test_time_of_day(self):
        cases = {5: 'Noite', 6: 'Manhã', 11: 'Manhã', 12: 'Meio-dia', 13: 'Meio-dia',
                 14: 'Tarde', 18: 'Tarde', 19: 'Noite', 23: 'Noite'}
        for hour, expected in cases.items():
            with self.subTest(hour=hour):
                self.assertEqual(get_time_of_day(hour), expected)

    def test_subject(self):
        self.assertEqual(build_subject(self.digests, NOW), '📰 Manhã (17/10): Publico dez')

    def test_subject_truncated(self):
        long_title = 'A' * 70
        digests = [digest('Expresso', [article(long_title, 5)])]
        self.assertEqual(build_subject(digests, NOW), f"📰 Manhã (17/10): {'A' * 60}...")

    def test_subject_fallback(self):
        self.assertEqual(build_subject([digest('Expresso', [])], NOW),
                         '📰 Manhã (17/10): Your news digest is ready')

class TestDates(unittest.TestCase):
    def test_portuguese_long_date(self):
        self.assertEqual(format_pt_long_date(NOW), 'sábado, 17 de outubro de 2026 às 07:05')

    def test_short_date(self):
        self.assertEqual(format_short_date(NOW), '17/10')

class TestDigestBodies(unittest.TestCase):
    def setUp(self):
        self.digests = [
            digest('Expresso', [
                article('<script>alert(1)</script> Tom & Jerry', 9, summary='Resumo "citado"', category='Política'),
            ]),
            digest('ZeroZero', [], error='Failed to establish a new connection'),
            digest('The Guardian', []),
        ]
        self.nba = {
            'games': [{
                'game_id': '1', 'home_team': 'BOS', 'away_team': 'LAL', 'home_score': 110, 'away_score': 105,
                'winner': 'home', 'matchup': 'LAL @ BOS',
                'home_top_scorer': {'name': 'Jayson Tatum', 'value': '30 PTS'},
                'away_top_scorer': {'name': 'LeBron James', 'value': '28 PTS'},
                'home_top_rebounder': {'name': 'N/A', 'value': ''},
                'away_top_rebounder': {'name': 'N/A', 'value': ''},
                'home_top_assists': {'name': 'N/A', 'value': ''},
                'away_top_assists': {'name': 'N/A', 'value': ''},
                'home_top_steals': {'name': 'Jayson Tatum', 'value': '2 STL'},
                'away_top_steals': {'name': 'N/A', 'value': '0 STL'},
                'home_top_blocks': {'name': 'N/A', 'value': ''},
                'away_top_blocks': {'name': 'N/A', 'value': ''},
                'home_top_game_score': {'name': 'Jayson Tatum', 'value': 'GmSc: 42.0 (30 PTS, 8 REB, 4 AST)'},
                'away_top_game_score': {'name': 'N/A', 'value': ''},
                'ap_article_url': 'https://apnews.com/search?q=Lakers%20Celtics%20NBA',
            }],
            'date': 'Friday, October 16',
            'player_of_the_night': {
                'name': 'Jayson Tatum', 'team': 'BOS', 'points': 30, 'rebounds': 8, 'assists': 4,
                'steals': 2, 'blocks': 1, 'game_score': 42.0, 'matchup': 'LAL @ BOS',
            },
            'featured_player': {
                'name': 'Neemias Queta', 'team': 'BOS', 'points': 0, 'rebounds': 0, 'assists': 0,
                'steals': 0, 'blocks': 0, 'minutes': 'DNP', 'matchup': 'LAL @ BOS', 'did_play': False,
            },
            'error': None,
        }

    def test_html_escapes_dynamic_values(self):
        html = build_digest_html(self.digests, now=NOW)
        self.assertIn('&lt;script&gt;alert(1)&lt;/script&gt; Tom &amp; Jerry', html)
        self.assertNotIn('<script>alert', html)
        self.assertNotIn('&amp;amp;', html)
        self.assertIn('Resumo &quot;citado&quot;', html)

    def test_html_sections(self):
        html = build_digest_html(self.digests, now=NOW)
        self.assertIn('sábado, 17 de outubro de 2026 às 07:05', html)
        self.assertIn('Top Headlines', html)
        self.assertIn('Priority: 9/10', html)
        self.assertIn('Ver site →', html)
        self.assertIn('⚠️ Erro ao carregar: Failed to establish a new connection', html)
        self.assertIn('Nenhum artigo encontrado', html)
        self.assertIn('Este digest é gerado automaticamente 4 vezes por dia.', html)
        self.assertIn('Fontes: Expresso, ZeroZero, The Guardian', html)
        self.assertNotIn('NBA', html)

    def test_html_nba_section(self):
        html = build_digest_html(self.digests, nba_scores=self.nba, now=NOW)
        self.assertIn('🏀 NBA', html)
        self.assertIn('Friday, October 16', html)
        self.assertIn('Player of the Night', html)
        self.assertIn('GmSc: 42.0 (30 PTS, 8 REB, 4 AST)', html)
        self.assertIn('Neemias Queta', html)
        self.assertIn('não jogou', html)
        self.assertIn('https://apnews.com/search?q=Lakers%20Celtics%20NBA', html)

    def test_html_nba_error(self):
        nba = {'games': [], 'date': 'Friday, October 16', 'player_of_the_night': None,
               'featured_player': None, 'error': 'read timed out'}
        html = build_digest_html(self.digests, nba_scores=nba, now=NOW)
        self.assertIn('⚠️ Erro ao carregar: read timed out', html)

    def test_text_body(self):
        text = build_digest_text(self.digests, nba_scores=self.nba, now=NOW)
        self.assertIn('📰 NEWS DIGEST', text)
        self.assertIn('▶ EXPRESSO', text)
        self.assertIn('<script>alert(1)</script> Tom & Jerry', text)
        self.assertIn('⚠️ Erro: Failed to establish a new connection', text)
        self.assertIn('Nenhum artigo encontrado', text)
        self.assertIn('LAL 105 @ BOS 110', text)
        self.assertIn('Este digest é gerado automaticamente 4 vezes por dia.', text)

if __name__ == '__main__':
    unittest.main()
