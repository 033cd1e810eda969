"""NBA results from ESPN's public scoreboard and box-score feeds.

The scoreboard gives final scores and per-team leaders for points,
rebounds and assists. Box scores for every completed game are fetched in
parallel to fill in steals, blocks and game-score leaders, pick the
Player of the Night and track the featured player.
"""
import concurrent.futures
import re
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Tuple
from urllib.parse import quote
from news_digest.config.settings import NBA_SETTINGS
from news_digest.core.constants import DID_NOT_PLAY_MINUTES, EMPTY_STAT, NBA_TEAM_NAMES
from news_digest.core.types import (
    FeaturedPlayerStats,
    NBAGame,
    NBAScores,
    PlayerGameStats,
    PlayerOfTheNight,
    PlayerStat,
)
from news_digest.logging_cfg.logger import setup_logger, update_metrics
from news_digest.scrapers.http import create_session, fetch_json
from news_digest.sports.matching import PlayerMatcher

logger = setup_logger()

AP_NEWS_SEARCH_URL = 'https://apnews.com/search?q='

# Box-score column labels mapped to the stats we read
BOXSCORE_LABELS = {
    'MIN': 'minutes',
    'PTS': 'points',
    'REB': 'rebounds',
    'AST': 'assists',
    'STL': 'steals',
    'BLK': 'blocks',
}

MIN_STAT_COLUMNS = 10

_LEADING_INT_RE = re.compile(r'^\s*([+-]?\d+)')

def _to_int(value) -> int:
    """Leading integer of a feed value; 0 when there is none."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return int(value)
    match = _LEADING_INT_RE.match(str(value or ''))
    return int(match.group(1)) if match else 0

def _as_utc(now: Optional[datetime]) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc)

def calculate_game_score(stats) -> float:
    """PTS + 0.4*REB + 0.7*AST + 2*STL + 2*BLK (unrounded)."""
    return (
        stats['points']
        + 0.4 * stats['rebounds']
        + 0.7 * stats['assists']
        + 2 * stats['steals']
        + 2 * stats['blocks']
    )

def get_yesterday_date(now: Optional[datetime] = None) -> str:
    """Yesterday's UTC date as YYYYMMDD, the scoreboard's query format."""
    yesterday = _as_utc(now) - timedelta(days=1)
    return yesterday.strftime('%Y%m%d')

def get_formatted_yesterday(now: Optional[datetime] = None) -> str:
    """Yesterday's UTC date for display, e.g. 'Saturday, October 17'."""
    yesterday = _as_utc(now) - timedelta(days=1)
    return f"{yesterday:%A}, {yesterday:%B} {yesterday.day}"

def is_morning_digest(now: Optional[datetime] = None) -> bool:
    """True when the UTC hour falls inside the configured morning window."""
    start, end = NBA_SETTINGS.get('morning_window_utc', (5, 8))
    return start <= _as_utc(now).hour < end

def build_ap_news_url(away_team: str, home_team: str) -> str:
    """AP News search for a game, using the team nicknames."""
    away_nickname = NBA_TEAM_NAMES.get(away_team, away_team).split(' ')[-1] or away_team
    home_nickname = NBA_TEAM_NAMES.get(home_team, home_team).split(' ')[-1] or home_team
    return AP_NEWS_SEARCH_URL + quote(f"{away_nickname} {home_nickname} NBA", safe='')

def get_leader_stat(competitor: Dict, category: str) -> Optional[Dict]:
    """First leader for a category in a scoreboard competitor, or None."""
    for leader in competitor.get('leaders') or []:
        if leader.get('name') == category or (leader.get('displayName') or '').lower() == category:
            entries = leader.get('leaders') or []
            if not entries:
                return None
            stat = entries[0]
            return {
                'name': (stat.get('athlete') or {}).get('displayName') or 'Unknown',
                'display_value': stat.get('displayValue', ''),
            }
    return None

def _leader_slot(competitor: Dict, category: str, suffix: str) -> PlayerStat:
    stat = get_leader_stat(competitor, category)
    if stat is None:
        return dict(EMPTY_STAT)
    return {'name': stat['name'], 'value': f"{stat['display_value']} {suffix}"}

def parse_scoreboard(data: Dict) -> Tuple[List[NBAGame], List[Tuple[str, str]]]:
    """
    Build games from a scoreboard payload.

    Returns:
        The completed games and, in the same order, (event id, matchup) pairs
    """
    games: List[NBAGame] = []
    completed: List[Tuple[str, str]] = []

    for event in data.get('events') or []:
        status = (event.get('status') or {}).get('type') or {}
        if not status.get('completed'):
            continue

        competitions = event.get('competitions') or []
        competitors = competitions[0].get('competitors') if competitions else None
        if not competitors:
            continue

        home = next((c for c in competitors if c.get('homeAway') == 'home'), None)
        away = next((c for c in competitors if c.get('homeAway') == 'away'), None)
        if home is None or away is None:
            continue

        home_score = _to_int(home.get('score'))
        away_score = _to_int(away.get('score'))
        home_abbr = (home.get('team') or {}).get('abbreviation') or 'HOME'
        away_abbr = (away.get('team') or {}).get('abbreviation') or 'AWAY'
        matchup = f"{away_abbr} @ {home_abbr}"
        game_id = str(event.get('id', ''))

        games.append({
            'game_id': game_id,
            'home_team': home_abbr,
            'away_team': away_abbr,
            'home_score': home_score,
            'away_score': away_score,
            'winner': 'home' if home_score > away_score else 'away',
            'matchup': matchup,
            'home_top_scorer': _leader_slot(home, 'points', 'PTS'),
            'away_top_scorer': _leader_slot(away, 'points', 'PTS'),
            'home_top_rebounder': _leader_slot(home, 'rebounds', 'REB'),
            'away_top_rebounder': _leader_slot(away, 'rebounds', 'REB'),
            'home_top_assists': _leader_slot(home, 'assists', 'AST'),
            'away_top_assists': _leader_slot(away, 'assists', 'AST'),
            # Replaced from the box score when it loads
            'home_top_steals': _leader_slot(home, 'steals', 'STL'),
            'away_top_steals': _leader_slot(away, 'steals', 'STL'),
            'home_top_blocks': _leader_slot(home, 'blocks', 'BLK'),
            'away_top_blocks': _leader_slot(away, 'blocks', 'BLK'),
            'home_top_game_score': dict(EMPTY_STAT),
            'away_top_game_score': dict(EMPTY_STAT),
            'ap_article_url': build_ap_news_url(away_abbr, home_abbr),
        })
        completed.append((game_id, matchup))

    return games, completed

def _column_map(labels: Optional[List[str]]) -> Dict[str, int]:
    """Stat name to array offset, from the feed's labels where it sends them."""
    columns = dict(NBA_SETTINGS['boxscore_stat_layout'])
    for index, label in enumerate(labels or []):
        key = BOXSCORE_LABELS.get(str(label).upper())
        if key:
            columns[key] = index
    return columns

def _empty_leaders() -> Dict:
    return {
        'steals': {'name': 'N/A', 'value': 0},
        'blocks': {'name': 'N/A', 'value': 0},
        'game_score': {'name': 'N/A', 'value': 0, 'stats': ''},
    }

def parse_boxscore(data: Dict, matchup: str, matcher: Optional[PlayerMatcher] = None) -> Dict:
    """
    Read player lines from a game summary payload.

    Returns:
        dict with 'players' (PlayerGameStats of everyone who played, in feed
        order), 'featured' (FeaturedPlayerStats or None) and 'team_leaders'
        keyed by team abbreviation
    """
    players: List[PlayerGameStats] = []
    featured: Optional[FeaturedPlayerStats] = None
    team_leaders: Dict[str, Dict] = {}

    boxscore = (data or {}).get('boxscore') or {}
    for team in boxscore.get('players') or []:
        team_abbr = (team.get('team') or {}).get('abbreviation') or 'UNK'
        leaders = _empty_leaders()

        for group in team.get('statistics') or []:
            columns = _column_map(group.get('labels'))

            for athlete_data in group.get('athletes') or []:
                name = (athlete_data.get('athlete') or {}).get('displayName')
                stats = athlete_data.get('stats') or []
                if not name:
                    continue

                if len(stats) < MIN_STAT_COLUMNS or max(columns.values()) >= len(stats):
                    # ESPN sends an empty stat line for inactive players
                    if matcher and athlete_data.get('didNotPlay') and matcher.matches(name):
                        featured = {
                            'name': name, 'team': team_abbr, 'points': 0, 'rebounds': 0,
                            'assists': 0, 'steals': 0, 'blocks': 0, 'minutes': 'DNP',
                            'matchup': matchup, 'did_play': False,
                        }
                    continue

                minutes = str(stats[columns['minutes']]).strip()
                line: PlayerGameStats = {
                    'name': name,
                    'team': team_abbr,
                    'points': _to_int(stats[columns['points']]),
                    'rebounds': _to_int(stats[columns['rebounds']]),
                    'assists': _to_int(stats[columns['assists']]),
                    'steals': _to_int(stats[columns['steals']]),
                    'blocks': _to_int(stats[columns['blocks']]),
                    'matchup': matchup,
                }
                did_play = minutes not in DID_NOT_PLAY_MINUTES

                if matcher and matcher.matches(name):
                    featured = {**line, 'minutes': minutes, 'did_play': did_play}

                if not did_play:
                    continue

                if line['steals'] > leaders['steals']['value']:
                    leaders['steals'] = {'name': name, 'value': line['steals']}
                if line['blocks'] > leaders['blocks']['value']:
                    leaders['blocks'] = {'name': name, 'value': line['blocks']}

                game_score = calculate_game_score(line)
                if game_score > leaders['game_score']['value']:
                    leaders['game_score'] = {
                        'name': name,
                        'value': round(game_score, 1),
                        'stats': f"{line['points']} PTS, {line['rebounds']} REB, {line['assists']} AST",
                    }

                players.append(line)

        team_leaders[team_abbr] = leaders

    return {'players': players, 'featured': featured, 'team_leaders': team_leaders}

def fetch_game_boxscore(session, game_id: str, matchup: str, matcher: Optional[PlayerMatcher] = None) -> Dict:
    """Fetch and parse one box score. A failure yields an empty result."""
    try:
        data = fetch_json(
            session,
            NBA_SETTINGS['summary_url'],
            params={'event': game_id},
            timeout=NBA_SETTINGS.get('boxscore_timeout', 10),
        )
        return parse_boxscore(data, matchup, matcher)
    except Exception as e:
        logger.warning(f"Failed to fetch box score for game {game_id} ({matchup}): {e}")
        update_metrics('boxscore_failures', [game_id])
        return {'players': [], 'featured': None, 'team_leaders': {}}

def pick_player_of_the_night(players: List[PlayerGameStats]) -> Optional[PlayerOfTheNight]:
    """Highest game score wins; the first player seen keeps a tie."""
    best = None
    best_score = -1
    for player in players:
        score = calculate_game_score(player)
        if score > best_score:
            best, best_score = player, score

    if best is None:
        return None
    return {**best, 'game_score': round(best_score, 1)}

def find_nightly_stats(session, completed: List[Tuple[str, str]], matcher: Optional[PlayerMatcher] = None) -> Dict:
    """
    Fetch every box score concurrently and combine them.

    Returns:
        dict with 'player_of_the_night', 'featured' and 'game_leaders'
        (team leaders keyed by game id)
    """
    if not completed:
        return {'player_of_the_night': None, 'featured': None, 'game_leaders': {}}

    max_workers = min(NBA_SETTINGS.get('max_boxscore_workers', 8), len(completed))
    with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [
            executor.submit(fetch_game_boxscore, session, game_id, matchup, matcher)
            for game_id, matchup in completed
        ]
        # Joined in submission order so results follow the scoreboard
        results = [future.result() for future in futures]

    all_players: List[PlayerGameStats] = []
    featured = None
    game_leaders = {}
    for (game_id, _), result in zip(completed, results):
        all_players.extend(result['players'])
        game_leaders[game_id] = result['team_leaders']
        if result['featured']:
            featured = result['featured']

    return {
        'player_of_the_night': pick_player_of_the_night(all_players),
        'featured': featured,
        'game_leaders': game_leaders,
    }

def apply_team_leaders(game: NBAGame, team_leaders: Dict[str, Dict]) -> None:
    """Fill a game's steals, blocks and game-score slots from its box score."""
    for side in ('home', 'away'):
        leaders = team_leaders.get(game[f'{side}_team'])
        if not leaders:
            continue

        steals, blocks, game_score = leaders['steals'], leaders['blocks'], leaders['game_score']
        game[f'{side}_top_steals'] = (
            {'name': steals['name'], 'value': f"{steals['value']} STL"}
            if steals['value'] > 0 else {'name': 'N/A', 'value': '0 STL'}
        )
        game[f'{side}_top_blocks'] = (
            {'name': blocks['name'], 'value': f"{blocks['value']} BLK"}
            if blocks['value'] > 0 else {'name': 'N/A', 'value': '0 BLK'}
        )
        game[f'{side}_top_game_score'] = (
            {'name': game_score['name'], 'value': f"GmSc: {game_score['value']} ({game_score['stats']})"}
            if game_score['value'] > 0 else dict(EMPTY_STAT)
        )

def fetch_nba_scores(now: Optional[datetime] = None, session=None, matcher: Optional[PlayerMatcher] = None) -> NBAScores:
    """
    Fetch yesterday's completed NBA games.

    Never raises: a scoreboard failure comes back as an NBAScores with no
    games and the error message set.
    """
    display_date = get_formatted_yesterday(now)
    owns_session = session is None
    if owns_session:
        session = create_session(accept='application/json')
    if matcher is None:
        matcher = PlayerMatcher.from_settings()

    try:
        data = fetch_json(
            session,
            NBA_SETTINGS['scoreboard_url'],
            params={'dates': get_yesterday_date(now)},
            timeout=NBA_SETTINGS.get('scoreboard_timeout', 15),
        )
        games, completed = parse_scoreboard(data)
        logger.info(f"NBA scoreboard for {display_date}: {len(games)} completed games")

        nightly = find_nightly_stats(session, completed, matcher)
        for game in games:
            apply_team_leaders(game, nightly['game_leaders'].get(game['game_id'], {}))

        update_metrics('games_fetched', len(games))
        return {
            'games': games,
            'date': display_date,
            'player_of_the_night': nightly['player_of_the_night'],
            'featured_player': nightly['featured'],
            'error': None,
        }
    except Exception as e:
        logger.error(f"Error fetching NBA scores: {e}")
        return {
            'games': [],
            'date': display_date,
            'player_of_the_night': None,
            'featured_player': None,
            'error': str(e) or e.__class__.__name__,
        }
    finally:
        if owns_session:
            session.close()
