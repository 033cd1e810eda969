"""Constants and configuration values."""
from enum import Enum

# Hard cap on articles kept per source
MAX_ARTICLES_PER_SOURCE = 15

# Number of cross-source headlines promoted to the top of the email
TOP_HEADLINES_COUNT = 5

# Path segments that never point at a readable article
NON_ARTICLE_PATH_SEGMENTS = ['/video/', '/videos/', '/interactive/', '/live/', '/gallery/']

# Extraction tiers, in cascade order
class Tier(str, Enum):
    HEADLINE = 'headline'
    CARD = 'card'
    FALLBACK = 'fallback'

# Minutes values ESPN uses for players who did not get on the floor
DID_NOT_PLAY_MINUTES = {'0', 'DNP', '--', ''}

# Placeholder for an empty leader slot
EMPTY_STAT = {'name': 'N/A', 'value': ''}

# NBA team abbreviation to full name mapping
NBA_TEAM_NAMES = {
    'ATL': 'Atlanta Hawks',
    'BOS': 'Boston Celtics',
    'BKN': 'Brooklyn Nets',
    'CHA': 'Charlotte Hornets',
    'CHI': 'Chicago Bulls',
    'CLE': 'Cleveland Cavaliers',
    'DAL': 'Dallas Mavericks',
    'DEN': 'Denver Nuggets',
    'DET': 'Detroit Pistons',
    'GS': 'Golden State Warriors',
    'GSW': 'Golden State Warriors',
    'HOU': 'Houston Rockets',
    'IND': 'Indiana Pacers',
    'LAC': 'Los Angeles Clippers',
    'LAL': 'Los Angeles Lakers',
    'MEM': 'Memphis Grizzlies',
    'MIA': 'Miami Heat',
    'MIL': 'Milwaukee Bucks',
    'MIN': 'Minnesota Timberwolves',
    'NO': 'New Orleans Pelicans',
    'NOP': 'New Orleans Pelicans',
    'NY': 'New York Knicks',
    'NYK': 'New York Knicks',
    'OKC': 'Oklahoma City Thunder',
    'ORL': 'Orlando Magic',
    'PHI': 'Philadelphia 76ers',
    'PHX': 'Phoenix Suns',
    'POR': 'Portland Trail Blazers',
    'SA': 'San Antonio Spurs',
    'SAC': 'Sacramento Kings',
    'TOR': 'Toronto Raptors',
    'UTAH': 'Utah Jazz',
    'UTA': 'Utah Jazz',
    'WAS': 'Washington Wizards',
}

# Portuguese calendar names for email headers (Monday first, as datetime.weekday())
PT_WEEKDAYS = ['segunda-feira', 'terça-feira', 'quarta-feira', 'quinta-feira',
               'sexta-feira', 'sábado', 'domingo']
PT_MONTHS = ['janeiro', 'fevereiro', 'março', 'abril', 'maio', 'junho', 'julho',
             'agosto', 'setembro', 'outubro', 'novembro', 'dezembro']
