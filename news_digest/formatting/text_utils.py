"""Text processing utilities."""
import re
from bs4 import BeautifulSoup

# Named entities decoded by normalize_text, folded to plain ASCII where
# the email font may lack the glyph
HTML_ENTITIES = {
    '&amp;': '&',
    '&lt;': '<',
    '&gt;': '>',
    '&quot;': '"',
    '&#39;': "'",
    '&apos;': "'",
    '&nbsp;': ' ',
    '&ndash;': '-',
    '&mdash;': '-',
    '&lsquo;': "'",
    '&rsquo;': "'",
    '&ldquo;': '"',
    '&rdquo;': '"',
    '&hellip;': '...',
    '&euro;': 'EUR',
    '&pound;': 'GBP',
    '&copy;': '(c)',
    '&reg;': '(R)',
    '&trade;': '(TM)',
    '&deg;': ' deg',
    '&plusmn;': '+/-',
    '&frac12;': '1/2',
    '&frac14;': '1/4',
    '&frac34;': '3/4',
    '&times;': 'x',
    '&divide;': '/',
}

# Characters whose UTF-8 bytes commonly arrive decoded as Latin-1 or cp1252
MOJIBAKE_SOURCE_CHARS = (
    'áàâãäçéèêëíìîïñóòôõöúùûü'
    'ÁÀÂÃÄÇÉÈÊËÍÌÎÏÑÓÒÔÕÖÚÙÛÜ'
    'ºª'
    '‘’“”–—…•€'
)

def _build_mojibake_fixes():
    fixes = {}
    for char in MOJIBAKE_SOURCE_CHARS:
        raw = char.encode('utf-8')
        for codec in ('latin-1', 'cp1252'):
            try:
                mangled = raw.decode(codec)
            except UnicodeDecodeError:
                # cp1252 leaves 0x81, 0x8D, 0x8F, 0x90 and 0x9D undefined
                continue
            fixes[mangled] = char
    return fixes

MOJIBAKE_FIXES = _build_mojibake_fixes()

_MOJIBAKE_RE = re.compile(
    '|'.join(re.escape(k) for k in sorted(MOJIBAKE_FIXES, key=len, reverse=True))
)
_NAMED_ENTITY_RE = re.compile(
    '|'.join(re.escape(k) for k in HTML_ENTITIES), re.IGNORECASE
)
_NUMERIC_ENTITY_RE = re.compile(r'&#(?:(\d+)|[xX]([0-9a-fA-F]+));')
_C1_CONTROLS_RE = re.compile('[\u0080-\u009f]')
_WHITESPACE_RE = re.compile(r'\s+')

# Typographic punctuation folded to ASCII. Middle dot, bullet and tilde
# become hyphens for every source.
_PUNCTUATION_FOLDS = [
    (re.compile('[\u2018\u2019\u201a\u201b]'), "'"),
    (re.compile('[\u201c\u201d\u201e\u201f]'), '"'),
    (re.compile('[\u2013\u2014\u2015]'), '-'),
    (re.compile('\u2026'), '...'),
    (re.compile('[\u00b7\u2022~]'), '-'),
]

def _decode_numeric_entity(match) -> str:
    decimal, hexadecimal = match.groups()
    code = int(decimal) if decimal is not None else int(hexadecimal, 16)
    try:
        return chr(code)
    except (ValueError, OverflowError):
        return match.group(0)

def repair_mojibake(text: str) -> str:
    """Replace UTF-8 sequences that were decoded as Latin-1/cp1252."""
    if not text:
        return ''
    return _MOJIBAKE_RE.sub(lambda m: MOJIBAKE_FIXES[m.group(0)], text)

def decode_entities(text: str) -> str:
    """Decode the known named entities plus decimal and hex numeric entities."""
    if not text:
        return ''
    text = _NAMED_ENTITY_RE.sub(lambda m: HTML_ENTITIES[m.group(0).lower()], text)
    return _NUMERIC_ENTITY_RE.sub(_decode_numeric_entity, text)

def normalize_text(text: str) -> str:
    """
    Sanitize and normalize text scraped from a web page.

    Repairs mis-encoded accents, decodes HTML entities, strips C1 control
    characters, collapses whitespace and folds typographic punctuation to
    ASCII.

    Args:
        text: Raw text taken from the document tree

    Returns:
        Clean single-line text, or an empty string
    """
    if not text:
        return ''

    result = repair_mojibake(text)
    result = decode_entities(result)
    result = _C1_CONTROLS_RE.sub('', result)
    # Stripping controls can join the halves of a mangled sequence
    result = repair_mojibake(result)
    result = _WHITESPACE_RE.sub(' ', result).strip()

    for pattern, replacement in _PUNCTUATION_FOLDS:
        result = pattern.sub(replacement, result)

    return result

sanitize_text = normalize_text

def escape_html(text: str) -> str:
    """Escape the five XML-unsafe characters for safe display in email."""
    if text is None:
        return ''

    return (str(text)
            .replace('&', '&amp;')
            .replace('<', '&lt;')
            .replace('>', '&gt;')
            .replace('"', '&quot;')
            .replace("'", '&#39;'))

def strip_html(html: str) -> str:
    """
    Convert HTML to plain text by removing tags while keeping line structure.

    Args:
        html: HTML content to convert

    Returns:
        Plain text version of the HTML content
    """
    if not html:
        return ""

    soup = BeautifulSoup(html, 'html.parser')

    for script in soup(["script", "style"]):
        script.decompose()

    text = soup.get_text()
    lines = (line.strip() for line in text.splitlines())
    chunks = (phrase.strip() for line in lines for phrase in line.split("  "))

    return '\n'.join(chunk for chunk in chunks if chunk)
