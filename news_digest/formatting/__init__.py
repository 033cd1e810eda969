"""Formatting package exports."""
from news_digest.formatting.text_utils import (
    normalize_text,
    sanitize_text,
    escape_html,
    strip_html
)
from news_digest.formatting.date_utils import (
    format_pt_long_date,
    format_short_date
)
from news_digest.formatting.render import (
    get_top_headlines,
    get_time_of_day,
    build_subject,
    build_digest_html,
    build_digest_text
)
from news_digest.formatting.template_renderer import (
    render_template,
    get_template_environment
)

__all__ = [
    # Text processing
    'normalize_text',
    'sanitize_text',
    'escape_html',
    'strip_html',

    # Date handling
    'format_pt_long_date',
    'format_short_date',

    # Email composition
    'get_top_headlines',
    'get_time_of_day',
    'build_subject',
    'build_digest_html',
    'build_digest_text',

    # Template rendering
    'render_template',
    'get_template_environment'
]
