"""Jinja2 template rendering for the digest email."""
from pathlib import Path
from typing import Any, Dict
from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup
from news_digest.formatting.text_utils import escape_html

TEMPLATE_DIR = Path(__file__).parent.parent / 'templates'

def escape_html_filter(value) -> Markup:
    """Escape with escape_html and mark safe so autoescape leaves it alone."""
    return Markup(escape_html(value))

def format_priority(priority) -> str:
    return f"{priority}/10"

def get_template_environment() -> Environment:
    """Create and configure Jinja2 environment."""
    env = Environment(
        loader=FileSystemLoader(TEMPLATE_DIR),
        autoescape=select_autoescape(['html', 'xml']),
        trim_blocks=True,
        lstrip_blocks=True,
    )

    # Register custom filters
    env.filters['escape_html'] = escape_html_filter
    env.filters['format_priority'] = format_priority

    return env

def render_template(name: str, context: Dict[str, Any]) -> str:
    """Render a template from the package templates directory.

    Args:
        name: Template file name, e.g. 'digest.html'
        context: Variables passed to the template

    Returns:
        str: The rendered document
    """
    env = get_template_environment()
    template = env.get_template(name)
    return template.render(**context)
