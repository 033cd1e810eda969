"""
News Digest Command Line Interface.

Runs one digest end to end:
1. Scrape the enabled news sources
2. Fetch last night's NBA results (morning digest only, unless forced)
3. Render the HTML and plain-text email
4. Send it over SMTP

Scheduled four times a day; dates in the email are shown in Lisbon time.

Example Usage:
    # Send the digest to RECIPIENT_EMAIL
    news-digest

    # Render only, saving the HTML to output/
    news-digest --dry-run --sports

Environment Variables:
    RECIPIENT_EMAIL: Default recipient
    SMTP_HOST: SMTP server hostname
    SMTP_PORT: SMTP server port
    SMTP_SECURE: 'true' for implicit TLS
    SMTP_USER: SMTP authentication username (also the sender address)
    SMTP_PASS: SMTP authentication password

For detailed configuration options, see config/settings.py
"""
# Standard library imports
import os
import sys
import json
import time
import logging
from datetime import datetime, timezone

# Third-party imports
import click
from dotenv import load_dotenv

# Local imports
from news_digest.feeds import run_digest
from news_digest.formatting import build_digest_html
from news_digest.email.sender import send_digest_email
from news_digest.logging_cfg.logger import setup_logger, get_metrics, reset_metrics, print_metrics_summary
from news_digest.config.settings import EMAIL_SETTINGS, SYSTEM_SETTINGS

# Load environment variables
load_dotenv()

# Set up logger
logger = setup_logger()

def save_digest_html(content: str, now: datetime) -> str:
    """Save rendered digest HTML to the output directory.

    Args:
        content: HTML content to save
        now: Run time, used in the file name

    Returns:
        str: Path of the written file
    """
    output_dir = SYSTEM_SETTINGS.get('output_dir', 'output')
    os.makedirs(output_dir, exist_ok=True)
    output_path = os.path.join(output_dir, f"digest_{now:%Y%m%d_%H%M}.html")
    with open(output_path, 'w', encoding='utf-8') as f:
        f.write(content)
    logger.info(f"Digest HTML saved to {output_path}")
    return output_path

def build_run_summary(digests, nba_scores, sent: bool, start_time: float) -> dict:
    metrics = get_metrics()
    return {
        "sources": len(digests),
        "sources_failed": [d['source'] for d in digests if d['error']],
        "articles": sum(len(d['articles']) for d in digests),
        "nba_games": len(nba_scores['games']) if nba_scores else None,
        "boxscore_failures": len(metrics.get('boxscore_failures', [])),
        "email_sent": sent,
        "runtime_seconds": round(time.time() - start_time, 2),
        "end_time_utc": datetime.now(timezone.utc).isoformat(),
    }

@click.command()
@click.option('--recipient', default=lambda: EMAIL_SETTINGS.get('recipient', ''),
              help='Recipient address (defaults to RECIPIENT_EMAIL).')
@click.option('--dry-run', is_flag=True, help='Render and save the HTML without sending.')
@click.option('--sports/--no-sports', default=None,
              help='Force the NBA section on or off (default: morning digest only).')
@click.option('--parallel', is_flag=True, default=None, help='Scrape sources through a thread pool.')
@click.option('--log-level', type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
              default=None, help='Override NEWS_DIGEST_LOG_LEVEL.')
def cli(recipient, dry_run, sports, parallel, log_level):
    """Scrape the news sources and email the digest."""
    if log_level:
        logger.setLevel(getattr(logging, log_level.upper()))

    start_time = time.time()
    now = datetime.now(timezone.utc)
    reset_metrics()
    digests, nba_scores, sent = [], None, False

    logger.info("--- Starting News Digest ---")
    try:
        digests, nba_scores = run_digest(now=now, include_sports=sports, parallel=parallel)

        if dry_run:
            save_digest_html(build_digest_html(digests, nba_scores, now), now)
            logger.info("Dry run: email not sent")
            return

        if not recipient:
            logger.error("No recipient configured. Set RECIPIENT_EMAIL or pass --recipient.")
            sys.exit(1)

        try:
            sent = send_digest_email(recipient, digests, nba_scores, now=now)
        except Exception as e:
            logger.critical(f"Failed to send digest: {e}", exc_info=True)
            sys.exit(1)

    finally:
        logger.info(print_metrics_summary())
        logger.info(f"SUMMARY: {json.dumps(build_run_summary(digests, nba_scores, sent, start_time))}")
        logger.info("--- News Digest Finished ---")

if __name__ == "__main__":
    cli()
