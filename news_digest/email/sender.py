import smtplib
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from email.utils import formataddr, formatdate
import os
from datetime import datetime
from typing import Dict, List, Optional
from dotenv import load_dotenv
import ssl
import certifi
from news_digest.config.settings import EMAIL_SETTINGS
from news_digest.core.types import NBAScores, SourceDigest
from news_digest.formatting.render import build_subject, build_digest_html, build_digest_text
from news_digest.formatting.text_utils import strip_html
from news_digest.logging_cfg.logger import setup_logger

# Set up logger
logger = setup_logger()

# Load environment variables
load_dotenv()

SMTP_TIMEOUT = 30

class EmailConfigurationError(Exception):
    """SMTP credentials are missing."""

def setup_email_settings() -> Dict:
    """Read SMTP settings from the environment, falling back to EMAIL_SETTINGS."""
    port = os.getenv('SMTP_PORT')
    secure = os.getenv('SMTP_SECURE')
    return {
        'smtp_host': os.getenv('SMTP_HOST') or EMAIL_SETTINGS['smtp_host'],
        'smtp_port': int(port) if port else EMAIL_SETTINGS['smtp_port'],
        'smtp_secure': secure.lower() == 'true' if secure is not None else EMAIL_SETTINGS['smtp_secure'],
        'smtp_user': os.getenv('SMTP_USER') or EMAIL_SETTINGS['smtp_user'],
        'smtp_pass': os.getenv('SMTP_PASS') or EMAIL_SETTINGS['smtp_pass'],
        'sender_name': EMAIL_SETTINGS.get('sender_name', 'News Digest'),
    }

def create_secure_smtp_context():
    """Create a secure SSL context for SMTP"""
    context = ssl.create_default_context(
        purpose=ssl.Purpose.SERVER_AUTH,
        cafile=certifi.where()
    )
    context.verify_mode = ssl.CERT_REQUIRED
    return context

def create_smtp_connection(smtp_settings: Dict):
    """Open an authenticated SMTP connection.

    Implicit TLS (SMTP_SSL) when secure is set or the port is 465,
    otherwise plain SMTP upgraded with STARTTLS.
    """
    context = create_secure_smtp_context()
    host, port = smtp_settings['smtp_host'], smtp_settings['smtp_port']

    if smtp_settings.get('smtp_secure') or port == 465:
        server = smtplib.SMTP_SSL(host, port, timeout=SMTP_TIMEOUT, context=context)
    else:
        server = smtplib.SMTP(host, port, timeout=SMTP_TIMEOUT)
        server.starttls(context=context)

    server.login(smtp_settings['smtp_user'], smtp_settings['smtp_pass'])
    return server

def build_message(subject: str, html_body: str, sender: str, recipient: str,
                  text_body: Optional[str] = None, sender_name: str = 'News Digest') -> MIMEMultipart:
    """multipart/alternative with the plain text part first, then HTML."""
    msg = MIMEMultipart('alternative')
    msg['Subject'] = subject
    msg['From'] = formataddr((sender_name, sender))
    msg['To'] = recipient
    msg['Date'] = formatdate(localtime=True)

    if text_body is None:
        text_body = strip_html(html_body)
    msg.attach(MIMEText(text_body, 'plain', 'utf-8'))
    msg.attach(MIMEText(html_body, 'html', 'utf-8'))
    return msg

def send_email(subject: str, html_body: str, recipient: str, text_body: Optional[str] = None,
               smtp_settings: Optional[Dict] = None) -> None:
    """Send one email.

    Raises:
        EmailConfigurationError: When SMTP_USER or SMTP_PASS is not set
        smtplib.SMTPException, OSError: On transport failures
    """
    smtp_settings = smtp_settings or setup_email_settings()
    if not smtp_settings.get('smtp_user') or not smtp_settings.get('smtp_pass'):
        raise EmailConfigurationError(
            'SMTP credentials not configured. Set SMTP_USER and SMTP_PASS environment variables.'
        )

    msg = build_message(
        subject,
        html_body,
        smtp_settings['smtp_user'],
        recipient,
        text_body=text_body,
        sender_name=smtp_settings.get('sender_name', 'News Digest'),
    )

    server = None
    try:
        server = create_smtp_connection(smtp_settings)
        server.send_message(msg)
        logger.info(f"✅ Digest sent to {recipient}")

    except Exception as e:
        logger.error(f"Failed to send email: {str(e)}")
        raise

    finally:
        if server:
            server.quit()

def send_digest_email(recipient_email: str, digests: List[SourceDigest],
                      nba_scores: Optional[NBAScores] = None,
                      smtp_settings: Optional[Dict] = None,
                      now: Optional[datetime] = None) -> bool:
    """Compose and send the digest email.

    Args:
        recipient_email: Destination address
        digests: One SourceDigest per scraped source
        nba_scores: Optional NBA section
        smtp_settings: Overrides for setup_email_settings()
        now: Time used for the subject and header, defaults to the current time

    Returns:
        bool: True once the message has been handed to the SMTP server
    """
    subject = build_subject(digests, now)
    html_body = build_digest_html(digests, nba_scores, now)
    text_body = build_digest_text(digests, nba_scores, now)

    logger.info(f"Sending digest: {subject}")
    send_email(subject, html_body, recipient_email, text_body=text_body, smtp_settings=smtp_settings)
    return True

# Expose these functions as the public API
__all__ = ['send_digest_email', 'send_email', 'setup_email_settings', 'EmailConfigurationError']
