"""Transactional email for requested deals.

When a moderator publishes a deal that a user asked for, the user gets a
"your deal is live" message. The body is rendered from a Jinja2 template and
sent over SMTP with STARTTLS.
"""

import smtplib
from datetime import datetime, timezone
from email.message import EmailMessage
from pathlib import Path

import structlog
from jinja2 import Environment, FileSystemLoader, select_autoescape

from savrdeals.core.config import Settings, get_settings
from savrdeals.core.exceptions import MailConfigurationError, MailDeliveryError

logger = structlog.get_logger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"


def deal_live_subject(deal_name: str) -> str:
    return f'Your Requested Deal "{deal_name}" is Now Live! 🎉'


class DealLiveMailer:
    """Render and send the deal-is-live notification."""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self.env = Environment(
            loader=FileSystemLoader(str(TEMPLATE_DIR)),
            autoescape=select_autoescape(["html", "j2"]),
        )

    def render(self, deal_name: str) -> str:
        template = self.env.get_template("deal_live.html.j2")
        return template.render(
            deal_name=deal_name,
            site_url=self.settings.public_site_url,
            year=datetime.now(timezone.utc).year,
        )

    def build_message(self, to_email: str, deal_name: str) -> EmailMessage:
        sender = self.settings.email_from or self.settings.email_user
        msg = EmailMessage()
        msg["Subject"] = deal_live_subject(deal_name)
        msg["From"] = f'"Savrdeals" <{sender}>'
        msg["To"] = to_email
        msg.set_content(self.render(deal_name), subtype="html")
        return msg

    def send_deal_live(self, to_email: str, deal_name: str) -> None:
        """Send the notification. Blocking; call via asyncio.to_thread from async code.

        Raises:
            MailConfigurationError: EMAIL_USER / EMAIL_PASSWORD not set
            MailDeliveryError: SMTP connection, auth, or send failed
        """
        user = self.settings.email_user
        password = self.settings.email_password
        if not (user and password):
            raise MailConfigurationError(
                "Email credentials not configured. Set EMAIL_USER and EMAIL_PASSWORD."
            )

        msg = self.build_message(to_email, deal_name)
        try:
            with smtplib.SMTP(self.settings.smtp_server, self.settings.smtp_port) as server:
                server.starttls()
                server.login(user, password)
                server.send_message(msg, from_addr=user, to_addrs=[to_email])
        except (smtplib.SMTPException, OSError) as e:
            logger.error("deal_live_email_failed", error=str(e), error_type=type(e).__name__)
            raise MailDeliveryError(str(e)) from e

        logger.info("deal_live_email_sent", deal_name=deal_name)


def get_mailer() -> DealLiveMailer:
    """FastAPI dependency returning a mailer bound to current settings."""
    return DealLiveMailer()
