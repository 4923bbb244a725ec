"""Tests for the deal-is-live mailer (SMTP mocked)."""
import smtplib
from unittest.mock import MagicMock, patch

import pytest

from savrdeals.core.config import Settings
from savrdeals.core.exceptions import MailConfigurationError, MailDeliveryError
from savrdeals.notifications.mailer import DealLiveMailer, deal_live_subject

pytestmark = pytest.mark.unit


@pytest.fixture
def settings():
    return Settings(
        email_user="deals@savrdeals.com",
        email_password="app-password",
        smtp_server="smtp.example.com",
        smtp_port=2525,
        public_site_url="https://savrdeals.example",
    )


def test_subject_names_the_deal():
    assert deal_live_subject("Air Fryer") == 'Your Requested Deal "Air Fryer" is Now Live! 🎉'


def test_render_includes_deal_and_site_link(settings):
    html = DealLiveMailer(settings).render("Air Fryer")
    assert "Air Fryer" in html
    assert 'href="https://savrdeals.example"' in html


def test_render_escapes_deal_name(settings):
    html = DealLiveMailer(settings).render("<script>alert(1)</script>")
    assert "<script>" not in html
    assert "&lt;script&gt;" in html


def test_message_headers(settings):
    msg = DealLiveMailer(settings).build_message("buyer@example.com", "Air Fryer")
    assert msg["To"] == "buyer@example.com"
    sender = msg["From"].addresses[0]
    assert sender.display_name == "Savrdeals"
    assert sender.addr_spec == "deals@savrdeals.com"
    assert msg.get_content_type() == "text/html"


def test_send_uses_starttls_and_login(settings):
    smtp = MagicMock()
    with patch("savrdeals.notifications.mailer.smtplib.SMTP") as smtp_cls:
        smtp_cls.return_value.__enter__.return_value = smtp
        DealLiveMailer(settings).send_deal_live("buyer@example.com", "Air Fryer")

    smtp_cls.assert_called_once_with("smtp.example.com", 2525)
    smtp.starttls.assert_called_once()
    smtp.login.assert_called_once_with("deals@savrdeals.com", "app-password")
    sent = smtp.send_message.call_args
    assert sent.kwargs["from_addr"] == "deals@savrdeals.com"
    assert sent.kwargs["to_addrs"] == ["buyer@example.com"]
    assert sent.args[0]["Subject"] == deal_live_subject("Air Fryer")


def test_missing_credentials_raise():
    mailer = DealLiveMailer(Settings(email_user="", email_password=""))
    with pytest.raises(MailConfigurationError):
        mailer.send_deal_live("buyer@example.com", "Air Fryer")


def test_smtp_failure_raises_delivery_error(settings):
    with patch("savrdeals.notifications.mailer.smtplib.SMTP") as smtp_cls:
        smtp_cls.return_value.__enter__.return_value.login.side_effect = (
            smtplib.SMTPAuthenticationError(535, b"bad credentials")
        )
        with pytest.raises(MailDeliveryError):
            DealLiveMailer(settings).send_deal_live("buyer@example.com", "Air Fryer")
