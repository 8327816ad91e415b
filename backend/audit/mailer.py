"""
SMTP delivery of the audit report.

Configuration (see settings):
    EMAIL_SMTP_HOST: SMTP server hostname
    EMAIL_SMTP_PORT: SMTP server port (default: 587)
    EMAIL_SMTP_SECURE: implicit TLS on connect (port 465) instead of STARTTLS
    EMAIL_SMTP_USER / EMAIL_SMTP_PASS: optional authentication
    EMAIL_FROM: sender address
"""

import logging
import smtplib
import ssl
from email.message import EmailMessage
from typing import Any, Optional

from .errors import DeliveryError
from .settings import Settings, settings as default_settings

logger = logging.getLogger(__name__)

REPORT_SUBJECT = "Your PromptProfit Audit Report"
REPORT_FILENAME = "PromptProfit-Audit.pdf"


def build_report_message(recipient: str, pdf: bytes, route: str, config: Settings) -> EmailMessage:
    msg = EmailMessage()
    msg["From"] = config.email_from
    msg["To"] = recipient
    msg["Subject"] = REPORT_SUBJECT
    msg.set_content(
        f"Your audit is ready. View your recommended plan: {config.base_url.rstrip('/')}{route}"
    )
    msg.add_attachment(pdf, maintype="application", subtype="pdf", filename=REPORT_FILENAME)
    return msg


def send_report(recipient: Any, pdf: bytes, route: str, config: Optional[Settings] = None) -> None:
    """
    Email the rendered report to the person who filled in the audit.

    Blocking; call it from a worker thread inside async handlers.

    Raises:
        DeliveryError: no recipient, SMTP not configured, or the server
            rejected the message.
    """
    config = config or default_settings
    recipient = str(recipient or "").strip()
    if not recipient:
        raise DeliveryError("No recipient email address in answers")
    if any(c in recipient for c in ("\r", "\n")):
        raise DeliveryError("Recipient address contains a line break")
    if not config.smtp_host:
        raise DeliveryError("SMTP not configured (missing EMAIL_SMTP_HOST)")

    msg = build_report_message(recipient, pdf, route, config)
    context = ssl.create_default_context()
    try:
        if config.smtp_secure:
            with smtplib.SMTP_SSL(config.smtp_host, config.smtp_port, context=context) as server:
                _login(server, config)
                server.send_message(msg)
        else:
            with smtplib.SMTP(config.smtp_host, config.smtp_port) as server:
                server.ehlo()
                if server.has_extn("starttls"):
                    server.starttls(context=context)
                    server.ehlo()
                _login(server, config)
                server.send_message(msg)
    except (smtplib.SMTPException, OSError) as e:
        logger.error("SMTP delivery failed: %s", type(e).__name__)
        raise DeliveryError(f"SMTP delivery failed: {e}") from e

    logger.info("SMTP: report sent")
    logger.debug("SMTP: report recipient %s", recipient)


def _login(server: smtplib.SMTP, config: Settings) -> None:
    if config.smtp_user and config.smtp_password:
        server.login(config.smtp_user, config.smtp_password)
