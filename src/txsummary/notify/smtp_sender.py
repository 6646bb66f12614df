#!/usr/bin/env python3
"""
SMTP Email Service

Delivers rendered summary emails over SMTP with optional STARTTLS and login.
"""

import logging
import smtplib
from email.message import EmailMessage
from email.utils import formatdate, make_msgid

from ..core.config import SmtpConfig, get_config
from ..core.errors import EmailDeliveryError
from ..core.summary import Summary
from .template import render_summary_html, render_summary_text

logger = logging.getLogger(__name__)

FALLBACK_TEXT = "Your account summary is attached as HTML. Please use an HTML-capable mail client to view it.\n"


class SmtpEmailService:
    """
    Sends summary emails through an SMTP relay.

    Every failure, whether connecting, authenticating or sending, is reported
    as EmailDeliveryError with the original exception chained.
    """

    def __init__(self, config: SmtpConfig | None = None):
        """Initialize with SMTP configuration (default: application config)."""
        self.config = config if config is not None else get_config().smtp

    def render_template(self, summary: Summary) -> str:
        """Render the HTML body for a summary."""
        return render_summary_html(summary)

    def send_summary(self, recipient: str, summary: Summary) -> None:
        """
        Render and deliver a summary.

        Raises:
            EmailDeliveryError: If rendering or delivery fails
        """
        logger.info(f"Sending summary email to {recipient}")
        try:
            html_body = self.render_template(summary)
            text_body = render_summary_text(summary)
        except (KeyError, ValueError) as e:
            raise EmailDeliveryError(f"rendering email template failed: {e}") from e

        self.send(recipient, html_body, text_body=text_body)

    def send(self, recipient: str, rendered_body: str, text_body: str | None = None) -> None:
        """
        Deliver an already rendered HTML body.

        Args:
            recipient: Destination address
            rendered_body: HTML document
            text_body: Plain-text alternative (default: a short notice)

        Raises:
            EmailDeliveryError: If the SMTP exchange fails
        """
        message = self.build_message(recipient, rendered_body, text_body)

        logger.debug(f"Connecting to SMTP server {self.config.host}:{self.config.port}")
        try:
            with smtplib.SMTP(self.config.host, self.config.port, timeout=self.config.timeout) as smtp:
                if self.config.use_tls:
                    smtp.starttls()
                if self.config.username and self.config.password:
                    smtp.login(self.config.username, self.config.password)
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"SMTP send to {recipient} failed: {e}")
            raise EmailDeliveryError(f"sending email to {recipient} failed: {e}") from e

        logger.info(f"Summary email sent to {recipient}")

    def build_message(self, recipient: str, html_body: str, text_body: str | None = None) -> EmailMessage:
        """Assemble a multipart/alternative message with text and HTML parts."""
        message = EmailMessage()
        message["From"] = self.config.from_address
        message["To"] = recipient
        message["Subject"] = self.config.subject
        message["Date"] = formatdate(localtime=True)
        message["Message-ID"] = make_msgid()
        message.set_content(text_body or FALLBACK_TEXT)
        message.add_alternative(html_body, subtype="html")
        return message
