"""
Notification Package

Rendering summaries as email and delivering them over SMTP.
"""

from .smtp_sender import SmtpEmailService
from .template import render_summary_html, render_summary_text

__all__ = [
    "SmtpEmailService",
    "render_summary_html",
    "render_summary_text",
]
