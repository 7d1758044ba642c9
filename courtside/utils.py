"""Utility functions for the application."""

from __future__ import annotations

import datetime
import smtplib
from typing import TYPE_CHECKING, Any

from flask import current_app, render_template
from flask_mail import Message

from .core.constants import SMTP_AUTH_ERROR_CODE
from .extensions import mail

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot


class EmailError(Exception):
    """Base class for email errors."""

    pass


def send_email(to, subject, template, **kwargs):
    """Send an email to a recipient.

    Raises:
        EmailError: If sending the email fails.
    """
    msg = Message(
        subject,
        recipients=[to],
        html=render_template(template, **kwargs),
        sender=current_app.config["MAIL_DEFAULT_SENDER"],
    )
    try:
        mail.send(msg)
    except smtplib.SMTPAuthenticationError as e:
        if e.smtp_code == SMTP_AUTH_ERROR_CODE:
            raise EmailError(
                "Authentication failed. The mail provider requires an app password. "
                "Please verify your MAIL_USERNAME and MAIL_PASSWORD settings."
            ) from e
        raise EmailError(f"SMTP Authentication failed: {e}") from e
    except Exception as e:
        raise EmailError(f"Failed to send email: {e}") from e


def utcnow() -> datetime.datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.datetime.now(datetime.timezone.utc)


def as_utc(value: datetime.datetime) -> datetime.datetime:
    """Treat naive datetimes read back from Firestore as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=datetime.timezone.utc)
    return value


def parse_deadline(value: str) -> datetime.datetime:
    """Parse an ISO date or datetime string into an aware UTC datetime.

    A bare date means midnight UTC at the start of that day.
    """
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.datetime.fromisoformat(text)
    return as_utc(parsed).astimezone(datetime.timezone.utc)


def snapshot_to_dict(doc: DocumentSnapshot) -> dict[str, Any]:
    """Flatten a document snapshot into its data plus its ``id``."""
    data = doc.to_dict() or {}
    data["id"] = doc.id
    return data
