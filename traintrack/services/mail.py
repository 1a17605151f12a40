"""SMTP mail sender for registration and password reset messages."""

import html
import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import TYPE_CHECKING
from urllib.parse import urlencode

from traintrack.models import User

if TYPE_CHECKING:
    from traintrack.core.config import Settings

logger = logging.getLogger(__name__)

SENDER_NAME = "TrainTrack"


def _build_message(to_email: str, subject: str, html_body: str, settings: "Settings") -> MIMEMultipart:
    msg = MIMEMultipart("alternative")
    msg["From"] = f"{SENDER_NAME} <{settings.SMTP_FROM}>"
    msg["To"] = to_email
    msg["Subject"] = subject
    msg.attach(MIMEText(html_body, "html", "utf-8"))
    return msg


def _send(msg: MIMEMultipart, settings: "Settings") -> None:
    """Deliver through SMTP; raises smtplib.SMTPException or OSError on failure."""
    if not settings.MAIL_ENABLED:
        logger.info("Mail disabled; not sending '%s' to %s", msg["Subject"], msg["To"])
        return
    with smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT) as server:
        if settings.SMTP_USE_TLS:
            server.starttls()
        if settings.SMTP_USERNAME:
            server.login(settings.SMTP_USERNAME, settings.SMTP_PASSWORD.get_secret_value())
        server.send_message(msg)


def build_reset_link(token: str, settings: "Settings") -> str:
    return f"{settings.PASSWORD_RESET_URL}?{urlencode({'token': token})}"


def send_registration_mail(user: User, settings: "Settings") -> None:
    """Welcome mail after self-registration."""
    name = html.escape(user.name)
    body = f"""
    <html>
      <body style="font-family: Arial, sans-serif; color: #333; max-width: 600px; margin: auto;">
        <h2>Welcome to TrainTrack, {name}!</h2>
        <p>Your account <strong>{html.escape(user.email)}</strong> has been created.</p>
        <p>Scan the NFC tag on any machine in your studio to start tracking your training.</p>
      </body>
    </html>
    """
    _send(_build_message(user.email, "Thank you for registering with TrainTrack", body, settings), settings)
    logger.info("Registration mail sent to user_id=%s", user.id)


def send_password_reset_mail(user: User, token: str, settings: "Settings") -> None:
    """Mail the plaintext reset token; it is never stored or logged server-side."""
    link = html.escape(build_reset_link(token, settings))
    body = f"""
    <html>
      <body style="font-family: Arial, sans-serif; color: #333; max-width: 600px; margin: auto;">
        <h2>Reset your password</h2>
        <p>Hello {html.escape(user.name)},</p>
        <p>Follow the link below to choose a new password. It is valid for
        {settings.PASSWORD_RESET_EXPIRE_MINUTES} minutes and can be used once.</p>
        <p><a href="{link}">{link}</a></p>
        <p style="font-size: 12px; color: #888;">If you did not ask for this, ignore this message.</p>
      </body>
    </html>
    """
    _send(_build_message(user.email, "Reset Password", body, settings), settings)
    logger.info("Password reset mail sent to user_id=%s", user.id)
