"""Signup notification email sent to the admin mailbox.

Delivery goes through SMTP (``SMTP_HOST`` / ``SMTP_USER`` / ``SMTP_PASSWORD``).
The send is skipped, not failed, when signup notifications are switched off
in the email settings or SMTP is not configured.
"""

import asyncio
import html
import logging
import os
import smtplib
from datetime import datetime, timezone
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Any, Dict

from forgenova_admin.exceptions import BadRequest, EmailDeliveryError
from forgenova_admin.services.email_settings import EmailSettingsManager

logger = logging.getLogger(__name__)

SIGNUP_EVENT = "user_signup"


def smtp_configured() -> bool:
    return bool(
        os.getenv("SMTP_HOST") and os.getenv("SMTP_USER") and os.getenv("SMTP_PASSWORD")
    )


def _field(user_data: Dict[str, Any], key: str) -> str:
    return html.escape(str(user_data.get(key) or "Not provided"))


def render_signup_email(user_data: Dict[str, Any], signed_up_at: datetime) -> str:
    dashboard_url = os.getenv("ADMIN_DASHBOARD_URL", "https://mvp.forgenova.ai/admin.html")
    rows = [
        ("Name", _field(user_data, "full_name")),
        ("Email", _field(user_data, "email")),
        ("Company", _field(user_data, "company")),
        ("Position", _field(user_data, "position")),
        ("Signup Date", signed_up_at.strftime("%Y-%m-%d %H:%M UTC")),
    ]
    info = "".join(
        f'<div class="info-row"><span class="label">{label}:</span> <span>{value}</span></div>'
        for label, value in rows
    )
    return (
        "<html><body>"
        '<div class="container">'
        "<h2>New User Signup</h2>"
        "<p>Someone just created an account on ForgeNovaAI.</p>"
        f"{info}"
        f'<p><a href="{html.escape(dashboard_url)}">View in Admin Dashboard</a></p>'
        '<p class="footer">You can disable these notifications in Admin Dashboard '
        "&rarr; Settings &rarr; Email &amp; Notifications.</p>"
        "</div>"
        "</body></html>"
    )


class SignupNotifier:
    """Sends the ``user_signup`` notification."""

    def __init__(self, email_settings: EmailSettingsManager):
        self.email_settings = email_settings

    async def notify(self, event_type: str, user_data: Dict[str, Any]) -> Dict[str, Any]:
        if event_type != SIGNUP_EVENT:
            raise BadRequest("Invalid notification type")
        if not user_data.get("email"):
            raise BadRequest("userData.email is required")

        if not await self.email_settings.signup_notifications_enabled():
            return {"skipped": True, "reason": "Notifications disabled"}

        if not smtp_configured():
            logger.warning("Signup notification skipped: SMTP is not configured")
            return {"skipped": True, "reason": "SMTP not configured"}

        smtp_host = os.getenv("SMTP_HOST")
        smtp_port = int(os.getenv("SMTP_PORT", "587"))
        smtp_user = os.getenv("SMTP_USER")
        smtp_password = os.getenv("SMTP_PASSWORD")
        from_email = os.getenv("SMTP_FROM_EMAIL", "info@forgenova.ai")
        to_email = os.getenv("ADMIN_NOTIFICATION_EMAIL", from_email)

        msg = MIMEMultipart("alternative")
        msg["Subject"] = "New User Signup - ForgeNovaAI"
        msg["From"] = f"ForgeNovaAI <{from_email}>"
        msg["To"] = to_email
        msg.attach(
            MIMEText(render_signup_email(user_data, datetime.now(timezone.utc)), "html")
        )

        def _send_sync():
            with smtplib.SMTP(smtp_host, smtp_port) as server:
                server.starttls()
                server.login(smtp_user, smtp_password)
                server.sendmail(from_email, [to_email], msg.as_string())

        try:
            await asyncio.to_thread(_send_sync)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("SMTP error sending signup notification: %s", e)
            raise EmailDeliveryError(f"SMTP error: {type(e).__name__}") from e

        logger.info("Signup notification sent to %s for %s", to_email, user_data.get("email"))
        return {"sent": True, "to": to_email}
