"""Email service using Resend for transactional emails."""

import logging
from typing import Any

import resend
from starlette.concurrency import run_in_threadpool

from src.core.config import get_settings

logger = logging.getLogger(__name__)


class EmailService:
    """Service for sending transactional emails via Resend."""

    def __init__(self) -> None:
        """Initialize email service with Resend API key."""
        settings = get_settings()
        resend.api_key = settings.resend_api_key
        self.from_email = settings.email_from_address
        self.frontend_url = settings.frontend_url

    async def send_invite_email(
        self,
        to_email: str,
        company_name: str | None = None,
    ) -> dict[str, Any]:
        """Invite a newly provisioned employee to sign in.

        Delivery is not confirmed and failures are only logged; the
        result is returned for callers that want to log it.

        Args:
            to_email: Recipient email address.
            company_name: Name of the company the user was added to.

        Returns:
            dict: ``success`` flag plus the Resend email id or the error.
        """
        team = company_name or "your team"
        login_url = f"{self.frontend_url}/login"

        html_content = f"""
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>You're Invited!</title>
</head>
<body style="font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;">
    <h1 style="font-size: 22px;">You have been added to {team}</h1>

    <p>Your account was created with this email address. Sign in to start filling in your timesheets.</p>

    <div style="text-align: center; margin: 30px 0;">
        <a href="{login_url}" style="background: #3b82f6; color: white; padding: 12px 28px; text-decoration: none; border-radius: 6px; font-weight: 600;">
            Sign in
        </a>
    </div>

    <p style="font-size: 12px; color: #9ca3af;">
        If the button doesn't work, copy and paste this link:<br>
        <a href="{login_url}">{login_url}</a>
    </p>
</body>
</html>
"""

        text_content = f"""
You have been added to {team}.

Your account was created with this email address. Sign in to start filling in your timesheets:
{login_url}
"""

        try:
            response = await run_in_threadpool(resend.Emails.send, {
                "from": self.from_email,
                "to": [to_email],
                "subject": f"You have been added to {team}",
                "html": html_content,
                "text": text_content,
            })

            logger.info("Invite email sent to %s, id: %s", to_email, response.get("id"))
            return {"success": True, "email_id": response.get("id")}

        except Exception as e:
            logger.error("Failed to send invite email to %s: %s", to_email, str(e))
            return {"success": False, "error": str(e)}
