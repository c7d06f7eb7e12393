"""Password reset email delivery."""

import asyncio
import logging

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from src.app.services.notifier import INotifier

logger = logging.getLogger(__name__)


def build_reset_link(frontend_url: str, token: str) -> str:
    return f"{frontend_url.rstrip('/')}/reset-password?token={token}"


class SendGridNotifier(INotifier):
    """Sends password reset emails via SendGrid."""

    def __init__(self, api_key: str, from_email: str, frontend_url: str):
        self.api_key = api_key
        self.from_email = from_email
        self.frontend_url = frontend_url
        self.app_name = "Fleet Admin"

    async def send_password_reset(self, to_email: str, token: str) -> bool:
        message = Mail(
            from_email=self.from_email,
            to_emails=to_email,
            subject=f"{self.app_name} - Password Reset",
            html_content=self._build_reset_email_html(
                reset_url=build_reset_link(self.frontend_url, token)
            ),
        )

        try:
            # SendGrid's client is blocking
            await asyncio.to_thread(SendGridAPIClient(self.api_key).send, message)
        except Exception as e:
            # Provider errors stay in the logs, callers only see False
            logger.exception("Password reset email to %s failed: %s", to_email, e)
            return False

        logger.info("Password reset email sent to %s", to_email)
        return True

    def _build_reset_email_html(self, *, reset_url: str) -> str:
        return f"""
        <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
            <h3>Hello,</h3>
            <p>A password reset was requested for your {self.app_name} account.</p>
            <p>Use the button below to set a new password. The link is valid for 24 hours.</p>
            <p style="margin: 30px 0;">
                <a href="{reset_url}"
                   style="display: inline-block; padding: 10px 20px; background: #165DFF;
                          color: white; text-decoration: none; border-radius: 4px;">
                    Set new password
                </a>
            </p>
            <p>If you did not request this, ignore this email. Your account is unaffected.</p>
            <p>The {self.app_name} Team</p>
        </div>
        """


class LoggingNotifier(INotifier):
    """
    Development notifier: writes the reset link to the application log
    instead of sending an email.
    """

    def __init__(self, frontend_url: str):
        self.frontend_url = frontend_url

    async def send_password_reset(self, to_email: str, token: str) -> bool:
        logger.info(
            "Password reset link for %s: %s",
            to_email,
            build_reset_link(self.frontend_url, token),
        )
        return True
