# File: fellowship/core/email_service.py
import html
import logging
import smtplib
import ssl
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import List, Optional

from fellowship.core.config import settings

logger = logging.getLogger(__name__)


class EmailService:
    def __init__(self):
        self.smtp_server = settings.SMTP_SERVER
        self.smtp_port = settings.SMTP_PORT
        self.username = settings.SMTP_USERNAME
        self.password = settings.SMTP_PASSWORD
        self.from_email = settings.FROM_EMAIL
        self.from_name = settings.FROM_NAME

    def send_email(
        self,
        to_emails: List[str],
        subject: str,
        html_content: str,
        text_content: Optional[str] = None,
    ) -> bool:
        """Send email over SMTP; returns False instead of raising on failure."""

        if not settings.SEND_EMAILS:
            logger.info(f"Email sending disabled. Would send: {subject} to {to_emails}")
            return True

        try:
            message = MIMEMultipart("alternative")
            message["Subject"] = subject
            message["From"] = f"{self.from_name} <{self.from_email}>"
            message["To"] = ", ".join(to_emails)

            if text_content:
                message.attach(MIMEText(text_content, "plain"))
            message.attach(MIMEText(html_content, "html"))

            context = ssl.create_default_context()
            with smtplib.SMTP(self.smtp_server, self.smtp_port, timeout=settings.EMAIL_TIMEOUT) as server:
                server.starttls(context=context)
                if self.username and self.password:
                    server.login(self.username, self.password)
                server.sendmail(self.from_email, to_emails, message.as_string())

            logger.info(f"Email sent successfully to {to_emails}")
            return True

        except (smtplib.SMTPException, OSError):
            logger.exception(f"Failed to send email to {to_emails}")
            return False

    def send_invitation_email(
        self,
        email: str,
        tenant_name: str,
        token: str,
        invited_by: str,
        role: str,
    ) -> bool:
        """Send invitation email with the accept link."""
        invitation_url = f"{settings.FRONTEND_URL}/invite/{token}"
        role_label = role.replace("_", " ")
        safe_tenant = html.escape(tenant_name)
        safe_inviter = html.escape(invited_by)

        html_content = f"""
        <!DOCTYPE html>
        <html>
        <body style="font-family: Arial, sans-serif;">
            <h2>You're invited to join {safe_tenant}</h2>
            <p>{safe_inviter} has invited you to join {safe_tenant} as a {role_label}.</p>
            <p><a href="{invitation_url}">Accept Invitation</a></p>
            <p>This invitation will expire in {settings.INVITATION_EXPIRE_DAYS} days.</p>
        </body>
        </html>
        """

        text_content = f"""
        You're invited to join {tenant_name}

        {invited_by} has invited you to join {tenant_name} as a {role_label}.
        Accept the invitation here: {invitation_url}

        This invitation will expire in {settings.INVITATION_EXPIRE_DAYS} days.
        """

        return self.send_email([email], f"Invitation to join {tenant_name}", html_content, text_content)

    def send_tenant_review_email(self, email: str, tenant_name: str, approved: bool) -> bool:
        outcome = "approved" if approved else "not approved"
        html_content = f"""
        <p>Your organization <strong>{html.escape(tenant_name)}</strong> has been {outcome}.</p>
        <p><a href="{settings.FRONTEND_URL}">Open Fellowship</a></p>
        """
        return self.send_email([email], f"{tenant_name} has been {outcome}", html_content)


# Global email service instance
email_service = EmailService()
