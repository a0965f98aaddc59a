"""
Email utility functions
"""
import logging

from flask import current_app
from flask_mail import Mail, Message

from models.otp import PURPOSE_PASSWORD_RESET
from utils.errors import DeliveryError

mail = Mail()

logger = logging.getLogger(__name__)

_SUBJECTS = {
    PURPOSE_PASSWORD_RESET: "Reset Your Password",
}
_DEFAULT_SUBJECT = "Verify Your Email Address"


class MailNotifier:
    """Delivers one-time codes by email through Flask-Mail."""

    def ensure_ready(self):
        """Raise DeliveryError when mail is not configured, before any code is stored."""
        if "mail" not in current_app.extensions:
            raise DeliveryError("Mail extension not initialized. Check app configuration.")
        if not current_app.config.get('MAIL_SERVER') or not current_app.config.get('MAIL_USERNAME'):
            raise DeliveryError("Email service is not configured. Please contact support.")

    def send(self, email, otp, purpose, ttl_minutes):
        subject = _SUBJECTS.get(purpose, _DEFAULT_SUBJECT)
        body = (
            f"Your verification code is: {otp}. "
            f"It expires in {ttl_minutes} minutes. Do not share this code."
        )
        msg = Message(
            subject=subject,
            recipients=[email],
            body=body,
            html=_otp_email_html(subject, otp, ttl_minutes),
        )
        try:
            mail.send(msg)
        except Exception as e:
            logger.error("SMTP error sending %s code to %s: %s", purpose, email, e, exc_info=True)
            raise DeliveryError() from e


def _otp_email_html(title: str, otp: str, ttl_minutes: int) -> str:
    """Clean HTML template for OTP email."""
    app_name = current_app.config.get('APP_NAME', 'Student Records')
    return f"""
    <!DOCTYPE html>
    <html>
    <head><meta charset="utf-8"><title>{title}</title></head>
    <body style="font-family: system-ui, sans-serif; max-width: 480px; margin: 0 auto; padding: 24px;">
        <h2 style="color: #1a1a2e;">{title}</h2>
        <p>Use the code below to continue with your {app_name} account:</p>
        <p style="font-size: 28px; font-weight: bold; letter-spacing: 6px; color: #16213e;">{otp}</p>
        <p style="color: #666;">This code expires in {ttl_minutes} minutes. Do not share it with anyone.</p>
        <hr style="border: none; border-top: 1px solid #eee; margin: 24px 0;">
        <p style="font-size: 12px; color: #999;">If you did not request this, you can ignore this email.</p>
    </body>
    </html>
    """
