import logging
import smtplib
from email.message import EmailMessage
from email.utils import formataddr

from starlette.concurrency import run_in_threadpool

from servicehub.core.config import settings

logger = logging.getLogger(__name__)


def _deliver(msg: EmailMessage):
    if settings.SMTP_USE_SSL:
        with smtplib.SMTP_SSL(settings.SMTP_SERVER, settings.SMTP_PORT) as smtp:
            if settings.SMTP_USER:
                smtp.login(settings.SMTP_USER, settings.SMTP_PASSWORD)
            smtp.send_message(msg)
    else:
        with smtplib.SMTP(settings.SMTP_SERVER, settings.SMTP_PORT) as smtp:
            smtp.starttls()
            if settings.SMTP_USER:
                smtp.login(settings.SMTP_USER, settings.SMTP_PASSWORD)
            smtp.send_message(msg)


async def send_email(to_email: str, subject: str, html_body: str) -> bool:
    """Send an HTML email. Returns False instead of raising when delivery fails."""
    msg = EmailMessage()
    msg["Subject"] = subject
    msg["From"] = formataddr((settings.MAIL_FROM_NAME, settings.SMTP_USER or "no-reply@localhost"))
    msg["To"] = to_email
    msg.set_content("This message requires an HTML capable mail client.")
    msg.add_alternative(html_body, subtype="html")

    try:
        await run_in_threadpool(_deliver, msg)
    except (smtplib.SMTPException, OSError) as e:
        logger.error("Failed to send email to %s: %s", to_email, e)
        return False

    logger.info("Email sent to %s", to_email)
    return True


def build_reset_email(full_name: str, reset_url: str) -> str:
    return f"""
        <h3>Hello {full_name or ''},</h3>
        <p>You requested to reset your password.</p>
        <p>Click the link below to reset it:</p>
        <a href="{reset_url}">{reset_url}</a>
        <p><strong>This link will expire in {settings.RESET_TOKEN_EXPIRE_MINUTES} minutes.</strong></p>
    """
