"""
Outgoing mail via SMTP.

Mail is a best-effort side channel: failures are logged and never raised,
and nothing is sent while MAIL_ENABLED is off.
"""

from email.message import EmailMessage

import aiosmtplib

from shared.config.logging import get_logger, mask_email
from shared.config.settings import settings

logger = get_logger(__name__)


def build_message(subject: str, body_html: str, to_email: str | None = None) -> EmailMessage:
    """Build an HTML message from the configured sender to to_email."""
    msg = EmailMessage()
    msg["From"] = settings.mail_from
    msg["To"] = to_email or settings.mail_to
    msg["Subject"] = subject
    msg.set_content(body_html, subtype="html")
    return msg


async def send_mail(subject: str, body_html: str, to_email: str | None = None) -> bool:
    """
    Send an HTML mail using the configured SMTP settings.

    Returns:
        True if the mail was handed to the SMTP server, False otherwise.
    """
    recipient = to_email or settings.mail_to
    if not settings.mail_enabled:
        logger.debug("Mail disabled, skipping", subject=subject)
        return False
    if not settings.smtp_host:
        logger.warning("SMTP not configured, skipping mail", to=mask_email(recipient))
        return False

    msg = build_message(subject, body_html, recipient)

    # STARTTLS on 587, implicit TLS on 465
    start_tls = settings.smtp_tls and settings.smtp_port == 587
    use_tls = settings.smtp_tls and settings.smtp_port == 465
    try:
        await aiosmtplib.send(
            msg,
            hostname=settings.smtp_host,
            port=settings.smtp_port,
            username=settings.smtp_user or None,
            password=settings.smtp_password or None,
            start_tls=start_tls,
            use_tls=use_tls,
            timeout=settings.mail_timeout_seconds,
        )
    except (aiosmtplib.SMTPException, OSError) as e:
        logger.error("Failed to send mail", to=mask_email(recipient), subject=subject, error=str(e))
        return False

    logger.info("Mail sent", to=mask_email(recipient), subject=subject)
    return True
