"""
Unified Email Service using SMTP (when configured) or Resend (fallback)
Provides email functionality using MJML templates for responsive design
"""

import logging
import smtplib
import ssl
from datetime import datetime
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional, Union

import resend
from mjml import mjml_to_html

from .config import (
    EMAIL_FROM_ADDRESS,
    FRONTEND_URL,
    PASSWORD_RESET_EXPIRES_MINUTES,
    RESEND_API_KEY,
    SMTP_HOST,
    SMTP_PASSWORD,
    SMTP_PORT,
    SMTP_USE_TLS,
    SMTP_USERNAME,
)
from .email_templates import (
    APP_NAME,
    appointment_cancelled_template,
    appointment_completed_template,
    appointment_confirmation_template,
    password_reset_template,
    sale_cancelled_template,
    sale_confirmation_template,
)

logger = logging.getLogger(__name__)

# Initialize Resend as fallback
resend.api_key = RESEND_API_KEY


def send_via_smtp(
    to: Union[str, list[str]],
    subject: str,
    html_content: str,
    from_address: str,
) -> dict:
    """Send email via the configured SMTP server"""
    try:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = from_address
        msg["To"] = to if isinstance(to, str) else ", ".join(to)
        msg.attach(MIMEText(html_content, "html"))

        recipients = [to] if isinstance(to, str) else to

        if SMTP_PORT == 465:
            context = ssl.create_default_context()
            server = smtplib.SMTP_SSL(SMTP_HOST, SMTP_PORT, context=context, timeout=30)
        else:
            server = smtplib.SMTP(SMTP_HOST, SMTP_PORT, timeout=30)
            if SMTP_USE_TLS:
                context = ssl.create_default_context()
                server.starttls(context=context)

        if SMTP_USERNAME:
            server.login(SMTP_USERNAME, SMTP_PASSWORD)
        server.sendmail(from_address.split("<")[-1].rstrip(">"), recipients, msg.as_string())
        server.quit()

        logger.info(f"✅ SMTP email sent successfully via {SMTP_HOST}")
        return {"id": f"smtp-{datetime.utcnow().timestamp()}", "success": True}

    except (smtplib.SMTPException, OSError) as e:
        logger.error(f"❌ SMTP send failed: {e}")
        raise RuntimeError(f"SMTP failed: {str(e)}") from e


def compile_mjml_to_html(mjml_content: str) -> str:
    """Compile MJML template to production-ready HTML"""
    result = mjml_to_html(mjml_content)
    # mjml_to_html returns a dict-like object with 'html' and 'errors' keys
    if isinstance(result, dict):
        if result.get("errors"):
            logger.warning(f"MJML compilation warnings: {result['errors']}")
        return result.get("html", "")
    return str(result)


async def send_email(
    to: Union[str, list[str]],
    subject: str,
    mjml_content: str,
    from_address: Optional[str] = None,
) -> dict:
    """
    Send an email using SMTP (if configured) or Resend (fallback)

    Args:
        to: Recipient email(s)
        subject: Email subject line
        mjml_content: MJML template content (will be compiled to HTML)
        from_address: Optional custom from address

    Returns:
        Send response dict
    """
    html_content = compile_mjml_to_html(mjml_content)

    recipients = [to] if isinstance(to, str) else to
    sender = from_address or EMAIL_FROM_ADDRESS

    if SMTP_HOST:
        try:
            logger.info(f"📧 Sending email via SMTP: {SMTP_HOST}")
            return send_via_smtp(
                to=recipients,
                subject=subject,
                html_content=html_content,
                from_address=sender,
            )
        except RuntimeError as e:
            logger.warning(f"⚠️ SMTP failed, falling back to Resend: {e}")

    if not RESEND_API_KEY:
        logger.error("❌ No email service configured - RESEND_API_KEY missing and no SMTP")
        raise RuntimeError("Email service not configured")

    logger.info(f"📧 Sending email via Resend to: {to}")
    email_data = {
        "from": sender,
        "to": recipients,
        "subject": subject,
        "html": html_content,
    }
    response = resend.Emails.send(email_data)
    logger.info(f"✅ Email sent successfully via Resend: {response}")
    return response


# ============================================
# Transactional emails
# ============================================


async def send_appointment_confirmation(
    to: str,
    client_name: str,
    pet_name: str,
    service_name: str,
    date_label: str,
    start: str,
    end: str,
    staff_name: Optional[str] = None,
) -> dict:
    mjml_content = appointment_confirmation_template(
        client_name, pet_name, service_name, date_label, start, end, staff_name
    )
    return await send_email(
        to=to,
        subject=f"Appointment Scheduled - {APP_NAME}",
        mjml_content=mjml_content,
    )


async def send_appointment_completed(
    to: str, client_name: str, pet_name: str, service_name: str, date_label: str, start: str, end: str
) -> dict:
    mjml_content = appointment_completed_template(
        client_name, pet_name, service_name, date_label, start, end
    )
    return await send_email(
        to=to,
        subject=f"Service Completed - {APP_NAME}",
        mjml_content=mjml_content,
    )


async def send_appointment_cancelled(
    to: str, client_name: str, pet_name: str, service_name: str, date_label: str, start: str, end: str
) -> dict:
    mjml_content = appointment_cancelled_template(
        client_name, pet_name, service_name, date_label, start, end
    )
    return await send_email(
        to=to,
        subject=f"Appointment Cancelled - {APP_NAME}",
        mjml_content=mjml_content,
    )


async def send_sale_confirmation(
    to: str,
    client_name: str,
    sale_id: int,
    items: list[dict],
    discount,
    total,
    payment_method: str,
) -> dict:
    """Purchase receipt listing every line item"""
    mjml_content = sale_confirmation_template(
        client_name, sale_id, items, discount, total, payment_method
    )
    return await send_email(
        to=to,
        subject=f"Purchase Confirmation #{sale_id} - {APP_NAME}",
        mjml_content=mjml_content,
    )


async def send_sale_cancelled(to: str, client_name: str, sale_id: int, total) -> dict:
    mjml_content = sale_cancelled_template(client_name, sale_id, total)
    return await send_email(
        to=to,
        subject=f"Order #{sale_id} Cancelled - {APP_NAME}",
        mjml_content=mjml_content,
    )


async def send_password_reset_email(to: str, user_name: str, token: str) -> dict:
    """Send password reset email"""
    reset_link = f"{FRONTEND_URL}/reset-password?token={token}"
    mjml_content = password_reset_template(user_name, reset_link, PASSWORD_RESET_EXPIRES_MINUTES)
    return await send_email(
        to=to,
        subject=f"Reset Your Password - {APP_NAME}",
        mjml_content=mjml_content,
    )
