"""
Notification Service
Best-effort transactional emails for appointment and sale events.

Payloads are extracted from ORM objects while the request session is still
open, then the send runs as a FastAPI background task after the response
(and therefore after the commit). Failures are logged and never retried.
"""

import logging
from typing import Optional

from fastapi import BackgroundTasks

from .. import email_service
from ..models import Appointment, Sale, User

logger = logging.getLogger(__name__)


async def send_notification(
    recipient: Optional[str],
    notification_type: str,
    email_func,
    email_kwargs: dict,
) -> bool:
    """
    Send one email and swallow any failure

    Args:
        recipient: Email address (skipped when empty)
        notification_type: Type of notification (for logging)
        email_func: Coroutine function from email_service
        email_kwargs: Kwargs for email function

    Returns:
        True when the email was handed to the provider
    """
    if not recipient:
        logger.debug(f"⚠️ No email address for {notification_type} notification")
        return False

    try:
        logger.info(f"📧 Sending {notification_type} email to {recipient}")
        await email_func(to=recipient, **email_kwargs)
        logger.info(f"✅ {notification_type} email sent successfully to {recipient}")
        return True
    except Exception as e:
        logger.error(f"❌ Failed to send {notification_type} email to {recipient}: {e}")
        return False


def _appointment_payload(appointment: Appointment) -> tuple[Optional[str], dict]:
    user = appointment.client.user
    return user.email, {
        "client_name": user.name,
        "pet_name": appointment.pet.name,
        "service_name": appointment.service.name,
        "date_label": appointment.date.strftime("%d/%m/%Y"),
        "start": appointment.start_time.strftime("%H:%M"),
        "end": appointment.end_time.strftime("%H:%M"),
    }


def notify_appointment_scheduled(background_tasks: BackgroundTasks, appointment: Appointment) -> None:
    recipient, kwargs = _appointment_payload(appointment)
    kwargs["staff_name"] = appointment.staff.user.name if appointment.staff else None
    background_tasks.add_task(
        send_notification,
        recipient,
        "appointment_scheduled",
        email_service.send_appointment_confirmation,
        kwargs,
    )


def notify_appointment_status(background_tasks: BackgroundTasks, appointment: Appointment) -> None:
    """Only completed and cancelled transitions are announced to the client"""
    if appointment.status == "completed":
        email_func = email_service.send_appointment_completed
    elif appointment.status == "cancelled":
        email_func = email_service.send_appointment_cancelled
    else:
        return
    recipient, kwargs = _appointment_payload(appointment)
    background_tasks.add_task(
        send_notification, recipient, f"appointment_{appointment.status}", email_func, kwargs
    )


def notify_appointment_cancelled(background_tasks: BackgroundTasks, appointment: Appointment) -> None:
    recipient, kwargs = _appointment_payload(appointment)
    background_tasks.add_task(
        send_notification,
        recipient,
        "appointment_cancelled",
        email_service.send_appointment_cancelled,
        kwargs,
    )


def notify_sale_confirmed(background_tasks: BackgroundTasks, sale: Sale) -> None:
    user = sale.client.user
    items = [
        {
            "name": item.product.name,
            "quantity": item.quantity,
            "unit_price": item.unit_price,
            "total": item.total,
        }
        for item in sale.items
    ]
    background_tasks.add_task(
        send_notification,
        user.email,
        "sale_confirmation",
        email_service.send_sale_confirmation,
        {
            "client_name": user.name,
            "sale_id": sale.id,
            "items": items,
            "discount": sale.discount,
            "total": sale.total,
            "payment_method": sale.payment_method,
        },
    )


def notify_sale_cancelled(background_tasks: BackgroundTasks, sale: Sale) -> None:
    user = sale.client.user
    background_tasks.add_task(
        send_notification,
        user.email,
        "sale_cancelled",
        email_service.send_sale_cancelled,
        {"client_name": user.name, "sale_id": sale.id, "total": sale.total},
    )


def notify_password_reset(background_tasks: BackgroundTasks, user: User, token: str) -> None:
    background_tasks.add_task(
        send_notification,
        user.email,
        "password_reset",
        email_service.send_password_reset_email,
        {"user_name": user.name, "token": token},
    )
