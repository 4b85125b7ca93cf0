from celery import shared_task
from celery.utils.log import get_task_logger
from django.conf import settings

from notifications.messages import (
    generate_reservation_cancellation_message,
    generate_reservation_creation_message,
)
from notifications.services.telegram import RETRYABLE_ERRORS, get_telegram_service
from reservation.models import Reservation

logger = get_task_logger(__name__)

EVENT_MESSAGES = {
    "created": generate_reservation_creation_message,
    "cancelled": generate_reservation_cancellation_message,
}


@shared_task(
    autoretry_for=RETRYABLE_ERRORS,
    retry_kwargs={"max_retries": 5, "countdown": 30},
)
def send_telegram_notification(message: str):
    """
    Sends notification message to the staff Telegram chat.
    """
    chat_id = settings.CHAT_ID
    if not chat_id:
        logger.warning("CHAT_ID is missing in settings; staff alert dropped.")
        return "skipped"

    get_telegram_service().send_sync(chat_id=int(chat_id), text=message)
    return "sent"


@shared_task
def notify_reservation_event_telegram(reservation_id, event: str):
    """Build the staff alert for a reservation event and queue its delivery."""
    try:
        reservation = Reservation.objects.select_related("room", "guest").get(
            pk=reservation_id
        )
    except Reservation.DoesNotExist:
        return f"Could not find reservation {reservation_id}"

    send_telegram_notification.delay(EVENT_MESSAGES[event](reservation))
    return f"Queued {event} alert for reservation {reservation_id}"
