from functools import partial

from django.db import transaction
from django.db.models.signals import post_save
from django.dispatch import receiver

from notifications.tasks import notify_reservation_event_telegram
from reservation.models import Reservation


@receiver(post_save, sender=Reservation)
def reservation_notification(sender, instance, created, update_fields=None, **kwargs):
    """
    Send Telegram notifications when reservations are created or cancelled.

    Signal Handler: Triggered after any Reservation instance is saved.
    The alert task is queued once the surrounding transaction commits.
    """
    if created:
        event = "created"
    elif instance.status == Reservation.ReservationStatus.CANCELLED and (
        update_fields is None or "status" in update_fields
    ):
        event = "cancelled"
    else:
        return

    transaction.on_commit(
        partial(notify_reservation_event_telegram.delay, str(instance.pk), event)
    )
