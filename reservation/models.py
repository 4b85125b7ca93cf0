import uuid

from django.db import models
from django.db.models import F, ForeignKey, Q

from guest.models import Guest
from room.models import Room


class Reservation(models.Model):
    """
    Hotel room reservation.
    Represents a stay booked for a guest in one room, including
    check-in/check-out dates, lifecycle status, pricing and the
    check-in token issued for it.
    """
    class ReservationStatus(models.TextChoices):
        """Enumeration of possible reservation statuses."""
        RESERVED = "reserved"
        CHECKED_IN = "checked_in"
        CHECKED_OUT = "checked_out"
        CANCELLED = "cancelled"

    class PaymentStatus(models.TextChoices):
        PENDING = "pending"
        PAID = "paid"
        REFUNDED = "refunded"

    ACTIVE_STATUSES = (ReservationStatus.RESERVED, ReservationStatus.CHECKED_IN)

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    guest = ForeignKey(Guest, on_delete=models.PROTECT, related_name="reservations")
    room = ForeignKey(Room, on_delete=models.PROTECT, related_name="reservations")
    check_in_date = models.DateField()
    check_out_date = models.DateField()
    status = models.CharField(
        choices=ReservationStatus,
        max_length=20,
        default=ReservationStatus.RESERVED,
    )
    num_guests = models.PositiveIntegerField(default=1)
    total_amount = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    payment_status = models.CharField(
        choices=PaymentStatus, max_length=20, default=PaymentStatus.PENDING
    )
    qr_code = models.TextField(blank=True, default="")
    qr_code_data = models.TextField(blank=True, default="")
    notes = models.TextField(blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """Meta configuration for Reservation model."""
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=Q(check_out_date__gt=F("check_in_date")),
                name="reservation_check_out_after_check_in",
            ),
        ]
        indexes = [
            models.Index(fields=["room", "status"], name="reservation_room_status_idx"),
        ]

    @property
    def nights(self) -> int:
        return (self.check_out_date - self.check_in_date).days

    def __str__(self):
        return f"Reservation {self.id} - room {self.room.number} ({self.check_in_date} to {self.check_out_date})"
