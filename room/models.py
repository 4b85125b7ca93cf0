from django.db import models


class Room(models.Model):
    """
    Bookable hotel room.

    ``status`` doubles as a housekeeping state (maintenance, cleaning) and
    an occupancy marker (available, reserved, occupied).
    """

    class RoomType(models.TextChoices):
        STANDARD = "standard"
        DELUXE = "deluxe"
        SUITE = "suite"
        PRESIDENTIAL = "presidential"

    class RoomStatus(models.TextChoices):
        AVAILABLE = "available"
        RESERVED = "reserved"
        OCCUPIED = "occupied"
        CLEANING = "cleaning"
        MAINTENANCE = "maintenance"

    UNBOOKABLE_STATUSES = (RoomStatus.MAINTENANCE, RoomStatus.CLEANING)

    number = models.CharField(max_length=20, unique=True)
    type = models.CharField(choices=RoomType, max_length=20)
    floor = models.IntegerField(null=True, blank=True)
    price_per_night = models.DecimalField(max_digits=10, decimal_places=2)
    status = models.CharField(
        choices=RoomStatus, max_length=20, default=RoomStatus.AVAILABLE
    )
    description = models.TextField(blank=True, default="")
    amenities = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["number"]

    @property
    def is_bookable(self) -> bool:
        return self.status not in self.UNBOOKABLE_STATUSES

    def __str__(self):
        return f"Room {self.number} ({self.type})"
