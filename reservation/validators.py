from django.utils import timezone
from rest_framework.exceptions import PermissionDenied, ValidationError

from accounts.principals import MANAGEMENT_ROLES
from reservation.availability import has_conflict
from reservation.exceptions import ConflictError, InvalidTransitionError
from reservation.models import Reservation
from room.models import Room


def validate_room_bookable(room):
    """Validate that the room is not out of service for housekeeping."""
    if not room.is_bookable:
        raise ValidationError(
            f"Room is {room.status}. Please select an available room."
        )


def validate_room_status_available(room):
    """Validate that the room is marked available (status hold policy)."""
    if room.status != Room.RoomStatus.AVAILABLE:
        raise ValidationError("Room not available")


def validate_stay_dates(check_in, check_out):
    """
    Validate requested stay dates.
    Check-in cannot be in the past and check-out must follow check-in.
    """
    today = timezone.localdate()

    if check_in < today:
        raise ValidationError("Check-in date cannot be in the past")

    if check_out <= check_in:
        raise ValidationError("Check-out date must be after check-in date")


def validate_room_free(room, check_in, check_out):
    """Validate that no active reservation overlaps the requested stay."""
    if has_conflict(room, check_in, check_out):
        raise ConflictError(
            "Room is already booked for the selected dates. Please choose different dates."
        )


def validate_reservation_can_check_in(reservation):
    """Validate that reservation can be checked in."""
    status = reservation.status

    if status == Reservation.ReservationStatus.CHECKED_IN:
        raise InvalidTransitionError("Guest is already checked in")

    if status == Reservation.ReservationStatus.CANCELLED:
        raise InvalidTransitionError("Cannot check in a cancelled reservation")

    if status != Reservation.ReservationStatus.RESERVED:
        raise InvalidTransitionError(f"Cannot check in a {status} reservation")

    today = timezone.localdate()
    if today < reservation.check_in_date:
        raise ValidationError(
            f"Cannot check in before {reservation.check_in_date.isoformat()}"
        )


def validate_reservation_can_check_out(reservation):
    """Validate that reservation can be checked out."""
    if reservation.status != Reservation.ReservationStatus.CHECKED_IN:
        raise InvalidTransitionError("Only checked-in reservations can be checked out")


def validate_reservation_can_cancel(reservation):
    """Validate that reservation can be cancelled."""
    if reservation.status != Reservation.ReservationStatus.RESERVED:
        raise InvalidTransitionError("Only reserved bookings can be cancelled")


def is_reservation_owner(reservation, principal) -> bool:
    return bool(principal.email) and reservation.guest.email.lower() == principal.email


def validate_cancel_permission(reservation, principal):
    """Validate that the caller is management staff or the owning guest."""
    if principal.role in MANAGEMENT_ROLES:
        return
    if not is_reservation_owner(reservation, principal):
        raise PermissionDenied("Not authorized to cancel this booking")


def validate_reservation_owner(reservation, principal):
    """Validate that the reservation belongs to the caller."""
    if not is_reservation_owner(reservation, principal):
        raise PermissionDenied("Unauthorized: This reservation does not belong to you")
