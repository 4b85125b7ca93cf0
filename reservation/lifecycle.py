"""
Reservation status transitions.

    reserved --check-in--> checked_in --check-out--> checked_out
    reserved --cancel--> cancelled

Each transition saves the reservation and then the room as two separate
writes; a failure between them leaves the room status stale.
"""

import logging

from reservation.models import Reservation
from reservation.validators import (
    validate_cancel_permission,
    validate_reservation_can_cancel,
    validate_reservation_can_check_in,
    validate_reservation_can_check_out,
)
from room.models import Room

logger = logging.getLogger(__name__)


def _transition(reservation, status, room_status):
    reservation.status = status
    reservation.save(update_fields=["status", "updated_at"])

    room = reservation.room
    room.status = room_status
    room.save(update_fields=["status", "updated_at"])

    logger.info(f"Reservation {reservation.pk} -> {status}, room {room.number} -> {room_status}")
    return reservation


def check_in(reservation):
    validate_reservation_can_check_in(reservation)
    return _transition(
        reservation,
        Reservation.ReservationStatus.CHECKED_IN,
        Room.RoomStatus.OCCUPIED,
    )


def check_out(reservation):
    validate_reservation_can_check_out(reservation)
    return _transition(
        reservation,
        Reservation.ReservationStatus.CHECKED_OUT,
        Room.RoomStatus.CLEANING,
    )


def cancel(reservation, principal):
    """Cancel a reserved stay on behalf of its guest or management staff."""
    validate_cancel_permission(reservation, principal)
    validate_reservation_can_cancel(reservation)
    return _transition(
        reservation,
        Reservation.ReservationStatus.CANCELLED,
        Room.RoomStatus.AVAILABLE,
    )
