"""
Booking use cases.

Two entry points create reservations, one per trust boundary: the public
flow for anonymous visitors and the flow for authenticated principals.
Both resolve the room, check dates and availability, upsert the guest,
store the reservation and then issue its booking token. The confirmation
email is best-effort and never fails a booking.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db.models import Count, Q, Sum
from rest_framework.exceptions import NotFound, ValidationError

from guest.services import find_guest_by_email, resolve_guest
from notifications.services.email import notify_booking_confirmation
from reservation import lifecycle, tokens
from reservation.exceptions import TokenRenderError
from reservation.models import Reservation
from reservation.validators import (
    validate_reservation_owner,
    validate_room_bookable,
    validate_room_free,
    validate_room_status_available,
    validate_stay_dates,
)
from room.models import Room

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GuestContact:
    first_name: str
    last_name: str
    email: str
    phone: str = ""


def room_status_hold_enabled() -> bool:
    return getattr(settings, "RESERVATION_ROOM_STATUS_HOLD", True)


def calculate_total_amount(room, check_in, check_out) -> Decimal:
    nights = (check_out - check_in).days
    return Decimal(nights) * room.price_per_night


def get_room(room_id):
    if room_id in (None, ""):
        raise ValidationError("Room ID is required")
    try:
        room = Room.objects.filter(pk=room_id).first()
    except (ValueError, TypeError, DjangoValidationError):
        room = None
    if room is None:
        raise NotFound("Room not found")
    return room


def get_reservation(reservation_id):
    try:
        reservation = (
            Reservation.objects.select_related("room", "guest")
            .filter(pk=reservation_id)
            .first()
        )
    except (ValueError, TypeError, DjangoValidationError):
        reservation = None
    if reservation is None:
        raise NotFound("Reservation not found")
    return reservation


def create_public_reservation(
    contact: GuestContact,
    room_id,
    check_in,
    check_out,
    num_guests=1,
    notes="",
    password=None,
) -> Reservation:
    """
    Book a room for an anonymous visitor.

    The room only has to be out of housekeeping states; exclusivity comes
    from the date overlap check. A new guest record needs a password.
    """
    room = get_room(room_id)
    validate_room_bookable(room)
    validate_stay_dates(check_in, check_out)
    validate_room_free(room, check_in, check_out)

    guest = resolve_guest(
        contact.email,
        contact.first_name,
        contact.last_name,
        phone=contact.phone,
        notes=notes,
        password=password,
        require_password=True,
    )

    reservation = _create_reservation(guest, room, check_in, check_out, num_guests, notes)
    _issue_token(reservation)
    notify_booking_confirmation(reservation, reservation.qr_code)
    return reservation


def create_reservation_for_principal(
    principal,
    room_id,
    check_in,
    check_out,
    num_guests=1,
    notes="",
) -> Reservation:
    """
    Book a room on behalf of a logged-in staff member or guest.

    With the room status hold enabled the room must be ``available`` and is
    marked ``reserved`` once the reservation is stored.
    """
    if not principal.email:
        raise NotFound("User not found")

    room = get_room(room_id)
    validate_room_bookable(room)
    if room_status_hold_enabled():
        validate_room_status_available(room)
    validate_stay_dates(check_in, check_out)
    validate_room_free(room, check_in, check_out)

    first_name, last_name, phone = principal.contact_details()
    guest = resolve_guest(
        principal.email,
        first_name,
        last_name,
        phone=phone or None,
        require_password=False,
    )

    reservation = _create_reservation(guest, room, check_in, check_out, num_guests, notes)

    if room_status_hold_enabled():
        room.status = Room.RoomStatus.RESERVED
        room.save(update_fields=["status", "updated_at"])

    _issue_token(reservation)
    notify_booking_confirmation(reservation, reservation.qr_code)
    return reservation


def _create_reservation(guest, room, check_in, check_out, num_guests, notes):
    reservation = Reservation.objects.create(
        guest=guest,
        room=room,
        check_in_date=check_in,
        check_out_date=check_out,
        num_guests=num_guests or 1,
        notes=notes or "",
        total_amount=calculate_total_amount(room, check_in, check_out),
        status=Reservation.ReservationStatus.RESERVED,
        payment_status=Reservation.PaymentStatus.PENDING,
    )
    logger.info(
        f"booking created: reservation {reservation.pk} room {room.number} "
        f"guest {guest.email} {check_in}..{check_out}"
    )
    return reservation


def _issue_token(reservation):
    payload, image = tokens.encode(
        reservation.pk,
        reservation.guest_id,
        reservation.room.number,
        reservation.check_in_date,
        reservation.check_out_date,
    )
    reservation.qr_code = image
    reservation.qr_code_data = tokens.serialize(payload)
    reservation.save(update_fields=["qr_code", "qr_code_data", "updated_at"])
    return reservation


def get_bookings_for_principal(principal):
    """Reservations of the guest record matching the caller's email, newest first."""
    guest = find_guest_by_email(principal.email)
    if guest is None:
        return Reservation.objects.none()
    return (
        Reservation.objects.filter(guest=guest)
        .select_related("room", "guest")
        .order_by("-created_at")
    )


def cancel_reservation(principal, reservation_id) -> Reservation:
    reservation = get_reservation(reservation_id)
    return lifecycle.cancel(reservation, principal)


def scan_token(raw) -> Reservation:
    """
    Look up the reservation a scanned booking token points to.

    The embedded guest and room fields are not compared with the stored
    reservation.
    """
    if not raw:
        raise ValidationError("QR code data is required")
    payload = tokens.decode(raw)
    return get_reservation(payload.reservation_id)


def get_reservation_token(principal, reservation_id):
    """
    Re-render the booking token of one of the caller's reservations.

    Returns ``(reservation, payload, image)``. The token is stored on the
    reservation when it has none yet.
    """
    reservation = get_reservation(reservation_id)
    validate_reservation_owner(reservation, principal)

    payload = tokens.payload_for_reservation(reservation)
    data = tokens.serialize(payload)
    try:
        image = tokens.render_qr(data)
    except Exception:
        logger.exception(f"QR code generation failed for reservation {reservation.pk}")
        raise TokenRenderError()

    if not reservation.qr_code or not reservation.qr_code_data:
        reservation.qr_code = image
        reservation.qr_code_data = data
        reservation.save(update_fields=["qr_code", "qr_code_data", "updated_at"])

    return reservation, payload, image


def get_reservation_summary() -> dict:
    totals = Reservation.objects.aggregate(
        total_reservations=Count("id"),
        occupancy_count=Count(
            "id", filter=Q(status=Reservation.ReservationStatus.CHECKED_IN)
        ),
        revenue=Sum(
            "total_amount", filter=Q(payment_status=Reservation.PaymentStatus.PAID)
        ),
    )
    return {
        "occupancyCount": totals["occupancy_count"],
        "totalReservations": totals["total_reservations"],
        "revenue": totals["revenue"] or Decimal("0"),
    }
