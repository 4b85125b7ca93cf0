"""
Booking tokens.

A booking token is the small JSON document printed as a QR code on the
guest's confirmation. It identifies the reservation for check-in; it is
not signed, so scanning it is a lookup, not a proof.
"""

import base64
import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime
from io import BytesIO

import qrcode
from qrcode.constants import ERROR_CORRECT_M

from reservation.exceptions import MalformedTokenError

logger = logging.getLogger(__name__)

PAYLOAD_FIELDS = (
    "reservationId",
    "guestId",
    "roomNumber",
    "checkInDate",
    "checkOutDate",
)


@dataclass(frozen=True)
class BookingTokenPayload:
    reservation_id: str
    guest_id: str
    room_number: str
    check_in_date: date
    check_out_date: date

    def as_dict(self) -> dict:
        return {
            "reservationId": self.reservation_id,
            "guestId": self.guest_id,
            "roomNumber": self.room_number,
            "checkInDate": self.check_in_date.isoformat(),
            "checkOutDate": self.check_out_date.isoformat(),
        }


def build_payload(reservation_id, guest_id, room_number, check_in, check_out):
    return BookingTokenPayload(
        reservation_id=str(reservation_id),
        guest_id=str(guest_id),
        room_number=str(room_number),
        check_in_date=_as_date(check_in),
        check_out_date=_as_date(check_out),
    )


def payload_for_reservation(reservation) -> BookingTokenPayload:
    return build_payload(
        reservation.pk,
        reservation.guest_id,
        reservation.room.number,
        reservation.check_in_date,
        reservation.check_out_date,
    )


def serialize(payload: BookingTokenPayload) -> str:
    return json.dumps(payload.as_dict(), separators=(",", ":"))


def render_qr(data: str) -> str:
    """Render ``data`` as a PNG QR code and return it as a data URL."""
    qr = qrcode.QRCode(error_correction=ERROR_CORRECT_M, box_size=10, border=1)
    qr.add_data(data)
    qr.make(fit=True)
    img = qr.make_image()

    buf = BytesIO()
    img.save(buf, format="PNG")
    encoded = base64.b64encode(buf.getvalue()).decode("utf-8")
    return f"data:image/png;base64,{encoded}"


def encode(reservation_id, guest_id, room_number, check_in, check_out):
    """
    Build the token payload and its QR image.

    Returns ``(payload, image)``. When the QR code cannot be rendered the
    image is an empty string and the payload is still returned.
    """
    payload = build_payload(reservation_id, guest_id, room_number, check_in, check_out)
    try:
        image = render_qr(serialize(payload))
    except Exception:
        logger.exception(f"QR code generation failed for reservation {payload.reservation_id}")
        image = ""
    return payload, image


def decode(raw) -> BookingTokenPayload:
    """
    Parse a serialized token (or an already-parsed mapping).

    Raises MalformedTokenError for anything that is not a JSON object with
    the five token fields as strings and ISO dates.
    """
    if isinstance(raw, Mapping):
        data = raw
    elif isinstance(raw, (str, bytes)):
        try:
            data = json.loads(raw)
        except (TypeError, ValueError, RecursionError):
            raise MalformedTokenError()
    else:
        raise MalformedTokenError()

    if not isinstance(data, Mapping):
        raise MalformedTokenError()

    missing = [field for field in PAYLOAD_FIELDS if not isinstance(data.get(field), str)]
    if missing:
        raise MalformedTokenError(f"Invalid QR code format: missing {', '.join(missing)}")

    try:
        check_in = date.fromisoformat(data["checkInDate"])
        check_out = date.fromisoformat(data["checkOutDate"])
    except ValueError:
        raise MalformedTokenError("Invalid QR code format: bad dates")

    return BookingTokenPayload(
        reservation_id=data["reservationId"],
        guest_id=data["guestId"],
        room_number=data["roomNumber"],
        check_in_date=check_in,
        check_out_date=check_out,
    )


def _as_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])
