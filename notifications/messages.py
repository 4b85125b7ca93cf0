from django.conf import settings
from django.utils.html import escape

from reservation.models import Reservation


def generate_reservation_creation_message(instance: Reservation) -> str:
    message = (
        "🆕 New reservation created\n"
        f"Guest: {instance.guest.full_name} ({instance.guest.email})\n"
        f"Room: {instance.room.number}\n"
        f"Check-in: {instance.check_in_date}\n"
        f"Check-out: {instance.check_out_date}\n"
        f"Guests: {instance.num_guests}\n"
        f"Total: ${instance.total_amount}"
    )
    return message


def generate_reservation_cancellation_message(instance: Reservation) -> str:
    message = (
        "❌ Reservation Cancelled\n"
        f"Guest: {instance.guest.email}\n"
        f"Room: {instance.room.number}\n"
        f"Dates: {instance.check_in_date} - {instance.check_out_date}"
    )
    return message


def generate_booking_confirmation_subject(instance: Reservation) -> str:
    return f"Booking Confirmation - {settings.HOTEL_NAME} - Room {instance.room.number}"


def generate_booking_confirmation_text(instance: Reservation) -> str:
    guest = instance.guest
    room = instance.room
    message = (
        f"Dear {guest.first_name} {guest.last_name},\n"
        "\n"
        f"Your reservation at {settings.HOTEL_NAME} is confirmed.\n"
        "\n"
        f"Reservation ID: {instance.pk}\n"
        f"Room: {room.number} ({room.type})\n"
        f"Check-in: {instance.check_in_date}\n"
        f"Check-out: {instance.check_out_date}\n"
        f"Guests: {instance.num_guests}\n"
        f"Total amount: ${instance.total_amount}\n"
        "\n"
        "Please present the attached QR code at the front desk when you arrive.\n"
    )
    return message


def generate_booking_confirmation_html(instance: Reservation, has_qr_code: bool) -> str:
    guest = instance.guest
    room = instance.room
    qr_block = (
        '<p><img src="cid:qr-code.png" alt="Check-in QR code" width="250" height="250"></p>'
        if has_qr_code
        else ""
    )
    return (
        f"<h2>{settings.HOTEL_NAME}</h2>"
        f"<p>Dear {escape(guest.first_name)} {escape(guest.last_name)},</p>"
        "<p>Your reservation is confirmed.</p>"
        "<table>"
        f"<tr><td>Reservation ID</td><td>{instance.pk}</td></tr>"
        f"<tr><td>Room</td><td>{room.number} ({room.type})</td></tr>"
        f"<tr><td>Check-in</td><td>{instance.check_in_date}</td></tr>"
        f"<tr><td>Check-out</td><td>{instance.check_out_date}</td></tr>"
        f"<tr><td>Guests</td><td>{instance.num_guests}</td></tr>"
        f"<tr><td>Total amount</td><td>${instance.total_amount}</td></tr>"
        "</table>"
        f"{qr_block}"
        "<p>Please present this QR code at the front desk when you arrive.</p>"
    )


def generate_password_reset_subject() -> str:
    return f"Password Reset Request - {settings.HOTEL_NAME}"


def generate_password_reset_text(reset_url: str) -> str:
    lifetime_hours = int(settings.PASSWORD_RESET_TOKEN_LIFETIME.total_seconds() // 3600)
    return (
        f"We received a request to reset your {settings.HOTEL_NAME} password.\n"
        "\n"
        f"Open this link to choose a new password: {reset_url}\n"
        "\n"
        f"The link expires in {lifetime_hours} hour(s). "
        "If you did not ask for a reset, ignore this email.\n"
    )
