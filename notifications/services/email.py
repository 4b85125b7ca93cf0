import base64
import binascii
import logging
from email.mime.image import MIMEImage

from django.conf import settings
from django.core import mail
from django.core.mail import EmailMultiAlternatives

from notifications.messages import (
    generate_booking_confirmation_html,
    generate_booking_confirmation_subject,
    generate_booking_confirmation_text,
    generate_password_reset_subject,
    generate_password_reset_text,
)

logger = logging.getLogger(__name__)

QR_ATTACHMENT_NAME = "qr-code.png"


def decode_data_url(data_url: str) -> bytes:
    """Return the raw bytes of a ``data:image/png;base64,...`` URL."""
    if not data_url:
        return b""
    _, _, encoded = data_url.partition("base64,")
    try:
        return base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError):
        return b""


class EmailNotificationService:
    """
    Sends guest-facing booking emails through Django's mail framework.

    The mail connection is created lazily, shared by every instance in the
    process and dropped after a failed send so the next one reconnects.
    """

    _connection = None

    @classmethod
    def get_connection(cls):
        if cls._connection is None:
            cls._connection = mail.get_connection(fail_silently=False)
        return cls._connection

    @classmethod
    def reset_connection(cls):
        connection, cls._connection = cls._connection, None
        if connection is not None:
            try:
                connection.close()
            except Exception as e:
                logger.warning(f"Error while closing mail connection: {e}")

    @staticmethod
    def is_configured() -> bool:
        return bool(getattr(settings, "EMAIL_HOST_USER", ""))

    def send_booking_confirmation(self, reservation, qr_code_image: str = "") -> bool:
        """
        Email the booking confirmation to the reservation's guest.

        Returns False without sending when outgoing mail is not configured.
        Delivery errors propagate to the caller.
        """
        recipient = reservation.guest.email
        if not self.is_configured():
            logger.info(
                f"Email not configured; skipping booking confirmation for {recipient}"
            )
            return False

        qr_png = decode_data_url(qr_code_image)
        message = EmailMultiAlternatives(
            subject=generate_booking_confirmation_subject(reservation),
            body=generate_booking_confirmation_text(reservation),
            from_email=settings.DEFAULT_FROM_EMAIL,
            to=[recipient],
            connection=self.get_connection(),
        )
        message.attach_alternative(
            generate_booking_confirmation_html(reservation, has_qr_code=bool(qr_png)),
            "text/html",
        )
        if qr_png:
            image = MIMEImage(qr_png, "png")
            image.add_header("Content-ID", f"<{QR_ATTACHMENT_NAME}>")
            image.add_header("Content-Disposition", "attachment", filename=QR_ATTACHMENT_NAME)
            message.attach(image)

        try:
            message.send()
        except Exception:
            self.reset_connection()
            raise

        logger.info(f"Booking confirmation sent to {recipient} for reservation {reservation.pk}")
        return True

    def send_password_reset(self, recipient: str, reset_url: str) -> bool:
        """Email a password reset link. Same contract as send_booking_confirmation."""
        if not self.is_configured():
            logger.info(f"Email not configured; skipping password reset for {recipient}")
            return False

        message = EmailMultiAlternatives(
            subject=generate_password_reset_subject(),
            body=generate_password_reset_text(reset_url),
            from_email=settings.DEFAULT_FROM_EMAIL,
            to=[recipient],
            connection=self.get_connection(),
        )
        try:
            message.send()
        except Exception:
            self.reset_connection()
            raise

        logger.info(f"Password reset link sent to {recipient}")
        return True


email_notification_service = EmailNotificationService()


def notify_booking_confirmation(reservation, qr_code_image: str = "") -> bool:
    """Send the booking confirmation; failures are logged and never raised."""
    try:
        return email_notification_service.send_booking_confirmation(
            reservation, qr_code_image
        )
    except Exception:
        logger.exception(
            f"Failed to send booking confirmation email for reservation {reservation.pk}"
        )
        return False


def build_password_reset_url(token: str) -> str:
    return f"{settings.FRONTEND_URL.rstrip('/')}/reset-password?token={token}"


def notify_password_reset(recipient: str, token: str) -> bool:
    """Send the reset link; returns False instead of raising when delivery fails."""
    try:
        return email_notification_service.send_password_reset(
            recipient, build_password_reset_url(token)
        )
    except Exception:
        logger.exception(f"Failed to send password reset email to {recipient}")
        return False
