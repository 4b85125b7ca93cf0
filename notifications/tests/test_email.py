from datetime import timedelta
from decimal import Decimal
from smtplib import SMTPException
from unittest.mock import Mock, patch

from django.core import mail
from django.test import TestCase, override_settings
from django.utils import timezone

from guest.models import Guest
from notifications.services.email import (
    EmailNotificationService,
    decode_data_url,
    email_notification_service,
    notify_booking_confirmation,
)
from reservation import services, tokens
from reservation.models import Reservation
from room.models import Room


@override_settings(EMAIL_HOST_USER="frontdesk@hotel.test", HOTEL_NAME="Test Hotel")
class EmailNotificationTestCase(TestCase):

    def setUp(self):
        EmailNotificationService.reset_connection()
        self.addCleanup(EmailNotificationService.reset_connection)
        today = timezone.localdate()
        self.room = Room.objects.create(
            number="101",
            type=Room.RoomType.STANDARD,
            price_per_night=Decimal("100.00"),
        )
        self.guest = Guest.objects.create(
            first_name="Ann", last_name="Lee", email="ann@example.com"
        )
        self.reservation = Reservation.objects.create(
            guest=self.guest,
            room=self.room,
            check_in_date=today + timedelta(days=1),
            check_out_date=today + timedelta(days=3),
            total_amount=Decimal("200.00"),
        )
        self.qr_code = tokens.render_qr("payload")

    def test_confirmation_sent_with_qr_attachment(self):
        sent = email_notification_service.send_booking_confirmation(
            self.reservation, self.qr_code
        )

        self.assertTrue(sent)
        self.assertEqual(len(mail.outbox), 1)
        message = mail.outbox[0]
        self.assertEqual(message.to, ["ann@example.com"])
        self.assertEqual(message.subject, "Booking Confirmation - Test Hotel - Room 101")
        self.assertIn("Total amount: $200.00", message.body)
        self.assertEqual(len(message.attachments), 1)
        self.assertEqual(message.attachments[0].get_filename(), "qr-code.png")

    def test_confirmation_without_image_has_no_attachment(self):
        email_notification_service.send_booking_confirmation(self.reservation, "")

        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].attachments, [])

    @override_settings(EMAIL_HOST_USER="")
    def test_skipped_when_mail_not_configured(self):
        sent = email_notification_service.send_booking_confirmation(
            self.reservation, self.qr_code
        )

        self.assertFalse(sent)
        self.assertEqual(mail.outbox, [])

    def test_connection_is_shared_and_reset_after_failure(self):
        self.assertIs(
            EmailNotificationService.get_connection(),
            EmailNotificationService.get_connection(),
        )
        broken = Mock()
        broken.send_messages.side_effect = SMTPException("connection lost")
        EmailNotificationService._connection = broken

        with self.assertRaises(SMTPException):
            email_notification_service.send_booking_confirmation(self.reservation)

        broken.close.assert_called_once()
        self.assertIsNone(EmailNotificationService._connection)

    def test_notify_swallows_failures(self):
        with patch.object(
            email_notification_service,
            "send_booking_confirmation",
            side_effect=SMTPException("down"),
        ):
            self.assertFalse(notify_booking_confirmation(self.reservation, self.qr_code))

    def test_booking_survives_email_failure(self):
        with patch.object(
            email_notification_service,
            "send_booking_confirmation",
            side_effect=SMTPException("down"),
        ) as mock_send:
            reservation = services.create_public_reservation(
                services.GuestContact("Bob", "Stone", "bob@example.com", "555-0111"),
                self.room.pk,
                self.reservation.check_out_date + timedelta(days=5),
                self.reservation.check_out_date + timedelta(days=6),
                password="secret1",
            )

        mock_send.assert_called_once()
        self.assertTrue(Reservation.objects.filter(pk=reservation.pk).exists())

    def test_public_booking_emails_guest(self):
        services.create_public_reservation(
            services.GuestContact("Bob", "Stone", "bob@example.com", "555-0111"),
            self.room.pk,
            self.reservation.check_out_date + timedelta(days=5),
            self.reservation.check_out_date + timedelta(days=6),
            password="secret1",
        )

        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].to, ["bob@example.com"])

    def test_decode_data_url(self):
        self.assertTrue(decode_data_url(self.qr_code).startswith(b"\x89PNG"))
        self.assertEqual(decode_data_url(""), b"")
        self.assertEqual(decode_data_url("data:image/png;base64,@@@"), b"")
