from datetime import date
from decimal import Decimal
from unittest.mock import patch

from django.test import TestCase, override_settings

from guest.models import Guest
from notifications.messages import (
    generate_reservation_cancellation_message,
    generate_reservation_creation_message,
)
from notifications.tasks import notify_reservation_event_telegram, send_telegram_notification
from reservation.models import Reservation
from room.models import Room


class TelegramNotificationTestCase(TestCase):

    def setUp(self):
        self.reservation = Reservation.objects.create(
            guest=Guest.objects.create(first_name="Ann", last_name="Lee", email="ann@example.com"),
            room=Room.objects.create(
                number="101", type=Room.RoomType.STANDARD, price_per_night=Decimal("100.00")
            ),
            check_in_date=date(2030, 6, 10),
            check_out_date=date(2030, 6, 12),
            total_amount=Decimal("200.00"),
        )

    def test_messages(self):
        created = generate_reservation_creation_message(self.reservation)
        cancelled = generate_reservation_cancellation_message(self.reservation)

        self.assertIn("Room: 101", created)
        self.assertIn("Ann Lee (ann@example.com)", created)
        self.assertIn("Total: $200.00", created)
        self.assertIn("Dates: 2030-06-10 - 2030-06-12", cancelled)

    def test_creation_queues_alert_after_commit(self):
        with patch("reservation.signals.notify_reservation_event_telegram") as mock_task:
            with self.captureOnCommitCallbacks(execute=True):
                reservation = Reservation.objects.create(
                    guest=self.reservation.guest,
                    room=self.reservation.room,
                    check_in_date=date(2030, 7, 1),
                    check_out_date=date(2030, 7, 2),
                )

        mock_task.delay.assert_called_once_with(str(reservation.pk), "created")

    def test_cancellation_queues_alert(self):
        with patch("reservation.signals.notify_reservation_event_telegram") as mock_task:
            with self.captureOnCommitCallbacks(execute=True):
                self.reservation.status = Reservation.ReservationStatus.CANCELLED
                self.reservation.save(update_fields=["status", "updated_at"])
            with self.captureOnCommitCallbacks(execute=True):
                self.reservation.save(update_fields=["qr_code", "updated_at"])

        mock_task.delay.assert_called_once_with(str(self.reservation.pk), "cancelled")

    @patch("notifications.tasks.send_telegram_notification")
    def test_event_task_builds_message(self, mock_send):
        result = notify_reservation_event_telegram(str(self.reservation.pk), "cancelled")

        mock_send.delay.assert_called_once_with(
            generate_reservation_cancellation_message(self.reservation)
        )
        self.assertIn("cancelled", result)

    @patch("notifications.tasks.send_telegram_notification")
    def test_event_task_unknown_reservation(self, mock_send):
        Reservation.objects.all().delete()

        notify_reservation_event_telegram("00000000-0000-0000-0000-000000000000", "created")

        mock_send.delay.assert_not_called()

    @override_settings(CHAT_ID="12345", TELEGRAM_BOT_TOKEN="123:abc")
    @patch("notifications.tasks.get_telegram_service")
    def test_send_task_delivers_to_chat(self, mock_service):
        send_telegram_notification("hello")

        mock_service.return_value.send_sync.assert_called_once_with(chat_id=12345, text="hello")

    @override_settings(CHAT_ID="")
    @patch("notifications.tasks.get_telegram_service")
    def test_send_task_without_chat_id(self, mock_service):
        self.assertEqual(send_telegram_notification("hello"), "skipped")
        mock_service.assert_not_called()
