from datetime import date, timedelta
from decimal import Decimal

from django.test import TestCase, override_settings

from guest.models import Guest
from reservation.availability import booked_dates, has_conflict, rooms_with_conflicts
from reservation.models import Reservation
from room.models import Room


class AvailabilityTestCase(TestCase):

    def setUp(self):
        self.room = Room.objects.create(
            number="101",
            type=Room.RoomType.STANDARD,
            price_per_night=Decimal("100.00"),
        )
        self.other_room = Room.objects.create(
            number="102",
            type=Room.RoomType.DELUXE,
            price_per_night=Decimal("150.00"),
        )
        self.guest = Guest.objects.create(
            first_name="Ann", last_name="Lee", email="ann@example.com"
        )
        self.reservation = Reservation.objects.create(
            guest=self.guest,
            room=self.room,
            check_in_date=date(2030, 6, 10),
            check_out_date=date(2030, 6, 12),
        )

    def test_overlapping_stay_conflicts(self):
        self.assertTrue(has_conflict(self.room, date(2030, 6, 11), date(2030, 6, 13)))
        self.assertTrue(has_conflict(self.room, date(2030, 6, 8), date(2030, 6, 15)))

    def test_disjoint_stay_is_free(self):
        self.assertFalse(has_conflict(self.room, date(2030, 6, 13), date(2030, 6, 15)))
        self.assertFalse(has_conflict(self.other_room, date(2030, 6, 10), date(2030, 6, 12)))

    def test_touching_boundary_conflicts_by_default(self):
        self.assertTrue(has_conflict(self.room, date(2030, 6, 12), date(2030, 6, 14)))
        self.assertTrue(has_conflict(self.room, date(2030, 6, 8), date(2030, 6, 10)))

    @override_settings(RESERVATION_ALLOW_SAME_DAY_TURNOVER=True)
    def test_touching_boundary_allowed_with_same_day_turnover(self):
        self.assertFalse(has_conflict(self.room, date(2030, 6, 12), date(2030, 6, 14)))
        self.assertFalse(has_conflict(self.room, date(2030, 6, 8), date(2030, 6, 10)))
        self.assertTrue(has_conflict(self.room, date(2030, 6, 11), date(2030, 6, 14)))

    def test_inactive_reservations_do_not_block(self):
        for status in (
            Reservation.ReservationStatus.CANCELLED,
            Reservation.ReservationStatus.CHECKED_OUT,
        ):
            with self.subTest(status=status):
                self.reservation.status = status
                self.reservation.save()
                self.assertFalse(
                    has_conflict(self.room, date(2030, 6, 10), date(2030, 6, 12))
                )

    def test_checked_in_reservation_blocks(self):
        self.reservation.status = Reservation.ReservationStatus.CHECKED_IN
        self.reservation.save()

        self.assertTrue(has_conflict(self.room, date(2030, 6, 11), date(2030, 6, 12)))

    def test_rooms_with_conflicts_returns_taken_room_ids(self):
        taken = rooms_with_conflicts(
            Room.objects.all(), date(2030, 6, 11), date(2030, 6, 13)
        )

        self.assertEqual(taken, {self.room.pk})

    def test_booked_dates_counts_nights_only(self):
        dates = booked_dates(self.room, date(2030, 6, 9), date(2030, 6, 13))

        self.assertEqual(dates, {date(2030, 6, 10), date(2030, 6, 11)})

    def test_booked_dates_clipped_to_window(self):
        dates = booked_dates(self.room, date(2030, 6, 11), date(2030, 6, 11))

        self.assertEqual(dates, {date(2030, 6, 11)})
        self.assertEqual(
            booked_dates(self.room, date(2030, 6, 12), date(2030, 6, 12) + timedelta(days=3)),
            set(),
        )
