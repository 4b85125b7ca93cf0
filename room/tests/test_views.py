from datetime import date
from decimal import Decimal

from rest_framework import status
from rest_framework.test import APITestCase

from accounts.models import StaffAccount
from accounts.principals import GuestPrincipal, StaffPrincipal
from guest.models import Guest
from reservation.models import Reservation
from room.models import Room

ROOMS_URL = "/api/rooms/"


class RoomAPITestCase(APITestCase):

    def setUp(self):
        self.room = Room.objects.create(
            number="101",
            type=Room.RoomType.STANDARD,
            floor=1,
            price_per_night=Decimal("100.00"),
            amenities=["wifi", "tv"],
        )
        self.suite = Room.objects.create(
            number="201",
            type=Room.RoomType.SUITE,
            floor=2,
            price_per_night=Decimal("300.00"),
        )
        self.closed = Room.objects.create(
            number="301",
            type=Room.RoomType.DELUXE,
            price_per_night=Decimal("180.00"),
            status=Room.RoomStatus.MAINTENANCE,
        )
        self.guest = Guest.objects.create(first_name="Ann", email="ann@example.com")
        Reservation.objects.create(
            guest=self.guest,
            room=self.room,
            check_in_date=date(2030, 6, 10),
            check_out_date=date(2030, 6, 12),
        )
        self.receptionist = StaffPrincipal(
            StaffAccount.objects.create_user(
                email="desk@hotel.test", password="password123", name="Rita Desk"
            )
        )

    def test_public_list_hides_unbookable_rooms(self):
        response = self.client.get(ROOMS_URL)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([room["roomNumber"] for room in response.data], ["101", "201"])
        self.assertEqual(response.data[0]["pricePerNight"], Decimal("100.00"))
        self.assertEqual(response.data[0]["amenities"], ["wifi", "tv"])

    def test_filter_by_type(self):
        response = self.client.get(ROOMS_URL, {"type": "suite"})

        self.assertEqual([room["roomNumber"] for room in response.data], ["201"])

    def test_list_with_stay_window_reports_availability(self):
        response = self.client.get(
            ROOMS_URL, {"check_in_date": "2030-06-11", "check_out_date": "2030-06-13"}
        )

        availability = {room["roomNumber"]: room["isAvailable"] for room in response.data}
        self.assertEqual(availability, {"101": False, "201": True})

    def test_list_with_invalid_stay_window(self):
        for params in (
            {"check_in_date": "2030-06-11"},
            {"check_in_date": "2030-06-13", "check_out_date": "2030-06-11"},
            {"check_in_date": "tomorrow", "check_out_date": "2030-06-11"},
        ):
            with self.subTest(params=params):
                response = self.client.get(ROOMS_URL, params)
                self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_calendar(self):
        response = self.client.get(
            f"{ROOMS_URL}{self.room.pk}/calendar/",
            {"date_from": "2030-06-09", "date_to": "2030-06-12"},
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            [(day["date"], day["available"]) for day in response.data],
            [
                ("2030-06-09", True),
                ("2030-06-10", False),
                ("2030-06-11", False),
                ("2030-06-12", True),
            ],
        )

    def test_calendar_requires_dates(self):
        response = self.client.get(f"{ROOMS_URL}{self.room.pk}/calendar/")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_create_room_requires_front_desk(self):
        payload = {
            "roomNumber": "401",
            "type": "deluxe",
            "floor": 4,
            "pricePerNight": "180.00",
        }
        self.assertEqual(
            self.client.post(ROOMS_URL, payload).status_code,
            status.HTTP_401_UNAUTHORIZED,
        )

        self.client.force_authenticate(user=GuestPrincipal(self.guest))
        self.assertEqual(
            self.client.post(ROOMS_URL, payload).status_code,
            status.HTTP_403_FORBIDDEN,
        )

        self.client.force_authenticate(user=self.receptionist)
        response = self.client.post(ROOMS_URL, payload)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["status"], "available")

    def test_duplicate_room_number(self):
        self.client.force_authenticate(user=self.receptionist)

        response = self.client.post(
            ROOMS_URL,
            {"roomNumber": "101", "type": "standard", "pricePerNight": "90.00"},
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(str(response.data["detail"]), "Room number already exists")

    def test_delete_room_with_reservations_rejected(self):
        self.client.force_authenticate(user=self.receptionist)

        response = self.client.delete(f"{ROOMS_URL}{self.room.pk}/")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertTrue(Room.objects.filter(pk=self.room.pk).exists())
