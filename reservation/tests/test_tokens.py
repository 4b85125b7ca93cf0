import json
import uuid
from datetime import date
from unittest.mock import patch

from django.test import SimpleTestCase

from reservation import tokens
from reservation.exceptions import MalformedTokenError


class BookingTokenTestCase(SimpleTestCase):

    def setUp(self):
        self.reservation_id = uuid.uuid4()
        self.args = (
            self.reservation_id,
            42,
            "101",
            date(2025, 6, 10),
            date(2025, 6, 12),
        )

    def test_encode_builds_payload_and_png_data_url(self):
        payload, image = tokens.encode(*self.args)

        self.assertEqual(
            payload.as_dict(),
            {
                "reservationId": str(self.reservation_id),
                "guestId": "42",
                "roomNumber": "101",
                "checkInDate": "2025-06-10",
                "checkOutDate": "2025-06-12",
            },
        )
        self.assertTrue(image.startswith("data:image/png;base64,"))

    def test_serialized_payload_decodes_to_same_payload(self):
        payload, _ = tokens.encode(*self.args)

        self.assertEqual(tokens.decode(tokens.serialize(payload)), payload)

    def test_decode_accepts_parsed_mapping(self):
        payload, _ = tokens.encode(*self.args)

        self.assertEqual(tokens.decode(payload.as_dict()), payload)

    def test_datetime_and_string_dates_are_normalized(self):
        payload = tokens.build_payload(
            "r1", "g1", 101, "2025-06-10T00:00:00.000Z", date(2025, 6, 12)
        )

        self.assertEqual(payload.check_in_date, date(2025, 6, 10))
        self.assertEqual(payload.room_number, "101")

    def test_decode_rejects_non_json(self):
        with self.assertRaises(MalformedTokenError):
            tokens.decode("not a token")

    def test_decode_rejects_deeply_nested_json(self):
        with self.assertRaises(MalformedTokenError):
            tokens.decode("[" * 100000 + "]" * 100000)

    def test_decode_rejects_wrong_shape(self):
        for raw in ("[]", "42", json.dumps({"reservationId": "abc"}), None, 12):
            with self.subTest(raw=raw):
                with self.assertRaises(MalformedTokenError):
                    tokens.decode(raw)

    def test_decode_rejects_bad_dates(self):
        data = {
            "reservationId": "abc",
            "guestId": "1",
            "roomNumber": "101",
            "checkInDate": "10/06/2025",
            "checkOutDate": "2025-06-12",
        }

        with self.assertRaises(MalformedTokenError):
            tokens.decode(json.dumps(data))

    @patch("reservation.tokens.render_qr", side_effect=RuntimeError("no renderer"))
    def test_render_failure_leaves_image_empty(self, mock_render):
        payload, image = tokens.encode(*self.args)

        self.assertEqual(image, "")
        self.assertEqual(payload.reservation_id, str(self.reservation_id))
        mock_render.assert_called_once()
