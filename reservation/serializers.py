from rest_framework import serializers

from guest.serializers import GuestSummarySerializer
from reservation.models import Reservation
from room.serializers import RoomSerializer


class ReservationReadSerializer(serializers.ModelSerializer):
    """Serializer for reading reservation data with nested guest and room."""

    guest = GuestSummarySerializer(read_only=True)
    room = RoomSerializer(read_only=True)
    checkInDate = serializers.DateField(source="check_in_date")
    checkOutDate = serializers.DateField(source="check_out_date")
    numGuests = serializers.IntegerField(source="num_guests")
    totalAmount = serializers.DecimalField(
        source="total_amount", max_digits=12, decimal_places=2
    )
    paymentStatus = serializers.CharField(source="payment_status")
    qrCode = serializers.CharField(source="qr_code")
    qrCodeData = serializers.CharField(source="qr_code_data")
    createdAt = serializers.DateTimeField(source="created_at")
    updatedAt = serializers.DateTimeField(source="updated_at")

    class Meta:
        model = Reservation
        fields = (
            "id",
            "guest",
            "room",
            "checkInDate",
            "checkOutDate",
            "status",
            "numGuests",
            "totalAmount",
            "paymentStatus",
            "qrCode",
            "qrCodeData",
            "notes",
            "createdAt",
            "updatedAt",
        )


class ReservationCreateSerializer(serializers.Serializer):
    """Input for a reservation made by an authenticated caller."""

    room = serializers.IntegerField(
        error_messages={"required": "Room ID is required", "null": "Room ID is required"}
    )
    checkInDate = serializers.DateField(
        error_messages={"required": "Check-in and check-out dates are required"}
    )
    checkOutDate = serializers.DateField(
        error_messages={"required": "Check-in and check-out dates are required"}
    )
    numGuests = serializers.IntegerField(min_value=1, required=False, default=1)
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class PublicReservationCreateSerializer(ReservationCreateSerializer):
    """Input for the anonymous booking form. Contact details are mandatory."""

    firstName = serializers.CharField(max_length=150)
    lastName = serializers.CharField(max_length=150)
    email = serializers.EmailField(error_messages={"invalid": "Invalid email format"})
    phone = serializers.CharField(max_length=30)
    password = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, trim_whitespace=False
    )


class PublicReservationResponseSerializer(serializers.Serializer):
    reservation = ReservationReadSerializer()
    qrCode = serializers.CharField()
    message = serializers.CharField()


class QRScanSerializer(serializers.Serializer):
    qrData = serializers.JSONField(
        error_messages={"required": "QR code data is required"}
    )


class QRScanResponseSerializer(serializers.Serializer):
    reservation = ReservationReadSerializer()
    isValid = serializers.BooleanField()
    message = serializers.CharField()


class ReservationTokenSerializer(serializers.Serializer):
    qrCode = serializers.CharField()
    qrCodeData = serializers.CharField()
    reservationId = serializers.CharField()
    roomNumber = serializers.CharField()
    checkInDate = serializers.DateField()
    checkOutDate = serializers.DateField()


class CancelReservationResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    reservation = ReservationReadSerializer()


class ReservationSummarySerializer(serializers.Serializer):
    occupancyCount = serializers.IntegerField()
    totalReservations = serializers.IntegerField()
    revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
