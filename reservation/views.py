from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import (
    OpenApiParameter,
    OpenApiResponse,
    OpenApiTypes,
    extend_schema,
)
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from accounts.permissions import IsFrontDesk, IsManagement
from reservation import lifecycle, services, tokens
from reservation.filters import ReservationFilter
from reservation.models import Reservation
from reservation.serializers import (
    CancelReservationResponseSerializer,
    PublicReservationCreateSerializer,
    PublicReservationResponseSerializer,
    QRScanResponseSerializer,
    QRScanSerializer,
    ReservationCreateSerializer,
    ReservationReadSerializer,
    ReservationSummarySerializer,
    ReservationTokenSerializer,
)

UNAUTHORIZED_RESPONSE = OpenApiResponse(
    description="Authentication credentials were not provided or are invalid"
)


@extend_schema(tags=["Reservations"])
class ReservationViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """
    ViewSet for hotel reservations.

    Anonymous visitors book through ``public`` and verify tokens through
    ``scan-qr``; logged-in guests and staff book, list and cancel their own
    stays; front desk staff see every reservation and drive check-in and
    check-out.
    """

    serializer_class = ReservationReadSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_class = ReservationFilter

    public_actions = ("public", "scan_qr")
    principal_actions = ("create", "my_bookings", "qr_code", "cancel")

    def get_queryset(self):
        return Reservation.objects.select_related("room", "guest")

    def get_permissions(self):
        if self.action in self.public_actions:
            return [AllowAny()]
        if self.action in self.principal_actions:
            return [IsAuthenticated()]
        if self.action == "summary":
            return [IsManagement()]
        return [IsFrontDesk()]

    def get_serializer_class(self):
        if self.action == "create":
            return ReservationCreateSerializer
        if self.action == "public":
            return PublicReservationCreateSerializer
        if self.action == "scan_qr":
            return QRScanSerializer
        return ReservationReadSerializer

    @extend_schema(
        summary="List reservations",
        description=(
            "Retrieve all reservations (front desk staff only).\n\n"
            "Supports filtering by guest, room, status, payment status, "
            "date range and room type."
        ),
        parameters=[
            OpenApiParameter(
                name="from_date",
                type=OpenApiTypes.DATE,
                location=OpenApiParameter.QUERY,
                description="Filter reservations with check-in date from this date",
                required=False,
            ),
            OpenApiParameter(
                name="to_date",
                type=OpenApiTypes.DATE,
                location=OpenApiParameter.QUERY,
                description="Filter reservations with check-out date up to this date",
                required=False,
            ),
            OpenApiParameter(
                name="room_type",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                description="Filter by room type (standard, deluxe, suite, presidential)",
                required=False,
            ),
        ],
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(
        request=ReservationCreateSerializer,
        responses={
            201: ReservationReadSerializer,
            400: OpenApiResponse(description="Validation error, room not available or dates taken"),
            401: UNAUTHORIZED_RESPONSE,
            404: OpenApiResponse(description="Room not found"),
        },
        summary="Create reservation",
    )
    def create(self, request, *args, **kwargs):
        """
        Book a room for the authenticated caller.
        The caller's account details become the guest record.
        """
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        reservation = services.create_reservation_for_principal(
            request.user,
            data["room"],
            data["checkInDate"],
            data["checkOutDate"],
            num_guests=data["numGuests"],
            notes=data["notes"],
        )
        return Response(
            ReservationReadSerializer(reservation).data,
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(
        request=PublicReservationCreateSerializer,
        responses={
            201: PublicReservationResponseSerializer,
            400: OpenApiResponse(description="Validation error or dates already booked"),
            404: OpenApiResponse(description="Room not found"),
        },
        summary="Public booking",
        description="Book a room without an account. A guest record is created or updated by email.",
    )
    @action(detail=False, methods=["post"], url_path="public")
    def public(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        contact = services.GuestContact(
            first_name=data["firstName"],
            last_name=data["lastName"],
            email=data["email"],
            phone=data["phone"],
        )
        reservation = services.create_public_reservation(
            contact,
            data["room"],
            data["checkInDate"],
            data["checkOutDate"],
            num_guests=data["numGuests"],
            notes=data["notes"],
            password=data.get("password"),
        )

        message = (
            "Booking confirmed! Check your email for QR code."
            if reservation.qr_code
            else "Booking confirmed!"
        )
        return Response(
            {
                "reservation": ReservationReadSerializer(reservation).data,
                "qrCode": reservation.qr_code,
                "message": message,
            },
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(
        responses={200: ReservationReadSerializer(many=True), 401: UNAUTHORIZED_RESPONSE},
        summary="My bookings",
        description="Reservations of the guest record whose email matches the caller, newest first.",
    )
    @action(detail=False, methods=["get"], url_path="my-bookings", filter_backends=[])
    def my_bookings(self, request):
        reservations = services.get_bookings_for_principal(request.user)
        return Response(ReservationReadSerializer(reservations, many=True).data)

    @extend_schema(
        responses={
            200: ReservationTokenSerializer,
            401: UNAUTHORIZED_RESPONSE,
            403: OpenApiResponse(description="Reservation belongs to someone else"),
            404: OpenApiResponse(description="Reservation not found"),
            500: OpenApiResponse(description="QR code could not be generated"),
        },
        summary="Download QR code",
    )
    @action(detail=True, methods=["get"], url_path="qr-code")
    def qr_code(self, request, pk=None):
        reservation, payload, image = services.get_reservation_token(request.user, pk)
        data = {
            "qrCode": image,
            "qrCodeData": tokens.serialize(payload),
            "reservationId": payload.reservation_id,
            "roomNumber": payload.room_number,
            "checkInDate": payload.check_in_date,
            "checkOutDate": payload.check_out_date,
        }
        return Response(ReservationTokenSerializer(data).data)

    @extend_schema(
        request=None,
        responses={
            200: CancelReservationResponseSerializer,
            400: OpenApiResponse(description="Reservation is not in reserved status"),
            401: UNAUTHORIZED_RESPONSE,
            403: OpenApiResponse(description="Not the owner or a manager"),
            404: OpenApiResponse(description="Reservation not found"),
        },
        summary="Cancel",
        description="Cancel a reserved stay. Allowed for the owning guest, managers and admins.",
    )
    @action(detail=True, methods=["put"], url_path="cancel")
    def cancel(self, request, pk=None):
        reservation = services.cancel_reservation(request.user, pk)
        return Response(
            {
                "message": "Booking cancelled successfully",
                "reservation": ReservationReadSerializer(reservation).data,
            },
            status=status.HTTP_200_OK,
        )

    @extend_schema(
        request=None,
        summary="Check in",
        responses={
            200: ReservationReadSerializer,
            400: OpenApiResponse(description="Too early or invalid status"),
            401: UNAUTHORIZED_RESPONSE,
            404: OpenApiResponse(description="Reservation not found"),
        },
    )
    @action(detail=True, methods=["post"], url_path="check-in", filter_backends=[])
    def check_in(self, request, pk=None):
        reservation = lifecycle.check_in(self.get_object())
        return Response(ReservationReadSerializer(reservation).data, status=status.HTTP_200_OK)

    @extend_schema(
        request=None,
        summary="Check out",
        responses={
            200: ReservationReadSerializer,
            400: OpenApiResponse(description="Reservation is not checked in"),
            401: UNAUTHORIZED_RESPONSE,
            404: OpenApiResponse(description="Reservation not found"),
        },
    )
    @action(detail=True, methods=["post"], url_path="check-out", filter_backends=[])
    def check_out(self, request, pk=None):
        reservation = lifecycle.check_out(self.get_object())
        return Response(ReservationReadSerializer(reservation).data, status=status.HTTP_200_OK)

    @extend_schema(
        request=QRScanSerializer,
        responses={
            200: QRScanResponseSerializer,
            400: OpenApiResponse(description="Missing or malformed QR data"),
            404: OpenApiResponse(description="Reservation not found"),
        },
        summary="Scan QR code",
        description="Resolve a scanned booking token to its reservation.",
    )
    @action(detail=False, methods=["post"], url_path="scan-qr")
    def scan_qr(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        reservation = services.scan_token(serializer.validated_data["qrData"])
        return Response(
            {
                "reservation": ReservationReadSerializer(reservation).data,
                "isValid": True,
                "message": "QR code verified successfully",
            }
        )

    @extend_schema(
        responses={
            200: ReservationSummarySerializer,
            401: UNAUTHORIZED_RESPONSE,
            403: OpenApiResponse(description="Admin or manager only"),
        },
        summary="Reservation summary",
        description="Occupancy, reservation count and paid revenue.",
    )
    @action(detail=False, methods=["get"], url_path="summary", filter_backends=[])
    def summary(self, request):
        return Response(ReservationSummarySerializer(services.get_reservation_summary()).data)
