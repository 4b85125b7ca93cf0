from datetime import timedelta

from django.db.models import ProtectedError
from django.utils.dateparse import parse_date
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.viewsets import ModelViewSet

from reservation.availability import booked_dates, rooms_with_conflicts
from reservation.exceptions import ConflictError
from room.models import Room
from room.permissions import IsFrontDeskOrReadOnly
from room.serializers import (
    RoomAvailabilitySerializer,
    RoomCalendarSerializer,
    RoomSerializer,
)
from room.validators import validate_availability_window, validate_calendar_request


def _parse_query_date(value):
    try:
        return parse_date(value) if value else None
    except ValueError:
        return None


@extend_schema(tags=["Rooms"])
class RoomViewSet(ModelViewSet):
    """
    ViewSet for managing rooms.

    Anyone can browse rooms and their calendars; front desk staff create,
    update and delete them. Rooms under maintenance or cleaning are hidden
    from the public list.
    """

    serializer_class = RoomSerializer
    permission_classes = (IsFrontDeskOrReadOnly,)

    filter_backends = (DjangoFilterBackend,)
    filterset_fields = ("type", "status")

    def get_queryset(self):
        queryset = Room.objects.all().order_by("number")
        if self.action == "list":
            queryset = queryset.exclude(status__in=Room.UNBOOKABLE_STATUSES)
        return queryset

    def get_serializer_class(self):
        """Return serializer class depending on the current action."""

        if self.action == "calendar":
            return RoomCalendarSerializer
        return RoomSerializer

    def perform_destroy(self, instance):
        try:
            instance.delete()
        except ProtectedError:
            raise ConflictError("Room has reservations and cannot be deleted")

    @extend_schema(
        parameters=[
            OpenApiParameter(
                name="check_in_date",
                type=OpenApiTypes.DATE,
                location=OpenApiParameter.QUERY,
                description="Stay start (YYYY-MM-DD); adds isAvailable to each room",
                required=False,
            ),
            OpenApiParameter(
                name="check_out_date",
                type=OpenApiTypes.DATE,
                location=OpenApiParameter.QUERY,
                description="Stay end (YYYY-MM-DD)",
                required=False,
            ),
        ],
        responses={200: RoomAvailabilitySerializer(many=True)},
    )
    def list(self, request, *args, **kwargs):
        """
        List bookable rooms.

        When a stay window is given each room carries ``isAvailable``
        computed from overlapping active reservations.
        """
        check_in_str = request.query_params.get("check_in_date")
        check_out_str = request.query_params.get("check_out_date")
        check_in = _parse_query_date(check_in_str)
        check_out = _parse_query_date(check_out_str)

        validate_availability_window(check_in_str, check_out_str, check_in, check_out)

        rooms = self.filter_queryset(self.get_queryset())
        if not check_in_str:
            return Response(RoomSerializer(rooms, many=True).data)

        rooms = list(rooms)
        taken = rooms_with_conflicts(rooms, check_in, check_out)
        availability = {room.pk: room.pk not in taken for room in rooms}
        serializer = RoomAvailabilitySerializer(
            rooms, many=True, context={"availability": availability}
        )
        return Response(serializer.data)

    @extend_schema(
        request=None,
        parameters=[
            OpenApiParameter(
                name="date_from",
                type=OpenApiTypes.DATE,
                location=OpenApiParameter.QUERY,
                description="First day (YYYY-MM-DD)",
                required=True,
            ),
            OpenApiParameter(
                name="date_to",
                type=OpenApiTypes.DATE,
                location=OpenApiParameter.QUERY,
                description="Last day (YYYY-MM-DD)",
                required=True,
            ),
        ],
        responses={
            200: RoomCalendarSerializer(many=True),
            400: {
                "description": "Bad Request",
                "examples": [
                    {"detail": "date_from and date_to are required"},
                    {"detail": "date_from must be before date_to"},
                ],
            },
        },
        description=(
            "Get room availability calendar for a given date range.\n\n"
            "Only reservations with status reserved or checked_in occupy dates. "
            "A night is booked when check-in <= day < check-out."
        ),
    )
    @action(methods=["GET"], detail=True, url_path="calendar", filter_backends=[])
    def calendar(self, request, pk=None):
        """Return one entry per day between date_from and date_to (inclusive)."""

        room = self.get_object()

        date_from_str = request.query_params.get("date_from")
        date_to_str = request.query_params.get("date_to")

        date_from = _parse_query_date(date_from_str)
        date_to = _parse_query_date(date_to_str)

        validate_calendar_request(date_from_str, date_to_str, date_from, date_to)

        taken = booked_dates(room, date_from, date_to)

        calendar = []
        current_date = date_from
        while current_date <= date_to:
            calendar.append(
                {
                    "date": current_date,
                    "available": current_date not in taken,
                }
            )
            current_date += timedelta(days=1)

        serializer = RoomCalendarSerializer(calendar, many=True)
        return Response(serializer.data)
