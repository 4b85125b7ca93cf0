"""
Date-range availability for rooms.

Only reservations in an active status (reserved, checked_in) occupy a
room. By default the overlap test is inclusive on both stored bounds,
so a check-out and a new check-in on the same day collide. Setting
``RESERVATION_ALLOW_SAME_DAY_TURNOVER`` switches to a half-open test.
"""

from datetime import timedelta

from django.conf import settings

from reservation.models import Reservation


def same_day_turnover_allowed() -> bool:
    return getattr(settings, "RESERVATION_ALLOW_SAME_DAY_TURNOVER", False)


def _overlapping(queryset, check_in, check_out):
    queryset = queryset.filter(status__in=Reservation.ACTIVE_STATUSES)
    if same_day_turnover_allowed():
        return queryset.filter(
            check_in_date__lt=check_out,
            check_out_date__gt=check_in,
        )
    return queryset.filter(
        check_in_date__lte=check_out,
        check_out_date__gte=check_in,
    )


def conflicting_reservations(room, check_in, check_out):
    """Active reservations on ``room`` whose stay intersects ``[check_in, check_out]``."""
    return _overlapping(Reservation.objects.filter(room=room), check_in, check_out)


def has_conflict(room, check_in, check_out) -> bool:
    """
    Return True if any active reservation on ``room`` overlaps the stay.

    The check and the later insert are separate queries; two concurrent
    requests can both pass it.
    """
    return conflicting_reservations(room, check_in, check_out).exists()


def rooms_with_conflicts(rooms, check_in, check_out) -> set:
    """Return the ids of ``rooms`` that have a conflicting reservation."""
    queryset = Reservation.objects.filter(room__in=rooms)
    return set(
        _overlapping(queryset, check_in, check_out).values_list("room_id", flat=True)
    )


def booked_dates(room, date_from, date_to) -> set:
    """
    Nights occupied on ``room`` between ``date_from`` and ``date_to``.

    A night counts as booked when ``check_in <= day < check_out`` for an
    active reservation.
    """
    reservations = Reservation.objects.filter(
        room=room,
        status__in=Reservation.ACTIVE_STATUSES,
        check_in_date__lt=date_to + timedelta(days=1),
        check_out_date__gt=date_from,
    ).only("check_in_date", "check_out_date")

    dates = set()
    for reservation in reservations:
        current = max(reservation.check_in_date, date_from)
        while current < reservation.check_out_date and current <= date_to:
            dates.add(current)
            current += timedelta(days=1)
    return dates
