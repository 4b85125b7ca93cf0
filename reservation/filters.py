import django_filters

from reservation.models import Reservation


class ReservationFilter(django_filters.FilterSet):
    """
    Provides filtering for reservations by stay dates, room type,
    guest, room, status and payment status.
    """

    from_date = django_filters.DateFilter(field_name="check_in_date", lookup_expr="gte")
    to_date = django_filters.DateFilter(field_name="check_out_date", lookup_expr="lte")

    room_type = django_filters.CharFilter(field_name="room__type", lookup_expr="iexact")

    class Meta:
        model = Reservation
        fields = ["guest", "room", "status", "payment_status"]
