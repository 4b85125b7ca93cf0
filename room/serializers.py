from rest_framework import serializers

from reservation.exceptions import ConflictError
from room.models import Room


class RoomSerializer(serializers.ModelSerializer):
    """Serializer for Room model."""

    roomNumber = serializers.CharField(source="number", max_length=20)
    pricePerNight = serializers.DecimalField(
        source="price_per_night", max_digits=10, decimal_places=2, min_value=0
    )
    amenities = serializers.ListField(
        child=serializers.CharField(), required=False
    )

    class Meta:
        model = Room
        fields = (
            "id",
            "roomNumber",
            "type",
            "floor",
            "pricePerNight",
            "status",
            "description",
            "amenities",
        )

    def validate_roomNumber(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Room number is required")
        queryset = Room.objects.filter(number=value)
        if self.instance is not None:
            queryset = queryset.exclude(pk=self.instance.pk)
        if queryset.exists():
            raise ConflictError("Room number already exists")
        return value


class RoomAvailabilitySerializer(RoomSerializer):
    """Room listing entry annotated with availability for a stay window."""

    isAvailable = serializers.SerializerMethodField()

    class Meta(RoomSerializer.Meta):
        fields = RoomSerializer.Meta.fields + ("isAvailable",)

    def get_isAvailable(self, obj) -> bool:
        return self.context["availability"].get(obj.pk, True)


class RoomCalendarSerializer(serializers.Serializer):
    """Serializer for room availability calendar response."""

    date = serializers.DateField()
    available = serializers.BooleanField()
