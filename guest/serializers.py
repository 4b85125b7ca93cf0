from rest_framework import serializers

from guest.models import Guest

MIN_PASSWORD_LENGTH = 6


class GuestSerializer(serializers.ModelSerializer):
    """Serializer for Guest model. The password is write-only."""

    firstName = serializers.CharField(source="first_name", max_length=150)
    lastName = serializers.CharField(
        source="last_name", max_length=150, required=False, allow_blank=True
    )
    password = serializers.CharField(
        write_only=True,
        required=False,
        min_length=MIN_PASSWORD_LENGTH,
        trim_whitespace=False,
    )
    hasPortalAccess = serializers.SerializerMethodField()
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Guest
        fields = (
            "id",
            "firstName",
            "lastName",
            "email",
            "phone",
            "password",
            "address",
            "preferences",
            "notes",
            "hasPortalAccess",
            "createdAt",
        )
        extra_kwargs = {"email": {"validators": []}}

    def get_hasPortalAccess(self, obj) -> bool:
        return bool(obj.password)

    def validate_email(self, value):
        value = value.strip().lower()
        queryset = Guest.objects.filter(email=value)
        if self.instance is not None:
            queryset = queryset.exclude(pk=self.instance.pk)
        if queryset.exists():
            raise serializers.ValidationError("A guest with this email already exists.")
        return value

    def validate(self, attrs):
        if self.instance is None and not attrs.get("password"):
            raise serializers.ValidationError(
                {"password": f"Password is required and must be at least {MIN_PASSWORD_LENGTH} characters"}
            )
        return attrs


class GuestSummarySerializer(serializers.ModelSerializer):
    """Compact guest representation embedded in reservations."""

    firstName = serializers.CharField(source="first_name")
    lastName = serializers.CharField(source="last_name")

    class Meta:
        model = Guest
        fields = ("id", "firstName", "lastName", "email", "phone")


class GuestPasswordSerializer(serializers.Serializer):
    password = serializers.CharField(
        min_length=MIN_PASSWORD_LENGTH, trim_whitespace=False
    )
