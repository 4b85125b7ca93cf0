from rest_framework import serializers

from guest.serializers import MIN_PASSWORD_LENGTH


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)


class TokenRefreshSerializer(serializers.Serializer):
    refresh = serializers.CharField()


class PrincipalSerializer(serializers.Serializer):
    """Read-only view of the authenticated caller."""

    id = serializers.CharField()
    name = serializers.CharField(source="display_name")
    email = serializers.EmailField()
    role = serializers.CharField()
    kind = serializers.CharField()


class RegisterSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=300)
    email = serializers.EmailField(error_messages={"invalid": "Invalid email format"})
    password = serializers.CharField(
        write_only=True, min_length=MIN_PASSWORD_LENGTH, trim_whitespace=False
    )
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True, default="")


class ForgotPasswordSerializer(serializers.Serializer):
    email = serializers.EmailField()


class ResetPasswordSerializer(serializers.Serializer):
    token = serializers.CharField(
        error_messages={
            "required": "Token and password are required",
            "blank": "Token and password are required",
        }
    )
    password = serializers.CharField(
        write_only=True,
        min_length=MIN_PASSWORD_LENGTH,
        trim_whitespace=False,
        error_messages={
            "required": "Token and password are required",
            "blank": "Token and password are required",
        },
    )


class ProfileUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=300, required=False)
    email = serializers.EmailField(required=False)


class ChangePasswordSerializer(serializers.Serializer):
    currentPassword = serializers.CharField(write_only=True, trim_whitespace=False)
    newPassword = serializers.CharField(
        write_only=True, min_length=MIN_PASSWORD_LENGTH, trim_whitespace=False
    )
