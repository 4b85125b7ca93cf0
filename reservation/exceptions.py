from rest_framework import status
from rest_framework.exceptions import APIException


class ConflictError(APIException):
    """The requested stay collides with an existing one."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Room is already booked for the selected dates."
    default_code = "conflict"


class InvalidTransitionError(APIException):
    """The reservation cannot move to the requested status."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid reservation status transition."
    default_code = "invalid_transition"


class MalformedTokenError(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid QR code format"
    default_code = "malformed_token"


class TokenRenderError(APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Failed to generate QR code"
    default_code = "token_render_failed"
