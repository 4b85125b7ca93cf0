from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.exceptions import AuthenticationFailed
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts import services
from accounts.authentication import issue_tokens, refresh_access_token
from accounts.serializers import (
    ChangePasswordSerializer,
    ForgotPasswordSerializer,
    LoginSerializer,
    PrincipalSerializer,
    ProfileUpdateSerializer,
    RegisterSerializer,
    ResetPasswordSerializer,
    TokenRefreshSerializer,
)

PASSWORD_RESET_REQUESTED_MESSAGE = "If email exists, reset link has been sent"


@extend_schema(tags=["Auth"])
class LoginView(APIView):
    """
    Exchange email and password for a JWT pair.

    Staff accounts are checked first, then guest accounts.
    """

    permission_classes = (AllowAny,)

    @extend_schema(
        request=LoginSerializer,
        responses={
            200: OpenApiResponse(description="Principal details with access and refresh tokens"),
            401: OpenApiResponse(description="Invalid credentials"),
        },
        summary="Log in",
    )
    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        principal = services.authenticate_credentials(
            serializer.validated_data["email"],
            serializer.validated_data["password"],
        )
        if principal is None:
            raise AuthenticationFailed("Invalid credentials")

        data = PrincipalSerializer(principal).data
        data.update(issue_tokens(principal))
        return Response(data, status=status.HTTP_200_OK)


@extend_schema(tags=["Auth"])
class TokenRefreshView(APIView):
    """Issue a new access token from a refresh token."""

    permission_classes = (AllowAny,)

    @extend_schema(
        request=TokenRefreshSerializer,
        responses={
            200: OpenApiResponse(description="New access token"),
            401: OpenApiResponse(description="Invalid or expired refresh token"),
        },
        summary="Refresh access token",
    )
    def post(self, request):
        serializer = TokenRefreshSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        access = refresh_access_token(serializer.validated_data["refresh"])
        return Response({"access": access}, status=status.HTTP_200_OK)


@extend_schema(tags=["Auth"])
class RegisterView(APIView):
    """Guest self-registration. Returns the new principal with a JWT pair."""

    permission_classes = (AllowAny,)

    @extend_schema(
        request=RegisterSerializer,
        responses={
            201: OpenApiResponse(description="Guest account with access and refresh tokens"),
            400: OpenApiResponse(description="Validation error or email already registered"),
        },
        summary="Register guest account",
    )
    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        principal = services.register_guest(**serializer.validated_data)

        data = PrincipalSerializer(principal).data
        data.update(issue_tokens(principal))
        return Response(data, status=status.HTTP_201_CREATED)


@extend_schema(tags=["Auth"])
class ForgotPasswordView(APIView):
    """
    Start a password reset for a guest account.

    The response is the same whether or not the email is registered.
    """

    permission_classes = (AllowAny,)

    @extend_schema(
        request=ForgotPasswordSerializer,
        responses={200: OpenApiResponse(description="Reset link sent if the account exists")},
        summary="Forgot password",
    )
    def post(self, request):
        serializer = ForgotPasswordSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        services.request_password_reset(serializer.validated_data["email"])
        return Response({"message": PASSWORD_RESET_REQUESTED_MESSAGE})


@extend_schema(tags=["Auth"])
class ResetPasswordView(APIView):
    permission_classes = (AllowAny,)

    @extend_schema(
        request=ResetPasswordSerializer,
        responses={
            200: OpenApiResponse(description="Password reset"),
            400: OpenApiResponse(description="Missing fields or invalid/expired token"),
        },
        summary="Reset password",
    )
    def post(self, request):
        serializer = ResetPasswordSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        services.reset_password(
            serializer.validated_data["token"], serializer.validated_data["password"]
        )
        return Response({"message": "Password reset successfully"})


@extend_schema(tags=["Auth"])
class ProfileView(APIView):
    """Return or rename the authenticated caller."""

    permission_classes = (IsAuthenticated,)

    @extend_schema(responses={200: PrincipalSerializer}, summary="Current principal")
    def get(self, request):
        return Response(PrincipalSerializer(request.user).data)

    @extend_schema(
        request=ProfileUpdateSerializer,
        responses={
            200: PrincipalSerializer,
            400: OpenApiResponse(description="Email address cannot be changed"),
        },
        summary="Update profile",
    )
    def put(self, request):
        serializer = ProfileUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        principal = services.update_profile(request.user, **serializer.validated_data)
        return Response(PrincipalSerializer(principal).data)


@extend_schema(tags=["Auth"])
class ChangePasswordView(APIView):
    permission_classes = (IsAuthenticated,)

    @extend_schema(
        request=ChangePasswordSerializer,
        responses={
            200: OpenApiResponse(description="Password updated"),
            401: OpenApiResponse(description="Current password is incorrect"),
            404: OpenApiResponse(description="Account has no password"),
        },
        summary="Change password",
    )
    def put(self, request):
        serializer = ChangePasswordSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        services.change_password(
            request.user,
            serializer.validated_data["currentPassword"],
            serializer.validated_data["newPassword"],
        )
        return Response({"message": "Password updated successfully"})
