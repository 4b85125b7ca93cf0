from django.db.models import ProtectedError
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.viewsets import ModelViewSet

from accounts.permissions import IsAdmin, IsFrontDesk, IsManagement
from guest.models import Guest
from guest.serializers import GuestPasswordSerializer, GuestSerializer
from reservation.exceptions import ConflictError


@extend_schema(tags=["Guests"])
class GuestViewSet(ModelViewSet):
    """
    Staff management of guest records.

    Front desk staff can list, create and edit guests; deleting requires
    a management role and resetting a password requires an admin.
    """

    queryset = Guest.objects.all()
    serializer_class = GuestSerializer
    filterset_fields = ("email",)

    def get_permissions(self):
        if self.action == "destroy":
            return [IsManagement()]
        if self.action == "change_password":
            return [IsAdmin()]
        return [IsFrontDesk()]

    def get_serializer_class(self):
        if self.action == "change_password":
            return GuestPasswordSerializer
        return GuestSerializer

    def perform_destroy(self, instance):
        try:
            instance.delete()
        except ProtectedError:
            raise ConflictError("Guest has reservations and cannot be deleted")

    @extend_schema(
        request=GuestPasswordSerializer,
        responses={
            200: OpenApiResponse(description="Password updated"),
            400: OpenApiResponse(description="Password too short"),
            404: OpenApiResponse(description="Guest not found"),
        },
        summary="Change guest password",
    )
    @action(detail=True, methods=["put"], url_path="change-password")
    def change_password(self, request, pk=None):
        """Set a new portal password for the guest."""
        guest = self.get_object()
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        guest.password = serializer.validated_data["password"]
        guest.save(update_fields=["password", "updated_at"])

        return Response(
            {"detail": "Guest password updated successfully"},
            status=status.HTTP_200_OK,
        )
