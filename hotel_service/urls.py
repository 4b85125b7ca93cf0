from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

urlpatterns = [
    path("api/auth/", include("accounts.urls", namespace="accounts")),
    path("api/guests/", include("guest.urls", namespace="guest")),
    path("api/rooms/", include("room.urls", namespace="room")),
    path("api/reservations/", include("reservation.urls", namespace="reservation")),
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path(
        "api/doc/swagger/",
        SpectacularSwaggerView.as_view(url_name="schema"),
        name="swagger-ui",
    ),
]
