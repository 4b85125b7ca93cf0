from rest_framework.routers import SimpleRouter

from reservation.views import ReservationViewSet

router = SimpleRouter()
router.register("", ReservationViewSet, basename="reservation")

urlpatterns = router.urls

app_name = "reservation"
