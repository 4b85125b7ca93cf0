from rest_framework.routers import SimpleRouter

from guest.views import GuestViewSet

router = SimpleRouter()
router.register("", GuestViewSet, basename="guest")

urlpatterns = router.urls

app_name = "guest"
