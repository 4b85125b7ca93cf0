from rest_framework.routers import SimpleRouter

from room.views import RoomViewSet

router = SimpleRouter()
router.register("", RoomViewSet, basename="room")

urlpatterns = router.urls

app_name = "room"
