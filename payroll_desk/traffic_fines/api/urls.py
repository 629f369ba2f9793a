from rest_framework.routers import SimpleRouter

from payroll_desk.traffic_fines.api.views import TrafficFineViewSet

router = SimpleRouter()
router.register("traffic-fines", TrafficFineViewSet, basename="traffic-fine")

urlpatterns = [
    *router.urls,
]
