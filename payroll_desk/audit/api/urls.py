from rest_framework.routers import SimpleRouter

from payroll_desk.audit.api.views import AuditLogViewSet

# Mounted at api/logs/, so the viewset takes the root prefix.
router = SimpleRouter()
router.register("", AuditLogViewSet, basename="audit-log")

urlpatterns = [
    *router.urls,
]
