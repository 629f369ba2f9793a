from rest_framework.routers import DefaultRouter

from payroll_desk.payroll.api.views import OvertimeEntryViewSet, PayrollEntryViewSet

router = DefaultRouter()
router.register("payroll", PayrollEntryViewSet, basename="payroll-entry")
router.register("overtime", OvertimeEntryViewSet, basename="overtime-entry")

urlpatterns = [
    *router.urls,
]
