from rest_framework.routers import SimpleRouter

from payroll_desk.employees.api.views import EmployeeViewSet

router = SimpleRouter()
router.register("employees", EmployeeViewSet, basename="employee")

urlpatterns = [
    *router.urls,
]
