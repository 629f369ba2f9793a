from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from payroll_desk.employees.api.serializers import EmployeeSerializer
from payroll_desk.employees.models import Employee
from payroll_desk.employees.services import EmployeeService
from payroll_desk.users.permissions import CanDeleteEmployees, IsAdminOrClerk


@extend_schema_view(
    list=extend_schema(
        tags=["Employees"],
        summary="List employees",
        description="All employees ordered by full name, including those with an end date.",
    ),
    retrieve=extend_schema(
        tags=["Employees"],
        summary="Retrieve employee details",
    ),
    create=extend_schema(
        tags=["Employees"],
        summary="Add a new employee",
    ),
    update=extend_schema(
        tags=["Employees"],
        summary="Update employee information",
        description="Salary and working days changes apply to every period on its next read.",
    ),
    partial_update=extend_schema(
        tags=["Employees"],
        summary="Partially update employee information",
    ),
    destroy=extend_schema(
        tags=["Employees"],
        summary="Delete employee record",
        description="Admin only. Removes the employee's payroll entries, overtime and traffic fines too.",
    ),
)
class EmployeeViewSet(viewsets.ModelViewSet):
    queryset = Employee.objects.all().order_by("full_name")
    serializer_class = EmployeeSerializer
    permission_classes = [IsAuthenticated, IsAdminOrClerk]
    filterset_fields = ["work_area", "is_insured"]

    def get_permissions(self):
        if self.action == "destroy":
            return [IsAuthenticated(), CanDeleteEmployees()]
        return super().get_permissions()

    def perform_create(self, serializer):
        serializer.instance = EmployeeService.create_employee(self.request.user, serializer.validated_data)

    def perform_update(self, serializer):
        serializer.instance = EmployeeService.update_employee(
            self.request.user, serializer.instance, serializer.validated_data
        )

    def destroy(self, request, *args, **kwargs):
        EmployeeService.delete_employee(request.user, self.get_object())
        return Response(status=status.HTTP_204_NO_CONTENT)
