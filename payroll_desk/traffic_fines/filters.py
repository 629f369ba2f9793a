import django_filters

from payroll_desk.traffic_fines.models import TrafficFine


class TrafficFineFilter(django_filters.FilterSet):
    employee_id = django_filters.UUIDFilter(field_name="employee_id")

    class Meta:
        model = TrafficFine
        fields = ["employee_id"]
