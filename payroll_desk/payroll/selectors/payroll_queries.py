from datetime import date

from django.db.models import Q

from payroll_desk.employees.models import Employee
from payroll_desk.payroll.models import OvertimeEntry, PayrollEntry


def get_active_employees(month, year):
    """Employees with no end date, or leaving in or after the given period."""
    return Employee.objects.filter(
        Q(end_date__isnull=True) | Q(end_date__gte=date(year, month, 1))
    )


def get_period_entries(month, year, employee_ids=None):
    qs = PayrollEntry.objects.select_related("employee").filter(month=month, year=year)
    if employee_ids is not None:
        qs = qs.filter(employee_id__in=employee_ids)
    return qs.order_by("sort_order", "employee__full_name")


def get_overtime_entries(month, year, employee_id=None):
    qs = OvertimeEntry.objects.select_related("employee").filter(month=month, year=year)
    if employee_id:
        qs = qs.filter(employee_id=employee_id)
    return qs.order_by("-entry_date", "-created_at")
