from django.contrib import admin

from payroll_desk.employees.models import Employee


@admin.register(Employee)
class EmployeeAdmin(admin.ModelAdmin):
    list_display = ("full_name", "work_area", "is_insured", "salary", "working_days", "start_date", "end_date")
    list_filter = ("work_area", "is_insured")
    search_fields = ("full_name",)
