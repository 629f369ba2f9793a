from django.apps import AppConfig


class EmployeesConfig(AppConfig):
    name = "payroll_desk.employees"
    verbose_name = "Employees"
