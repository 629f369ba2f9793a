from django.apps import AppConfig


class PayrollConfig(AppConfig):
    name = "payroll_desk.payroll"
    verbose_name = "Payroll"
