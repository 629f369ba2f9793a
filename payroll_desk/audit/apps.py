from django.apps import AppConfig


class AuditConfig(AppConfig):
    name = "payroll_desk.audit"
    verbose_name = "Audit log"
