from django.apps import AppConfig


class TrafficFinesConfig(AppConfig):
    name = "payroll_desk.traffic_fines"
    verbose_name = "Traffic fines"
