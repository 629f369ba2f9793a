from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class UsersConfig(AppConfig):
    name = "payroll_desk.users"
    verbose_name = _("Users")

    def ready(self):
        from payroll_desk.users import signals  # noqa: F401
