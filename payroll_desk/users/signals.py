import logging

from django.db.models.signals import post_save
from django.dispatch import receiver
from rolepermissions.roles import assign_role, clear_roles

from payroll_desk.users.models import User

logger = logging.getLogger(__name__)

ROLE_NAMES = {
    User.ADMIN: 'admin',
    User.USER: 'clerk',
}


@receiver(post_save, sender=User)
def sync_user_role(sender, instance, created, **kwargs):
    """Mirror ``User.role`` into django-role-permissions."""
    clear_roles(instance)
    assign_role(instance, ROLE_NAMES.get(instance.role, 'clerk'))
    if created:
        logger.info("User %s created with role %s", instance.username, instance.role)
