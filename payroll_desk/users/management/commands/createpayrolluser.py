from django.core.management.base import BaseCommand, CommandError

from payroll_desk.users.models import User
from payroll_desk.users.services.user_service import UserExists, UserService


class Command(BaseCommand):
    help = "Create a payroll desk user (clerk by default)"

    def add_arguments(self, parser):
        parser.add_argument("username")
        parser.add_argument("password")
        parser.add_argument(
            "--role",
            choices=[User.ADMIN, User.USER],
            default=User.USER,
        )

    def handle(self, *args, **options):
        try:
            user = UserService.create_user(options["username"], options["password"], options["role"])
        except UserExists:
            raise CommandError(f"User {options['username']} already exists")

        self.stdout.write(self.style.SUCCESS(f"Created {user.username} ({user.role})"))
