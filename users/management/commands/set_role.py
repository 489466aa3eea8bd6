"""Grant or revoke the admin role for an existing account.

Usage: python manage.py set_role alice@example.com admin
"""

from common.choices import UserRole
from django.core.management.base import BaseCommand, CommandError
from users.models import User


class Command(BaseCommand):
    help = "Set the role (user or admin) of the account with the given email"

    def add_arguments(self, parser):
        parser.add_argument("email")
        parser.add_argument("role", choices=UserRole.values)

    def handle(self, *args, **options):
        email = options["email"].strip().lower()
        try:
            user = User.objects.get(email=email)
        except User.DoesNotExist:
            raise CommandError(f"No user with email {email}")
        user.role = options["role"]
        user.save(update_fields=["role"])
        self.stdout.write(self.style.SUCCESS(f"{email} now has role '{user.role}'."))
