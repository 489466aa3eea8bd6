"""User model for authentication and authorization.

The custom `User` extends Django's `AbstractUser` with a unique, normalized
email (the login identifier) and a `role` drawn from `UserRole`.
"""

from common.choices import UserRole
from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    """Custom user with unique email and an authorization role.

    Fields:
    - email: the login identifier, unique at the database level (normalized).
    - role: `user` or `admin`; admin endpoints require `admin`.
    """

    email = models.EmailField(unique=True)
    role = models.CharField(max_length=16, choices=UserRole.choices, default=UserRole.USER, db_index=True)

    def save(self, *args, **kwargs):
        """Normalize the email and mirror it into `username` when unset."""
        if self.email:
            self.email = self.email.strip().lower()
        if not self.username and self.email:
            self.username = self.email
        super().save(*args, **kwargs)

    @property
    def is_admin_role(self) -> bool:
        return self.role == UserRole.ADMIN

    def __str__(self) -> str:  # pragma: no cover
        return self.email or self.username
