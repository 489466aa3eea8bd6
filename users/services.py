"""User services: registration and credential checks."""

from common.exceptions import Conflict
from django.db import IntegrityError, transaction

from .models import User


def register_user(*, email: str, password: str) -> User:
    """Create a user with the default role.

    Raises `Conflict` when the (normalized) email is already registered,
    including when a concurrent registration wins the unique constraint.
    """
    email = email.strip().lower()
    if User.objects.filter(email=email).exists():
        raise Conflict("email already registered")
    user = User(username=email, email=email)
    user.set_password(password)
    try:
        with transaction.atomic():
            user.save()
    except IntegrityError:
        raise Conflict("email already registered")
    return user


def authenticate_user(*, email: str, password: str) -> User | None:
    """Return the active user for these credentials, or None."""
    try:
        user = User.objects.get(email=email.strip().lower())
    except User.DoesNotExist:
        # Equalize timing with the found-user path.
        User().set_password(password)
        return None
    if not user.is_active or not user.check_password(password):
        return None
    return user
