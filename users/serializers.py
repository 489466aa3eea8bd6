"""Serializers for registration, login, and the current user profile.

- UserMeSerializer: read-only profile data for the authenticated user.
- RegistrationSerializer: validates email format and runs Django's password
  validators; uniqueness is enforced by `users.services.register_user`.
- LoginSerializer: email + password credentials.
"""

from django.contrib.auth.password_validation import validate_password as run_password_validators
from rest_framework import serializers

from .models import User


class UserMeSerializer(serializers.ModelSerializer):
    """Serializer returning basic profile fields for the current user."""

    created_at = serializers.DateTimeField(source="date_joined", read_only=True)

    class Meta:
        model = User
        fields = ["id", "email", "role", "created_at"]
        read_only_fields = fields


class RegistrationSerializer(serializers.Serializer):
    """Action serializer to register a new user.

    A caller cannot choose a role here; roles are granted by administrators.
    """

    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)

    def validate_email(self, value: str) -> str:
        return value.strip().lower()

    def validate_password(self, value: str) -> str:
        """Run Django's password validators against the provided password."""
        user = User(username=self.initial_data.get("email", ""), email=self.initial_data.get("email", ""))
        run_password_validators(value, user=user)
        return value


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)


class AuthResponseSerializer(serializers.Serializer):
    """Response body for register and login: the user plus an access token."""

    user = UserMeSerializer()
    token = serializers.CharField()
