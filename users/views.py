"""Users app API views.

Endpoints:
- register: creates a user with the default role and returns an access token.
- login: exchanges email + password for an access token.
- me: returns the current authenticated user's profile.
"""

from common.exceptions import ServiceError
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.exceptions import AuthenticationFailed, ValidationError
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .logging import log_auth_event
from .serializers import AuthResponseSerializer, LoginSerializer, RegistrationSerializer, UserMeSerializer
from .services import authenticate_user, register_user
from .tokens import issue_access_token


def _auth_payload(user) -> dict:
    return {"user": UserMeSerializer(user).data, "token": issue_access_token(user)}


class RegisterView(APIView):
    """Register a new user and issue an access token."""

    permission_classes = [AllowAny]
    throttle_scope = "register"
    failure_message = "failed to register"

    @extend_schema(
        operation_id="auth_register",
        summary="Register a new user",
        description=(
            "Creates a user with role `user` and returns the profile plus a bearer token.\n\n"
            "Errors: 400 on invalid email or weak password, 409 if the email is already registered."
        ),
        tags=["Auth Endpoints"],
        request=RegistrationSerializer,
        responses={
            201: AuthResponseSerializer,
            400: OpenApiResponse(description="Invalid input"),
            409: OpenApiResponse(description="Email already registered"),
        },
    )
    def post(self, request):
        serializer = RegistrationSerializer(data=request.data)
        if not serializer.is_valid():
            log_auth_event("register", request, status="invalid")
            raise ValidationError(serializer.errors)
        try:
            user = register_user(**serializer.validated_data)
        except ServiceError:
            log_auth_event("register", request, status="duplicate_email")
            raise
        log_auth_event("register", request, user=user, status="success")
        return Response(_auth_payload(user), status=status.HTTP_201_CREATED)


class LoginView(APIView):
    """Check credentials and issue an access token."""

    permission_classes = [AllowAny]
    throttle_scope = "signin"
    failure_message = "failed to login"

    @extend_schema(
        operation_id="auth_login",
        summary="Sign in with email and password",
        tags=["Auth Endpoints"],
        request=LoginSerializer,
        responses={
            200: AuthResponseSerializer,
            400: OpenApiResponse(description="Invalid input"),
            401: OpenApiResponse(description="Invalid credentials"),
        },
    )
    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = authenticate_user(**serializer.validated_data)
        if user is None:
            log_auth_event("signin", request, status="failed")
            raise AuthenticationFailed("invalid credentials")
        log_auth_event("signin", request, user=user, status="success")
        return Response(_auth_payload(user))


class CurrentUserView(APIView):
    """Return the authenticated user's profile fields."""

    permission_classes = [IsAuthenticated]
    throttle_scope = "profile"
    failure_message = "failed to fetch user"

    @extend_schema(
        operation_id="users_current_user",
        summary="Get current user profile",
        description=(
            "Returns the current authenticated user's profile.\n\n"
            "Auth: Requires JWT (Authorization: Bearer <token>).\n\n"
            "Response fields: id, email, role, created_at.\n\n"
            "Errors: 401 if authentication credentials are missing or invalid."
        ),
        tags=["User Endpoints"],
        responses={
            200: OpenApiResponse(description="User profile", response=UserMeSerializer),
            401: OpenApiResponse(description="Unauthorized"),
        },
    )
    def get(self, request):
        log_auth_event("profile", request, user=request.user)
        return Response(UserMeSerializer(request.user).data)
