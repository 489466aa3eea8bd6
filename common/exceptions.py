"""Error taxonomy shared by services and the API layer.

Services raise the `ServiceError` subclasses below. The DRF exception handler
`api_exception_handler` renders those, DRF's own exceptions and anything
unexpected into a single response shape::

    {"kind": "failed_precondition", "detail": "cart is empty"}

Validation failures also carry the per-field messages under ``errors``.
Unexpected exceptions are logged with their traceback and answered with a
generic ``internal`` error; storage details never reach the client.
"""

import logging

from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.http import Http404
from rest_framework import exceptions as drf_exceptions
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler, set_rollback

logger = logging.getLogger("storefront.api")


class ServiceError(Exception):
    """Base class for errors raised by domain services."""

    kind = "internal"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "internal error"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class InvalidArgument(ServiceError):
    kind = "invalid_argument"
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "invalid argument"


class NotFound(ServiceError):
    kind = "not_found"
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "not found"


class FailedPrecondition(ServiceError):
    kind = "failed_precondition"
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "failed precondition"


class Conflict(FailedPrecondition):
    """Precondition failure caused by existing state (duplicates, references)."""

    status_code = status.HTTP_409_CONFLICT
    default_detail = "conflict"


class Internal(ServiceError):
    """Storage or transport failure; the message is always generic."""


# First match wins; anything unlisted is reported as "internal".
DRF_KINDS = (
    (drf_exceptions.ValidationError, "invalid_argument"),
    (drf_exceptions.ParseError, "invalid_argument"),
    (drf_exceptions.UnsupportedMediaType, "invalid_argument"),
    (drf_exceptions.NotAuthenticated, "unauthenticated"),
    (drf_exceptions.AuthenticationFailed, "unauthenticated"),
    (drf_exceptions.PermissionDenied, "permission_denied"),
    (drf_exceptions.NotFound, "not_found"),
    (drf_exceptions.MethodNotAllowed, "unimplemented"),
    (drf_exceptions.NotAcceptable, "invalid_argument"),
    (drf_exceptions.Throttled, "resource_exhausted"),
)


def kind_for(exc: Exception) -> str:
    """Return the stable error kind for a DRF or service exception."""
    if isinstance(exc, ServiceError):
        return exc.kind
    for exc_class, kind in DRF_KINDS:
        if isinstance(exc, exc_class):
            return kind
    return "internal"


def first_message(detail) -> str:
    """Flatten DRF error detail (dict/list/str) into one readable message."""
    if isinstance(detail, dict):
        for key, value in detail.items():
            message = first_message(value)
            if message:
                if key in ("non_field_errors", "detail"):
                    return message
                return f"{key}: {message}"
        return ""
    if isinstance(detail, (list, tuple)):
        for value in detail:
            message = first_message(value)
            if message:
                return message
        return ""
    return str(detail) if detail is not None else ""


def api_exception_handler(exc, context):
    """DRF `EXCEPTION_HANDLER` producing `{"kind", "detail"[, "errors"]}` bodies."""

    view = context.get("view")

    if isinstance(exc, ServiceError):
        set_rollback()
        if isinstance(exc, Internal):
            detail = getattr(view, "failure_message", None) or exc.detail
        else:
            detail = exc.detail
        return Response({"kind": exc.kind, "detail": detail}, status=exc.status_code)

    if isinstance(exc, Http404):
        exc = drf_exceptions.NotFound()
    elif isinstance(exc, DjangoPermissionDenied):
        exc = drf_exceptions.PermissionDenied()

    response = exception_handler(exc, context)
    if response is None:
        set_rollback()
        logger.exception(
            "api.unhandled_error",
            extra={"event": "api.unhandled_error", "view": type(view).__name__ if view else None},
        )
        message = getattr(view, "failure_message", None) or "internal error"
        return Response({"kind": "internal", "detail": message}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    payload = {"kind": kind_for(exc), "detail": first_message(response.data)}
    if isinstance(exc, drf_exceptions.ValidationError):
        payload["errors"] = response.data if isinstance(response.data, dict) else {"non_field_errors": response.data}
    response.data = payload
    return response
