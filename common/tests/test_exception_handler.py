import pytest
from common.exceptions import Conflict, FailedPrecondition, Internal, InvalidArgument, NotFound, first_message, kind_for
from rest_framework import exceptions as drf_exceptions


@pytest.mark.parametrize(
    "exc,kind,status_code",
    [
        (InvalidArgument("bad"), "invalid_argument", 400),
        (NotFound("missing"), "not_found", 404),
        (FailedPrecondition("cart is empty"), "failed_precondition", 400),
        (Conflict("email already registered"), "failed_precondition", 409),
        (Internal(), "internal", 500),
    ],
)
def test_service_error_kinds(exc, kind, status_code):
    assert kind_for(exc) == kind
    assert exc.status_code == status_code


@pytest.mark.parametrize(
    "exc,kind",
    [
        (drf_exceptions.ValidationError({"email": ["bad"]}), "invalid_argument"),
        (drf_exceptions.ParseError(), "invalid_argument"),
        (drf_exceptions.NotAuthenticated(), "unauthenticated"),
        (drf_exceptions.AuthenticationFailed(), "unauthenticated"),
        (drf_exceptions.PermissionDenied(), "permission_denied"),
        (drf_exceptions.NotFound(), "not_found"),
        (drf_exceptions.MethodNotAllowed("PUT"), "unimplemented"),
        (drf_exceptions.Throttled(), "resource_exhausted"),
        (RuntimeError("boom"), "internal"),
    ],
)
def test_drf_exception_kinds(exc, kind):
    assert kind_for(exc) == kind


def test_default_detail_used_when_none_given():
    assert Internal().detail == "internal error"
    assert NotFound().detail == "not found"


def test_first_message_flattens_nested_detail():
    assert first_message({"quantity": ["Ensure this value is greater than or equal to 1."]}) == (
        "quantity: Ensure this value is greater than or equal to 1."
    )
    assert first_message({"non_field_errors": ["nope"]}) == "nope"
    assert first_message({"detail": "Not found."}) == "Not found."
    assert first_message(["a", "b"]) == "a"
    assert first_message({}) == ""


@pytest.mark.django_db
def test_malformed_json_is_invalid_argument():
    from rest_framework.test import APIClient
    from users.tests.factories import UserFactory

    client = APIClient()
    client.force_authenticate(user=UserFactory())
    resp = client.post("/api/cart/items", data="{not json", content_type="application/json")
    assert resp.status_code == 400
    assert resp.data["kind"] == "invalid_argument"


@pytest.mark.django_db
def test_method_not_allowed_shape():
    from rest_framework.test import APIClient

    resp = APIClient().put("/api/auth/login", {}, format="json")
    assert resp.status_code == 405
    assert resp.data["kind"] == "unimplemented"
