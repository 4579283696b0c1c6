from datetime import datetime, timedelta, timezone

import pytest

from attio_crm.core.error_transforms import decode_error, parse_retry_after
from attio_crm.core.exceptions import (
    AttioAPIError,
    ConflictError,
    FilterError,
    ForbiddenError,
    ImmutableValueError,
    MissingValueError,
    MultipleMatchResultsError,
    NotFoundError,
    RateLimitError,
    SystemEditUnauthorizedError,
    UnauthorizedError,
    UnexpectedResponseError,
    UniquenessConflictError,
    ValidationError,
)

from conftest import attio_error_body


@pytest.mark.parametrize("status, code, expected", [
    (404, "not_found", NotFoundError),
    (400, "missing_value", MissingValueError),
    (400, "value_not_found", MissingValueError),
    (400, "immutable_value", ImmutableValueError),
    (400, "filter_error", FilterError),
    (400, "multiple_match_results", MultipleMatchResultsError),
    (400, "system_edit_unauthorized", SystemEditUnauthorizedError),
    (400, "uniqueness_conflict", UniquenessConflictError),
    (409, "slug_conflict", ConflictError),
    (401, "unauthorized", UnauthorizedError),
    (403, "billing_error", ForbiddenError),
])
def test_known_error_kinds(status, code, expected):
    error = decode_error(status, attio_error_body(status, code, "Something went wrong"))
    assert type(error) is expected
    assert isinstance(error, AttioAPIError)
    assert error.status_code == status
    assert error.code == code
    assert error.message == "Something went wrong"


def test_validation_error_keeps_field_paths():
    body = attio_error_body(
        400,
        "validation_type",
        "Body payload validation error.",
        validation_errors=[{"code": "invalid_type", "path": ["data", "values", "name"], "message": "Expected string"}],
    )
    error = decode_error(400, body)
    assert isinstance(error, ValidationError)
    assert error.errors == [{"code": "invalid_type", "path": ["data", "values", "name"], "message": "Expected string"}]


def test_rate_limit_error_carries_retry_after():
    body = attio_error_body(429, "rate_limit_exceeded", "Rate limit exceeded, please try again later")
    error = decode_error(429, body, {"retry-after": "Wed, 21 Oct 2015 07:28:00 GMT"})
    assert isinstance(error, RateLimitError)
    assert error.retry_after == datetime(2015, 10, 21, 7, 28, tzinfo=timezone.utc)


def test_rate_limit_without_header():
    error = decode_error(429, attio_error_body(429, "rate_limit_exceeded"))
    assert isinstance(error, RateLimitError)
    assert error.retry_after is None


@pytest.mark.parametrize("status, body", [
    (400, attio_error_body(400, "made_up_code")),
    (500, attio_error_body(500, "internal_error")),
    (500, "<html>Bad Gateway</html>"),
    (502, None),
    (404, {"error": "not found"}),
    (500, attio_error_body(404, "not_found")),
])
def test_unrecognised_bodies_are_unexpected(status, body):
    error = decode_error(status, body)
    assert isinstance(error, UnexpectedResponseError)
    assert error.status_code == status
    assert error.body == body


def test_parse_retry_after_seconds():
    now = datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)
    assert parse_retry_after("5", now=now) == now + timedelta(seconds=5)


@pytest.mark.parametrize("value", [None, "", "soon"])
def test_parse_retry_after_invalid(value):
    assert parse_retry_after(value) is None
