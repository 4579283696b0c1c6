"""
Exception classes for the Attio client.

Local errors (schema validation, configuration) are raised before any request
is sent. Server errors are decoded from Attio's JSON error bodies by
``attio_crm.core.error_transforms``.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional


class AttioError(Exception):
    """Base exception for all Attio client errors"""
    def __init__(self, message: str, code: str = "ATTIO_ERROR", details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)


# ----- Local errors -----

class SchemaValidationError(AttioError):
    """Raised when a value does not match an attribute or object schema"""
    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "SCHEMA_VALIDATION_ERROR", details)
        self.errors = errors or []

    @classmethod
    def from_pydantic(cls, error, context: str) -> "SchemaValidationError":
        errors = [
            {"loc": tuple(item["loc"]), "msg": item["msg"], "type": item["type"]}
            for item in error.errors()
        ]
        return cls(f"{context}: {error.error_count()} validation error(s)", errors=errors)


class ReadOnlyAttributeError(SchemaValidationError):
    """Raised when a value is encoded for an attribute that cannot be written"""
    def __init__(self, attribute_type: str):
        super().__init__(f"'{attribute_type}' attribute variation is read-only and has no input representation")
        self.attribute_type = attribute_type


class ResponseDecodeError(SchemaValidationError):
    """Raised when an API payload does not match the configured output schema"""


class ConfigurationError(AttioError):
    """Raised when the client objects/lists configuration cannot be resolved"""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "CONFIGURATION_ERROR", details)


class UnknownResourceError(ConfigurationError):
    """Raised when a resource name is not part of the resolved configuration"""
    def __init__(self, resource: str, available: Optional[List[str]] = None):
        super().__init__(f"Unknown resource: {resource}", {"available": sorted(available or [])})
        self.resource = resource


# ----- Server errors -----

class AttioAPIError(AttioError):
    """Base class for errors reported by the Attio API"""
    status_code: int = 0

    def __init__(self, message: str, code: str = "api_error", status_code: Optional[int] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code, details)
        if status_code is not None:
            self.status_code = status_code


class NotFoundError(AttioAPIError):
    status_code = 404


class ValidationError(AttioAPIError):
    """400 ``validation_type``; ``errors`` holds the field-path scoped issues"""
    status_code = 400

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.errors = errors or []


class MissingValueError(AttioAPIError):
    status_code = 400


class ImmutableValueError(AttioAPIError):
    status_code = 400


class FilterError(AttioAPIError):
    status_code = 400


class MultipleMatchResultsError(AttioAPIError):
    status_code = 400


class SystemEditUnauthorizedError(AttioAPIError):
    status_code = 400


class UniquenessConflictError(AttioAPIError):
    status_code = 400


class ConflictError(AttioAPIError):
    status_code = 409


class UnauthorizedError(AttioAPIError):
    status_code = 401


class ForbiddenError(AttioAPIError):
    """403, raised by Attio for billing restrictions"""
    status_code = 403


class RateLimitError(AttioAPIError):
    """429; ``retry_after`` is the instant the server allows the next request"""
    status_code = 429

    def __init__(self, message: str, retry_after: Optional[datetime] = None, **kwargs):
        if retry_after:
            message += f". Retry after {retry_after.isoformat()}"
        super().__init__(message, **kwargs)
        self.retry_after = retry_after


class UnexpectedResponseError(AttioAPIError):
    """A non-2xx response whose body matches none of the known error kinds"""
    def __init__(self, status_code: int, body: Any):
        super().__init__(
            f"Unexpected Attio response with status {status_code}",
            code="unexpected_response",
            status_code=status_code,
            details={"body": body},
        )
        self.body = body
