"""
Typed async client for the Attio CRM REST API.

Objects and lists are declared with attribute kinds from ``attio_crm.schemas``;
the client validates input before sending it and decodes every response into
pydantic models.
"""
from .client import AttioClient
from .core.exceptions import (
    AttioAPIError,
    AttioError,
    ConfigurationError,
    ConflictError,
    FilterError,
    ForbiddenError,
    ImmutableValueError,
    MissingValueError,
    MultipleMatchResultsError,
    NotFoundError,
    RateLimitError,
    ReadOnlyAttributeError,
    ResponseDecodeError,
    SchemaValidationError,
    SystemEditUnauthorizedError,
    UnauthorizedError,
    UnexpectedResponseError,
    UniquenessConflictError,
    UnknownResourceError,
    ValidationError,
)
from .factory import get_attio_client, reset_attio_client
from .schemas import create_schemas, process_configuration

__version__ = "0.1.0"

__all__ = [
    "AttioClient",
    "get_attio_client",
    "reset_attio_client",
    "create_schemas",
    "process_configuration",
    "AttioError",
    "AttioAPIError",
    "ConfigurationError",
    "ConflictError",
    "FilterError",
    "ForbiddenError",
    "ImmutableValueError",
    "MissingValueError",
    "MultipleMatchResultsError",
    "NotFoundError",
    "RateLimitError",
    "ReadOnlyAttributeError",
    "ResponseDecodeError",
    "SchemaValidationError",
    "SystemEditUnauthorizedError",
    "UnauthorizedError",
    "UnexpectedResponseError",
    "UniquenessConflictError",
    "UnknownResourceError",
    "ValidationError",
]
