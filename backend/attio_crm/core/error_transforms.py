"""
Maps Attio error bodies to typed exceptions.

Attio answers every failed request with a JSON body of the form
``{"status_code", "type", "code", "message"}`` (plus ``validation_errors`` for
400 ``validation_type``). The pair ``(status_code, code)`` selects the error kind.
"""

import logging
from datetime import datetime, timedelta, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type, Union

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

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

logger = logging.getLogger(__name__)


class ValidationIssue(BaseModel):
    code: str
    path: List[Union[str, int]] = Field(default_factory=list)
    message: str


class AttioErrorBody(BaseModel):
    status_code: int
    type: str = ""
    code: str
    message: str
    validation_errors: List[ValidationIssue] = Field(default_factory=list)


# (status_code, code) -> error class; code None matches any code for that status
ERROR_KINDS: Dict[Tuple[int, Optional[str]], Type[AttioAPIError]] = {
    (404, "not_found"): NotFoundError,
    (400, "validation_type"): ValidationError,
    (400, "missing_value"): MissingValueError,
    (400, "value_not_found"): MissingValueError,
    (400, "immutable_value"): ImmutableValueError,
    (400, "filter_error"): FilterError,
    (400, "multiple_match_results"): MultipleMatchResultsError,
    (400, "system_edit_unauthorized"): SystemEditUnauthorizedError,
    (400, "uniqueness_conflict"): UniquenessConflictError,
    (409, None): ConflictError,
    (401, "unauthorized"): UnauthorizedError,
    (403, "billing_error"): ForbiddenError,
    (429, None): RateLimitError,
}


def parse_retry_after(value: Optional[str], now: Optional[datetime] = None) -> Optional[datetime]:
    """Parse a Retry-After header given either as an HTTP-date or as delta-seconds."""
    if not value:
        return None
    value = value.strip()
    if value.isdigit():
        return (now or datetime.now(timezone.utc)) + timedelta(seconds=int(value))
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        parsed = None
    if parsed is None:
        logger.warning(f"[Attio Errors] Ignoring unparseable Retry-After header: {value!r}")
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def decode_error(
    status_code: int,
    body: Any,
    headers: Optional[Mapping[str, str]] = None,
) -> AttioAPIError:
    """Build the typed exception for a non-2xx response.

    Bodies that do not parse, or whose ``(status_code, code)`` is unknown, become
    ``UnexpectedResponseError`` instead of being coerced into a generic kind.
    """
    try:
        parsed = AttioErrorBody.model_validate(body)
    except PydanticValidationError:
        return UnexpectedResponseError(status_code, body)

    error_cls = ERROR_KINDS.get((parsed.status_code, parsed.code)) or ERROR_KINDS.get((parsed.status_code, None))
    if error_cls is None or parsed.status_code != status_code:
        return UnexpectedResponseError(status_code, body)

    details = {"type": parsed.type}
    if error_cls is ValidationError:
        return ValidationError(
            parsed.message,
            errors=[issue.model_dump() for issue in parsed.validation_errors],
            code=parsed.code,
            details=details,
        )
    if error_cls is RateLimitError:
        retry_after = parse_retry_after((headers or {}).get("retry-after"))
        return RateLimitError(parsed.message, retry_after=retry_after, code=parsed.code, details=details)
    return error_cls(parsed.message, code=parsed.code, details=details)
