"""
Value types shared by attribute values, records and list entries.
"""
import re
from datetime import date, datetime, timezone
from typing import Annotated, Any, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, BeforeValidator, StringConstraints

ActorType = Literal["api-token", "workspace-member", "system", "app"]

_EXCESS_FRACTION = re.compile(r"(\.\d{6})\d+")


def _truncate_nanoseconds(value: Any) -> Any:
    # Attio timestamps carry nanoseconds; datetime stops at microseconds
    if isinstance(value, str):
        return _EXCESS_FRACTION.sub(r"\1", value, count=1)
    return value


AttioDatetime = Annotated[datetime, BeforeValidator(_truncate_nanoseconds)]

CountryCode = Annotated[str, StringConstraints(pattern=r"^[A-Z]{2}$")]
CurrencyCode = Annotated[str, StringConstraints(pattern=r"^[A-Z]{3}$")]


class Actor(BaseModel):
    type: ActorType
    id: Optional[UUID] = None


class RecordId(BaseModel):
    workspace_id: UUID
    object_id: UUID
    record_id: UUID


class EntryId(BaseModel):
    workspace_id: UUID
    list_id: UUID
    entry_id: UUID


def to_iso_timestamp(value: datetime) -> str:
    """Render a datetime as an ISO-8601 UTC string; naive values are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def to_iso_date(value: date) -> str:
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()
