"""
Envelopes Attio wraps around object records and list entries.

``values`` / ``entry_values`` are typed with the output model of the object or
list, e.g. ``AttioRecord[registry.objects["people"].output]``.
"""
from typing import Generic, Optional, TypeVar
from uuid import UUID

from pydantic import BaseModel

from attio_crm.schemas.shared import AttioDatetime, EntryId, RecordId

ValuesT = TypeVar("ValuesT", bound=BaseModel)


class AttioRecord(BaseModel, Generic[ValuesT]):
    id: RecordId
    created_at: AttioDatetime
    web_url: Optional[str] = None
    values: ValuesT


class AttioEntry(BaseModel, Generic[ValuesT]):
    id: EntryId
    parent_record_id: UUID
    parent_object: str
    created_at: AttioDatetime
    entry_values: ValuesT


class RecordEntry(BaseModel):
    """A list entry whose parent is a given record."""
    list_id: UUID
    list_api_slug: str
    entry_id: UUID
    created_at: AttioDatetime
