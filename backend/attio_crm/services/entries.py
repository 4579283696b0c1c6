"""
Entry operations of one configured list.

@see https://docs.attio.com/rest-api/endpoint-reference/entries
"""
import logging
from typing import Any, Dict, List, Optional

from attio_crm.schemas.records import AttioEntry
from attio_crm.services.resources import DEFAULT_PAGE_SIZE, Identifier, SchemaResource, query_body

logger = logging.getLogger(__name__)


class ListEntryResource(SchemaResource):
    """Typed access to the entries of one list."""

    kind = "entry"

    @property
    def path(self) -> str:
        return f"/v2/lists/{self.name}/entries"

    @property
    def entry_model(self):
        return AttioEntry[self.schemas.output]

    def _parent_body(self, parent_record_id: Identifier, parent_object: str, entry_values: Any) -> Dict[str, Any]:
        return {
            "data": {
                "parent_record_id": str(parent_record_id),
                "parent_object": parent_object,
                "entry_values": self.schemas.encode_input(entry_values),
            }
        }

    async def list(
        self,
        filter: Optional[Dict[str, Any]] = None,
        sorts: Optional[List[Dict[str, Any]]] = None,
        limit: int = DEFAULT_PAGE_SIZE,
        offset: int = 0,
    ) -> List[AttioEntry]:
        body = await self.transport.post(f"{self.path}/query", json=query_body(filter, sorts, limit, offset))
        entries = self._decode(self.entry_model, body, many=True)
        logger.debug(f"[Attio Client] Listed {len(entries)} {self.name} entries", extra={"resource": self.name})
        return entries

    async def get(self, entry_id: Identifier) -> AttioEntry:
        body = await self.transport.get(f"{self.path}/{entry_id}")
        return self._decode(self.entry_model, body)

    async def create(self, parent_record_id: Identifier, parent_object: str, entry_values: Any) -> AttioEntry:
        """Add a record to the list. A record may be added more than once."""
        request = self._parent_body(parent_record_id, parent_object, entry_values)
        body = await self.transport.post(self.path, json=request)
        return self._decode(self.entry_model, body)

    async def assert_by_parent(self, parent_record_id: Identifier, parent_object: str, entry_values: Any) -> AttioEntry:
        """
        Create the entry for the parent record, or update it if one exists.

        Raises:
            MultipleMatchResultsError: the record already has several entries in the list
        """
        request = self._parent_body(parent_record_id, parent_object, entry_values)
        body = await self.transport.put(self.path, json=request)
        return self._decode(self.entry_model, body)

    async def update(self, entry_id: Identifier, entry_values: Any) -> AttioEntry:
        """Overwrite the given attributes; multi-value attributes are replaced."""
        values = self.schemas.encode_input(entry_values, partial=True)
        body = await self.transport.put(f"{self.path}/{entry_id}", json={"data": {"entry_values": values}})
        return self._decode(self.entry_model, body)

    async def patch(self, entry_id: Identifier, entry_values: Any) -> AttioEntry:
        """Update the given attributes; values of multi-value attributes are appended."""
        values = self.schemas.encode_input(entry_values, partial=True)
        body = await self.transport.patch(f"{self.path}/{entry_id}", json={"data": {"entry_values": values}})
        return self._decode(self.entry_model, body)

    async def delete(self, entry_id: Identifier) -> None:
        await self.transport.delete(f"{self.path}/{entry_id}")

    async def list_attribute_values(
        self,
        entry_id: Identifier,
        attribute: str,
        show_historic: bool = False,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[Any]:
        return await self._attribute_values(f"{self.path}/{entry_id}", attribute, show_historic, limit, offset)
