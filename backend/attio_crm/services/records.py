"""
Record operations of one configured object.

@see https://docs.attio.com/rest-api/endpoint-reference/records
"""
import logging
from typing import Any, Dict, List, Optional

from attio_crm.schemas.records import AttioRecord, RecordEntry
from attio_crm.services.resources import DEFAULT_PAGE_SIZE, Identifier, SchemaResource, query_body

logger = logging.getLogger(__name__)


class ObjectResource(SchemaResource):
    """
    Typed access to the records of one object.

    Input is validated and encoded before any request is sent; responses are
    decoded into ``AttioRecord`` with the object's output model as ``values``.
    """

    kind = "record"

    @property
    def path(self) -> str:
        return f"/v2/objects/{self.name}/records"

    @property
    def record_model(self):
        return AttioRecord[self.schemas.output]

    async def list(
        self,
        filter: Optional[Dict[str, Any]] = None,
        sorts: Optional[List[Dict[str, Any]]] = None,
        limit: int = DEFAULT_PAGE_SIZE,
        offset: int = 0,
    ) -> List[AttioRecord]:
        """One page of records; page further with ``offset``."""
        body = await self.transport.post(f"{self.path}/query", json=query_body(filter, sorts, limit, offset))
        records = self._decode(self.record_model, body, many=True)
        logger.debug(f"[Attio Client] Listed {len(records)} {self.name} records", extra={"resource": self.name})
        return records

    async def get(self, record_id: Identifier) -> AttioRecord:
        body = await self.transport.get(f"{self.path}/{record_id}")
        return self._decode(self.record_model, body)

    async def create(self, data: Any) -> AttioRecord:
        values = self.schemas.encode_input(data)
        body = await self.transport.post(self.path, json={"data": {"values": values}})
        return self._decode(self.record_model, body)

    async def update(self, record_id: Identifier, data: Any) -> AttioRecord:
        """Overwrite the given attributes; multi-value attributes are replaced."""
        values = self.schemas.encode_input(data, partial=True)
        body = await self.transport.put(f"{self.path}/{record_id}", json={"data": {"values": values}})
        return self._decode(self.record_model, body)

    async def patch(self, record_id: Identifier, data: Any) -> AttioRecord:
        """Update the given attributes; values of multi-value attributes are appended."""
        values = self.schemas.encode_input(data, partial=True)
        body = await self.transport.patch(f"{self.path}/{record_id}", json={"data": {"values": values}})
        return self._decode(self.record_model, body)

    async def delete(self, record_id: Identifier) -> None:
        await self.transport.delete(f"{self.path}/{record_id}")

    async def assert_record(self, matching_attribute: str, data: Any) -> AttioRecord:
        """
        Create or update the record whose ``matching_attribute`` matches ``data``.

        Raises:
            MultipleMatchResultsError: more than one record matches
        """
        values = self.schemas.encode_input(data)
        body = await self.transport.put(
            self.path,
            json={"data": {"values": values}},
            params={"matching_attribute": matching_attribute},
        )
        return self._decode(self.record_model, body)

    async def list_attribute_values(
        self,
        record_id: Identifier,
        attribute: str,
        show_historic: bool = False,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[Any]:
        """Values of one attribute, oldest first; with ``show_historic`` the full timeline."""
        return await self._attribute_values(f"{self.path}/{record_id}", attribute, show_historic, limit, offset)

    async def list_entries(
        self,
        record_id: Identifier,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[RecordEntry]:
        """List entries whose parent is this record."""
        body = await self.transport.get(
            f"{self.path}/{record_id}/entries",
            params={"limit": limit, "offset": offset},
        )
        return self._decode(RecordEntry, body, many=True)
