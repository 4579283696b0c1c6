"""
Shared plumbing of the object and list resources: envelope decoding and the
attribute value history endpoint.
"""
import logging
from functools import lru_cache
from typing import Any, Dict, List, Optional, Type, Union
from uuid import UUID

from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from attio_crm.core.exceptions import ResponseDecodeError
from attio_crm.schemas.helpers import ObjectSchemas
from attio_crm.services.base import AttioTransport

logger = logging.getLogger(__name__)

Identifier = Union[str, UUID]

DEFAULT_PAGE_SIZE = 500


@lru_cache(maxsize=None)
def _adapter(target: Any) -> TypeAdapter:
    return TypeAdapter(target)


def query_body(
    filter: Optional[Dict[str, Any]] = None,
    sorts: Optional[List[Dict[str, Any]]] = None,
    limit: int = DEFAULT_PAGE_SIZE,
    offset: int = 0,
) -> Dict[str, Any]:
    body: Dict[str, Any] = {"limit": limit, "offset": offset}
    if filter is not None:
        body["filter"] = filter
    if sorts is not None:
        body["sorts"] = sorts
    return body


class SchemaResource:
    """Base of ``ObjectResource`` and ``ListEntryResource``."""

    kind = "resource"

    def __init__(self, name: str, schemas: ObjectSchemas, transport: AttioTransport):
        self.name = name
        self.schemas = schemas
        self.transport = transport

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"

    def _decode(self, model: Type[BaseModel], body: Any, many: bool = False) -> Any:
        data = body.get("data") if isinstance(body, dict) else None
        target = List[model] if many else model
        try:
            return _adapter(target).validate_python(data)
        except PydanticValidationError as e:
            raise ResponseDecodeError.from_pydantic(e, f"Unexpected {self.kind} payload for '{self.name}'") from e

    def _decode_attribute_values(self, attribute: str, body: Any) -> List[Any]:
        """Decode a value history with the attribute's value model when it is configured."""
        data = body.get("data") if isinstance(body, dict) else None
        variation = self.schemas.fields.get(attribute)
        if variation is None or variation.value_model is None:
            logger.debug(f"[Attio Client] '{attribute}' is not configured on '{self.name}', returning raw values")
            return list(data or [])
        try:
            return _adapter(List[variation.value_model]).validate_python(data)
        except PydanticValidationError as e:
            raise ResponseDecodeError.from_pydantic(e, f"Unexpected '{attribute}' values for '{self.name}'") from e

    async def _attribute_values(
        self,
        path: str,
        attribute: str,
        show_historic: bool = False,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[Any]:
        params = {"show_historic": show_historic, "limit": limit, "offset": offset}
        body = await self.transport.get(f"{path}/attributes/{attribute}/values", params=params)
        return self._decode_attribute_values(attribute, body)
