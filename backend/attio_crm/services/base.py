"""
Transport interface used by the record and entry services.

Implementations send already-encoded JSON bodies and return parsed JSON, or
raise one of the ``AttioAPIError`` kinds.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

JSON = Any
Params = Optional[Dict[str, Any]]


class AttioTransport(ABC):
    """Abstract HTTP transport to the Attio REST API."""

    @abstractmethod
    async def request(self, method: str, path: str, json: JSON = None, params: Params = None) -> JSON:
        ...

    async def get(self, path: str, params: Params = None) -> JSON:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, json: JSON = None, params: Params = None) -> JSON:
        return await self.request("POST", path, json=json, params=params)

    async def put(self, path: str, json: JSON = None, params: Params = None) -> JSON:
        return await self.request("PUT", path, json=json, params=params)

    async def patch(self, path: str, json: JSON = None, params: Params = None) -> JSON:
        return await self.request("PATCH", path, json=json, params=params)

    async def delete(self, path: str, params: Params = None) -> JSON:
        return await self.request("DELETE", path, params=params)

    async def aclose(self) -> None:
        """Release network resources; no-op by default."""
        return None
