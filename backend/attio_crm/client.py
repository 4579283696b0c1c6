"""
Attio client: one typed resource per configured object and list.

    async with AttioClient({"objects": {"deals": True}}, api_key="...") as attio:
        person = await attio["people"].create({"email_addresses": ["ada@example.com"]})
        deals = await attio.objects["deals"].list(limit=50)
"""
import logging
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union

from attio_crm.core.config import get_settings
from attio_crm.core.exceptions import ConfigurationError, UnknownResourceError
from attio_crm.schemas.registry import ObjectsConfig, ResolvedSchemaRegistry, process_configuration
from attio_crm.services.base import AttioTransport
from attio_crm.services.entries import ListEntryResource
from attio_crm.services.http_client import AttioHttpClient
from attio_crm.services.records import ObjectResource

logger = logging.getLogger(__name__)


class AttioClient:
    """
    Args:
        config: Objects/lists configuration (see ``process_configuration``)
        api_key: Access token; defaults to ``ATTIO_API_KEY``
        base_url: API root; defaults to ``ATTIO_BASE_URL``
        transport: Ready-made transport, used instead of building an
            ``AttioHttpClient`` (the client then does not close it)

    Raises:
        ConfigurationError: invalid configuration, or no API key and no transport
    """

    def __init__(
        self,
        config: Union[ObjectsConfig, Mapping[str, Any], None] = None,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        transport: Optional[AttioTransport] = None,
    ):
        # Resolve first so a bad configuration fails before any transport exists
        self.registry: ResolvedSchemaRegistry = process_configuration(config)

        self._owns_transport = transport is None
        if transport is None:
            settings = get_settings()
            if api_key is None and settings.ATTIO_API_KEY is not None:
                api_key = settings.ATTIO_API_KEY.get_secret_value()
            if not api_key:
                raise ConfigurationError("An Attio API key is required: pass api_key or set ATTIO_API_KEY")
            transport = AttioHttpClient(
                api_key=api_key,
                base_url=base_url or settings.ATTIO_BASE_URL,
                timeout=settings.ATTIO_TIMEOUT_SECONDS,
                retry_rate_limits=settings.ATTIO_RETRY_RATE_LIMITS,
                max_retries=settings.ATTIO_MAX_RETRIES,
            )
        self.transport = transport

        self.objects: Mapping[str, ObjectResource] = MappingProxyType({
            name: ObjectResource(name, schemas, transport) for name, schemas in self.registry.objects.items()
        })
        self.lists: Mapping[str, ListEntryResource] = MappingProxyType({
            name: ListEntryResource(name, schemas, transport) for name, schemas in self.registry.lists.items()
        })

        logger.info(
            f"[Attio Client] Initialized with objects {sorted(self.objects)} and lists {sorted(self.lists)}"
        )

    def resource(self, name: str) -> ObjectResource:
        try:
            return self.objects[name]
        except KeyError:
            raise UnknownResourceError(name, list(self.objects)) from None

    def list_resource(self, name: str) -> ListEntryResource:
        try:
            return self.lists[name]
        except KeyError:
            raise UnknownResourceError(name, list(self.lists)) from None

    def __getitem__(self, name: str) -> ObjectResource:
        return self.resource(name)

    def __contains__(self, name: object) -> bool:
        return name in self.objects

    async def aclose(self) -> None:
        if self._owns_transport:
            await self.transport.aclose()

    async def __aenter__(self) -> "AttioClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
