"""
Process-wide Attio client built from settings.

The first call fixes the configuration; later calls return the same client
until ``reset_attio_client`` is called.
"""
import logging
from typing import Any, Mapping, Optional

from attio_crm.client import AttioClient

logger = logging.getLogger(__name__)

_singleton: Optional[AttioClient] = None


def get_attio_client(config: Optional[Mapping[str, Any]] = None) -> AttioClient:
    """Return the client singleton, creating it from ``ATTIO_*`` settings on first use."""
    global _singleton
    if _singleton is not None:
        if config is not None:
            logger.warning("[Attio Factory] Client already initialized, ignoring new configuration")
        return _singleton

    _singleton = AttioClient(config)
    logger.info("[Attio Factory] Initialized AttioClient")
    return _singleton


def reset_attio_client() -> None:
    """Clear the singleton (useful for tests). Does not close its transport."""
    global _singleton
    _singleton = None
