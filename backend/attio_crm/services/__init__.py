"""
Transport and resources for the Attio REST API.
"""
from .base import AttioTransport
from .entries import ListEntryResource
from .http_client import AttioHttpClient
from .records import ObjectResource

__all__ = [
    "AttioTransport",
    "AttioHttpClient",
    "ListEntryResource",
    "ObjectResource",
]
