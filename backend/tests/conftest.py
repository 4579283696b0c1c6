"""
Pytest fixtures for the Attio client tests: a recording stub transport and
builders for attribute values as Attio returns them.
"""

from typing import Any, Dict, List, Optional, Tuple

import pytest

from attio_crm.services.base import AttioTransport

WORKSPACE_ID = "a8f3c3f4-1d9e-4b55-9c1e-0d6c0a7f2b11"
OBJECT_ID = "5e2b7c90-8d1a-4c3f-a7f6-3b2d9e4c1a00"
LIST_ID = "9c4d2e1f-7b6a-4d3c-8e2f-1a0b9c8d7e6f"
RECORD_ID = "0f3d5a7b-2c4e-4f6a-8b1c-9d0e2f4a6b8c"
OTHER_RECORD_ID = "1a2b3c4d-5e6f-4a7b-8c9d-0e1f2a3b4c5d"
ENTRY_ID = "7e6d5c4b-3a29-4180-9f8e-7d6c5b4a3928"
ACTOR_ID = "2b4d6f8a-0c2e-4a6c-8e0a-2c4e6a8c0e2a"
CREATED_AT = "2024-01-15T10:30:00Z"


class StubTransport(AttioTransport):
    """Transport that records every call and answers from a canned table.

    ``responses`` maps ``(method, path)`` to a JSON body, or to an exception
    instance that is raised instead.
    """

    def __init__(self, responses: Optional[Dict[Tuple[str, str], Any]] = None):
        self.responses = dict(responses or {})
        self.calls: List[Tuple[str, str, Any, Any]] = []
        self.closed = False

    async def request(self, method, path, json=None, params=None):
        self.calls.append((method, path, json, params))
        response = self.responses.get((method, path))
        if isinstance(response, Exception):
            raise response
        return response

    async def aclose(self):
        self.closed = True


@pytest.fixture
def stub_transport():
    return StubTransport()


# ----- attribute values -----

def value_metadata(active_from: str = CREATED_AT) -> Dict[str, Any]:
    return {
        "active_from": active_from,
        "active_until": None,
        "created_by_actor": {"type": "api-token", "id": ACTOR_ID},
    }


def text_value(value: str) -> Dict[str, Any]:
    return {"attribute_type": "text", "value": value, **value_metadata()}


def timestamp_value(value: str = CREATED_AT) -> Dict[str, Any]:
    return {"attribute_type": "timestamp", "value": value, **value_metadata()}


def actor_value(actor_type: str = "workspace-member", actor_id: Optional[str] = ACTOR_ID) -> Dict[str, Any]:
    return {
        "attribute_type": "actor-reference",
        "referenced_actor_type": actor_type,
        "referenced_actor_id": actor_id,
        **value_metadata(),
    }


def domain_value(domain: str) -> Dict[str, Any]:
    return {"attribute_type": "domain", "domain": domain, "root_domain": domain, **value_metadata()}


def email_value(address: str) -> Dict[str, Any]:
    local, _, domain = address.partition("@")
    return {
        "attribute_type": "email-address",
        "email_address": address,
        "original_email_address": address,
        "email_domain": domain,
        "email_root_domain": domain,
        "email_local_specifier": local,
        **value_metadata(),
    }


def name_value(first: str, last: str) -> Dict[str, Any]:
    return {
        "attribute_type": "personal-name",
        "first_name": first,
        "last_name": last,
        "full_name": f"{first} {last}",
        **value_metadata(),
    }


def currency_value(amount: Any, code: str = "USD") -> Dict[str, Any]:
    return {"attribute_type": "currency", "currency_value": amount, "currency_code": code, **value_metadata()}


def record_reference_value(target_object: str, record_id: str = OTHER_RECORD_ID) -> Dict[str, Any]:
    return {
        "attribute_type": "record-reference",
        "target_object": target_object,
        "target_record_id": record_id,
        **value_metadata(),
    }


def status_value(title: str) -> Dict[str, Any]:
    return {
        "attribute_type": "status",
        "status": {
            "id": {
                "workspace_id": WORKSPACE_ID,
                "object_id": OBJECT_ID,
                "attribute_id": ACTOR_ID,
                "status_id": OTHER_RECORD_ID,
            },
            "title": title,
            "is_archived": False,
            "celebration_enabled": False,
            "target_time_in_status": None,
        },
        **value_metadata(),
    }


# ----- record and entry payloads -----

def make_values(schemas, **values) -> Dict[str, Any]:
    """Values block with every configured attribute present, as Attio sends it."""
    payload: Dict[str, Any] = {
        slug: [] for slug, variation in schemas.fields.items() if not variation.optional_output
    }
    payload["created_at"] = [timestamp_value()]
    payload["created_by"] = [actor_value()]
    if schemas.id_field == "entry_id":
        payload["entry_id"] = [text_value(ENTRY_ID)]
        payload["parent_record"] = [record_reference_value("companies", RECORD_ID)]
    else:
        payload["record_id"] = [text_value(RECORD_ID)]
    payload.update(values)
    return payload


def record_payload(schemas, record_id: str = RECORD_ID, **values) -> Dict[str, Any]:
    return {
        "id": {"workspace_id": WORKSPACE_ID, "object_id": OBJECT_ID, "record_id": record_id},
        "created_at": CREATED_AT,
        "web_url": f"https://app.attio.com/acme/{schemas.name}/{record_id}",
        "values": make_values(schemas, **values),
    }


def entry_payload(schemas, **values) -> Dict[str, Any]:
    return {
        "id": {"workspace_id": WORKSPACE_ID, "list_id": LIST_ID, "entry_id": ENTRY_ID},
        "parent_record_id": RECORD_ID,
        "parent_object": "companies",
        "created_at": CREATED_AT,
        "entry_values": make_values(schemas, **values),
    }


def attio_error_body(status_code: int, code: str, message: str = "Request failed", **extra) -> Dict[str, Any]:
    return {
        "status_code": status_code,
        "type": "invalid_request_error",
        "code": code,
        "message": message,
        **extra,
    }
