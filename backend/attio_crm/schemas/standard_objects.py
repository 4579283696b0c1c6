"""
Attributes of Attio's standard objects.

Companies and people exist in every workspace. Deals, users and workspaces
exist in every workspace too but are disabled until an admin activates them.

@see https://docs.attio.com/docs/standard-objects
"""
from types import MappingProxyType

from attio_crm.schemas.attributes import (
    ActorReference,
    CompanyRecordReference,
    Currency,
    DealRecordReference,
    Domain,
    EmailAddress,
    Location,
    PersonalName,
    PersonRecordReference,
    PhoneNumber,
    Select,
    Status,
    Text,
    UserRecordReference,
    WorkspaceRecordReference,
    optional_attribute,
)

# Enriched by Attio; API writes to enriched values are ignored
companies = MappingProxyType({
    "domains": Domain.Multiple,
    "name": Text,
    "description": Text,
    "team": PersonRecordReference.Multiple,
    "categories": Select.Multiple,
    "primary_location": Location,
    "angellist": Text,
    "facebook": Text,
    "instagram": Text,
    "linkedin": Text,
    "twitter": Text,
    # Only present once the related object is activated
    "associated_deals": optional_attribute(DealRecordReference.Multiple),
    "associated_workspaces": optional_attribute(WorkspaceRecordReference.Multiple),
})

people = MappingProxyType({
    "email_addresses": EmailAddress.Multiple,
    "name": PersonalName,
    "company": CompanyRecordReference,
    "description": Text,
    "job_title": Text,
    "phone_numbers": PhoneNumber.Multiple,
    "primary_location": Location,
    "angellist": Text,
    "facebook": Text,
    "instagram": Text,
    "linkedin": Text,
    "twitter": Text,
    "associated_deals": optional_attribute(DealRecordReference.Multiple),
    "associated_users": optional_attribute(UserRecordReference.Multiple),
})

deals = MappingProxyType({
    "name": Text.Required,
    "stage": Status.Required,
    "owner": ActorReference.Required,
    "value": Currency,
    "associated_people": PersonRecordReference.Multiple,
    "associated_company": CompanyRecordReference,
})

users = MappingProxyType({
    "person": PersonRecordReference.Required,
    "primary_email_address": EmailAddress.Required,
    "user_id": Text.Required,
    "workspace": WorkspaceRecordReference.Multiple,
})

workspaces = MappingProxyType({
    "workspace_id": Text.Required,
    "name": Text,
    "users": UserRecordReference.Multiple,
    "company": CompanyRecordReference,
    "avatar_url": Text,
})

STANDARD_OBJECTS = MappingProxyType({
    "companies": companies,
    "people": people,
    "deals": deals,
    "users": users,
    "workspaces": workspaces,
})
