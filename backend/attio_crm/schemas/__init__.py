"""
Attribute kinds, object schema assembly and configuration resolution.
"""
from .attribute_builder import NO_INPUT, AttributeDefinition, AttributeVariation, Shorthand, ShorthandParser, build_attribute
from .attributes import (
    CATALOG,
    ActorReference,
    Checkbox,
    CompanyRecordReference,
    Currency,
    Date,
    DealRecordReference,
    Domain,
    EmailAddress,
    Interaction,
    Location,
    NumberAttribute,
    PersonalName,
    PersonRecordReference,
    PhoneNumber,
    Rating,
    RecordReference,
    Select,
    Status,
    Text,
    Timestamp,
    UserRecordReference,
    WorkspaceRecordReference,
    optional_attribute,
    select_with,
)
from .helpers import BASE_ENTRY_FIELDS, BASE_OBJECT_FIELDS, ObjectSchemas, create_schemas
from .records import AttioEntry, AttioRecord, RecordEntry
from .registry import DEFAULT_DISABLED_OBJECTS, ObjectsConfig, ResolvedSchemaRegistry, process_configuration
from .standard_objects import STANDARD_OBJECTS

__all__ = [
    "NO_INPUT",
    "AttributeDefinition",
    "AttributeVariation",
    "Shorthand",
    "ShorthandParser",
    "build_attribute",
    "CATALOG",
    "ActorReference",
    "Checkbox",
    "CompanyRecordReference",
    "Currency",
    "Date",
    "DealRecordReference",
    "Domain",
    "EmailAddress",
    "Interaction",
    "Location",
    "NumberAttribute",
    "PersonalName",
    "PersonRecordReference",
    "PhoneNumber",
    "Rating",
    "RecordReference",
    "Select",
    "Status",
    "Text",
    "Timestamp",
    "UserRecordReference",
    "WorkspaceRecordReference",
    "optional_attribute",
    "select_with",
    "BASE_ENTRY_FIELDS",
    "BASE_OBJECT_FIELDS",
    "ObjectSchemas",
    "create_schemas",
    "AttioEntry",
    "AttioRecord",
    "RecordEntry",
    "DEFAULT_DISABLED_OBJECTS",
    "ObjectsConfig",
    "ResolvedSchemaRegistry",
    "process_configuration",
    "STANDARD_OBJECTS",
]
