"""
Object schema assembly.

``create_schemas`` turns a map of attribute slug -> ``AttributeVariation`` into
the pydantic models used to validate what callers send and what Attio returns
for one object (or list). Attribute slugs are kept as field aliases, so slugs
that are not valid Python identifiers still round-trip unchanged.
"""
import keyword
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Type

from pydantic import BaseModel, ConfigDict, Field, create_model
from pydantic import ValidationError as PydanticValidationError

from attio_crm.core.exceptions import ConfigurationError, ResponseDecodeError, SchemaValidationError
from attio_crm.schemas.attribute_builder import AttributeVariation
from attio_crm.schemas.attributes import (
    ActorReference,
    RecordReference,
    Text,
    Timestamp,
    optional_attribute,
)

RECORD_ID_FIELD = "record_id"
ENTRY_ID_FIELD = "entry_id"

BASE_OBJECT_FIELDS = MappingProxyType({
    "created_at": Timestamp.ReadOnly,
    "created_by": ActorReference.ReadOnly,
    RECORD_ID_FIELD: Text.ReadOnly,
})

BASE_ENTRY_FIELDS = MappingProxyType({
    "created_at": Timestamp.ReadOnly,
    "created_by": ActorReference.ReadOnly,
    ENTRY_ID_FIELD: Text.ReadOnly,
    "parent_record": RecordReference.ReadOnly,
})

_BASE_FIELDS = {RECORD_ID_FIELD: BASE_OBJECT_FIELDS, ENTRY_ID_FIELD: BASE_ENTRY_FIELDS}

_NON_IDENTIFIER = re.compile(r"\W")

__all__ = [
    "BASE_ENTRY_FIELDS",
    "BASE_OBJECT_FIELDS",
    "ObjectSchemas",
    "create_schemas",
    "optional_attribute",
]


def _class_name(name: str) -> str:
    return "".join(part.title() for part in re.split(r"[^0-9a-zA-Z]+", name) if part) or "Object"


def _python_name(slug: str) -> str:
    """Field name for an attribute slug; the slug itself stays the alias."""
    name = _NON_IDENTIFIER.sub("_", slug)
    # pydantic reserves the "model_" namespace and private "_" names
    if not name or name[0].isdigit() or name.startswith(("_", "model_")):
        name = f"f_{name}"
    if keyword.iskeyword(name) or hasattr(BaseModel, name):
        name = f"{name}_"
    return name


def _field_names(fields: Mapping[str, AttributeVariation], object_name: str) -> Dict[str, str]:
    names: Dict[str, str] = {}
    seen: Dict[str, str] = {}
    for slug in fields:
        name = _python_name(slug)
        if name in seen:
            raise ConfigurationError(
                f"Attributes '{seen[name]}' and '{slug}' of '{object_name}' map to the same field name",
                details={"object": object_name, "field": name},
            )
        seen[name] = slug
        names[slug] = name
    return names


def _merge_fields(
    fields: Mapping[str, AttributeVariation],
    id_field: str,
    object_name: str,
) -> Dict[str, AttributeVariation]:
    if id_field not in _BASE_FIELDS:
        raise ConfigurationError(f"Unsupported identifier field '{id_field}'", details={"object": object_name})
    if id_field in fields:
        raise ConfigurationError(
            f"'{id_field}' is reserved and cannot be redefined on '{object_name}'",
            details={"object": object_name, "field": id_field},
        )
    for slug, variation in fields.items():
        if not isinstance(variation, AttributeVariation):
            raise ConfigurationError(
                f"Field '{slug}' of '{object_name}' is not an attribute variation: {variation!r}",
                details={"object": object_name, "field": slug},
            )
    # Caller fields override base fields of the same name
    return {**_BASE_FIELDS[id_field], **fields}


@dataclass(frozen=True)
class ObjectSchemas:
    """Input/output models of one object or list, plus the fields they were built from."""
    name: str
    id_field: str
    input: Type[BaseModel]
    partial_input: Type[BaseModel]
    output: Type[BaseModel]
    fields: Mapping[str, AttributeVariation]

    def validate_input(self, data: Any, partial: bool = False) -> BaseModel:
        model = self.partial_input if partial else self.input
        if isinstance(data, model):
            return data
        if isinstance(data, BaseModel):
            data = data.model_dump(by_alias=True, exclude_unset=True)
        try:
            return model.model_validate(data)
        except PydanticValidationError as e:
            raise SchemaValidationError.from_pydantic(e, f"Invalid {self.name} input") from e

    def encode_input(self, data: Any, partial: bool = False) -> Dict[str, Any]:
        """Validate caller data and render the ``values`` payload Attio expects.

        Only attributes the caller set are sent; every value is a list.
        """
        validated = self.validate_input(data, partial=partial)
        return validated.model_dump(mode="json", by_alias=True, exclude_unset=True)

    def decode_output(self, raw: Any) -> BaseModel:
        try:
            return self.output.model_validate(raw)
        except PydanticValidationError as e:
            raise ResponseDecodeError.from_pydantic(e, f"Unexpected {self.name} values in response") from e

    def describe(self) -> Dict[str, Dict[str, Any]]:
        return {slug: variation.describe() for slug, variation in self.fields.items()}


def create_schemas(
    fields: Mapping[str, AttributeVariation],
    id_field: str = RECORD_ID_FIELD,
    name: str = "object",
) -> ObjectSchemas:
    """
    Build the schema pair for an object (``id_field="record_id"``) or a list
    (``id_field="entry_id"``).

    Args:
        fields: Attribute slug -> variation. Overrides base fields of the same
            name, except the identifier field, which cannot be redefined.
        id_field: Identifier attribute of the base fields
        name: Object or list slug, used for model names and error messages

    Raises:
        ConfigurationError: reserved or colliding field names
    """
    all_fields = _merge_fields(fields, id_field, name)
    names = _field_names(all_fields, name)
    class_name = _class_name(name)

    input_fields: Dict[str, Any] = {}
    partial_fields: Dict[str, Any] = {}
    output_fields: Dict[str, Any] = {}

    for slug, variation in all_fields.items():
        field_name = names[slug]
        if variation.writable:
            if variation.required:
                input_fields[field_name] = (variation.input_type, Field(alias=slug))
            else:
                input_fields[field_name] = (variation.input_type, Field(default=None, alias=slug))
            partial_fields[field_name] = (variation.input_type, Field(default=None, alias=slug))

        if variation.optional_output:
            output_fields[field_name] = (Optional[variation.output_type], Field(default=None, alias=slug))
        else:
            output_fields[field_name] = (variation.output_type, Field(alias=slug))

    input_config = ConfigDict(extra="forbid", populate_by_name=True)
    return ObjectSchemas(
        name=name,
        id_field=id_field,
        input=create_model(f"{class_name}Input", __config__=input_config, **input_fields),
        partial_input=create_model(f"{class_name}PartialInput", __config__=input_config, **partial_fields),
        output=create_model(
            f"{class_name}Values",
            __config__=ConfigDict(extra="ignore", populate_by_name=True),
            **output_fields,
        ),
        fields=MappingProxyType(dict(all_fields)),
    )
