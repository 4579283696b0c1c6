"""
Attribute variation builder.

An attribute kind is declared once as an ``AttributeDefinition``: the accepted
input shorthands and the pydantic model of the value Attio returns. From that,
``build_attribute`` derives the variations used when declaring object fields:

    Text                      optional, single value
    Text.Required             exactly one value, must be supplied on create
    Text.ReadOnly             exactly one value, never written
    Domain.Multiple           ordered list of values
    Domain.Multiple.Required  at least one value
    Domain.Multiple.ReadOnly  at least one value, never written

Attio always transports attribute values as lists. Single-valued variations
collapse that list on decode (``[] -> None``, ``[v] -> v``) and expand it again
on encode; a list with more than one value is a validation error, never a
silent truncation.
"""
from functools import cached_property
from typing import Annotated, Any, Callable, Dict, List, Literal, NamedTuple, Optional, Type, Union, get_args, get_origin

from annotated_types import MinLen
from pydantic import BaseModel, BeforeValidator, PlainSerializer, PlainValidator, TypeAdapter, create_model
from pydantic import ValidationError as PydanticValidationError

from attio_crm.core.exceptions import ReadOnlyAttributeError, ResponseDecodeError, SchemaValidationError
from attio_crm.schemas.shared import Actor, AttioDatetime


class _NoInput:
    """Marker for variations that have no input representation."""

    def __repr__(self) -> str:
        return "NO_INPUT"

    def __bool__(self) -> bool:
        return False


NO_INPUT = _NoInput()

# Metadata Attio attaches to every returned attribute value
METADATA_FIELDS = {
    "active_from": (AttioDatetime, ...),
    "active_until": (Optional[AttioDatetime], ...),
    "created_by_actor": (Actor, ...),
}


def _dump(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    return value


def _first_message(exc: ValueError) -> str:
    if isinstance(exc, PydanticValidationError):
        return exc.errors()[0]["msg"]
    return str(exc)


class Shorthand:
    """One accepted input form of an attribute kind.

    ``annotation`` checks the raw value, ``normalize`` turns the validated value
    into the canonical JSON payload Attio accepts.
    """

    def __init__(self, label: str, annotation: Any, normalize: Optional[Callable[[Any], Any]] = None):
        self.label = label
        self.adapter = TypeAdapter(annotation)
        self.normalize = normalize or _dump

    def parse(self, raw: Any) -> Any:
        return self.normalize(self.adapter.validate_python(raw))


class ShorthandParser:
    """Tries each shorthand in order; the first one that accepts the value wins."""

    def __init__(self, attribute_type: str, *shorthands: Shorthand):
        self.attribute_type = attribute_type
        self.shorthands = shorthands

    @property
    def trial_order(self) -> List[str]:
        return [shorthand.label for shorthand in self.shorthands]

    def __call__(self, raw: Any) -> Any:
        problems = []
        for shorthand in self.shorthands:
            try:
                return shorthand.parse(raw)
            except ValueError as exc:
                problems.append(f"{shorthand.label}: {_first_message(exc)}")
        raise ValueError(f"{self.attribute_type} input {raw!r} matches no accepted form ({'; '.join(problems)})")


class AttributeDefinition(NamedTuple):
    input: Union[ShorthandParser, _NoInput]
    output: Type[BaseModel]


# ----- list <-> value transforms -----

def _collapse(required: bool) -> Callable[[Any], Any]:
    def collapse(raw: Any) -> Any:
        if not isinstance(raw, (list, tuple)):
            raise ValueError("expected a list of attribute values")
        if len(raw) > 1:
            raise ValueError(f"expected at most one value, received {len(raw)}")
        if not raw:
            if required:
                raise ValueError("expected exactly one value, received none")
            return None
        return raw[0]
    return collapse


def _expand(value: Any) -> List[Any]:
    return [] if value is None else [_dump(value)]


def _as_value_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def single_output(item: Type[BaseModel], required: bool) -> Any:
    if required:
        return Annotated[item, BeforeValidator(_collapse(True)), PlainSerializer(_expand)]
    return Annotated[Optional[item], BeforeValidator(_collapse(False)), PlainSerializer(_expand)]


def multiple_output(item: Type[BaseModel], required: bool) -> Any:
    if required:
        return Annotated[List[item], MinLen(1)]
    return List[item]


def single_input(parser: ShorthandParser, required: bool) -> Any:
    value = Annotated[Any, PlainValidator(parser)]
    if required:
        return Annotated[value, PlainSerializer(_as_value_list)]
    return Annotated[Optional[value], PlainSerializer(_as_value_list)]


def multiple_input(parser: ShorthandParser, required: bool) -> Any:
    values = List[Annotated[Any, PlainValidator(parser)]]
    if required:
        return Annotated[values, MinLen(1)]
    return Annotated[Optional[values], PlainSerializer(_as_value_list)]


def _attribute_type_of(output: Type[BaseModel]) -> str:
    field = output.model_fields.get("attribute_type")
    if field is None or get_origin(field.annotation) is not Literal:
        raise TypeError(f"{output.__name__} must declare attribute_type as a Literal")
    return get_args(field.annotation)[0]


def enrich_output(output: Type[BaseModel]) -> Type[BaseModel]:
    """Extend a value model with the metadata fields every returned value carries."""
    return create_model(output.__name__, __base__=output, __module__=output.__module__, **METADATA_FIELDS)


class AttributeVariation:
    """One cardinality/writability variation of an attribute kind."""

    def __init__(
        self,
        attribute_type: str,
        input_type: Any,
        output_type: Any,
        *,
        multiple: bool = False,
        required: bool = False,
        read_only: bool = False,
        optional_output: bool = False,
        value_model: Optional[Type[BaseModel]] = None,
        parser: Optional[ShorthandParser] = None,
    ):
        self.attribute_type = attribute_type
        self.input_type = input_type
        self.output_type = output_type
        self.multiple = multiple
        self.required = required
        self.read_only = read_only
        self.optional_output = optional_output
        self.value_model = value_model
        self.parser = parser
        self._variants: Dict[str, "AttributeVariation"] = {}

    # ----- family navigation -----

    def _variant(self, name: str) -> "AttributeVariation":
        try:
            return self._variants[name]
        except KeyError:
            raise AttributeError(f"{self!r} has no '{name}' variation") from None

    @property
    def Required(self) -> "AttributeVariation":
        return self._variant("required")

    @property
    def ReadOnly(self) -> "AttributeVariation":
        return self._variant("read_only")

    @property
    def Multiple(self) -> "AttributeVariation":
        return self._variant("multiple")

    @property
    def supports_multiple(self) -> bool:
        return "multiple" in self._variants or self.multiple

    @property
    def writable(self) -> bool:
        return self.input_type is not NO_INPUT

    @property
    def variant(self) -> str:
        parts = []
        if self.multiple:
            parts.append("multiple")
        if self.read_only:
            parts.append("read_only")
        elif self.required:
            parts.append("required")
        return ".".join(parts) or "default"

    def describe(self) -> Dict[str, Any]:
        return {
            "attribute_type": self.attribute_type,
            "variant": self.variant,
            "writable": self.writable,
            "optional_output": self.optional_output,
        }

    def as_optional_output(self) -> "AttributeVariation":
        """Copy whose key may be missing from API responses, variations included."""
        optional = AttributeVariation(
            self.attribute_type,
            self.input_type,
            self.output_type,
            multiple=self.multiple,
            required=self.required,
            read_only=self.read_only,
            optional_output=True,
            value_model=self.value_model,
            parser=self.parser,
        )
        optional._variants = {name: variant.as_optional_output() for name, variant in self._variants.items()}
        return optional

    def __repr__(self) -> str:
        suffix = "" if self.variant == "default" else f".{self.variant}"
        return f"<AttributeVariation {self.attribute_type}{suffix}>"

    # ----- codecs -----

    @cached_property
    def _input_adapter(self) -> TypeAdapter:
        return TypeAdapter(self.input_type)

    @cached_property
    def _output_adapter(self) -> TypeAdapter:
        return TypeAdapter(self.output_type)

    def parse_input(self, value: Any) -> Any:
        """Normalize caller input (any accepted shorthand) to its canonical payload."""
        if not self.writable:
            raise ReadOnlyAttributeError(self.attribute_type)
        try:
            return self._input_adapter.validate_python(value)
        except PydanticValidationError as e:
            raise SchemaValidationError.from_pydantic(e, f"Invalid {self.attribute_type} input") from e

    def encode_input(self, value: Any) -> List[Any]:
        """Caller input -> the list of values sent to Attio."""
        canonical = self.parse_input(value)
        return self._input_adapter.dump_python(canonical, mode="json")

    def decode_output(self, raw: Any) -> Any:
        try:
            return self._output_adapter.validate_python(raw)
        except PydanticValidationError as e:
            raise ResponseDecodeError.from_pydantic(e, f"Invalid {self.attribute_type} value") from e

    def encode_output(self, value: Any) -> List[Any]:
        encoded = self._output_adapter.dump_python(value, mode="json")
        return encoded if isinstance(encoded, list) else [encoded]


def build_attribute(base: AttributeDefinition, multiple: bool = False) -> AttributeVariation:
    """Derive the variation family of an attribute kind.

    Returns the default (optional, single) variation; ``.Required`` and
    ``.ReadOnly`` hang off it, and with ``multiple=True`` also ``.Multiple``,
    ``.Multiple.Required`` and ``.Multiple.ReadOnly``.
    """
    attribute_type = _attribute_type_of(base.output)
    item = enrich_output(base.output)
    parser = base.input if isinstance(base.input, ShorthandParser) else None

    def variation(input_type: Any, output_type: Any, **flags) -> AttributeVariation:
        return AttributeVariation(attribute_type, input_type, output_type, value_model=item, parser=parser, **flags)

    def single(required: bool) -> Any:
        return NO_INPUT if parser is None else single_input(parser, required)

    def many(required: bool) -> Any:
        return NO_INPUT if parser is None else multiple_input(parser, required)

    default = variation(single(False), single_output(item, False))
    default._variants["required"] = variation(single(True), single_output(item, True), required=True)
    default._variants["read_only"] = variation(NO_INPUT, single_output(item, True), required=True, read_only=True)

    if multiple:
        family = variation(many(False), multiple_output(item, False), multiple=True)
        family._variants["required"] = variation(many(True), multiple_output(item, True), multiple=True, required=True)
        family._variants["read_only"] = variation(
            NO_INPUT, multiple_output(item, True), multiple=True, required=True, read_only=True
        )
        default._variants["multiple"] = family

    return default
