"""
Catalog of Attio attribute kinds.

Each kind lists the input shorthands it accepts, in the order they are tried
(first match wins), and the model of the value Attio returns. Inputs are
normalized to the structured payload Attio documents for the kind.

@see https://docs.attio.com/docs/attribute-types
"""
import math
from datetime import date, datetime
from decimal import Decimal
from types import MappingProxyType
from typing import Annotated, Any, Dict, List, Literal, Optional, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, InstanceOf, StrictBool, StrictFloat, StrictInt, StrictStr, TypeAdapter, create_model, model_validator

from attio_crm.schemas.attribute_builder import (
    NO_INPUT,
    AttributeDefinition,
    AttributeVariation,
    Shorthand,
    ShorthandParser,
    build_attribute,
)
from attio_crm.schemas.shared import Actor, ActorType, AttioDatetime, CountryCode, CurrencyCode, to_iso_date, to_iso_timestamp

Number = Union[StrictInt, StrictFloat]

# Attio sends coordinates as numeric strings; Decimal keeps their exact digits
Coordinate = Annotated[Decimal, Field(allow_inf_nan=False)]

_DATETIME = TypeAdapter(AttioDatetime)


class _Struct(BaseModel):
    """Structured input shorthand; unknown keys make the shorthand not match."""
    model_config = ConfigDict(extra="forbid")


# ----- normalizers -----

def _iso_date(value: Union[date, str]) -> str:
    if isinstance(value, date):
        return to_iso_date(value)
    return date.fromisoformat(value).isoformat()


def _iso_timestamp(value: Union[datetime, str]) -> str:
    if isinstance(value, datetime):
        return to_iso_timestamp(value)
    return to_iso_timestamp(_DATETIME.validate_python(value))


def _amount(value: Union[int, float, str]) -> float:
    amount = float(value)
    if not math.isfinite(amount):
        raise ValueError(f"{value!r} is not a finite amount")
    return amount


def _rating(value: Union[int, float]) -> Union[int, float]:
    if not 0 <= value <= 5:
        raise ValueError("rating must be between 0 and 5")
    return value


def _coordinate(value: Union[int, float, str, None]) -> Optional[str]:
    if value is None:
        return None
    _amount(value)
    return str(value)


def _split_name(value: str) -> Dict[str, str]:
    # "Last, First" as accepted by Attio
    if "," in value:
        last, first = (part.strip() for part in value.split(",", 1))
    else:
        first, last = value.strip(), ""
    return {"first_name": first, "last_name": last, "full_name": " ".join(p for p in (first, last) if p)}


# ----- Actor reference -----

class _MemberEmail(_Struct):
    workspace_member_email_address: StrictStr


class _MemberId(_Struct):
    referenced_actor_type: Literal["workspace-member"]
    referenced_actor_id: UUID


class ActorReferenceValue(BaseModel):
    attribute_type: Literal["actor-reference"]
    referenced_actor_type: ActorType
    referenced_actor_id: Optional[UUID] = None

    @model_validator(mode="after")
    def _system_actor_has_no_id(self):
        if (self.referenced_actor_type == "system") != (self.referenced_actor_id is None):
            raise ValueError("system actors have no id; every other actor type requires one")
        return self


ActorReference = build_attribute(
    AttributeDefinition(
        # Only workspace members can be written through the API
        input=ShorthandParser(
            "actor-reference",
            Shorthand("workspace member email", StrictStr, lambda s: {"workspace_member_email_address": s}),
            Shorthand("{workspace_member_email_address}", _MemberEmail),
            Shorthand("{referenced_actor_type, referenced_actor_id}", _MemberId),
        ),
        output=ActorReferenceValue,
    ),
    multiple=True,
)


# ----- Checkbox -----

class _CheckboxStruct(_Struct):
    value: StrictBool


class CheckboxValue(BaseModel):
    attribute_type: Literal["checkbox"]
    value: bool


Checkbox = build_attribute(
    AttributeDefinition(
        input=ShorthandParser(
            "checkbox",
            Shorthand("boolean", StrictBool, lambda b: {"value": b}),
            Shorthand('"true" / "false"', Literal["true", "false"], lambda s: {"value": s == "true"}),
            Shorthand("{value}", _CheckboxStruct),
        ),
        output=CheckboxValue,
    )
)


# ----- Currency -----

class _CurrencyStruct(_Struct):
    currency_value: Union[Number, StrictStr]


class CurrencyValue(BaseModel):
    """``currency_code`` is shared by every value of the attribute workspace-wide."""
    attribute_type: Literal["currency"]
    currency_value: float
    currency_code: CurrencyCode


Currency = build_attribute(
    AttributeDefinition(
        input=ShorthandParser(
            "currency",
            Shorthand("number", Number, lambda n: {"currency_value": _amount(n)}),
            Shorthand("numeric string", StrictStr, lambda s: {"currency_value": _amount(s)}),
            Shorthand("{currency_value}", _CurrencyStruct, lambda m: {"currency_value": _amount(m.currency_value)}),
        ),
        output=CurrencyValue,
    )
)


# ----- Date -----

class _DateStruct(_Struct):
    value: Union[InstanceOf[date], StrictStr]


class DateValue(BaseModel):
    attribute_type: Literal["date"]
    value: date


Date = build_attribute(
    AttributeDefinition(
        input=ShorthandParser(
            "date",
            Shorthand("date", InstanceOf[date], lambda d: {"value": _iso_date(d)}),
            Shorthand("ISO date string", StrictStr, lambda s: {"value": _iso_date(s)}),
            Shorthand("{value}", _DateStruct, lambda m: {"value": _iso_date(m.value)}),
        ),
        output=DateValue,
    )
)


# ----- Domain -----

class _DomainStruct(_Struct):
    domain: StrictStr


class DomainValue(BaseModel):
    attribute_type: Literal["domain"]
    domain: str
    root_domain: str


Domain = build_attribute(
    AttributeDefinition(
        input=ShorthandParser(
            "domain",
            Shorthand("string", StrictStr, lambda s: {"domain": s}),
            Shorthand("{domain}", _DomainStruct),
        ),
        output=DomainValue,
    ),
    multiple=True,
)


# ----- Email address -----

class _EmailStruct(_Struct):
    email_address: StrictStr


class EmailAddressValue(BaseModel):
    attribute_type: Literal["email-address"]
    email_address: str
    original_email_address: str
    email_domain: str
    email_root_domain: str
    email_local_specifier: str


EmailAddress = build_attribute(
    AttributeDefinition(
        input=ShorthandParser(
            "email-address",
            Shorthand("string", StrictStr, lambda s: {"email_address": s}),
            Shorthand("{email_address}", _EmailStruct),
        ),
        output=EmailAddressValue,
    ),
    multiple=True,
)


# ----- Interaction -----

class InteractionValue(BaseModel):
    attribute_type: Literal["interaction"]
    interaction_type: Literal["email", "calendar-event", "call", "meeting"]
    interacted_at: AttioDatetime
    owner_actor: Actor


# Interactions are only ever written by Attio itself
Interaction = build_attribute(AttributeDefinition(input=NO_INPUT, output=InteractionValue))


# ----- Location -----

class _LocationStruct(_Struct):
    line_1: Optional[StrictStr] = None
    line_2: Optional[StrictStr] = None
    line_3: Optional[StrictStr] = None
    line_4: Optional[StrictStr] = None
    locality: Optional[StrictStr] = None
    region: Optional[StrictStr] = None
    postcode: Optional[StrictStr] = None
    country_code: Optional[CountryCode] = None
    latitude: Optional[Union[Number, StrictStr]] = None
    longitude: Optional[Union[Number, StrictStr]] = None


def _location(value: _LocationStruct) -> Dict[str, Any]:
    # Location updates are atomic: every key is sent, even when null
    payload = value.model_dump()
    payload["latitude"] = _coordinate(value.latitude)
    payload["longitude"] = _coordinate(value.longitude)
    return payload


class LocationValue(BaseModel):
    attribute_type: Literal["location"]
    line_1: Optional[str] = None
    line_2: Optional[str] = None
    line_3: Optional[str] = None
    line_4: Optional[str] = None
    locality: Optional[str] = None
    region: Optional[str] = None
    postcode: Optional[str] = None
    country_code: Optional[CountryCode] = None
    latitude: Optional[Coordinate] = None
    longitude: Optional[Coordinate] = None


Location = build_attribute(
    AttributeDefinition(
        input=ShorthandParser(
            "location",
            Shorthand("address string", StrictStr, lambda s: _location(_LocationStruct(line_1=s))),
            Shorthand("location struct", _LocationStruct, _location),
        ),
        output=LocationValue,
    )
)


# ----- Number -----

class _NumberStruct(_Struct):
    value: Number


class NumberValue(BaseModel):
    attribute_type: Literal["number"]
    value: Union[int, float]


NumberAttribute = build_attribute(
    AttributeDefinition(
        input=ShorthandParser(
            "number",
            Shorthand("number", Number, lambda n: {"value": n}),
            Shorthand("{value}", _NumberStruct),
        ),
        output=NumberValue,
    )
)


# ----- Personal name -----

class _NameStruct(_Struct):
    first_name: StrictStr
    last_name: StrictStr
    full_name: StrictStr


class PersonalNameValue(BaseModel):
    attribute_type: Literal["personal-name"]
    first_name: str
    last_name: str
    full_name: str


PersonalName = build_attribute(
    AttributeDefinition(
        input=ShorthandParser(
            "personal-name",
            Shorthand('"Last, First" string', StrictStr, _split_name),
            Shorthand("{first_name, last_name, full_name}", _NameStruct),
        ),
        output=PersonalNameValue,
    )
)


# ----- Phone number -----

class _PhoneStruct(_Struct):
    original_phone_number: StrictStr
    country_code: Optional[CountryCode] = None


class PhoneNumberValue(BaseModel):
    attribute_type: Literal["phone-number"]
    original_phone_number: str
    phone_number: str
    country_code: Optional[CountryCode] = None


PhoneNumber = build_attribute(
    AttributeDefinition(
        input=ShorthandParser(
            "phone-number",
            Shorthand("string", StrictStr, lambda s: {"original_phone_number": s, "country_code": None}),
            Shorthand("{original_phone_number, country_code}", _PhoneStruct),
        ),
        output=PhoneNumberValue,
    ),
    multiple=True,
)


# ----- Rating -----

class RatingValue(BaseModel):
    attribute_type: Literal["rating"]
    value: Union[int, float]


Rating = build_attribute(
    AttributeDefinition(
        input=ShorthandParser(
            "rating",
            Shorthand("number 0-5", Number, lambda n: {"value": _rating(n)}),
            Shorthand("{value}", _NumberStruct, lambda m: {"value": _rating(m.value)}),
        ),
        output=RatingValue,
    )
)


# ----- Record references -----

class _RecordTarget(_Struct):
    target_object: StrictStr
    target_record_id: UUID


class RecordReferenceValue(BaseModel):
    attribute_type: Literal["record-reference"]
    target_object: str
    target_record_id: UUID


RecordReference = build_attribute(
    AttributeDefinition(
        input=ShorthandParser(
            "record-reference",
            Shorthand("{target_object, target_record_id}", _RecordTarget),
        ),
        output=RecordReferenceValue,
    ),
    multiple=True,
)


def _typed_record_reference(
    target_object: str,
    label: Optional[str] = None,
    matching_attribute: Optional[str] = None,
    matching_key: str = "value",
) -> AttributeVariation:
    """Record reference restricted to ``target_object``.

    ``matching_attribute`` enables writing a reference by the target's unique
    attribute (e.g. a company domain) instead of its record id.
    """
    suffix = target_object.title()
    target = Literal[target_object]
    by_id = create_model(f"_{suffix}Target", __base__=_Struct, target_object=(target, ...), target_record_id=(UUID, ...))
    shorthands = [
        Shorthand("record id", UUID, lambda u: {"target_object": target_object, "target_record_id": str(u)}),
    ]
    if matching_attribute:
        matcher = create_model(
            f"_{suffix}Match",
            __base__=_Struct,
            target_object=(target, ...),
            **{matching_attribute: (List[Dict[str, StrictStr]], ...)},
        )
        shorthands.append(
            Shorthand(
                label,
                StrictStr,
                lambda s: {"target_object": target_object, matching_attribute: [{matching_key: s}]},
            )
        )
        shorthands.append(Shorthand("{target_object, target_record_id}", by_id, lambda m: m.model_dump(mode="json")))
        shorthands.append(Shorthand(f"{{target_object, {matching_attribute}}}", matcher))
    else:
        shorthands.append(Shorthand("{target_object, target_record_id}", by_id, lambda m: m.model_dump(mode="json")))

    value = create_model(
        f"{suffix}ReferenceValue",
        __module__=__name__,
        attribute_type=(Literal["record-reference"], ...),
        target_object=(target, ...),
        target_record_id=(UUID, ...),
    )
    return build_attribute(
        AttributeDefinition(input=ShorthandParser("record-reference", *shorthands), output=value),
        multiple=True,
    )


CompanyRecordReference = _typed_record_reference("companies", "domain", "domains", "domain")
PersonRecordReference = _typed_record_reference("people", "email address", "email_addresses", "email_address")
DealRecordReference = _typed_record_reference("deals")
UserRecordReference = _typed_record_reference("users", "user id", "user_id")
WorkspaceRecordReference = _typed_record_reference("workspaces", "workspace id", "workspace_id")


# ----- Select -----

class _OptionStruct(_Struct):
    option: Union[StrictStr, UUID]


class SelectOptionId(BaseModel):
    option_id: UUID
    workspace_id: Optional[UUID] = None
    object_id: Optional[UUID] = None
    attribute_id: Optional[UUID] = None


class SelectOption(BaseModel):
    id: Union[SelectOptionId, UUID]
    title: str
    is_archived: bool = False


class SelectValue(BaseModel):
    attribute_type: Literal["select"]
    option: SelectOption


Select = build_attribute(
    AttributeDefinition(
        input=ShorthandParser(
            "select",
            Shorthand("option title or id", StrictStr, lambda s: {"option": s}),
            Shorthand("option UUID", InstanceOf[UUID], lambda u: {"option": str(u)}),
            Shorthand("{option}", _OptionStruct, lambda m: {"option": str(m.option)}),
        ),
        output=SelectValue,
    ),
    multiple=True,
)


def select_with(*titles: str) -> AttributeVariation:
    """Select attribute whose input is limited to the given option titles.

    Example:
        priority = select_with("low", "medium", "high")
    """
    if not titles:
        raise ValueError("select_with requires at least one option title")
    allowed = Literal[titles]
    by_title = create_model("_SelectTitle", __base__=_Struct, option=(allowed, ...))
    return build_attribute(
        AttributeDefinition(
            input=ShorthandParser(
                "select",
                Shorthand("option title", allowed, lambda s: {"option": s}),
                Shorthand("{option}", by_title),
            ),
            output=SelectValue,
        ),
        multiple=True,
    )


# ----- Status -----

class _StatusStruct(_Struct):
    status: Union[StrictStr, UUID]


class StatusId(BaseModel):
    status_id: UUID
    workspace_id: Optional[UUID] = None
    object_id: Optional[UUID] = None
    attribute_id: Optional[UUID] = None


class StatusOption(BaseModel):
    id: Union[StatusId, UUID]
    title: str
    is_archived: bool = False
    celebration_enabled: bool = False
    # ISO 8601 duration, e.g. "P0Y0M1DT0H0M0S"
    target_time_in_status: Optional[str] = None


class StatusValue(BaseModel):
    attribute_type: Literal["status"]
    status: StatusOption


Status = build_attribute(
    AttributeDefinition(
        input=ShorthandParser(
            "status",
            Shorthand("status title or id", StrictStr, lambda s: {"status": s}),
            Shorthand("{status}", _StatusStruct, lambda m: {"status": str(m.status)}),
        ),
        output=StatusValue,
    )
)


# ----- Text -----

class _TextStruct(_Struct):
    value: StrictStr


class TextValue(BaseModel):
    attribute_type: Literal["text"]
    value: str


Text = build_attribute(
    AttributeDefinition(
        input=ShorthandParser(
            "text",
            Shorthand("string", StrictStr, lambda s: {"value": s}),
            Shorthand("{value}", _TextStruct),
        ),
        output=TextValue,
    )
)


# ----- Timestamp -----

class _TimestampStruct(_Struct):
    value: Union[InstanceOf[datetime], StrictStr]


class TimestampValue(BaseModel):
    attribute_type: Literal["timestamp"]
    value: AttioDatetime


Timestamp = build_attribute(
    AttributeDefinition(
        input=ShorthandParser(
            "timestamp",
            Shorthand("datetime", InstanceOf[datetime], lambda d: {"value": _iso_timestamp(d)}),
            Shorthand("ISO timestamp string", StrictStr, lambda s: {"value": _iso_timestamp(s)}),
            Shorthand("{value}", _TimestampStruct, lambda m: {"value": _iso_timestamp(m.value)}),
        ),
        output=TimestampValue,
    )
)


def optional_attribute(variation: AttributeVariation) -> AttributeVariation:
    """Attribute whose key is only present in responses when the workspace enables it."""
    return variation.as_optional_output()


CATALOG = MappingProxyType({
    "actor-reference": ActorReference,
    "checkbox": Checkbox,
    "currency": Currency,
    "date": Date,
    "domain": Domain,
    "email-address": EmailAddress,
    "interaction": Interaction,
    "location": Location,
    "number": NumberAttribute,
    "personal-name": PersonalName,
    "phone-number": PhoneNumber,
    "rating": Rating,
    "record-reference": RecordReference,
    "select": Select,
    "status": Status,
    "text": Text,
    "timestamp": Timestamp,
})
