"""
Input shorthands and output models of the attribute catalog.
"""
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from uuid import UUID

import pytest

from attio_crm.core.exceptions import ReadOnlyAttributeError, ResponseDecodeError, SchemaValidationError
from attio_crm.schemas.attributes import (
    CATALOG,
    ActorReference,
    Checkbox,
    CompanyRecordReference,
    Currency,
    Date,
    DealRecordReference,
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
    select_with,
)

from conftest import ACTOR_ID, OTHER_RECORD_ID, actor_value, currency_value, status_value, value_metadata


def test_catalog_covers_every_kind():
    assert set(CATALOG) == {
        "actor-reference", "checkbox", "currency", "date", "domain", "email-address",
        "interaction", "location", "number", "personal-name", "phone-number", "rating",
        "record-reference", "select", "status", "text", "timestamp",
    }
    for attribute_type, variation in CATALOG.items():
        assert variation.attribute_type == attribute_type


# ----- text / number / checkbox -----

def test_text_shorthands():
    assert Text.parse_input("Acme") == {"value": "Acme"}
    assert Text.parse_input({"value": "Acme"}) == {"value": "Acme"}
    with pytest.raises(SchemaValidationError):
        Text.parse_input(42)


def test_number_shorthands():
    assert NumberAttribute.parse_input(3) == {"value": 3}
    assert NumberAttribute.parse_input(2.5) == {"value": 2.5}
    assert NumberAttribute.parse_input({"value": 7}) == {"value": 7}


@pytest.mark.parametrize("raw", [True, "3", {"value": "3"}])
def test_number_rejects_non_numbers(raw):
    with pytest.raises(SchemaValidationError):
        NumberAttribute.parse_input(raw)


@pytest.mark.parametrize("raw, expected", [
    (True, True),
    (False, False),
    ("true", True),
    ("false", False),
    ({"value": True}, True),
])
def test_checkbox_shorthands(raw, expected):
    assert Checkbox.parse_input(raw) == {"value": expected}


def test_checkbox_rejects_other_strings():
    with pytest.raises(SchemaValidationError):
        Checkbox.parse_input("yes")


# ----- currency -----

@pytest.mark.parametrize("raw", [1500.50, "1500.50", {"currency_value": 1500.5}, {"currency_value": "1500.5"}])
def test_currency_shorthands(raw):
    assert Currency.parse_input(raw) == {"currency_value": 1500.5}


def test_currency_int_is_sent_as_float():
    assert Currency.encode_input(1500) == [{"currency_value": 1500.0}]


@pytest.mark.parametrize("raw", ["abc", "nan", {"currency_code": "USD"}])
def test_currency_rejects_non_amounts(raw):
    with pytest.raises(SchemaValidationError):
        Currency.parse_input(raw)


def test_currency_output_accepts_numeric_strings():
    decoded = Currency.decode_output([currency_value("1500.50", "EUR")])
    assert decoded.currency_value == 1500.50
    assert decoded.currency_code == "EUR"


def test_currency_output_rejects_lowercase_code():
    with pytest.raises(ResponseDecodeError):
        Currency.decode_output([currency_value(10, "usd")])


# ----- date / timestamp -----

@pytest.mark.parametrize("raw", [
    date(2024, 1, 15),
    datetime(2024, 1, 15, 22, 45),
    "2024-01-15",
    {"value": "2024-01-15"},
    {"value": date(2024, 1, 15)},
])
def test_date_shorthands(raw):
    assert Date.parse_input(raw) == {"value": "2024-01-15"}


def test_date_rejects_other_formats():
    with pytest.raises(SchemaValidationError):
        Date.parse_input("15/01/2024")


def test_date_output():
    decoded = Date.decode_output([{"attribute_type": "date", "value": "2024-01-15", **value_metadata()}])
    assert decoded.value == date(2024, 1, 15)


@pytest.mark.parametrize("raw", [
    datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc),
    datetime(2024, 1, 15, 12, 30, tzinfo=timezone(timedelta(hours=2))),
    datetime(2024, 1, 15, 10, 30),
    "2024-01-15T10:30:00Z",
    "2024-01-15T12:30:00+02:00",
    {"value": "2024-01-15T10:30:00Z"},
])
def test_timestamp_shorthands_normalize_to_utc(raw):
    assert Timestamp.parse_input(raw) == {"value": "2024-01-15T10:30:00Z"}


def test_timestamp_rejects_garbage():
    with pytest.raises(SchemaValidationError):
        Timestamp.parse_input("next tuesday")


# ----- contact details -----

def test_email_shorthands():
    assert EmailAddress.Multiple.encode_input(["ada@example.com", {"email_address": "ada@acme.com"}]) == [
        {"email_address": "ada@example.com"},
        {"email_address": "ada@acme.com"},
    ]


def test_phone_number_shorthands():
    assert PhoneNumber.parse_input("+44 20 7946 0958") == {
        "original_phone_number": "+44 20 7946 0958",
        "country_code": None,
    }
    assert PhoneNumber.parse_input({"original_phone_number": "020 7946 0958", "country_code": "GB"}) == {
        "original_phone_number": "020 7946 0958",
        "country_code": "GB",
    }


def test_phone_number_rejects_bad_country_code():
    with pytest.raises(SchemaValidationError):
        PhoneNumber.parse_input({"original_phone_number": "020 7946 0958", "country_code": "gb"})


def test_location_string_fills_every_key():
    payload = Location.parse_input("1 Infinite Loop")
    assert payload["line_1"] == "1 Infinite Loop"
    assert len(payload) == 10
    assert all(value is None for key, value in payload.items() if key != "line_1")


def test_location_struct_keeps_coordinates_as_strings():
    payload = Location.parse_input({"locality": "Cupertino", "country_code": "US", "latitude": 37.33, "longitude": "-122.03"})
    assert payload["locality"] == "Cupertino"
    assert payload["latitude"] == "37.33"
    assert payload["longitude"] == "-122.03"
    assert payload["line_1"] is None


def test_location_output_keeps_coordinate_strings():
    raw = [{
        "attribute_type": "location",
        "line_1": "1 Infinite Loop",
        "line_2": None,
        "line_3": None,
        "line_4": None,
        "locality": "Cupertino",
        "region": "CA",
        "postcode": "95014",
        "country_code": "US",
        "latitude": "37.331741",
        "longitude": "-122.030333",
        **value_metadata(),
    }]
    decoded = Location.decode_output(raw)
    assert decoded.latitude == Decimal("37.331741")
    assert float(decoded.longitude) == -122.030333
    assert Location.encode_output(decoded) == raw


def test_location_output_rejects_non_numeric_coordinates():
    raw = {"attribute_type": "location", "latitude": "north", **value_metadata()}
    with pytest.raises(ResponseDecodeError):
        Location.decode_output([raw])


def test_location_rejects_unknown_keys():
    with pytest.raises(SchemaValidationError):
        Location.parse_input({"street": "1 Infinite Loop"})


def test_personal_name_shorthands():
    assert PersonalName.parse_input("Lovelace, Ada") == {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "full_name": "Ada Lovelace",
    }
    struct = {"first_name": "Ada", "last_name": "Lovelace", "full_name": "Ada King"}
    assert PersonalName.parse_input(struct) == struct


def test_personal_name_without_comma_is_a_first_name():
    assert PersonalName.parse_input("Ada") == {"first_name": "Ada", "last_name": "", "full_name": "Ada"}


# ----- rating / select / status -----

def test_rating_range():
    assert Rating.parse_input(4) == {"value": 4}
    assert Rating.parse_input({"value": 0}) == {"value": 0}
    with pytest.raises(SchemaValidationError):
        Rating.parse_input(6)
    with pytest.raises(SchemaValidationError):
        Rating.parse_input({"value": -1})


def test_select_shorthands():
    option_id = UUID(OTHER_RECORD_ID)
    assert Select.parse_input("Enterprise") == {"option": "Enterprise"}
    assert Select.parse_input(option_id) == {"option": OTHER_RECORD_ID}
    assert Select.parse_input({"option": "Enterprise"}) == {"option": "Enterprise"}


def test_select_with_restricts_titles():
    Priority = select_with("low", "high")
    assert Priority.parse_input("low") == {"option": "low"}
    assert Priority.parse_input({"option": "high"}) == {"option": "high"}
    assert Priority.Multiple.encode_input(["low", "high"]) == [{"option": "low"}, {"option": "high"}]
    with pytest.raises(SchemaValidationError):
        Priority.parse_input("medium")


def test_select_with_requires_titles():
    with pytest.raises(ValueError):
        select_with()


def test_select_output_accepts_both_option_id_forms():
    base = {"attribute_type": "select", **value_metadata()}
    by_uuid = Select.decode_output([{**base, "option": {"id": OTHER_RECORD_ID, "title": "A", "is_archived": False}}])
    by_struct = Select.decode_output([{**base, "option": {"id": {"option_id": OTHER_RECORD_ID}, "title": "A", "is_archived": False}}])
    assert by_uuid.option.id == UUID(OTHER_RECORD_ID)
    assert by_struct.option.id.option_id == UUID(OTHER_RECORD_ID)


def test_status_shorthands_and_output():
    assert Status.parse_input("In Progress") == {"status": "In Progress"}
    assert Status.parse_input({"status": "In Progress"}) == {"status": "In Progress"}
    decoded = Status.Required.decode_output([status_value("In Progress")])
    assert decoded.status.title == "In Progress"


def test_status_output_keeps_option_settings():
    raw = status_value("Won")
    raw["status"]["celebration_enabled"] = True
    raw["status"]["target_time_in_status"] = "P0Y0M14DT0H0M0S"
    decoded = Status.decode_output([raw])
    assert decoded.status.celebration_enabled is True
    assert decoded.status.target_time_in_status == "P0Y0M14DT0H0M0S"
    assert Status.encode_output(decoded) == [raw]


# ----- actors and references -----

def test_actor_reference_shorthands():
    assert ActorReference.parse_input("ada@example.com") == {"workspace_member_email_address": "ada@example.com"}
    assert ActorReference.parse_input({"workspace_member_email_address": "ada@example.com"}) == {
        "workspace_member_email_address": "ada@example.com"
    }
    assert ActorReference.parse_input({"referenced_actor_type": "workspace-member", "referenced_actor_id": ACTOR_ID}) == {
        "referenced_actor_type": "workspace-member",
        "referenced_actor_id": ACTOR_ID,
    }


def test_actor_reference_cannot_write_system_actors():
    with pytest.raises(SchemaValidationError):
        ActorReference.parse_input({"referenced_actor_type": "system", "referenced_actor_id": ACTOR_ID})


def test_actor_reference_output_system_actor_has_no_id():
    assert ActorReference.decode_output([actor_value("system", None)]).referenced_actor_id is None
    with pytest.raises(ResponseDecodeError):
        ActorReference.decode_output([actor_value("system", ACTOR_ID)])
    with pytest.raises(ResponseDecodeError):
        ActorReference.decode_output([actor_value("workspace-member", None)])


def test_generic_record_reference_needs_target_object():
    assert RecordReference.parse_input({"target_object": "projects", "target_record_id": OTHER_RECORD_ID}) == {
        "target_object": "projects",
        "target_record_id": OTHER_RECORD_ID,
    }
    with pytest.raises(SchemaValidationError):
        RecordReference.parse_input(OTHER_RECORD_ID)


def test_company_reference_shorthands_in_trial_order():
    assert CompanyRecordReference.parser.trial_order == [
        "record id",
        "domain",
        "{target_object, target_record_id}",
        "{target_object, domains}",
    ]
    expected_by_id = {"target_object": "companies", "target_record_id": OTHER_RECORD_ID}
    assert CompanyRecordReference.parse_input(OTHER_RECORD_ID) == expected_by_id
    assert CompanyRecordReference.parse_input(UUID(OTHER_RECORD_ID)) == expected_by_id
    assert CompanyRecordReference.parse_input(expected_by_id) == expected_by_id
    assert CompanyRecordReference.parse_input("acme.com") == {
        "target_object": "companies",
        "domains": [{"domain": "acme.com"}],
    }


def test_typed_reference_rejects_other_targets():
    with pytest.raises(SchemaValidationError):
        CompanyRecordReference.parse_input({"target_object": "people", "target_record_id": OTHER_RECORD_ID})


def test_person_and_user_reference_matching_shorthands():
    assert PersonRecordReference.parse_input("ada@example.com") == {
        "target_object": "people",
        "email_addresses": [{"email_address": "ada@example.com"}],
    }
    assert UserRecordReference.parse_input("user-42") == {
        "target_object": "users",
        "user_id": [{"value": "user-42"}],
    }


def test_deal_reference_has_no_string_shorthand():
    with pytest.raises(SchemaValidationError):
        DealRecordReference.parse_input("Big deal")


def test_typed_reference_output_checks_target():
    base = {"attribute_type": "record-reference", "target_record_id": OTHER_RECORD_ID, **value_metadata()}
    assert CompanyRecordReference.decode_output([{**base, "target_object": "companies"}]).target_object == "companies"
    with pytest.raises(ResponseDecodeError):
        CompanyRecordReference.decode_output([{**base, "target_object": "people"}])


def test_interaction_is_output_only():
    decoded = Interaction.decode_output([{
        "attribute_type": "interaction",
        "interaction_type": "email",
        "interacted_at": "2024-01-15T10:30:00Z",
        "owner_actor": {"type": "workspace-member", "id": ACTOR_ID},
        **value_metadata(),
    }])
    assert decoded.interaction_type == "email"
    with pytest.raises(ReadOnlyAttributeError):
        Interaction.encode_input(None)
