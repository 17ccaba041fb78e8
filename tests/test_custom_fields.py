import json
from datetime import date
from pathlib import Path
from typing import List

import pytest
from backlog_client.custom_fields import (
    CheckboxSettings,
    CustomField,
    CustomFieldTypeId,
    DateSettings,
    InitialDateType,
    NumericSettings,
    SingleListSettings,
    TextSettings,
)
from backlog_client.errors import InvalidParameterError
from pydantic import TypeAdapter, ValidationError


def load_fixture(name: str):
    p = Path(__file__).parent / "fixtures" / name
    with open(p, encoding="utf-8") as f:
        return json.load(f)


def load_fields() -> List[CustomField]:
    return TypeAdapter(List[CustomField]).validate_python(
        load_fixture("custom_field_list.json")
    )


def test_each_type_id_dispatches_to_its_settings():
    fields = load_fields()

    assert [type(f.settings) for f in fields] == [
        TextSettings,
        NumericSettings,
        DateSettings,
        SingleListSettings,
        CheckboxSettings,
    ]
    assert [f.kind for f in fields] == [
        "text",
        "numeric",
        "date",
        "single-list",
        "checkbox",
    ]


def test_single_list_items_match_payload():
    severity = load_fields()[3]

    assert severity.type_id is CustomFieldTypeId.SINGLE_LIST
    assert len(severity.settings.items) == 3
    assert [i.name for i in severity.items] == ["High", "Medium", "Low"]
    assert severity.settings.allow_add_item is True
    assert severity.item_by_name("Low").id == 13
    assert severity.item_by_name("Missing") is None


def test_list_kind_with_empty_items_is_valid():
    platforms = load_fields()[4]
    assert platforms.settings.items == []
    assert platforms.items == []


def test_numeric_settings():
    estimate = load_fields()[1]
    settings = estimate.settings

    assert settings.min == 0
    assert settings.max == 100
    assert settings.initial_value == 1.5
    assert settings.unit == "pt"
    assert estimate.required is True
    assert estimate.applicable_issue_types == [100, 101]


def test_date_settings_accept_plain_and_rfc3339_dates():
    release = load_fields()[2]
    settings = release.settings

    assert settings.min == date(2024, 1, 1)
    assert settings.max == date(2024, 12, 31)
    assert settings.initial_value_type is InitialDateType.SPECIFIED
    assert settings.initial_date == date(2024, 6, 1)
    assert settings.initial_shift is None
    assert release.applicable_issue_types is None


def test_initial_date_type_token():
    field = CustomField.model_validate(
        {
            "id": 9,
            "projectId": 1,
            "typeId": 4,
            "name": "Due",
            "initialValueType": "tomorrow",
            "initialShift": 2,
        }
    )
    assert field.settings.initial_value_type is InitialDateType.TOMORROW
    assert field.settings.initial_shift == 2


def test_missing_items_key_on_list_kind_is_valid():
    field = CustomField.model_validate(
        {"id": 9, "projectId": 1, "typeId": 8, "name": "Pick one", "items": None}
    )
    assert field.settings.items == []


@pytest.mark.parametrize("type_id", [0, 9, None, "5a", "9", True, False, 3.5])
def test_unknown_type_id_fails(type_id):
    payload = {"id": 9, "projectId": 1, "typeId": type_id, "name": "Mystery"}
    with pytest.raises(ValidationError):
        CustomField.model_validate(payload)


def test_string_type_id_dispatches():
    field = CustomField.model_validate(
        {"id": 9, "projectId": 1, "typeId": "5", "name": "Severity", "items": []}
    )
    assert isinstance(field.settings, SingleListSettings)
    assert field.type_id is CustomFieldTypeId.SINGLE_LIST


def test_missing_type_id_fails():
    with pytest.raises(ValidationError):
        CustomField.model_validate({"id": 9, "projectId": 1, "name": "Mystery"})


def test_bad_server_date_is_a_validation_error():
    with pytest.raises(ValidationError):
        CustomField.model_validate(
            {"id": 9, "projectId": 1, "typeId": 4, "name": "Due", "min": "someday"}
        )


def test_numeric_field_round_trips_through_dump():
    estimate = load_fields()[1]
    assert CustomField.model_validate(estimate.model_dump()) == estimate


def test_kind_tokens():
    assert CustomFieldTypeId.from_kind("single-list") is CustomFieldTypeId.SINGLE_LIST
    assert CustomFieldTypeId.from_kind("Multiple_List") is CustomFieldTypeId.MULTIPLE_LIST
    assert CustomFieldTypeId.RADIO.is_list
    assert not CustomFieldTypeId.DATE.is_list

    with pytest.raises(InvalidParameterError):
        CustomFieldTypeId.from_kind("dropdown")
