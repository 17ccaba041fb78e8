"""
Custom field schema.

A project's custom field is one of eight kinds. The server sends a flat
object with a numeric `typeId`; CustomField lifts the kind-specific keys into
`settings`, a closed discriminated union with `type_id` as its only tag.
Unknown type ids fail validation instead of falling back to a guess.

    1 Text, 2 TextArea, 3 Numeric, 4 Date,
    5 SingleList, 6 MultipleList, 7 Checkbox, 8 Radio
"""

from __future__ import annotations

from datetime import date
from enum import IntEnum
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator

from .dates import parse_calendar_date
from .errors import InvalidDateError, InvalidParameterError


class CustomFieldTypeId(IntEnum):
    TEXT = 1
    TEXT_AREA = 2
    NUMERIC = 3
    DATE = 4
    SINGLE_LIST = 5
    MULTIPLE_LIST = 6
    CHECKBOX = 7
    RADIO = 8

    @property
    def kind(self) -> str:
        return _KIND_TOKENS[self]

    @property
    def is_list(self) -> bool:
        return self in LIST_TYPES

    @classmethod
    def from_kind(cls, kind: str) -> "CustomFieldTypeId":
        token = (kind or "").strip().lower().replace("_", "-")
        for type_id, name in _KIND_TOKENS.items():
            if name == token:
                return type_id
        valid = ", ".join(_KIND_TOKENS.values())
        raise InvalidParameterError(
            f"Invalid custom field type {kind!r}. Valid types: {valid}"
        )


_KIND_TOKENS: Dict[CustomFieldTypeId, str] = {
    CustomFieldTypeId.TEXT: "text",
    CustomFieldTypeId.TEXT_AREA: "textarea",
    CustomFieldTypeId.NUMERIC: "numeric",
    CustomFieldTypeId.DATE: "date",
    CustomFieldTypeId.SINGLE_LIST: "single-list",
    CustomFieldTypeId.MULTIPLE_LIST: "multiple-list",
    CustomFieldTypeId.CHECKBOX: "checkbox",
    CustomFieldTypeId.RADIO: "radio",
}

LIST_TYPES = frozenset(
    {
        CustomFieldTypeId.SINGLE_LIST,
        CustomFieldTypeId.MULTIPLE_LIST,
        CustomFieldTypeId.CHECKBOX,
        CustomFieldTypeId.RADIO,
    }
)


class InitialDateType(IntEnum):
    """Which default a date field starts with; sent on the wire as the code."""

    TODAY = 1
    TOMORROW = 2
    YESTERDAY = 3
    SPECIFIED = 4


def _coerce_initial_date_type(value: Any) -> Any:
    if isinstance(value, str) and not value.isdigit():
        try:
            return InitialDateType[value.strip().upper()]
        except KeyError as exc:
            raise ValueError(f"Unknown initial date type: {value!r}") from exc
    return value


def _normalize_type_id(value: Any) -> Any:
    # True == 1 would select the text variant.
    if isinstance(value, bool):
        raise ValueError(f"typeId must be an integer, got {value!r}")
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return value


def _coerce_response_date(value: Any) -> Any:
    if value is None or value == "":
        return None
    try:
        return parse_calendar_date(value)
    except InvalidDateError as exc:
        raise ValueError(str(exc)) from exc


ResponseDate = Annotated[Optional[date], BeforeValidator(_coerce_response_date)]
InitialDateTypeField = Annotated[
    Optional[InitialDateType], BeforeValidator(_coerce_initial_date_type)
]


class ListItem(BaseModel):
    id: int
    name: str
    display_order: int = Field(default=0, alias="displayOrder")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


_SETTINGS_CONFIG = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class TextSettings(BaseModel):
    type_id: Literal[1] = 1

    model_config = _SETTINGS_CONFIG


class TextAreaSettings(BaseModel):
    type_id: Literal[2] = 2

    model_config = _SETTINGS_CONFIG


class NumericSettings(BaseModel):
    type_id: Literal[3] = 3
    min: Optional[float] = None
    max: Optional[float] = None
    initial_value: Optional[float] = Field(default=None, alias="initialValue")
    unit: Optional[str] = None

    model_config = _SETTINGS_CONFIG


class DateSettings(BaseModel):
    # initial_value_type decides whether initial_date or initial_shift applies;
    # both are kept as sent.
    type_id: Literal[4] = 4
    min: ResponseDate = None
    max: ResponseDate = None
    initial_value_type: InitialDateTypeField = Field(
        default=None, alias="initialValueType"
    )
    initial_date: ResponseDate = Field(default=None, alias="initialDate")
    initial_shift: Optional[int] = Field(default=None, alias="initialShift")

    model_config = _SETTINGS_CONFIG


class SingleListSettings(BaseModel):
    type_id: Literal[5] = 5
    items: List[ListItem] = Field(default_factory=list)
    allow_input: Optional[bool] = Field(default=None, alias="allowInput")
    allow_add_item: Optional[bool] = Field(default=None, alias="allowAddItem")

    model_config = _SETTINGS_CONFIG


class MultipleListSettings(BaseModel):
    type_id: Literal[6] = 6
    items: List[ListItem] = Field(default_factory=list)
    allow_input: Optional[bool] = Field(default=None, alias="allowInput")
    allow_add_item: Optional[bool] = Field(default=None, alias="allowAddItem")

    model_config = _SETTINGS_CONFIG


class CheckboxSettings(BaseModel):
    type_id: Literal[7] = 7
    items: List[ListItem] = Field(default_factory=list)

    model_config = _SETTINGS_CONFIG


class RadioSettings(BaseModel):
    type_id: Literal[8] = 8
    items: List[ListItem] = Field(default_factory=list)

    model_config = _SETTINGS_CONFIG


CustomFieldSettings = Annotated[
    Union[
        TextSettings,
        TextAreaSettings,
        NumericSettings,
        DateSettings,
        SingleListSettings,
        MultipleListSettings,
        CheckboxSettings,
        RadioSettings,
    ],
    Field(discriminator="type_id"),
]


class CustomField(BaseModel):
    id: int
    project_id: int = Field(alias="projectId")
    name: str
    description: str = ""
    required: bool = False
    display_order: int = Field(default=0, alias="displayOrder")
    applicable_issue_types: Optional[List[int]] = Field(
        default=None, alias="applicableIssueTypes"
    )
    settings: CustomFieldSettings

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _lift_settings(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "settings" in data:
            return data
        settings = {k: v for k, v in data.items() if k != "typeId"}
        settings["type_id"] = _normalize_type_id(data.get("typeId"))
        if settings.get("items") is None:
            settings.pop("items", None)
        return {**data, "settings": settings}

    @property
    def type_id(self) -> CustomFieldTypeId:
        return CustomFieldTypeId(self.settings.type_id)

    @property
    def kind(self) -> str:
        return self.type_id.kind

    @property
    def items(self) -> List[ListItem]:
        """Options of a list-type field, in server display order; [] otherwise."""
        items = getattr(self.settings, "items", None) or []
        return sorted(items, key=lambda item: item.display_order)

    def item_by_name(self, name: str) -> Optional[ListItem]:
        for item in self.items:
            if item.name == name:
                return item
        return None


__all__ = [
    "CustomFieldTypeId",
    "LIST_TYPES",
    "InitialDateType",
    "ListItem",
    "TextSettings",
    "TextAreaSettings",
    "NumericSettings",
    "DateSettings",
    "SingleListSettings",
    "MultipleListSettings",
    "CheckboxSettings",
    "RadioSettings",
    "CustomFieldSettings",
    "CustomField",
]
