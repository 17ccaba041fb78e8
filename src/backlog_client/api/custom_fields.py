"""
Custom field operations.

AddCustomFieldParams is built per kind:

    AddCustomFieldParams.single_list("PROJ", "Severity", ["High", "Low"])
    AddCustomFieldParams.numeric("PROJ", "Estimate").with_numeric_settings(min=0)

Each builder carries only the options of its own kind, so the form body never
mixes keys across kinds. A setter for another kind leaves the builder as is.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar, List, Optional, Sequence, Union

from pydantic import Field, model_validator

from ..custom_fields import CustomField, CustomFieldTypeId, InitialDateTypeField
from ..encoding import Pairs, ParamList
from ..errors import InvalidParameterError
from ..identifiers import ProjectIdOrKey
from ..request import CalendarDate, HttpMethod, ParamsModel
from .projects import ProjectScoped

if TYPE_CHECKING:
    from ..client import BacklogClient

DEFAULT_LIST_ITEMS = "High,Medium,Low"


class NumericOptions(ParamsModel):
    min: Optional[float] = None
    max: Optional[float] = None
    initial_value: Optional[float] = None
    unit: Optional[str] = None

    def to_pairs(self) -> Pairs:
        return (
            ParamList()
            .add("min", self.min)
            .add("max", self.max)
            .add("initialValue", self.initial_value)
            .add("unit", self.unit)
            .pairs()
        )


class DateOptions(ParamsModel):
    min: Optional[CalendarDate] = None
    max: Optional[CalendarDate] = None
    initial_value_type: InitialDateTypeField = None
    initial_date: Optional[CalendarDate] = None
    initial_shift: Optional[int] = None

    def to_pairs(self) -> Pairs:
        return (
            ParamList()
            .add("min", self.min)
            .add("max", self.max)
            .add("initialValueType", self.initial_value_type)
            .add("initialDate", self.initial_date)
            .add("initialShift", self.initial_shift)
            .pairs()
        )


class ListOptions(ParamsModel):
    """Single and multiple selection lists."""

    items: List[str] = Field(default_factory=list)
    allow_input: Optional[bool] = None
    allow_add_item: Optional[bool] = None

    def to_pairs(self) -> Pairs:
        return (
            ParamList()
            .add_array("items", self.items)
            .add("allowInput", self.allow_input)
            .add("allowAddItem", self.allow_add_item)
            .pairs()
        )


class ChoiceOptions(ParamsModel):
    """Checkboxes and radio buttons."""

    items: List[str] = Field(default_factory=list)

    def to_pairs(self) -> Pairs:
        return ParamList().add_array("items", self.items).pairs()


KindOptions = Union[NumericOptions, DateOptions, ListOptions, ChoiceOptions]

_OPTIONS_BY_TYPE = {
    CustomFieldTypeId.TEXT: None,
    CustomFieldTypeId.TEXT_AREA: None,
    CustomFieldTypeId.NUMERIC: NumericOptions,
    CustomFieldTypeId.DATE: DateOptions,
    CustomFieldTypeId.SINGLE_LIST: ListOptions,
    CustomFieldTypeId.MULTIPLE_LIST: ListOptions,
    CustomFieldTypeId.CHECKBOX: ChoiceOptions,
    CustomFieldTypeId.RADIO: ChoiceOptions,
}


def split_items(items: Optional[str]) -> List[str]:
    """'High, Medium,,Low' -> ['High', 'Medium', 'Low']"""
    if not items:
        return []
    return [token.strip() for token in items.split(",") if token.strip()]


class GetCustomFieldListParams(ProjectScoped):
    response_type: ClassVar[Any] = List[CustomField]

    def path(self) -> str:
        return self.project_path("customFields")


class AddCustomFieldParams(ProjectScoped):
    method: ClassVar[HttpMethod] = HttpMethod.POST
    response_type: ClassVar[Any] = CustomField

    type_id: CustomFieldTypeId
    name: str
    description: Optional[str] = None
    required: Optional[bool] = None
    applicable_issue_types: Optional[List[int]] = None
    options: Optional[KindOptions] = None

    @model_validator(mode="after")
    def _options_match_kind(self) -> "AddCustomFieldParams":
        expected = _OPTIONS_BY_TYPE[self.type_id]
        if self.options is None:
            return self
        if expected is None or type(self.options) is not expected:
            raise InvalidParameterError(
                f"{type(self.options).__name__} does not apply to "
                f"{self.type_id.kind} custom fields."
            )
        return self

    # --- builders ---

    @classmethod
    def text(cls, project: Any, name: str) -> "AddCustomFieldParams":
        return cls(project=project, type_id=CustomFieldTypeId.TEXT, name=name)

    @classmethod
    def textarea(cls, project: Any, name: str) -> "AddCustomFieldParams":
        return cls(project=project, type_id=CustomFieldTypeId.TEXT_AREA, name=name)

    @classmethod
    def numeric(cls, project: Any, name: str) -> "AddCustomFieldParams":
        return cls(
            project=project,
            type_id=CustomFieldTypeId.NUMERIC,
            name=name,
            options=NumericOptions(),
        )

    @classmethod
    def date(cls, project: Any, name: str) -> "AddCustomFieldParams":
        return cls(
            project=project,
            type_id=CustomFieldTypeId.DATE,
            name=name,
            options=DateOptions(),
        )

    @classmethod
    def single_list(
        cls, project: Any, name: str, items: Sequence[str]
    ) -> "AddCustomFieldParams":
        return cls(
            project=project,
            type_id=CustomFieldTypeId.SINGLE_LIST,
            name=name,
            options=ListOptions(items=list(items)),
        )

    @classmethod
    def multiple_list(
        cls, project: Any, name: str, items: Sequence[str]
    ) -> "AddCustomFieldParams":
        return cls(
            project=project,
            type_id=CustomFieldTypeId.MULTIPLE_LIST,
            name=name,
            options=ListOptions(items=list(items)),
        )

    @classmethod
    def checkbox(
        cls, project: Any, name: str, items: Optional[Sequence[str]] = None
    ) -> "AddCustomFieldParams":
        return cls(
            project=project,
            type_id=CustomFieldTypeId.CHECKBOX,
            name=name,
            options=ChoiceOptions(items=list(items or [])),
        )

    @classmethod
    def radio(
        cls, project: Any, name: str, items: Optional[Sequence[str]] = None
    ) -> "AddCustomFieldParams":
        return cls(
            project=project,
            type_id=CustomFieldTypeId.RADIO,
            name=name,
            options=ChoiceOptions(items=list(items or [])),
        )

    @classmethod
    def for_kind(
        cls,
        project: Any,
        kind: str,
        name: str,
        items: Optional[str] = DEFAULT_LIST_ITEMS,
    ) -> "AddCustomFieldParams":
        """
        Build from a kind token as typed on a command line.
        List kinds take `items` as a comma-separated string.
        """
        type_id = CustomFieldTypeId.from_kind(kind)
        options_cls = _OPTIONS_BY_TYPE[type_id]
        if not type_id.is_list:
            return cls(
                project=project,
                type_id=type_id,
                name=name,
                options=options_cls() if options_cls else None,
            )

        values = split_items(items)
        if not values:
            raise InvalidParameterError(
                f"Custom field type {type_id.kind!r} requires at least one item."
            )
        return cls(
            project=project,
            type_id=type_id,
            name=name,
            options=options_cls(items=values),
        )

    # --- common setters ---

    def with_description(self, description: str) -> "AddCustomFieldParams":
        return self._replace(description=description)

    def with_required(self, required: bool = True) -> "AddCustomFieldParams":
        return self._replace(required=required)

    def with_applicable_issue_types(
        self, issue_type_ids: Sequence[int]
    ) -> "AddCustomFieldParams":
        return self._replace(applicable_issue_types=list(issue_type_ids))

    # --- kind setters; inert on other kinds ---

    def with_numeric_settings(
        self,
        *,
        min: Optional[float] = None,
        max: Optional[float] = None,
        initial_value: Optional[float] = None,
        unit: Optional[str] = None,
    ) -> "AddCustomFieldParams":
        if not isinstance(self.options, NumericOptions):
            return self
        return self._replace(
            options=NumericOptions(
                min=min, max=max, initial_value=initial_value, unit=unit
            )
        )

    def with_date_settings(
        self,
        *,
        min: Any = None,
        max: Any = None,
        initial_value_type: Any = None,
        initial_date: Any = None,
        initial_shift: Optional[int] = None,
    ) -> "AddCustomFieldParams":
        if not isinstance(self.options, DateOptions):
            return self
        return self._replace(
            options=DateOptions(
                min=min,
                max=max,
                initial_value_type=initial_value_type,
                initial_date=initial_date,
                initial_shift=initial_shift,
            )
        )

    def with_allow_input(self, allow: bool = True) -> "AddCustomFieldParams":
        if not isinstance(self.options, ListOptions):
            return self
        return self._replace(
            options=self.options.model_copy(update={"allow_input": allow})
        )

    def with_allow_add_item(self, allow: bool = True) -> "AddCustomFieldParams":
        if not isinstance(self.options, ListOptions):
            return self
        return self._replace(
            options=self.options.model_copy(update={"allow_add_item": allow})
        )

    # --- wire ---

    def path(self) -> str:
        return self.project_path("customFields")

    def to_form(self) -> Pairs:
        params = (
            ParamList()
            .add("typeId", self.type_id)
            .add("name", self.name)
            .add_array("applicableIssueTypes", self.applicable_issue_types)
            .add("description", self.description)
            .add("required", self.required)
        )
        if self.options is not None:
            params.extend(self.options.to_pairs())
        return params.pairs()


class CustomFieldScoped(ProjectScoped):
    custom_field_id: int = Field(gt=0)

    def custom_field_path(self, *parts: Any) -> str:
        return self.project_path("customFields", self.custom_field_id, *parts)


class UpdateCustomFieldParams(CustomFieldScoped):
    """
    Partial update; only given fields are sent.
    The date keys are meaningful for date fields only.
    """

    method: ClassVar[HttpMethod] = HttpMethod.PATCH
    response_type: ClassVar[Any] = CustomField

    name: Optional[str] = None
    description: Optional[str] = None
    required: Optional[bool] = None
    applicable_issue_types: Optional[List[int]] = None
    min: Optional[CalendarDate] = None
    max: Optional[CalendarDate] = None
    initial_value_type: InitialDateTypeField = None
    initial_date: Optional[CalendarDate] = None
    initial_shift: Optional[int] = None

    def path(self) -> str:
        return self.custom_field_path()

    def to_form(self) -> Pairs:
        return (
            ParamList()
            .add("name", self.name)
            .add_array("applicableIssueTypes", self.applicable_issue_types)
            .add("description", self.description)
            .add("required", self.required)
            .add("min", self.min)
            .add("max", self.max)
            .add("initialValueType", self.initial_value_type)
            .add("initialDate", self.initial_date)
            .add("initialShift", self.initial_shift)
            .pairs()
        )


class DeleteCustomFieldParams(CustomFieldScoped):
    method: ClassVar[HttpMethod] = HttpMethod.DELETE
    response_type: ClassVar[Any] = CustomField

    def path(self) -> str:
        return self.custom_field_path()


class AddListItemParams(CustomFieldScoped):
    method: ClassVar[HttpMethod] = HttpMethod.POST
    response_type: ClassVar[Any] = CustomField

    name: str

    def path(self) -> str:
        return self.custom_field_path("items")

    def to_form(self) -> Pairs:
        return ParamList().add("name", self.name).pairs()


class UpdateListItemParams(CustomFieldScoped):
    method: ClassVar[HttpMethod] = HttpMethod.PATCH
    response_type: ClassVar[Any] = CustomField

    item_id: int = Field(gt=0)
    name: str

    def path(self) -> str:
        return self.custom_field_path("items", self.item_id)

    def to_form(self) -> Pairs:
        return ParamList().add("name", self.name).pairs()


class DeleteListItemParams(CustomFieldScoped):
    method: ClassVar[HttpMethod] = HttpMethod.DELETE
    response_type: ClassVar[Any] = CustomField

    item_id: int = Field(gt=0)

    def path(self) -> str:
        return self.custom_field_path("items", self.item_id)


# The server answers list-item changes with the whole field; callers should
# replace their copy with it rather than patch items locally.


async def add_list_item(
    client: "BacklogClient",
    project: Union[ProjectIdOrKey, int, str],
    custom_field_id: int,
    name: str,
) -> CustomField:
    params = AddListItemParams(
        project=project, custom_field_id=custom_field_id, name=name
    )
    return await client.execute(params)


async def update_list_item(
    client: "BacklogClient",
    project: Union[ProjectIdOrKey, int, str],
    custom_field_id: int,
    item_id: int,
    name: str,
) -> CustomField:
    params = UpdateListItemParams(
        project=project, custom_field_id=custom_field_id, item_id=item_id, name=name
    )
    return await client.execute(params)


async def delete_list_item(
    client: "BacklogClient",
    project: Union[ProjectIdOrKey, int, str],
    custom_field_id: int,
    item_id: int,
) -> CustomField:
    params = DeleteListItemParams(
        project=project, custom_field_id=custom_field_id, item_id=item_id
    )
    return await client.execute(params)


__all__ = [
    "DEFAULT_LIST_ITEMS",
    "NumericOptions",
    "DateOptions",
    "ListOptions",
    "ChoiceOptions",
    "split_items",
    "GetCustomFieldListParams",
    "AddCustomFieldParams",
    "UpdateCustomFieldParams",
    "DeleteCustomFieldParams",
    "AddListItemParams",
    "UpdateListItemParams",
    "DeleteListItemParams",
    "add_list_item",
    "update_list_item",
    "delete_list_item",
]
