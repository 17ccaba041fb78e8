"""
Request descriptors.

Every API operation is a parameter object (a frozen pydantic model) that can
describe itself as a RequestSpec: method, path, query pairs and, for
mutating calls, a form body. Building a spec performs no I/O.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Annotated, Any, ClassVar, Optional

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    ValidationError,
)

from .dates import parse_calendar_date, since_bound, until_bound
from .encoding import Pairs, clamp_count
from .errors import InvalidParameterError


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PATCH = "PATCH"
    PUT = "PUT"
    DELETE = "DELETE"

    @property
    def has_body(self) -> bool:
        return self in (HttpMethod.POST, HttpMethod.PATCH, HttpMethod.PUT)


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


# Field types shared by parameter objects. Date-only input to a timestamp
# bound anchors to the start (since) or end (until) of that day.
Count = Annotated[int, AfterValidator(clamp_count)]
CalendarDate = Annotated[date, BeforeValidator(parse_calendar_date)]
SinceTimestamp = Annotated[datetime, BeforeValidator(since_bound)]
UntilTimestamp = Annotated[datetime, BeforeValidator(until_bound)]


@dataclass(frozen=True)
class RequestSpec:
    method: HttpMethod
    path: str
    query: Pairs = field(default_factory=list)
    form: Optional[Pairs] = None
    operation: str = ""


class ParamsModel(BaseModel):
    """
    Frozen caller-side input. A bad argument raises InvalidParameterError
    with pydantic's ValidationError as the cause.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as exc:
            raise InvalidParameterError(
                f"Invalid {type(self).__name__}: {_describe(exc)}"
            ) from exc


def _describe(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "value"
        parts.append(f"{loc}: {err.get('msg')}")
    return "; ".join(parts)


class ApiRequest(ParamsModel):
    """
    Base for all parameter objects.
    Subclasses set `method` and `response_type` and implement path();
    reads override to_query(), writes override to_form().
    """

    method: ClassVar[HttpMethod] = HttpMethod.GET
    # Anything pydantic's TypeAdapter accepts; None returns the raw JSON.
    response_type: ClassVar[Any] = None

    def path(self) -> str:
        raise NotImplementedError

    def to_query(self) -> Pairs:
        return []

    def to_form(self) -> Pairs:
        return []

    def to_request_spec(self) -> RequestSpec:
        return RequestSpec(
            method=self.method,
            path=self.path(),
            query=self.to_query(),
            form=self.to_form() if self.method.has_body else None,
            operation=type(self).__name__,
        )

    def _replace(self, **updates: Any):
        """Return a validated copy with `updates` applied."""
        values = {name: getattr(self, name) for name in type(self).model_fields}
        values.update(updates)
        return type(self)(**values)


class DownloadRequest(ApiRequest):
    """A GET whose response is a binary body rather than JSON."""


__all__ = [
    "HttpMethod",
    "SortOrder",
    "Count",
    "CalendarDate",
    "SinceTimestamp",
    "UntilTimestamp",
    "RequestSpec",
    "ParamsModel",
    "ApiRequest",
    "DownloadRequest",
]
