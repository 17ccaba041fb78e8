from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class BacklogClientError(Exception):
    """Base error for client failures."""


class BacklogValidationError(BacklogClientError):
    """Raised locally, before any request is sent."""


class InvalidIdentifierError(BacklogValidationError):
    def __init__(self, kind: str, value: Any):
        super().__init__(f"Invalid {kind}: {value!r}")
        self.kind = kind
        self.value = value


class InvalidDateError(BacklogValidationError):
    pass


class InvalidParameterError(BacklogValidationError):
    pass


class UnsupportedPresentationError(BacklogValidationError):
    """A file cannot be presented in the requested format."""


class BacklogTransportError(BacklogClientError):
    """Connection, timeout or TLS failure reported by httpx."""


class BacklogApiErrorEntry(BaseModel):
    message: str
    code: int
    more_info: Optional[str] = Field(default=None, alias="moreInfo")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class BacklogApiErrorResponse(BaseModel):
    errors: List[BacklogApiErrorEntry]

    model_config = ConfigDict(extra="ignore")


class BacklogHTTPError(BacklogClientError):
    def __init__(
        self,
        *,
        status_code: int,
        method: str,
        url: str,
        errors: Optional[List[BacklogApiErrorEntry]] = None,
        response_json: Optional[Any] = None,
        response_text: Optional[str] = None,
    ):
        self.status_code = status_code
        self.method = method
        self.url = url
        self.errors = errors or []
        self.response_json = response_json
        self.response_text = response_text
        super().__init__(f"{status_code} {method} {url}: {self.summary}")

    @property
    def summary(self) -> str:
        if self.errors:
            return "; ".join(e.message for e in self.errors)
        if self.response_text:
            return self.response_text
        return "request failed"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status_code,
            "errors": [e.model_dump(by_alias=True) for e in self.errors],
        }


class BacklogParseError(BacklogClientError):
    pass


class BacklogModelValidationError(BacklogClientError):
    pass


__all__ = [
    "BacklogClientError",
    "BacklogValidationError",
    "InvalidIdentifierError",
    "InvalidDateError",
    "InvalidParameterError",
    "UnsupportedPresentationError",
    "BacklogTransportError",
    "BacklogApiErrorEntry",
    "BacklogApiErrorResponse",
    "BacklogHTTPError",
    "BacklogParseError",
    "BacklogModelValidationError",
]
