"""
Identifiers that address a resource either by numeric ID or by textual key.

Each resource type has its own class and key grammar:
  - ProjectIdOrKey:     123 or "PROJ"
  - IssueIdOrKey:       456 or "PROJ-12"
  - RepositoryIdOrName: 7 or "my-repo.git"

Construction validates; an instance is always a usable path segment.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Optional, Pattern
from urllib.parse import quote

from pydantic_core import core_schema

from .errors import InvalidIdentifierError

MAX_ID = 2**32 - 1

_DIGITS_RE = re.compile(r"^[0-9]+$")


class IdentifierVariant(str, Enum):
    ID = "id"
    KEY = "key"
    EITHER = "either"


@dataclass(frozen=True)
class IdOrKey:
    id: Optional[int] = None
    key: Optional[str] = None

    kind: ClassVar[str] = "id or key"
    key_pattern: ClassVar[Pattern[str]] = re.compile(r"^(?!)$")

    def __post_init__(self) -> None:
        if self.id is None and self.key is None:
            raise InvalidIdentifierError(self.kind, None)
        if self.id is not None and not _is_valid_id(self.id):
            raise InvalidIdentifierError(self.kind, self.id)
        if self.key is not None and not self.is_valid_key(self.key):
            raise InvalidIdentifierError(self.kind, self.key)

    @classmethod
    def is_valid_key(cls, key: str) -> bool:
        return isinstance(key, str) and bool(cls.key_pattern.fullmatch(key))

    @classmethod
    def of_id(cls, value: int):
        return cls(id=value)

    @classmethod
    def of_key(cls, value: str):
        return cls(key=value)

    @classmethod
    def either(cls, id_value: int, key_value: str):
        return cls(id=id_value, key=key_value)

    @classmethod
    def parse(cls, value: str):
        """
        Parse caller input.
        - A positive integer string yields the ID variant.
        - Anything else must match the key grammar.
        """
        if not isinstance(value, str):
            raise InvalidIdentifierError(cls.kind, value)
        if _DIGITS_RE.fullmatch(value):
            number = int(value)
            if 0 < number <= MAX_ID:
                return cls(id=number)
            if number == 0:
                raise InvalidIdentifierError(cls.kind, value)
        if cls.is_valid_key(value):
            return cls(key=value)
        raise InvalidIdentifierError(cls.kind, value)

    @classmethod
    def coerce(cls, value: Any):
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise InvalidIdentifierError(cls.kind, value)
        if isinstance(value, int):
            return cls(id=value)
        return cls.parse(value)

    @property
    def variant(self) -> IdentifierVariant:
        if self.id is not None and self.key is not None:
            return IdentifierVariant.EITHER
        if self.id is not None:
            return IdentifierVariant.ID
        return IdentifierVariant.KEY

    def to_path_segment(self) -> str:
        return quote(str(self), safe="")

    def __str__(self) -> str:
        # The numeric form wins when both are known.
        if self.id is not None:
            return str(self.id)
        return str(self.key)

    @classmethod
    def __get_pydantic_core_schema__(cls, source: Any, handler: Any):
        return core_schema.no_info_plain_validator_function(
            cls.coerce,
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda v: v.id if v.id is not None else v.key
            ),
        )


def _is_valid_id(value: Any) -> bool:
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and 0 < value <= MAX_ID
    )


@dataclass(frozen=True)
class ProjectIdOrKey(IdOrKey):
    """Project keys are 1-25 chars of uppercase letters, digits and underscore."""

    kind: ClassVar[str] = "project id or key"
    key_pattern: ClassVar[Pattern[str]] = re.compile(r"^[_A-Z0-9]{1,25}$")


@dataclass(frozen=True)
class IssueIdOrKey(IdOrKey):
    """Issue keys are a project key, a hyphen and a positive issue number."""

    kind: ClassVar[str] = "issue id or key"
    key_pattern: ClassVar[Pattern[str]] = re.compile(
        r"^([_A-Z0-9]{1,25})-([1-9][0-9]*)$"
    )

    @classmethod
    def is_valid_key(cls, key: str) -> bool:
        if not isinstance(key, str):
            return False
        match = cls.key_pattern.fullmatch(key)
        return bool(match) and int(match.group(2)) <= MAX_ID

    @property
    def project_key(self) -> Optional[str]:
        if self.key is None:
            return None
        return self.key.rsplit("-", 1)[0]


@dataclass(frozen=True)
class RepositoryIdOrName(IdOrKey):
    """Repository names start alphanumeric, then up to 99 of [a-zA-Z0-9_.-]."""

    kind: ClassVar[str] = "repository id or name"
    key_pattern: ClassVar[Pattern[str]] = re.compile(
        r"^[a-zA-Z0-9][a-zA-Z0-9_.-]{0,99}$"
    )

    @property
    def name(self) -> Optional[str]:
        return self.key


__all__ = [
    "MAX_ID",
    "IdentifierVariant",
    "IdOrKey",
    "ProjectIdOrKey",
    "IssueIdOrKey",
    "RepositoryIdOrName",
]
