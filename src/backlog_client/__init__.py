"""backlog_client package exports."""

from .client import BacklogClient
from .config import BacklogConfig, create_client_from_env, load_env_config
from .custom_fields import (
    CustomField,
    CustomFieldSettings,
    CustomFieldTypeId,
    InitialDateType,
    ListItem,
)
from .errors import (
    BacklogApiErrorEntry,
    BacklogClientError,
    BacklogHTTPError,
    BacklogModelValidationError,
    BacklogParseError,
    BacklogTransportError,
    BacklogValidationError,
    InvalidDateError,
    InvalidIdentifierError,
    InvalidParameterError,
    UnsupportedPresentationError,
)
from .files import DownloadedFile, PresentationFormat, classify, render_file
from .identifiers import IssueIdOrKey, ProjectIdOrKey, RepositoryIdOrName
from .logging import setup_logging
from .request import ApiRequest, DownloadRequest, HttpMethod, RequestSpec, SortOrder

__all__ = [
    # Client
    "BacklogClient",
    "BacklogConfig",
    "load_env_config",
    "create_client_from_env",
    "setup_logging",
    # Requests
    "ApiRequest",
    "DownloadRequest",
    "HttpMethod",
    "RequestSpec",
    "SortOrder",
    # Identifiers
    "ProjectIdOrKey",
    "IssueIdOrKey",
    "RepositoryIdOrName",
    # Custom fields
    "CustomField",
    "CustomFieldSettings",
    "CustomFieldTypeId",
    "InitialDateType",
    "ListItem",
    # Files
    "DownloadedFile",
    "PresentationFormat",
    "classify",
    "render_file",
    # Exceptions
    "BacklogClientError",
    "BacklogValidationError",
    "InvalidIdentifierError",
    "InvalidDateError",
    "InvalidParameterError",
    "UnsupportedPresentationError",
    "BacklogTransportError",
    "BacklogApiErrorEntry",
    "BacklogHTTPError",
    "BacklogParseError",
    "BacklogModelValidationError",
]
