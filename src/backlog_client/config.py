from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .client import DEFAULT_TIMEOUT_SECONDS, BacklogClient


@dataclass(frozen=True)
class BacklogConfig:
    base_url: str
    api_key: Optional[str] = None
    access_token: Optional[str] = None
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_key or self.access_token)


def load_env_config(*, use_dotenv: bool = True) -> BacklogConfig:
    """Load Backlog settings from environment (optional .env)."""
    if use_dotenv:
        load_dotenv()
    base_url = os.getenv("BACKLOG_BASE_URL", "").strip()
    api_key = os.getenv("BACKLOG_API_KEY", "").strip()
    access_token = os.getenv("BACKLOG_ACCESS_TOKEN", "").strip()
    timeout_raw = os.getenv("BACKLOG_TIMEOUT_SECONDS", "").strip()
    try:
        timeout_seconds = float(timeout_raw) if timeout_raw else DEFAULT_TIMEOUT_SECONDS
    except ValueError as exc:
        raise ValueError(
            f"BACKLOG_TIMEOUT_SECONDS must be a number, got {timeout_raw!r}."
        ) from exc
    return BacklogConfig(
        base_url=base_url,
        api_key=api_key or None,
        access_token=access_token or None,
        timeout_seconds=timeout_seconds,
    )


def create_client_from_env(**kwargs) -> BacklogClient:
    """Create a BacklogClient from environment variables."""
    config = load_env_config()
    if not config.base_url or not config.has_credentials:
        raise ValueError(
            "Missing BACKLOG_BASE_URL or BACKLOG_API_KEY/BACKLOG_ACCESS_TOKEN "
            "in environment."
        )
    kwargs.setdefault("timeout_seconds", config.timeout_seconds)
    return BacklogClient(
        base_url=config.base_url,
        api_key=config.api_key,
        access_token=config.access_token,
        **kwargs,
    )


__all__ = ["BacklogConfig", "load_env_config", "create_client_from_env"]
