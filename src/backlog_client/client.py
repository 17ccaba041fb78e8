from __future__ import annotations

import asyncio
import logging
import os
import time
from typing import Any, Dict, Optional

import httpx
from dotenv import load_dotenv
from pydantic import TypeAdapter, ValidationError

from .errors import (
    BacklogApiErrorResponse,
    BacklogHTTPError,
    BacklogModelValidationError,
    BacklogParseError,
    BacklogTransportError,
)
from .files import (
    DEFAULT_CONTENT_TYPE,
    DEFAULT_FILENAME,
    DownloadedFile,
    parse_disposition_filename,
)
from .request import ApiRequest, DownloadRequest, RequestSpec

DEFAULT_TIMEOUT_SECONDS = 10.0


class BacklogClient:
    """
    Async HTTP client for the Backlog REST API (/api/v2).
    - Turns parameter objects into HTTP calls; no business logic
    - Authenticates with an API key (query) or an OAuth access token (header)
    - One request in flight at a time per client
    - Returns raw JSON or the parameter object's typed response
    """

    def __init__(
        self,
        *,
        base_url: str,
        api_key: Optional[str] = None,
        access_token: Optional[str] = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        logger: Optional[logging.Logger] = None,
        http: Optional[httpx.AsyncClient] = None,
    ):
        base_url = (base_url or "").rstrip("/")
        api_key = api_key or ""
        access_token = access_token or ""

        if not base_url:
            raise ValueError("base_url must be provided.")
        if not api_key and not access_token:
            raise ValueError("api_key or access_token must be provided.")

        self.base_url = base_url
        self.timeout_seconds = timeout_seconds
        self.log = logger or logging.getLogger("backlog_client.client")
        self._api_key = api_key
        self._lock = asyncio.Lock()

        headers = {"Accept": "application/json"}
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"

        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            timeout=timeout_seconds,
        )

    @classmethod
    def from_env(cls, **kwargs) -> "BacklogClient":
        load_dotenv()
        base_url = os.getenv("BACKLOG_BASE_URL", "").strip()
        api_key = os.getenv("BACKLOG_API_KEY", "").strip()
        access_token = os.getenv("BACKLOG_ACCESS_TOKEN", "").strip()
        return cls(
            base_url=base_url,
            api_key=api_key or None,
            access_token=access_token or None,
            **kwargs,
        )

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> "BacklogClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def request(self, spec: RequestSpec) -> Any:
        """
        Send a RequestSpec and return its parsed JSON body.
        - Raises BacklogHTTPError on non-2xx HTTP responses
        - Raises BacklogTransportError on network/timeout errors
        - Raises BacklogParseError if the body isn't valid JSON
        - Returns None for empty bodies
        """
        resp = await self._send(spec, event="api.request")
        self._raise_for_status(resp, spec)
        return self._safe_json(resp)

    async def execute(self, params: ApiRequest) -> Any:
        """Run a parameter object and validate the body into its response type."""
        spec = params.to_request_spec()
        payload = await self.request(spec)
        response_type = type(params).response_type
        if response_type is None:
            return payload
        try:
            return TypeAdapter(response_type).validate_python(payload)
        except ValidationError as exc:
            raise BacklogModelValidationError(
                f"Response did not match model for {spec.operation}: {exc}"
            ) from exc

    async def download(
        self,
        params: DownloadRequest,
        *,
        default_filename: str = DEFAULT_FILENAME,
    ) -> DownloadedFile:
        spec = params.to_request_spec()
        resp = await self._send(spec, event="api.download")
        self._raise_for_status(resp, spec)

        filename = (
            parse_disposition_filename(resp.headers.get("Content-Disposition"))
            or default_filename
        )
        content_type = resp.headers.get("Content-Type") or DEFAULT_CONTENT_TYPE
        self.log.debug(
            "api.download.file",
            extra={
                "operation": spec.operation,
                "path": spec.path,
                "content_type": content_type,
                "size": len(resp.content),
            },
        )
        return DownloadedFile(
            filename=filename,
            content_type=content_type,
            content=resp.content,
        )

    async def _send(self, spec: RequestSpec, *, event: str) -> httpx.Response:
        method = spec.method.value
        query = list(spec.query)
        if self._api_key:
            query.append(("apiKey", self._api_key))

        kwargs: Dict[str, Any] = {"params": query}
        if spec.form is not None:
            kwargs["content"] = str(httpx.QueryParams(spec.form)).encode("utf-8")
            kwargs["headers"] = {"Content-Type": "application/x-www-form-urlencoded"}

        async with self._lock:
            start = time.perf_counter()
            try:
                resp = await self.http.request(method, spec.path, **kwargs)
            except (httpx.ConnectError, httpx.ReadTimeout, httpx.ConnectTimeout) as exc:
                raise BacklogTransportError(
                    f"Network/timeout error calling {method} {spec.path}: {exc}"
                ) from exc
            except httpx.HTTPError as exc:
                raise BacklogTransportError(
                    f"HTTPX error calling {method} {spec.path}: {exc}"
                ) from exc

        duration_ms = int((time.perf_counter() - start) * 1000)
        # path only: the query carries the api key
        self.log.debug(
            event,
            extra={
                "operation": spec.operation,
                "method": method,
                "path": spec.path,
                "status": resp.status_code,
                "duration_ms": duration_ms,
            },
        )
        return resp

    def _raise_for_status(self, resp: httpx.Response, spec: RequestSpec) -> None:
        if 200 <= resp.status_code < 300:
            return
        err = self._to_http_error(resp, method=spec.method.value)
        self.log.debug(
            "api.error",
            extra={
                "operation": spec.operation,
                "method": err.method,
                "path": spec.path,
                "status": err.status_code,
                "error_codes": [e.code for e in err.errors] or None,
            },
        )
        raise err

    def _safe_json(self, resp: httpx.Response) -> Any:
        # Handle empty responses (204 No Content, etc.)
        if not resp.content:
            return None

        try:
            return resp.json()
        except ValueError as exc:
            snippet = (resp.text or "")[:500]
            raise BacklogParseError(
                f"Expected JSON from {resp.request.method} "
                f"{resp.request.url.path}, got non-JSON body snippet: "
                f"{snippet!r}"
            ) from exc

    def _to_http_error(self, resp: httpx.Response, *, method: str) -> BacklogHTTPError:
        # The full URL would leak the api key.
        url = resp.request.url.path
        response_json: Optional[Any] = None
        response_text: Optional[str] = None
        errors = None

        try:
            response_json = resp.json()
        except ValueError:
            response_text = (resp.text or "")[:500]

        if isinstance(response_json, dict):
            try:
                errors = BacklogApiErrorResponse.model_validate(response_json).errors
            except ValidationError:
                response_text = (resp.text or "")[:500]

        return BacklogHTTPError(
            status_code=resp.status_code,
            method=method,
            url=url,
            errors=errors,
            response_json=response_json,
            response_text=response_text,
        )


__all__ = ["BacklogClient", "DEFAULT_TIMEOUT_SECONDS"]
