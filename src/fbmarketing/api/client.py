"""Authenticated HTTP client for the Marketing Graph API."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlsplit

import httpx
import structlog
from pydantic import BaseModel

from ..core.config import ClientConfig
from ..errors import DecodeError, TransportError, error_from_response
from .route import Route

logger = structlog.get_logger(__name__)

# Multipart part name the advideos edge expects for chunk payloads.
UPLOAD_FILE_FIELD = "video_file_chunk"


@dataclass(slots=True)
class ApiClient:
    """Convenience wrapper around :class:`httpx.AsyncClient` speaking Graph JSON.

    The client never retries. Error responses are translated into the
    :mod:`fbmarketing.errors` hierarchy so that callers can tell a missing
    object from a failed request.
    """

    http: httpx.AsyncClient
    access_token: str = field(repr=False)
    log: Any = field(default_factory=lambda: logger)

    @classmethod
    def from_config(cls, config: ClientConfig) -> "ApiClient":
        """Build a client owning its own :class:`httpx.AsyncClient`."""

        if not config.access_token:
            raise ValueError("FBMARKETING_ACCESS_TOKEN is not set")
        http = httpx.AsyncClient(
            base_url=config.base_url,
            timeout=config.timeout_seconds,
        )
        return cls(http=http, access_token=config.access_token)

    async def aclose(self) -> None:
        await self.http.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, exc_type, exc_value, traceback) -> None:
        await self.aclose()

    async def get_json(self, route: Route | str) -> dict[str, Any]:
        """GET ``route`` and return the decoded JSON object."""

        return await self._request("GET", str(route))

    async def post_json(
        self, route: Route | str, body: BaseModel | Mapping[str, Any]
    ) -> dict[str, Any]:
        """POST ``body`` as JSON and return the decoded JSON object."""

        if isinstance(body, BaseModel):
            payload = body.model_dump(mode="json")
        else:
            payload = dict(body)
        return await self._request("POST", str(route), json=payload)

    async def upload_file(
        self,
        route: Route | str,
        filename: str,
        content: bytes,
        fields: Mapping[str, str],
    ) -> dict[str, Any]:
        """POST a multipart form with ``fields`` and one binary file part."""

        files = {UPLOAD_FILE_FIELD: (filename, content, "application/octet-stream")}
        return await self._request("POST", str(route), data=dict(fields), files=files)

    async def read_list(
        self, route: Route | str, output: asyncio.Queue[dict[str, Any]]
    ) -> int:
        """Push every entry of a paginated edge into ``output``.

        Follows ``paging.next`` until the platform stops returning one.
        ``output`` is never closed here; the caller decides how the end of
        the list is signalled. Returns the number of entries pushed.
        """

        url: str | None = str(route)
        pushed = 0
        pages = 0
        while url:
            body = await self.get_json(url)
            data = body.get("data")
            if not isinstance(data, list):
                raise DecodeError("paginated response has no 'data' list")
            for entry in data:
                await output.put(entry)
                pushed += 1
            pages += 1
            if not data:
                break
            paging = body.get("paging")
            url = paging.get("next") if isinstance(paging, Mapping) else None

        self.log.debug(
            "api.list.done", path=_path_of(str(route)), pages=pages, entries=pushed
        )
        return pushed

    async def _request(self, method: str, url: str, **kwargs: Any) -> dict[str, Any]:
        path = _path_of(url)
        # The route keeps its own query (fields, limit, paging cursors).
        request_url = httpx.URL(url).copy_merge_params({"access_token": self.access_token})
        try:
            response = await self.http.request(method, request_url, **kwargs)
        except httpx.HTTPError as exc:
            self.log.warning(
                "api.request.transport_error", method=method, path=path, error=str(exc)
            )
            raise TransportError(f"{method} {path} failed: {exc}") from exc

        try:
            body = response.json()
        except ValueError:
            body = None

        if response.status_code >= 400:
            error = error_from_response(
                response.status_code, body if isinstance(body, dict) else None
            )
            self.log.warning(
                "api.request.error",
                method=method,
                path=path,
                status_code=response.status_code,
                error_code=error.code,
                error_subcode=error.subcode,
                fbtrace_id=error.fbtrace_id,
            )
            raise error

        if not isinstance(body, dict):
            raise DecodeError(
                f"{method} {path} returned a non-object body "
                f"(status={response.status_code})"
            )
        return body


def _path_of(url: str) -> str:
    """Strip scheme, host and query so tokens in ``paging.next`` never reach logs."""

    return urlsplit(url).path or url


__all__ = ["ApiClient", "UPLOAD_FILE_FIELD"]
