"""Client level exceptions and Graph API error classification."""

from __future__ import annotations

from typing import Any, Mapping

__all__ = [
    "ClientError",
    "TransportError",
    "DecodeError",
    "UploadProtocolError",
    "ApiError",
    "NotFoundError",
    "RateLimitError",
    "UploadError",
    "error_from_response",
    "is_not_found",
    "is_rate_limited",
]

# Graph API codes for application, user, page and custom rate limits.
RATE_LIMIT_CODES = frozenset({4, 17, 32, 613})
# Code 100 with subcode 33: object does not exist or cannot be loaded.
NOT_FOUND_CODE = 100
NOT_FOUND_SUBCODE = 33


class ClientError(Exception):
    """Base class for marketing API client errors."""


class TransportError(ClientError):
    """Raised when the request never produced an HTTP response."""


class DecodeError(ClientError):
    """Raised when a response body cannot be decoded into the expected shape."""


class UploadProtocolError(DecodeError):
    """Raised when the upload session window violates the chunked protocol."""


class UploadError(ClientError):
    """Raised when a chunked upload cannot be completed."""


class ApiError(ClientError):
    """Non-2xx response carrying the Graph API error envelope."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        code: int | None = None,
        subcode: int | None = None,
        error_type: str | None = None,
        fbtrace_id: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code
        self.subcode = subcode
        self.error_type = error_type
        self.fbtrace_id = fbtrace_id

    def __str__(self) -> str:
        parts = [f"status={self.status_code}"]
        if self.code is not None:
            parts.append(f"code={self.code}")
        if self.subcode is not None:
            parts.append(f"subcode={self.subcode}")
        return f"{self.message} ({' '.join(parts)})"


class NotFoundError(ApiError):
    """Raised when the requested object does not exist."""


class RateLimitError(ApiError):
    """Raised when the platform throttles the caller."""


def _as_int(value: Any) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def error_from_response(status_code: int, body: Mapping[str, Any] | None) -> ApiError:
    """Build the most specific :class:`ApiError` for an error response."""

    error = (body or {}).get("error")
    if not isinstance(error, Mapping):
        error = {}
    message = str(error.get("message") or f"Graph API request failed with status {status_code}")
    code = _as_int(error.get("code"))
    subcode = _as_int(error.get("error_subcode"))
    kwargs = {
        "status_code": status_code,
        "code": code,
        "subcode": subcode,
        "error_type": error.get("type"),
        "fbtrace_id": error.get("fbtrace_id"),
    }

    if status_code == 404 or (code == NOT_FOUND_CODE and subcode == NOT_FOUND_SUBCODE):
        return NotFoundError(message, **kwargs)
    if status_code == 429 or code in RATE_LIMIT_CODES:
        return RateLimitError(message, **kwargs)
    return ApiError(message, **kwargs)


def is_not_found(exc: BaseException) -> bool:
    """Return ``True`` when ``exc`` reports a missing object."""

    return isinstance(exc, NotFoundError)


def is_rate_limited(exc: BaseException) -> bool:
    return isinstance(exc, RateLimitError)
