"""Async bindings for the ``advideos`` edge of the Marketing Graph API.

The package exposes :class:`VideoService` for single reads, chunked
uploads and streaming account listings, built on top of the thin
:class:`ApiClient` HTTP layer.
"""

from .api import ApiClient, Route
from .core.config import ClientConfig
from .errors import (
    ApiError,
    ClientError,
    DecodeError,
    NotFoundError,
    RateLimitError,
    TransportError,
    UploadError,
    UploadProtocolError,
    is_not_found,
    is_rate_limited,
)
from .schemas.videos import Video
from .videos import VideoService

__all__ = [
    "ApiClient",
    "ApiError",
    "ClientConfig",
    "ClientError",
    "DecodeError",
    "NotFoundError",
    "RateLimitError",
    "Route",
    "TransportError",
    "UploadError",
    "UploadProtocolError",
    "Video",
    "VideoService",
    "is_not_found",
    "is_rate_limited",
]
