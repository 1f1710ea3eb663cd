"""Client configuration for the marketing API bindings.

Values are read from environment variables prefixed with
``FBMARKETING_``. The access token is the only secret; it has no default
so that a misconfigured deployment fails when the client is built rather
than on the first request.
"""

from __future__ import annotations

from typing import Any, cast

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_VERSION = "v20.0"
DEFAULT_BASE_URL = "https://graph.facebook.com"


class ClientConfig(BaseSettings):
    """Pydantic settings container for :class:`~fbmarketing.api.ApiClient`."""

    model_config = cast(Any, SettingsConfigDict(env_prefix="FBMARKETING_"))

    access_token: str | None = Field(
        default=None,
        description="Graph API access token sent with every request.",
    )
    api_version: str = Field(
        default=DEFAULT_API_VERSION,
        min_length=1,
        description="Versioned path prefix, e.g. ``v20.0``.",
    )
    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Scheme and host of the Graph API.",
    )
    timeout_seconds: float = Field(
        default=60.0,
        gt=0.0,
        description="Timeout applied to every HTTP request in seconds.",
    )
    list_page_size: int = Field(
        default=1000,
        ge=1,
        le=5000,
        description="Page size requested when listing account videos.",
    )
    relay_size: int = Field(
        default=64,
        ge=1,
        description="Capacity of the queue between list fetch and decode tasks.",
    )

    @classmethod
    def build_default(cls) -> "ClientConfig":
        """Construct configuration from the environment."""

        return cls()


__all__ = ["ClientConfig", "DEFAULT_API_VERSION", "DEFAULT_BASE_URL"]
