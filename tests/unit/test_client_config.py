from __future__ import annotations

import pytest
from pydantic import ValidationError

from fbmarketing.core.config import ClientConfig
from fbmarketing.videos import VideoService


def test_defaults(monkeypatch):
    for name in ("ACCESS_TOKEN", "API_VERSION", "BASE_URL", "LIST_PAGE_SIZE", "RELAY_SIZE"):
        monkeypatch.delenv(f"FBMARKETING_{name}", raising=False)

    config = ClientConfig.build_default()

    assert config.access_token is None
    assert config.api_version == "v20.0"
    assert config.base_url == "https://graph.facebook.com"
    assert config.list_page_size == 1000
    assert config.relay_size == 64


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("FBMARKETING_ACCESS_TOKEN", "env-token")
    monkeypatch.setenv("FBMARKETING_API_VERSION", "v19.0")
    monkeypatch.setenv("FBMARKETING_LIST_PAGE_SIZE", "250")

    config = ClientConfig()

    assert config.access_token == "env-token"
    assert config.api_version == "v19.0"
    assert config.list_page_size == 250


@pytest.mark.parametrize(
    "overrides",
    [{"timeout_seconds": 0}, {"list_page_size": 0}, {"list_page_size": 5001}, {"relay_size": 0}],
)
def test_invalid_values_are_rejected(overrides):
    with pytest.raises(ValidationError):
        ClientConfig(**overrides)


@pytest.mark.asyncio
async def test_video_service_from_config():
    config = ClientConfig(access_token="tok", api_version="v18.0", list_page_size=10, relay_size=2)

    service = VideoService.from_config(config)
    try:
        assert service.version == "v18.0"
        assert service.page_size == 10
        assert service.relay_size == 2
        assert service.client.access_token == "tok"
    finally:
        await service.client.aclose()
