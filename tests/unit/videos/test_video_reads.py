from __future__ import annotations

import pytest

from fbmarketing.errors import ApiError, DecodeError, RateLimitError
from fbmarketing.schemas.videos import VIDEO_FIELDS, Video
from fbmarketing.videos import VideoService
from tests.mocks.graph import MockGraphClient, video_payload


class FailingClient:
    def __init__(self, error: Exception) -> None:
        self.error = error

    async def get_json(self, route):
        raise self.error


@pytest.mark.asyncio
async def test_get_returns_decoded_video():
    client = MockGraphClient(videos={"123": video_payload("123")})
    service = VideoService(client=client)  # type: ignore[arg-type]

    video = await service.get("123")

    assert isinstance(video, Video)
    assert video.id == "123"
    assert video.from_.name == "Brand Page"
    assert [fmt.filter for fmt in video.formats] == ["native", "130x130"]
    assert video.status.video_status == "ready"
    assert video.length == 12.5
    assert client.get_routes == [
        "/v20.0/123?fields=" + "%2C".join(VIDEO_FIELDS)
    ]


@pytest.mark.asyncio
async def test_get_missing_video_returns_none():
    service = VideoService(client=MockGraphClient())  # type: ignore[arg-type]

    assert await service.get("does-not-exist") is None


@pytest.mark.asyncio
async def test_get_surfaces_other_api_errors():
    error = RateLimitError("Too many calls", status_code=400, code=17)
    service = VideoService(client=FailingClient(error))  # type: ignore[arg-type]

    with pytest.raises(ApiError) as exc_info:
        await service.get("123")

    assert exc_info.value is error


@pytest.mark.asyncio
async def test_get_rejects_undecodable_payload():
    client = MockGraphClient(videos={"123": {"id": "123", "format": "not-a-list"}})
    service = VideoService(client=client)  # type: ignore[arg-type]

    with pytest.raises(DecodeError):
        await service.get("123")


@pytest.mark.asyncio
async def test_get_requires_identifier():
    service = VideoService(client=MockGraphClient())  # type: ignore[arg-type]

    with pytest.raises(ValueError):
        await service.get("")


@pytest.mark.asyncio
async def test_version_prefix_is_configurable():
    client = MockGraphClient(videos={"9": video_payload("9")})
    service = VideoService(client=client, version="v19.0")  # type: ignore[arg-type]

    await service.get("9")

    assert client.get_routes[0].startswith("/v19.0/9?")
