"""Ad video bindings: single reads, chunked uploads and streaming lists."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, BinaryIO, TypeVar

import structlog
from pydantic import BaseModel, ValidationError

from .api.client import ApiClient
from .api.route import Route
from .core.config import DEFAULT_API_VERSION, ClientConfig
from .errors import (
    ClientError,
    DecodeError,
    UploadError,
    UploadProtocolError,
    is_not_found,
)
from .schemas.videos import (
    VIDEO_FIELDS,
    UploadFinishRequest,
    UploadFinishResponse,
    UploadSession,
    UploadStartRequest,
    UploadStartResponse,
    UploadTransferResponse,
    Video,
)

logger = structlog.get_logger(__name__)

M = TypeVar("M", bound=BaseModel)

_END_OF_LIST = None


@dataclass(slots=True)
class VideoService:
    """Works with the ``advideos`` edge of an ad account."""

    client: ApiClient
    version: str = DEFAULT_API_VERSION
    page_size: int = 1000
    relay_size: int = 64
    log: Any = field(default_factory=lambda: logger)

    @classmethod
    def from_config(cls, config: ClientConfig) -> "VideoService":
        return cls(
            client=ApiClient.from_config(config),
            version=config.api_version,
            page_size=config.list_page_size,
            relay_size=config.relay_size,
        )

    async def get(self, video_id: str) -> Video | None:
        """Return a single video, or ``None`` when it does not exist."""

        if not video_id:
            raise ValueError("video_id is required")
        route = Route.new(self.version, "/%s", video_id).fields(*VIDEO_FIELDS)
        try:
            body = await self.client.get_json(route)
        except ClientError as exc:
            if is_not_found(exc):
                self.log.info("videos.get.not_found", video_id=video_id)
                return None
            raise
        return _decode(Video, body, what=f"video {video_id}")

    async def upload(
        self, account_id: str, title: str, size: int, content: BinaryIO
    ) -> Video:
        """Upload ``size`` bytes from ``content`` into ``account_id``.

        Runs the start/transfer/finish phases in order. The platform
        dictates the chunk window after every phase, so each transfer
        sends at most ``end_offset - start_offset`` bytes. Any failure
        aborts the upload; nothing is retried or resumed.
        """

        if not account_id:
            raise ValueError("account_id is required")
        if size < 0:
            raise ValueError("size must not be negative")
        route = Route.new(self.version, "/act_%s/advideos", account_id)

        body = await self.client.post_json(route, UploadStartRequest(file_size=size))
        session = UploadSession.started(
            _decode(UploadStartResponse, body, what="upload start response")
        )
        self.log.info(
            "videos.upload.start",
            account_id=account_id,
            session_id=session.session_id,
            video_id=session.video_id,
            file_size=size,
        )

        remaining = size
        chunks = 0
        while remaining > 0:
            if session.window_size <= 0:
                raise UploadProtocolError(
                    f"upload session {session.session_id} granted an empty window "
                    f"at offset {session.start_offset} with {remaining} bytes left"
                )
            chunk_size = min(session.window_size, remaining)
            chunk = await asyncio.to_thread(_read_exactly, content, chunk_size)
            body = await self.client.upload_file(
                route,
                title,
                chunk,
                {
                    "upload_phase": "transfer",
                    "upload_session_id": session.session_id,
                    "start_offset": str(session.start_offset),
                },
            )
            self.log.debug(
                "videos.upload.chunk",
                session_id=session.session_id,
                start_offset=session.start_offset,
                chunk_size=chunk_size,
            )
            session = session.advance(
                _decode(UploadTransferResponse, body, what="upload transfer response")
            )
            remaining -= chunk_size
            chunks += 1

        body = await self.client.post_json(
            route,
            UploadFinishRequest(upload_session_id=session.session_id, title=title),
        )
        finished = _decode(UploadFinishResponse, body, what="upload finish response")
        if not finished.success:
            raise UploadError(f"upload session {session.session_id} was not finished")
        self.log.info(
            "videos.upload.finish",
            account_id=account_id,
            session_id=session.session_id,
            video_id=session.video_id,
            chunks=chunks,
        )

        video = await self.get(session.video_id)
        if video is None:
            raise UploadError(f"uploaded video {session.video_id} could not be read back")
        return video

    async def read_list(self, account_id: str, output: asyncio.Queue[Video]) -> None:
        """Stream every video of ``account_id`` into ``output``.

        A fetch task pages through the edge while a decode task turns raw
        entries into :class:`Video` objects. The first failure in either
        task cancels the other and is raised here. ``output`` belongs to
        the caller and is left untouched once this returns.
        """

        if not account_id:
            raise ValueError("account_id is required")
        route = (
            Route.new(self.version, "/act_%s/advideos", account_id)
            .fields(*VIDEO_FIELDS)
            .limit(self.page_size)
        )
        relay: asyncio.Queue[dict[str, Any] | None] = asyncio.Queue(maxsize=self.relay_size)

        fetch = asyncio.create_task(self._fetch(route, relay))
        decode = asyncio.create_task(self._decode_into(relay, output))
        tasks = (fetch, decode)
        try:
            done, _ = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
        finally:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)

        for task in tasks:
            if task not in done or task.cancelled():
                continue
            error = task.exception()
            if error is not None:
                self.log.warning("videos.list.failed", account_id=account_id, error=str(error))
                raise error
        self.log.info("videos.list.done", account_id=account_id, videos=decode.result())

    async def _fetch(
        self, route: Route, relay: asyncio.Queue[dict[str, Any] | None]
    ) -> int:
        entries = await self.client.read_list(route, relay)
        await relay.put(_END_OF_LIST)
        return entries

    async def _decode_into(
        self,
        relay: asyncio.Queue[dict[str, Any] | None],
        output: asyncio.Queue[Video],
    ) -> int:
        delivered = 0
        while True:
            entry = await relay.get()
            if entry is _END_OF_LIST:
                return delivered
            await output.put(_decode(Video, entry, what="video list entry"))
            delivered += 1


def _decode(model: type[M], body: Any, *, what: str) -> M:
    try:
        return model.model_validate(body)
    except ValidationError as exc:
        raise DecodeError(f"malformed {what}: {exc}") from exc


def _read_exactly(content: BinaryIO, size: int) -> bytes:
    """Read ``size`` bytes, tolerating short reads from pipes and sockets."""

    buffer = bytearray()
    while len(buffer) < size:
        data = content.read(size - len(buffer))
        if not data:
            raise UploadError(
                f"content stream ended after {len(buffer)} of {size} chunk bytes"
            )
        buffer.extend(data)
    return bytes(buffer)


__all__ = ["VideoService"]
