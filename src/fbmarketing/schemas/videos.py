"""Pydantic models for the ``advideos`` edge and its upload protocol."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field

from ..errors import UploadProtocolError

__all__ = [
    "VIDEO_FIELDS",
    "CaptionCursors",
    "CaptionList",
    "CaptionPaging",
    "CaptionRef",
    "UploadFinishRequest",
    "UploadFinishResponse",
    "UploadSession",
    "UploadStartRequest",
    "UploadStartResponse",
    "UploadTransferResponse",
    "Video",
    "VideoFormat",
    "VideoOwner",
    "VideoPrivacy",
    "VideoStatus",
]

VIDEO_FIELDS = (
    "title",
    "id",
    "picture",
    "description",
    "from",
    "format",
    "length",
    "status",
)
"""Field projection requested for every video read."""


class _GraphObject(BaseModel):
    """Graph API objects omit unrequested fields and grow new ones over time."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)


class CaptionRef(_GraphObject):
    id: str = ""


class CaptionCursors(_GraphObject):
    before: str = ""
    after: str = ""


class CaptionPaging(_GraphObject):
    cursors: CaptionCursors = Field(default_factory=CaptionCursors)


class CaptionList(_GraphObject):
    """Auto-generated caption references attached to a video."""

    data: List[CaptionRef] = Field(default_factory=list)
    paging: CaptionPaging = Field(default_factory=CaptionPaging)


class VideoFormat(_GraphObject):
    """One rendition of the video."""

    embed_html: str = ""
    filter: str = ""
    height: int = 0
    picture: str = ""
    width: int = 0


class VideoOwner(_GraphObject):
    id: str = ""
    name: str = ""


class VideoPrivacy(_GraphObject):
    allow: str = ""
    deny: str = ""
    description: str = ""
    friends: str = ""
    networks: str = ""
    value: str = ""


class VideoStatus(_GraphObject):
    video_status: str = ""


class Video(_GraphObject):
    """Snapshot of an ad video as returned by the Graph API."""

    id: str = ""
    title: str = ""
    description: str = ""
    content_category: str = ""
    created_time: str = ""
    updated_time: str = ""
    embed_html: str = ""
    embeddable: bool = False
    icon: str = ""
    length: float = 0.0
    monetization_status: str = ""
    picture: str = ""
    is_crosspost_video: bool = False
    is_crossposting_eligible: bool = False
    is_instagram_eligible: bool = False
    permalink_url: str = ""
    published: bool = False
    source: str = ""
    from_: VideoOwner = Field(default_factory=VideoOwner, alias="from")
    privacy: VideoPrivacy = Field(default_factory=VideoPrivacy)
    formats: List[VideoFormat] = Field(default_factory=list, alias="format")
    status: VideoStatus = Field(default_factory=VideoStatus)
    auto_generated_captions: CaptionList = Field(default_factory=CaptionList)


class UploadStartRequest(BaseModel):
    upload_phase: Literal["start"] = "start"
    file_size: int = Field(..., ge=0)


class UploadFinishRequest(BaseModel):
    upload_phase: Literal["finish"] = "finish"
    upload_session_id: str
    title: str


class UploadTransferResponse(BaseModel):
    """Chunk window granted for the next transfer.

    The platform sends offsets as decimal strings; pydantic coerces them.
    """

    model_config = ConfigDict(extra="ignore")

    start_offset: int = Field(..., ge=0)
    end_offset: int = Field(..., ge=0)


class UploadStartResponse(UploadTransferResponse):
    upload_session_id: str = Field(..., min_length=1)
    video_id: str = Field(..., min_length=1)


class UploadFinishResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    success: bool = False


@dataclass(frozen=True, slots=True)
class UploadSession:
    """Server-assigned upload context and the chunk window it currently grants."""

    session_id: str
    video_id: str
    start_offset: int
    end_offset: int

    @classmethod
    def started(cls, response: UploadStartResponse) -> "UploadSession":
        session = cls(
            session_id=response.upload_session_id,
            video_id=response.video_id,
            start_offset=response.start_offset,
            end_offset=response.end_offset,
        )
        session._check_window()
        return session

    @property
    def window_size(self) -> int:
        return self.end_offset - self.start_offset

    def advance(self, window: UploadTransferResponse) -> "UploadSession":
        """Return the session moved to the window granted by ``window``."""

        if window.start_offset < self.start_offset:
            raise UploadProtocolError(
                f"upload session {self.session_id} moved start_offset backwards "
                f"({self.start_offset} -> {window.start_offset})"
            )
        session = replace(
            self, start_offset=window.start_offset, end_offset=window.end_offset
        )
        session._check_window()
        return session

    def _check_window(self) -> None:
        if self.end_offset < self.start_offset:
            raise UploadProtocolError(
                f"upload session {self.session_id} returned an inverted window "
                f"[{self.start_offset}, {self.end_offset})"
            )
