from __future__ import annotations

import pytest

from fbmarketing.errors import UploadProtocolError
from fbmarketing.schemas.videos import (
    UploadSession,
    UploadStartRequest,
    UploadStartResponse,
    UploadTransferResponse,
    Video,
)


def test_start_response_decodes_string_offsets():
    response = UploadStartResponse.model_validate(
        {
            "upload_session_id": "s1",
            "video_id": "v1",
            "start_offset": "0",
            "end_offset": "1048576",
        }
    )
    session = UploadSession.started(response)

    assert (session.start_offset, session.end_offset) == (0, 1048576)
    assert session.window_size == 1048576


def test_session_advance_moves_window_forward():
    session = UploadSession("s1", "v1", 0, 100)

    advanced = session.advance(UploadTransferResponse(start_offset="100", end_offset="250"))

    assert (advanced.start_offset, advanced.end_offset) == (100, 250)
    assert (session.start_offset, session.end_offset) == (0, 100)
    assert advanced.session_id == "s1"


def test_session_rejects_backwards_offsets():
    session = UploadSession("s1", "v1", 500, 600)

    with pytest.raises(UploadProtocolError):
        session.advance(UploadTransferResponse(start_offset=400, end_offset=600))


def test_session_rejects_inverted_window():
    session = UploadSession("s1", "v1", 0, 100)

    with pytest.raises(UploadProtocolError):
        session.advance(UploadTransferResponse(start_offset=100, end_offset=50))


def test_start_request_payload():
    assert UploadStartRequest(file_size=10).model_dump() == {"upload_phase": "start", "file_size": 10}


def test_video_ignores_unknown_fields_and_maps_aliases():
    video = Video.model_validate(
        {
            "id": "1",
            "from": {"id": "p", "name": "Page"},
            "format": [{"filter": "native", "width": 10, "height": 20}],
            "privacy": {"value": "EVERYONE"},
            "auto_generated_captions": {"data": [{"id": "c1"}]},
            "brand_new_field": {"nested": True},
        }
    )

    assert video.from_.name == "Page"
    assert video.formats[0].width == 10
    assert video.privacy.value == "EVERYONE"
    assert [caption.id for caption in video.auto_generated_captions.data] == ["c1"]
    assert video.title == ""


def test_video_is_immutable():
    video = Video(id="1")

    with pytest.raises(Exception):
        video.title = "changed"  # type: ignore[misc]
