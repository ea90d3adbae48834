"""Unit tests for bounded reading of multipart image uploads."""

import io

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from src.ba_common.errors import FileTooLargeError
from src.ba_nft.api.router import read_image_upload


class _TrackingFile(io.BytesIO):
    """BytesIO that records how many bytes each read() asked for."""

    def __init__(self, data: bytes) -> None:
        super().__init__(data)
        self.requested: list[int] = []

    def read(self, size: int | None = -1) -> bytes:  # type: ignore[override]
        self.requested.append(-1 if size is None else size)
        return super().read(size)


def _upload(data: bytes, size: int | None) -> tuple[UploadFile, _TrackingFile]:
    raw = _TrackingFile(data)
    upload = UploadFile(
        file=raw,
        size=size,
        filename="art.png",
        headers=Headers({"content-type": "image/png"}),
    )
    return upload, raw


@pytest.mark.asyncio
async def test_small_upload_is_read_whole() -> None:
    upload, _ = _upload(b"\x89PNG" * 4, size=16)
    image = await read_image_upload(upload, limit=64)
    assert image.content == b"\x89PNG" * 4
    assert image.filename == "art.png"
    assert image.content_type == "image/png"


@pytest.mark.asyncio
async def test_declared_size_over_limit_is_rejected_without_reading() -> None:
    upload, raw = _upload(b"x" * 100, size=100)
    with pytest.raises(FileTooLargeError) as exc_info:
        await read_image_upload(upload, limit=10)
    assert exc_info.value.http_status == 413
    assert raw.requested == []


@pytest.mark.asyncio
async def test_unknown_size_reads_at_most_limit_plus_one() -> None:
    upload, raw = _upload(b"x" * 10_000, size=None)
    with pytest.raises(FileTooLargeError):
        await read_image_upload(upload, limit=10)
    assert raw.requested == [11]


@pytest.mark.asyncio
async def test_exactly_at_limit_is_accepted() -> None:
    upload, _ = _upload(b"x" * 10, size=None)
    image = await read_image_upload(upload, limit=10)
    assert len(image.content) == 10
