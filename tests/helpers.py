"""Test doubles and constants shared by unit and integration tests."""

import itertools
from typing import Any

from src.ba_gateway.auth.jwt_handler import create_access_token

SELLER = "0x" + "a1" * 20
BUYER = "0x" + "b2" * 20
OTHER = "0x" + "c3" * 20

# 1x1 transparent PNG
PNG_BYTES = bytes.fromhex(
    "89504e470d0a1a0a0000000d49484452000000010000000108060000001f15c489"
    "0000000d49444154789c6360000002000154a24f5d0000000049454e44ae426082"
)


class FakeIpfs:
    """Records uploads and hands out deterministic CIDs."""

    def __init__(self) -> None:
        self.files: list[tuple[str, str, int]] = []
        self.documents: list[dict[str, Any]] = []
        self._seq = itertools.count(1)

    async def upload_file(self, content: bytes, filename: str, content_type: str) -> str:
        self.files.append((filename, content_type, len(content)))
        return f"bafyimage{next(self._seq)}"

    async def upload_json(self, metadata: dict[str, Any]) -> str:
        self.documents.append(metadata)
        return f"bafymeta{next(self._seq)}"

    def gateway_url(self, cid: str) -> str:
        return f"https://gateway.test/ipfs/{cid}"


def auth_headers(address: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(address)}"}
