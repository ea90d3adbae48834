"""Pinata pinning client.

Uploads image bytes and JSON metadata, returns IPFS CIDs, and builds gateway
URLs. Upload failures raise IpfsUploadError; nothing falls back silently.
"""

import hashlib
import logging
from typing import Any, Protocol

import httpx

from src.ba_common.errors import IpfsUploadError

logger = logging.getLogger("ba.ipfs")


class IpfsServiceProtocol(Protocol):
    async def upload_file(self, content: bytes, filename: str, content_type: str) -> str: ...

    async def upload_json(self, metadata: dict[str, Any]) -> str: ...

    def gateway_url(self, cid: str) -> str: ...


def sha256_hex(content: bytes) -> str:
    """SHA-256 of the raw upload, stored for duplicate/fraud detection."""
    return hashlib.sha256(content).hexdigest()


class PinataClient:
    def __init__(
        self,
        api_url: str,
        jwt: str,
        gateway: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_url = api_url.rstrip("/")
        self._jwt = jwt
        self._gateway = gateway.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._api_url,
            headers={"Authorization": f"Bearer {self._jwt}"},
            timeout=self._timeout,
            transport=self._transport,
        )

    async def upload_file(self, content: bytes, filename: str, content_type: str) -> str:
        files = {"file": (filename, content, content_type)}
        return await self._pin("/pinning/pinFileToIPFS", files=files)

    async def upload_json(self, metadata: dict[str, Any]) -> str:
        return await self._pin("/pinning/pinJSONToIPFS", json=metadata)

    def gateway_url(self, cid: str) -> str:
        return f"{self._gateway}/ipfs/{cid}"

    async def _pin(self, path: str, **kwargs: Any) -> str:
        try:
            async with self._client() as client:
                resp = await client.post(path, **kwargs)
                resp.raise_for_status()
                payload = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("IPFS %s failed: %s", path, exc)
            raise IpfsUploadError(str(exc)) from exc

        cid = payload.get("IpfsHash") if isinstance(payload, dict) else None
        if not cid:
            raise IpfsUploadError(f"{path} returned no IpfsHash")
        logger.info("IPFS %s pinned %s", path, cid)
        return str(cid)
