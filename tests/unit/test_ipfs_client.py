"""Unit tests for PinataClient over httpx.MockTransport."""

import json

import httpx
import pytest

from src.ba_common.errors import IpfsUploadError
from src.ba_ipfs.client import PinataClient, sha256_hex


def _client(handler) -> PinataClient:  # type: ignore[no-untyped-def]
    return PinataClient(
        api_url="https://pinata.test/",
        jwt="secret-jwt",
        gateway="https://gw.test/",
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_upload_json_returns_cid_and_sends_bearer() -> None:
    seen: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["auth"] = request.headers["authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"IpfsHash": "bafymeta"})

    cid = await _client(handler).upload_json({"name": "Sunrise"})
    assert cid == "bafymeta"
    assert seen == {
        "path": "/pinning/pinJSONToIPFS",
        "auth": "Bearer secret-jwt",
        "body": {"name": "Sunrise"},
    }


@pytest.mark.asyncio
async def test_upload_file_is_multipart() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/pinning/pinFileToIPFS"
        assert request.headers["content-type"].startswith("multipart/form-data")
        assert b"art.png" in request.content
        return httpx.Response(200, json={"IpfsHash": "bafyimg"})

    assert await _client(handler).upload_file(b"\x89PNG", "art.png", "image/png") == "bafyimg"


@pytest.mark.asyncio
async def test_http_error_raises_upload_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"error": "bad jwt"})

    with pytest.raises(IpfsUploadError):
        await _client(handler).upload_json({})


@pytest.mark.asyncio
async def test_missing_hash_raises_upload_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={})

    with pytest.raises(IpfsUploadError, match="no IpfsHash"):
        await _client(handler).upload_json({})


@pytest.mark.asyncio
async def test_non_json_success_body_raises_upload_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>gateway timeout</html>")

    with pytest.raises(IpfsUploadError):
        await _client(handler).upload_file(b"\x89PNG", "art.png", "image/png")


def test_gateway_url_and_hash() -> None:
    client = _client(lambda r: httpx.Response(200))
    assert client.gateway_url("bafy") == "https://gw.test/ipfs/bafy"
    assert sha256_hex(b"") == "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
