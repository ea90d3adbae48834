"""Integration-test fixtures: factories that drive the public HTTP API."""

from collections.abc import Awaitable, Callable
from typing import Any

import pytest
from httpx import AsyncClient

from tests.helpers import PNG_BYTES, SELLER, auth_headers

NFTFactory = Callable[..., Awaitable[dict[str, Any]]]
ListingFactory = Callable[..., Awaitable[dict[str, Any]]]


@pytest.fixture
def create_nft(client: AsyncClient) -> NFTFactory:
    async def _create(
        creator: str = SELLER,
        name: str = "Sunrise",
        category: str = "art",
        royalty: str = "5",
    ) -> dict[str, Any]:
        resp = await client.post(
            "/api/nfts",
            data={
                "name": name,
                "description": "A warm morning",
                "category": category,
                "royaltyPercentage": royalty,
            },
            files={"imageFile": ("sunrise.png", PNG_BYTES, "image/png")},
            headers=auth_headers(creator),
        )
        assert resp.status_code == 201, resp.text
        return resp.json()["data"]

    return _create


@pytest.fixture
def create_listing(client: AsyncClient) -> ListingFactory:
    async def _create(
        seller: str = SELLER, nft_id: int = 1, price: float = 2, quantity: int = 5
    ) -> dict[str, Any]:
        resp = await client.post(
            "/api/marketplace/listings",
            json={"nftId": nft_id, "price": price, "quantity": quantity},
            headers=auth_headers(seller),
        )
        assert resp.status_code == 201, resp.text
        return resp.json()["data"]

    return _create
