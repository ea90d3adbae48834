"""End-to-end profile flows."""

import pytest
from httpx import AsyncClient

from tests.helpers import BUYER, OTHER, SELLER, auth_headers

pytestmark = pytest.mark.asyncio


async def test_profile_created_on_first_read(client: AsyncClient) -> None:
    resp = await client.get(f"/api/users/{SELLER}")
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["address"] == SELLER
    assert data["stats"] == {
        "nftsCreated": 0, "nftsOwned": 0, "totalSales": 0, "followers": 0, "following": 0,
    }


async def test_invalid_address(client: AsyncClient) -> None:
    resp = await client.get("/api/users/alice")
    assert resp.status_code == 400
    assert resp.json()["code"] == 1005


async def test_update_own_profile_merges_social(client: AsyncClient) -> None:
    headers = auth_headers(SELLER)
    await client.put(f"/api/users/{SELLER}", json={"social": {"twitter": "@s"}}, headers=headers)
    resp = await client.put(
        f"/api/users/{SELLER}",
        json={"bio": "Painter", "social": {"website": "https://s.test"}},
        headers=headers,
    )
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["bio"] == "Painter"
    assert data["social"] == {"twitter": "@s", "website": "https://s.test"}
    assert data["updatedAt"] is not None


async def test_cannot_update_someone_else(client: AsyncClient) -> None:
    resp = await client.put(f"/api/users/{SELLER}", json={"bio": "x"}, headers=auth_headers(OTHER))
    assert resp.status_code == 403
    assert resp.json()["code"] == 4001


async def test_owned_nfts_listings_and_sales(
    client: AsyncClient, create_nft, create_listing
) -> None:
    nft = await create_nft()
    listing = await create_listing(nft_id=nft["id"], price=2, quantity=3)
    await client.post(
        "/api/marketplace/buy",
        json={"listingId": listing["id"], "quantity": 1},
        headers=auth_headers(BUYER),
    )

    owned = (await client.get(f"/api/users/{SELLER}/nfts")).json()["data"]
    assert [n["id"] for n in owned["items"]] == [nft["id"]]

    listings = (await client.get(f"/api/users/{SELLER}/listings")).json()["data"]
    assert [lst["quantity"] for lst in listings["items"]] == [2]

    sales = (await client.get(f"/api/users/{SELLER}/sales")).json()["data"]
    assert sales["pagination"]["total"] == 1
    assert sales["items"][0]["buyer"] == BUYER

    profile = (await client.get(f"/api/users/{SELLER}")).json()["data"]
    assert profile["stats"]["nftsCreated"] == 1
    assert profile["stats"]["totalSales"] == 1
