"""Unit tests for the PostgreSQL repositories using a mocked session factory."""

import json
from datetime import UTC, datetime
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.ba_marketplace.domain.models import Listing, Purchase
from src.ba_marketplace.infrastructure.persistence import ListingRepository, PurchaseRepository
from src.ba_nft.infrastructure.persistence import NFTRepository
from src.ba_user.domain.models import ProfileUpdate
from src.ba_user.infrastructure.persistence import UserProfileRepository
from tests.helpers import BUYER, SELLER

_NOW = datetime(2026, 1, 1, tzinfo=UTC)


def _make_factory(fetchone: object = None, fetchall: list | None = None) -> tuple[MagicMock, MagicMock]:
    db = MagicMock()
    result_mock = MagicMock()
    result_mock.fetchone.return_value = fetchone
    result_mock.fetchall.return_value = fetchall or []
    result_mock.scalar_one.return_value = 3
    db.execute = AsyncMock(return_value=result_mock)

    factory = MagicMock()
    factory.begin.return_value.__aenter__ = AsyncMock(return_value=db)
    factory.begin.return_value.__aexit__ = AsyncMock(return_value=False)
    return factory, db


def _listing_row(**kwargs: object) -> SimpleNamespace:
    defaults: dict = {
        "id": 1,
        "nft_id": 7,
        "seller": SELLER,
        "price": "2.000000000000000000",
        "quantity": 3,
        "listed_at": _NOW,
        "expires_at": _NOW,
        "status": "active",
        "updated_at": None,
        "cancelled_at": None,
    }
    defaults.update(kwargs)
    return SimpleNamespace(**defaults)


def _receipt(taken: Listing) -> Purchase:
    return Purchase(
        id="tx_1", listing_id=taken.id, nft_id=taken.nft_id, buyer=BUYER, seller=taken.seller,
        quantity=2, price_per_unit=taken.price, total_price=4.0, platform_fee=0,
        seller_amount=4.0, timestamp=_NOW, status="pending",
    )


def _sql_of(db: MagicMock) -> str:
    return str(db.execute.call_args.args[0])


class TestListingRepository:
    @pytest.mark.asyncio
    async def test_get_maps_numeric_price_to_float(self) -> None:
        factory, _ = _make_factory(fetchone=_listing_row())
        listing = await ListingRepository(factory).get(1)
        assert listing.price == 2.0
        assert listing.quantity == 3

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self) -> None:
        factory, _ = _make_factory(fetchone=None)
        assert await ListingRepository(factory).get(99) is None

    @pytest.mark.asyncio
    async def test_sale_decrements_and_inserts_in_one_transaction(self) -> None:
        factory, db = _make_factory(fetchone=_listing_row(quantity=1))
        taken, receipt = await ListingRepository(factory).record_sale(1, 2, _NOW, _receipt)

        assert factory.begin.call_count == 1
        decrement, insert = db.execute.call_args_list
        assert "quantity >= :quantity" in str(decrement.args[0])
        assert "status = 'active'" in str(decrement.args[0])
        assert decrement.args[1] == {"listing_id": 1, "quantity": 2, "now": _NOW}
        assert "INSERT INTO purchases" in str(insert.args[0])
        assert insert.args[1]["id"] == receipt.id
        assert taken.quantity == 1

    @pytest.mark.asyncio
    async def test_sale_no_row_means_refused(self) -> None:
        factory, db = _make_factory(fetchone=None)
        assert await ListingRepository(factory).record_sale(1, 2, _NOW, _receipt) is None
        assert db.execute.await_count == 1

    @pytest.mark.asyncio
    async def test_failed_receipt_insert_rolls_back_decrement(self) -> None:
        factory, db = _make_factory(fetchone=_listing_row(quantity=1))
        decrement_result = db.execute.return_value
        db.execute.side_effect = [decrement_result, RuntimeError("insert failed")]

        with pytest.raises(RuntimeError):
            await ListingRepository(factory).record_sale(1, 2, _NOW, _receipt)

        # The transaction context sees the error, so begin() rolls back both statements.
        exit_args = factory.begin.return_value.__aexit__.call_args.args
        assert exit_args[0] is RuntimeError
        assert factory.begin.call_count == 1

    @pytest.mark.asyncio
    async def test_update_price_matches_seller(self) -> None:
        factory, db = _make_factory(fetchone=None)
        assert await ListingRepository(factory).update_price(1, BUYER, 5.0, _NOW) is None
        assert "seller = :seller" in _sql_of(db)
        assert db.execute.call_args.args[1]["seller"] == BUYER


class TestPurchaseRepository:
    @pytest.mark.asyncio
    async def test_add_writes_timestamp_as_created_at(self) -> None:
        factory, db = _make_factory()
        purchase = Purchase(
            id="tx_1", listing_id=1, nft_id=7, buyer=BUYER, seller=SELLER, quantity=2,
            price_per_unit=2.0, total_price=4.0, platform_fee=0, seller_amount=4.0,
            timestamp=_NOW, status="pending",
        )
        await PurchaseRepository(factory).add(purchase)
        params = db.execute.call_args.args[1]
        assert params["created_at"] == _NOW
        assert params["id"] == "tx_1"

    @pytest.mark.asyncio
    async def test_list_by_seller_maps_rows(self) -> None:
        row = SimpleNamespace(
            id="tx_1", listing_id=1, nft_id=7, buyer=BUYER, seller=SELLER, quantity=2,
            price_per_unit="2", total_price="4", platform_fee=0, seller_amount="4",
            created_at=_NOW, status="pending",
        )
        factory, _ = _make_factory(fetchall=[row])
        [p] = await PurchaseRepository(factory).list_by_seller(SELLER)
        assert p.total_price == 4.0
        assert p.timestamp == _NOW


class TestNFTRepository:
    @pytest.mark.asyncio
    async def test_list_passes_category_param(self) -> None:
        factory, db = _make_factory(fetchall=[])
        assert await NFTRepository(factory).list_nfts("art") == []
        assert db.execute.call_args.args[1] == {"category": "art"}


class TestUserProfileRepository:
    @pytest.mark.asyncio
    async def test_update_sends_social_as_json(self) -> None:
        row = SimpleNamespace(
            address=SELLER, bio="", avatar="", banner="",
            social='{"twitter": "@a"}', verified=False, created_at=_NOW, updated_at=_NOW,
        )
        factory, db = _make_factory(fetchone=row)
        profile = await UserProfileRepository(factory).update(
            SELLER, ProfileUpdate(social={"twitter": "@a"}), _NOW
        )
        params = db.execute.call_args.args[1]
        assert json.loads(params["social"]) == {"twitter": "@a"}
        assert params["bio"] is None
        assert "user_profiles.social ||" in _sql_of(db)
        assert profile.social == {"twitter": "@a"}

    @pytest.mark.asyncio
    async def test_count(self) -> None:
        factory, _ = _make_factory()
        assert await UserProfileRepository(factory).count() == 3
