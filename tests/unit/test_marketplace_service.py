"""Unit tests for MarketplaceApplicationService with mocked repositories."""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest
from pydantic import ValidationError

from src.ba_common.enums import ListingSort, SortOrder
from src.ba_common.errors import (
    InsufficientQuantityError,
    InvalidPriceError,
    ListingNotActiveError,
    ListingNotFoundError,
    NotListingSellerError,
)
from src.ba_marketplace.application.schemas import CreateListingRequest
from src.ba_marketplace.application.service import MarketplaceApplicationService
from src.ba_marketplace.domain.models import Listing
from tests.helpers import BUYER, OTHER, SELLER

_NOW = datetime(2026, 1, 1, tzinfo=UTC)


def _make_listing(**kwargs: object) -> Listing:
    defaults: dict = {
        "id": 1,
        "nft_id": 7,
        "seller": SELLER,
        "price": 2.0,
        "quantity": 5,
        "listed_at": _NOW,
        "expires_at": datetime.now(UTC) + timedelta(days=30),
        "status": "active",
    }
    defaults.update(kwargs)
    return Listing(**defaults)


def _make_service() -> tuple[MarketplaceApplicationService, MagicMock, MagicMock]:
    listings = MagicMock()
    purchases = MagicMock()
    for name in ("create", "get", "list_active", "update_price", "cancel", "record_sale"):
        setattr(listings, name, AsyncMock())
    purchases.list_by_seller = AsyncMock(return_value=[])
    return MarketplaceApplicationService(listings, purchases), listings, purchases


def _sell_from(after: Listing) -> AsyncMock:
    """record_sale double that builds the receipt from the given post-sale row."""

    async def _record(listing_id, quantity, now, build_receipt):
        return after, build_receipt(after)

    return AsyncMock(side_effect=_record)


class TestCreateListing:
    @pytest.mark.asyncio
    async def test_create_sets_expiry_from_duration(self) -> None:
        service, listings, _ = _make_service()
        listings.create.side_effect = lambda d: _make_listing(
            price=d.price, quantity=d.quantity, listed_at=d.listed_at, expires_at=d.expires_at
        )
        out = await service.create_listing(
            CreateListingRequest(nft_id=7, price=1.5, quantity=3, duration=3600), SELLER
        )
        draft = listings.create.call_args.args[0]
        assert draft.seller == SELLER
        assert draft.expires_at - draft.listed_at == timedelta(seconds=3600)
        assert out.status == "active"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("price", [0, -1, 1e13, 1e308])
    async def test_out_of_range_price_rejected(self, price: float) -> None:
        service, listings, _ = _make_service()
        with pytest.raises(InvalidPriceError):
            await service.create_listing(CreateListingRequest(nft_id=7, price=price), SELLER)
        listings.create.assert_not_called()


    def test_non_finite_price_rejected_by_schema(self) -> None:
        with pytest.raises(ValidationError):
            CreateListingRequest.model_validate_json('{"nftId": 7, "price": Infinity}')
        with pytest.raises(ValidationError):
            CreateListingRequest(nft_id=7, price=float("nan"))


class TestUpdateAndCancel:
    @pytest.mark.asyncio
    async def test_missing_listing_is_404(self) -> None:
        service, listings, _ = _make_service()
        listings.get.return_value = None
        with pytest.raises(ListingNotFoundError):
            await service.update_price(99, SELLER, 3.0)

    @pytest.mark.asyncio
    async def test_non_seller_is_403_and_nothing_written(self) -> None:
        service, listings, _ = _make_service()
        listings.get.return_value = _make_listing()
        with pytest.raises(NotListingSellerError):
            await service.update_price(1, OTHER, 3.0)
        listings.update_price.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_on_inactive_listing(self) -> None:
        service, listings, _ = _make_service()
        listings.get.return_value = _make_listing(status="sold")
        listings.update_price.return_value = None
        with pytest.raises(ListingNotActiveError):
            await service.update_price(1, SELLER, 3.0)

    @pytest.mark.asyncio
    async def test_cancel_by_non_seller_is_403(self) -> None:
        service, listings, _ = _make_service()
        listings.get.return_value = _make_listing()
        with pytest.raises(NotListingSellerError):
            await service.cancel_listing(1, OTHER)
        listings.cancel.assert_not_called()


class TestBuy:
    @pytest.mark.asyncio
    async def test_buy_records_receipt_from_decremented_row(self) -> None:
        service, listings, _ = _make_service()
        listings.get.return_value = _make_listing()
        listings.record_sale = _sell_from(_make_listing(quantity=3))

        result = await service.buy(1, 2, BUYER)

        assert result.transaction.total_price == 4.0
        assert result.transaction.platform_fee == 0
        assert result.transaction.seller_amount == 4.0
        assert result.transaction.id.startswith("tx_")
        assert result.listing.quantity == 3
        listings.record_sale.assert_awaited_once()
        assert listings.record_sale.call_args.args[:2] == (1, 2)

    @pytest.mark.asyncio
    async def test_overflowing_total_is_rejected_before_commit(self) -> None:
        service, listings, _ = _make_service()
        huge = _make_listing(price=1e308)
        listings.get.return_value = huge
        listings.record_sale = _sell_from(huge)
        with pytest.raises(InvalidPriceError):
            await service.buy(1, 2, BUYER)

    @pytest.mark.asyncio
    async def test_buy_more_than_available(self) -> None:
        service, listings, _ = _make_service()
        listings.get.return_value = _make_listing(quantity=1)
        with pytest.raises(InsufficientQuantityError):
            await service.buy(1, 2, BUYER)
        listings.record_sale.assert_not_called()

    @pytest.mark.asyncio
    async def test_buy_expired_listing(self) -> None:
        service, listings, _ = _make_service()
        listings.get.return_value = _make_listing(expires_at=_NOW)
        with pytest.raises(ListingNotActiveError):
            await service.buy(1, 1, BUYER)

    @pytest.mark.asyncio
    async def test_lost_race_reports_remaining_quantity(self) -> None:
        service, listings, _ = _make_service()
        listings.get.side_effect = [_make_listing(quantity=2), _make_listing(quantity=1)]
        listings.record_sale.return_value = None
        with pytest.raises(InsufficientQuantityError, match="available 1"):
            await service.buy(1, 2, BUYER)

    @pytest.mark.asyncio
    async def test_lost_race_to_cancel(self) -> None:
        service, listings, _ = _make_service()
        listings.get.side_effect = [_make_listing(), _make_listing(status="cancelled")]
        listings.record_sale.return_value = None
        with pytest.raises(ListingNotActiveError):
            await service.buy(1, 1, BUYER)


class TestListListings:
    @pytest.mark.asyncio
    async def test_filters_expired_and_price_range(self) -> None:
        service, listings, _ = _make_service()
        listings.list_active.return_value = [
            _make_listing(id=1, price=1.0),
            _make_listing(id=2, price=5.0),
            _make_listing(id=3, price=3.0),
            _make_listing(id=4, price=2.0, expires_at=_NOW),
        ]
        result = await service.list_listings(1, 20, ListingSort.PRICE, SortOrder.ASC, 1.5, None)
        assert [lst.id for lst in result.items] == [3, 2]
        assert result.pagination.total == 2
