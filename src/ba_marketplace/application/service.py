"""MarketplaceApplicationService — listings CRUD and purchase.

Ownership and quantity rules are enforced by conditional repository
mutations; the service only re-reads afterwards to pick the right error.
"""

import logging
from datetime import timedelta

from src.ba_common import fees
from src.ba_common.datetime_utils import utc_now
from src.ba_common.enums import ListingSort, PurchaseStatus, SortOrder
from src.ba_common.errors import (
    InsufficientQuantityError,
    InvalidPriceError,
    ListingNotActiveError,
    ListingNotFoundError,
    NotListingSellerError,
)
from src.ba_common.id_generator import generate_tx_id
from src.ba_common.pagination import paginate
from src.ba_marketplace.application.schemas import (
    CreateListingRequest,
    ListingListResponse,
    ListingOut,
    PurchaseListResponse,
    PurchaseOut,
    PurchaseResponse,
)
from src.ba_marketplace.domain.models import Listing, NewListing, Purchase
from src.ba_marketplace.domain.pricing import quote_purchase
from src.ba_marketplace.domain.repository import (
    ListingRepositoryProtocol,
    PurchaseRepositoryProtocol,
)

logger = logging.getLogger("ba.marketplace")


def _validate_price(price: float) -> None:
    if not fees.is_valid_price(price):
        raise InvalidPriceError(price)


class MarketplaceApplicationService:
    def __init__(
        self,
        listings: ListingRepositoryProtocol,
        purchases: PurchaseRepositoryProtocol,
    ) -> None:
        self._listings = listings
        self._purchases = purchases

    async def create_listing(self, req: CreateListingRequest, seller: str) -> ListingOut:
        _validate_price(req.price)
        now = utc_now()
        listing = await self._listings.create(
            NewListing(
                nft_id=req.nft_id,
                seller=seller,
                price=req.price,
                quantity=req.quantity,
                listed_at=now,
                expires_at=now + timedelta(seconds=req.duration),
            )
        )
        logger.info(
            "listing %d created: nft=%d seller=%s price=%s qty=%d",
            listing.id, listing.nft_id, seller, listing.price, listing.quantity,
        )
        return ListingOut.from_domain(listing)

    async def list_listings(
        self,
        page: int,
        limit: int,
        sort_by: ListingSort,
        order: SortOrder,
        min_price: float | None,
        max_price: float | None,
    ) -> ListingListResponse:
        now = utc_now()
        listings = [
            lst for lst in await self._listings.list_active()
            if lst.expires_at > now
            and (min_price is None or lst.price >= min_price)
            and (max_price is None or lst.price <= max_price)
        ]

        reverse = order == SortOrder.DESC
        if sort_by == ListingSort.PRICE:
            listings.sort(key=lambda lst: (lst.price, lst.id), reverse=reverse)
        else:
            listings.sort(key=lambda lst: (lst.listed_at, lst.id), reverse=reverse)

        window, pagination = paginate(listings, page, limit)
        return ListingListResponse(
            items=[ListingOut.from_domain(lst) for lst in window],
            pagination=pagination,
        )

    async def get_listing(self, listing_id: int) -> ListingOut:
        return ListingOut.from_domain(await self._require(listing_id))

    async def update_price(self, listing_id: int, seller: str, price: float) -> ListingOut:
        listing = await self._require(listing_id)
        if listing.seller != seller:
            raise NotListingSellerError(listing_id)
        _validate_price(price)

        updated = await self._listings.update_price(listing_id, seller, price, utc_now())
        if updated is None:
            raise ListingNotActiveError(listing_id)
        logger.info("listing %d repriced to %s", listing_id, price)
        return ListingOut.from_domain(updated)

    async def cancel_listing(self, listing_id: int, seller: str) -> ListingOut:
        listing = await self._require(listing_id)
        if listing.seller != seller:
            raise NotListingSellerError(listing_id)

        cancelled = await self._listings.cancel(listing_id, seller, utc_now())
        if cancelled is None:
            raise ListingNotActiveError(listing_id)
        logger.info("listing %d cancelled", listing_id)
        return ListingOut.from_domain(cancelled)

    async def buy(self, listing_id: int, quantity: int, buyer: str) -> PurchaseResponse:
        """Take quantity units and record the receipt in one atomic step.

        The receipt is priced from the listing row returned by the atomic
        decrement, so a concurrent price update cannot skew it. A receipt
        that cannot be built or written leaves the listing untouched.
        """
        now = utc_now()
        listing = await self._listings.get(listing_id)
        if listing is None or not listing.is_active or listing.expires_at <= now:
            raise ListingNotActiveError(listing_id)
        if quantity > listing.quantity:
            raise InsufficientQuantityError(quantity, listing.quantity)

        def build_receipt(taken: Listing) -> Purchase:
            quote = quote_purchase(taken.price, quantity)
            return Purchase(
                id=generate_tx_id(),
                listing_id=taken.id,
                nft_id=taken.nft_id,
                buyer=buyer,
                seller=taken.seller,
                quantity=quantity,
                price_per_unit=taken.price,
                total_price=quote.total_price,
                platform_fee=quote.platform_fee,
                seller_amount=quote.seller_amount,
                timestamp=now,
                status=PurchaseStatus.PENDING.value,
            )

        sale = await self._listings.record_sale(listing_id, quantity, now, build_receipt)
        if sale is None:
            # Lost a race: another buyer or a cancel got there first.
            current = await self._listings.get(listing_id)
            if current is None or not current.is_active:
                raise ListingNotActiveError(listing_id)
            raise InsufficientQuantityError(quantity, current.quantity)

        taken, purchase = sale
        logger.info(
            "purchase %s: listing=%d buyer=%s qty=%d total=%s fee=%d remaining=%d",
            purchase.id, listing_id, buyer, quantity,
            purchase.total_price, purchase.platform_fee, taken.quantity,
        )
        return PurchaseResponse(
            transaction=PurchaseOut.from_domain(purchase),
            listing=ListingOut.from_domain(taken),
        )

    async def list_seller_listings(self, seller: str) -> list[ListingOut]:
        listings = await self._listings.list_by_seller(seller, active_only=True)
        listings.sort(key=lambda lst: lst.listed_at, reverse=True)
        return [ListingOut.from_domain(lst) for lst in listings]

    async def list_sales(self, seller: str, page: int, limit: int) -> PurchaseListResponse:
        sales = await self._purchases.list_by_seller(seller)
        sales.sort(key=lambda p: p.timestamp, reverse=True)
        window, pagination = paginate(sales, page, limit)
        return PurchaseListResponse(
            items=[PurchaseOut.from_domain(p) for p in window],
            pagination=pagination,
        )

    async def _require(self, listing_id: int) -> Listing:
        listing = await self._listings.get(listing_id)
        if listing is None:
            raise ListingNotFoundError(listing_id)
        return listing
