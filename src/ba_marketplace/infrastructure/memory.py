"""In-memory listing and purchase repositories.

Every mutation runs under one asyncio.Lock, so check-and-set sequences
(ownership match, active status, remaining quantity) are atomic with respect
to other requests on the same event loop. Reads return copies; callers
cannot mutate stored state by accident. A sale writes its receipt into the
purchase repository before the stored listing changes.
"""

import asyncio
import itertools
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime

from src.ba_common.enums import ListingStatus
from src.ba_marketplace.domain.models import Listing, NewListing, Purchase


class InMemoryListingRepository:
    def __init__(self, purchases: "InMemoryPurchaseRepository") -> None:
        self._purchases = purchases
        self._listings: dict[int, Listing] = {}
        self._ids = itertools.count(1)
        self._lock = asyncio.Lock()

    async def create(self, draft: NewListing) -> Listing:
        async with self._lock:
            listing = Listing(
                id=next(self._ids),
                nft_id=draft.nft_id,
                seller=draft.seller,
                price=draft.price,
                quantity=draft.quantity,
                listed_at=draft.listed_at,
                expires_at=draft.expires_at,
            )
            self._listings[listing.id] = listing
            return replace(listing)

    async def get(self, listing_id: int) -> Listing | None:
        listing = self._listings.get(listing_id)
        return replace(listing) if listing else None

    async def list_active(self) -> list[Listing]:
        return [replace(lst) for lst in self._listings.values() if lst.is_active]

    async def list_all(self) -> list[Listing]:
        return [replace(lst) for lst in self._listings.values()]

    async def list_by_seller(self, seller: str, active_only: bool) -> list[Listing]:
        return [
            replace(lst) for lst in self._listings.values()
            if lst.seller == seller and (lst.is_active or not active_only)
        ]

    async def update_price(
        self, listing_id: int, seller: str, price: float, now: datetime
    ) -> Listing | None:
        async with self._lock:
            listing = self._owned_active(listing_id, seller)
            if listing is None:
                return None
            listing.price = price
            listing.updated_at = now
            return replace(listing)

    async def cancel(self, listing_id: int, seller: str, now: datetime) -> Listing | None:
        async with self._lock:
            listing = self._owned_active(listing_id, seller)
            if listing is None:
                return None
            listing.status = ListingStatus.CANCELLED.value
            listing.cancelled_at = now
            listing.updated_at = now
            return replace(listing)

    async def record_sale(
        self,
        listing_id: int,
        quantity: int,
        now: datetime,
        build_receipt: Callable[[Listing], Purchase],
    ) -> tuple[Listing, Purchase] | None:
        async with self._lock:
            listing = self._listings.get(listing_id)
            if listing is None or not listing.is_active or listing.quantity < quantity:
                return None
            remaining = listing.quantity - quantity
            taken = replace(
                listing,
                quantity=remaining,
                status=ListingStatus.SOLD.value if remaining == 0 else listing.status,
                updated_at=now,
            )
            # Stored listing is only swapped once the receipt is written.
            purchase = await self._purchases.add(build_receipt(replace(taken)))
            self._listings[listing_id] = taken
            return replace(taken), purchase

    def _owned_active(self, listing_id: int, seller: str) -> Listing | None:
        listing = self._listings.get(listing_id)
        if listing is None or listing.seller != seller or not listing.is_active:
            return None
        return listing


class InMemoryPurchaseRepository:
    def __init__(self) -> None:
        self._purchases: list[Purchase] = []
        self._lock = asyncio.Lock()

    async def add(self, purchase: Purchase) -> Purchase:
        async with self._lock:
            self._purchases.append(replace(purchase))
        return purchase

    async def list_all(self) -> list[Purchase]:
        return [replace(p) for p in self._purchases]

    async def list_by_nft(self, nft_id: int) -> list[Purchase]:
        return [replace(p) for p in self._purchases if p.nft_id == nft_id]

    async def list_by_seller(self, seller: str) -> list[Purchase]:
        return [replace(p) for p in self._purchases if p.seller == seller]

    async def list_by_buyer(self, buyer: str) -> list[Purchase]:
        return [replace(p) for p in self._purchases if p.buyer == buyer]
