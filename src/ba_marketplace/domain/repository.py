# src/ba_marketplace/domain/repository.py
"""Repository Protocols for listings and purchase receipts.

Unit tests inject a mock that conforms to these Protocols.
Infrastructure provides the in-memory and PostgreSQL implementations.
"""

from collections.abc import Callable
from datetime import datetime
from typing import Protocol

from src.ba_marketplace.domain.models import Listing, NewListing, Purchase


class ListingRepositoryProtocol(Protocol):
    async def create(self, draft: NewListing) -> Listing: ...

    async def get(self, listing_id: int) -> Listing | None: ...

    async def list_active(self) -> list[Listing]: ...

    async def list_all(self) -> list[Listing]: ...

    async def list_by_seller(self, seller: str, active_only: bool) -> list[Listing]: ...

    async def update_price(
        self, listing_id: int, seller: str, price: float, now: datetime
    ) -> Listing | None:
        """Set price on an active listing owned by seller. None if no row matched."""
        ...

    async def cancel(self, listing_id: int, seller: str, now: datetime) -> Listing | None:
        """Flip an active listing owned by seller to cancelled. None if no row matched."""
        ...

    async def record_sale(
        self,
        listing_id: int,
        quantity: int,
        now: datetime,
        build_receipt: Callable[[Listing], Purchase],
    ) -> tuple[Listing, Purchase] | None:
        """Atomically take quantity units from an active listing and store the receipt.

        Succeeds only if the listing is active and has at least quantity
        units left; status becomes sold when the remainder hits zero.
        build_receipt receives the listing after the units were taken. The
        decrement and the receipt commit together: if build_receipt or the
        receipt write raises, the listing is left untouched.
        Returns (updated listing, receipt), or None if the condition failed.
        """
        ...


class PurchaseRepositoryProtocol(Protocol):
    async def add(self, purchase: Purchase) -> Purchase: ...

    async def list_all(self) -> list[Purchase]: ...

    async def list_by_nft(self, nft_id: int) -> list[Purchase]: ...

    async def list_by_seller(self, seller: str) -> list[Purchase]: ...

    async def list_by_buyer(self, buyer: str) -> list[Purchase]: ...
