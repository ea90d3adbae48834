"""Marketplace domain models — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import datetime

from src.ba_common.enums import ListingStatus


@dataclass
class NewListing:
    nft_id: int
    seller: str
    price: float
    quantity: int
    listed_at: datetime
    expires_at: datetime


@dataclass
class Listing:
    id: int
    nft_id: int
    seller: str
    price: float
    quantity: int  # remaining units
    listed_at: datetime
    expires_at: datetime
    status: str = ListingStatus.ACTIVE.value
    updated_at: datetime | None = None
    cancelled_at: datetime | None = None

    @property
    def is_active(self) -> bool:
        return self.status == ListingStatus.ACTIVE.value


@dataclass
class Purchase:
    """Receipt for one buy; status stays pending until chain confirmation."""

    id: str
    listing_id: int
    nft_id: int
    buyer: str
    seller: str
    quantity: int
    price_per_unit: float
    total_price: float
    platform_fee: int
    seller_amount: float
    timestamp: datetime
    status: str
