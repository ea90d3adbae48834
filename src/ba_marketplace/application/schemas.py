"""Pydantic schemas for ba_marketplace API requests and responses."""

from pydantic import Field

from src.ba_common.datetime_utils import iso_or_none
from src.ba_common.fees import MAX_QUANTITY
from src.ba_common.schemas import CamelModel, Pagination
from src.ba_marketplace.domain.models import Listing, Purchase

DEFAULT_LISTING_DURATION_SECONDS = 30 * 24 * 60 * 60
MAX_LISTING_DURATION_SECONDS = 365 * 24 * 60 * 60

# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class CreateListingRequest(CamelModel):
    nft_id: int = Field(..., ge=1)
    price: float = Field(..., allow_inf_nan=False)
    quantity: int = Field(1, ge=1, le=MAX_QUANTITY)
    duration: int = Field(
        DEFAULT_LISTING_DURATION_SECONDS,
        gt=0,
        le=MAX_LISTING_DURATION_SECONDS,
        description="Seconds",
    )


class UpdateListingRequest(CamelModel):
    price: float = Field(..., allow_inf_nan=False)


class PurchaseRequest(CamelModel):
    listing_id: int = Field(..., ge=1)
    quantity: int = Field(1, ge=1, le=MAX_QUANTITY)


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class ListingOut(CamelModel):
    id: int
    nft_id: int
    seller: str
    price: float
    quantity: int
    listed_at: str
    expires_at: str
    status: str
    updated_at: str | None = None
    cancelled_at: str | None = None

    @classmethod
    def from_domain(cls, lst: Listing) -> "ListingOut":
        return cls(
            id=lst.id,
            nft_id=lst.nft_id,
            seller=lst.seller,
            price=lst.price,
            quantity=lst.quantity,
            listed_at=lst.listed_at.isoformat(),
            expires_at=lst.expires_at.isoformat(),
            status=lst.status,
            updated_at=iso_or_none(lst.updated_at),
            cancelled_at=iso_or_none(lst.cancelled_at),
        )


class ListingListResponse(CamelModel):
    items: list[ListingOut]
    pagination: Pagination


class PurchaseOut(CamelModel):
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
    timestamp: str
    status: str

    @classmethod
    def from_domain(cls, p: Purchase) -> "PurchaseOut":
        return cls(
            id=p.id,
            listing_id=p.listing_id,
            nft_id=p.nft_id,
            buyer=p.buyer,
            seller=p.seller,
            quantity=p.quantity,
            price_per_unit=p.price_per_unit,
            total_price=p.total_price,
            platform_fee=p.platform_fee,
            seller_amount=p.seller_amount,
            timestamp=p.timestamp.isoformat(),
            status=p.status,
        )


class PurchaseResponse(CamelModel):
    transaction: PurchaseOut
    listing: ListingOut


class PurchaseListResponse(CamelModel):
    items: list[PurchaseOut]
    pagination: Pagination
