"""Pydantic response schemas for analytics and creator endpoints."""

from pydantic import Field

from src.ba_analytics.domain.models import (
    BuyerRanking,
    CreatorEarnings,
    CreatorRanking,
    MarketplaceStats,
    TrendingNFT,
)
from src.ba_common.datetime_utils import iso_or_none
from src.ba_common.schemas import CamelModel
from src.ba_marketplace.application.schemas import PurchaseOut


class MarketplaceStatsOut(CamelModel):
    total_volume: float
    total_sales: int
    total_nfts: int
    total_listings: int
    total_users: int
    floor_price: float
    average_price: float
    unique_creators: int
    unique_buyers: int
    unique_sellers: int
    last_updated: str
    window_hours: int | None = None
    stale: bool = False

    @classmethod
    def from_domain(
        cls, s: MarketplaceStats, window_hours: int | None, stale: bool
    ) -> "MarketplaceStatsOut":
        return cls(
            total_volume=s.total_volume,
            total_sales=s.total_sales,
            total_nfts=s.total_nfts,
            total_listings=s.total_listings,
            total_users=s.total_users,
            floor_price=s.floor_price,
            average_price=s.average_price,
            unique_creators=s.unique_creators,
            unique_buyers=s.unique_buyers,
            unique_sellers=s.unique_sellers,
            last_updated=s.last_updated.isoformat(),
            window_hours=window_hours,
            stale=stale,
        )


class CreatorEarningsOut(CamelModel):
    address: str
    total_earnings: float
    total_sales: int
    total_volume: float
    average_price: float
    top_sale: float
    nfts_created: int
    nfts_sold: int
    last_sale_at: str | None = None

    @classmethod
    def from_domain(cls, e: CreatorEarnings) -> "CreatorEarningsOut":
        return cls(
            address=e.address,
            total_earnings=e.total_earnings,
            total_sales=e.total_sales,
            total_volume=e.total_volume,
            average_price=e.average_price,
            top_sale=e.top_sale,
            nfts_created=e.nfts_created,
            nfts_sold=e.nfts_sold,
            last_sale_at=iso_or_none(e.last_sale_at),
        )


class CreatorRankingOut(CamelModel):
    rank: int
    address: str
    value: float
    nfts_created: int
    total_sales: int
    total_earnings: float

    @classmethod
    def from_domain(cls, r: CreatorRanking) -> "CreatorRankingOut":
        return cls(
            rank=r.rank,
            address=r.address,
            value=r.value,
            nfts_created=r.nfts_created,
            total_sales=r.total_sales,
            total_earnings=r.total_earnings,
        )


class RankingsOut(CamelModel):
    type: str
    items: list[CreatorRankingOut]


class BuyerRankingOut(CamelModel):
    rank: int
    address: str
    nfts_purchased: int
    total_spent: float
    average_price: float

    @classmethod
    def from_domain(cls, b: BuyerRanking) -> "BuyerRankingOut":
        return cls(
            rank=b.rank,
            address=b.address,
            nfts_purchased=b.nfts_purchased,
            total_spent=b.total_spent,
            average_price=b.average_price,
        )


class CreatorProfileOut(CamelModel):
    address: str
    bio: str = ""
    avatar: str = ""
    banner: str = ""
    social: dict[str, str] = {}
    verified: bool = False
    joined_at: str | None = None


class MostSoldNFTOut(CamelModel):
    nft_id: int
    units_sold: int


class CreatorStatsOut(CamelModel):
    profile: CreatorProfileOut
    earnings: CreatorEarningsOut
    recent_sales: list[PurchaseOut]
    most_sold_nft: MostSoldNFTOut | None = None


class TrendingNFTOut(CamelModel):
    nft_id: int
    name: str
    image: str
    creator: str
    sales_24h: int = Field(alias="sales24h")
    units_sold_24h: int = Field(alias="unitsSold24h")
    volume_24h: float = Field(alias="volume24h")
    floor_price: float | None = None

    @classmethod
    def from_domain(cls, t: TrendingNFT) -> "TrendingNFTOut":
        return cls(
            nft_id=t.nft_id,
            name=t.name,
            image=t.image,
            creator=t.creator,
            sales_24h=t.sales,
            units_sold_24h=t.units_sold,
            volume_24h=t.volume,
            floor_price=t.floor_price,
        )
