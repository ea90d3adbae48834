"""Typed aggregates returned by the analytics data provider."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class MarketplaceStats:
    total_volume: float
    total_sales: int
    total_nfts: int
    total_listings: int  # active
    total_users: int
    floor_price: float  # cheapest active listing, 0 when none
    average_price: float  # mean unit price of sales in window
    unique_creators: int
    unique_buyers: int
    unique_sellers: int
    last_updated: datetime


@dataclass
class CreatorEarnings:
    address: str
    total_earnings: float  # sum of seller_amount
    total_sales: int
    total_volume: float
    average_price: float
    top_sale: float
    nfts_created: int
    nfts_sold: int
    last_sale_at: datetime | None


@dataclass
class CreatorRanking:
    rank: int
    address: str
    value: float
    nfts_created: int
    total_sales: int
    total_earnings: float


@dataclass
class BuyerRanking:
    rank: int
    address: str
    nfts_purchased: int
    total_spent: float
    average_price: float


@dataclass
class UserStats:
    nfts_created: int = 0
    nfts_owned: int = 0
    total_sales: int = 0
    followers: int = 0
    following: int = 0


@dataclass
class TrendingNFT:
    nft_id: int
    name: str
    image: str
    creator: str
    sales: int  # receipts in window
    units_sold: int
    volume: float
    floor_price: float | None  # cheapest active listing, None when unlisted
