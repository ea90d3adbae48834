"""Global enums — values are the lowercase wire strings."""

from enum import Enum


class ListingStatus(str, Enum):
    ACTIVE = "active"
    SOLD = "sold"
    CANCELLED = "cancelled"


class PurchaseStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"


class TxStatus(str, Enum):
    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"


class HistoryEventType(str, Enum):
    CREATED = "created"
    SALE = "sale"


class NFTSort(str, Enum):
    CREATED_AT = "createdAt"
    NAME = "name"


class ListingSort(str, Enum):
    PRICE = "price"
    DATE = "date"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class RankingType(str, Enum):
    EARNINGS = "earnings"
    SALES = "sales"
    NFTS = "nfts"


NFT_CATEGORIES: tuple[str, ...] = (
    "art",
    "collectibles",
    "sports",
    "digital-items",
    "music",
    "video",
)
