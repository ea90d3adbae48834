"""Domain models for ba_nft — pure dataclasses, no business logic."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class NewNFT:
    """Fields known before the repository assigns an id."""

    name: str
    description: str
    image: str
    image_hash: str
    category: str | None
    royalty_percentage: float
    creator: str
    metadata_hash: str
    metadata_uri: str
    created_at: datetime


@dataclass
class NFT:
    id: int
    name: str
    description: str
    image: str
    image_hash: str
    category: str | None
    royalty_percentage: float
    creator: str
    owner: str
    metadata_hash: str
    metadata_uri: str
    created_at: datetime


@dataclass
class HistoryEvent:
    type: str  # created / sale
    from_address: str
    to_address: str
    timestamp: datetime
    tx_id: str | None = None
    price: float | None = None
    quantity: int | None = None
