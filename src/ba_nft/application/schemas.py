"""Pydantic schemas for ba_nft API responses.

Creation is multipart/form-data, so there is no JSON request model; the
router passes form fields straight to the service.
"""

from pydantic import Field

from src.ba_common.schemas import CamelModel, Pagination
from src.ba_nft.domain.models import NFT, HistoryEvent


class NFTOut(CamelModel):
    id: int
    name: str
    description: str
    image: str
    image_hash: str
    category: str | None = None
    royalty_percentage: float
    creator: str
    owner: str
    metadata_hash: str
    metadata_uri: str
    created_at: str

    @classmethod
    def from_domain(cls, nft: NFT) -> "NFTOut":
        return cls(
            id=nft.id,
            name=nft.name,
            description=nft.description,
            image=nft.image,
            image_hash=nft.image_hash,
            category=nft.category,
            royalty_percentage=nft.royalty_percentage,
            creator=nft.creator,
            owner=nft.owner,
            metadata_hash=nft.metadata_hash,
            metadata_uri=nft.metadata_uri,
            created_at=nft.created_at.isoformat(),
        )


class NFTListResponse(CamelModel):
    items: list[NFTOut]
    pagination: Pagination


class HistoryEventOut(CamelModel):
    type: str
    from_address: str = Field(alias="from")
    to_address: str = Field(alias="to")
    timestamp: str
    tx_id: str | None = None
    price: float | None = None
    quantity: int | None = None

    @classmethod
    def from_domain(cls, e: HistoryEvent) -> "HistoryEventOut":
        return cls(
            type=e.type,
            from_address=e.from_address,
            to_address=e.to_address,
            timestamp=e.timestamp.isoformat(),
            tx_id=e.tx_id,
            price=e.price,
            quantity=e.quantity,
        )


class NFTHistoryResponse(CamelModel):
    nft_id: int
    events: list[HistoryEventOut]


class CategoriesOut(CamelModel):
    categories: list[str]
