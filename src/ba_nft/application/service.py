"""NFTApplicationService — creation via IPFS, browsing, provenance history."""

import logging
from dataclasses import dataclass

from src.ba_common.address import ZERO_ADDRESS
from src.ba_common.datetime_utils import utc_now
from src.ba_common.enums import NFT_CATEGORIES, HistoryEventType, NFTSort
from src.ba_common.errors import (
    FileTooLargeError,
    InvalidFileTypeError,
    InvalidRoyaltyError,
    MissingFieldsError,
    NFTNotFoundError,
)
from src.ba_common.pagination import paginate
from src.ba_ipfs.client import IpfsServiceProtocol, sha256_hex
from src.ba_marketplace.domain.repository import PurchaseRepositoryProtocol
from src.ba_nft.application.schemas import (
    CategoriesOut,
    HistoryEventOut,
    NFTHistoryResponse,
    NFTListResponse,
    NFTOut,
)
from src.ba_nft.domain.models import NFT, HistoryEvent, NewNFT
from src.ba_nft.domain.repository import NFTRepositoryProtocol

logger = logging.getLogger("ba.nft")

ALLOWED_IMAGE_TYPES = frozenset({"image/jpeg", "image/png", "image/gif", "image/webp"})
MAX_ROYALTY_PERCENTAGE = 25.0


@dataclass
class ImageUpload:
    content: bytes
    filename: str
    content_type: str | None


def parse_royalty(raw: str | float | None) -> float:
    """Royalty is optional (0) but, when given, must be a number in [0, 25]."""
    if raw is None or raw == "":
        return 0.0
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise InvalidRoyaltyError(raw) from None
    if not 0 <= value <= MAX_ROYALTY_PERCENTAGE:
        raise InvalidRoyaltyError(raw)
    return value


class NFTApplicationService:
    def __init__(
        self,
        nfts: NFTRepositoryProtocol,
        purchases: PurchaseRepositoryProtocol,
        ipfs: IpfsServiceProtocol,
        max_upload_bytes: int,
    ) -> None:
        self._nfts = nfts
        self._purchases = purchases
        self._ipfs = ipfs
        self._max_upload_bytes = max_upload_bytes

    @property
    def max_upload_bytes(self) -> int:
        return self._max_upload_bytes

    async def create_nft(
        self,
        creator: str,
        name: str | None,
        description: str | None,
        category: str | None,
        royalty_percentage: str | float | None,
        image: ImageUpload | None,
    ) -> NFTOut:
        """Validate, pin image + metadata to IPFS, then store the record.

        Nothing is stored if either upload fails.
        """
        missing = [
            field
            for field, value in (("name", name), ("description", description), ("imageFile", image))
            if not value
        ]
        if missing:
            raise MissingFieldsError(missing)

        royalty = parse_royalty(royalty_percentage)
        if image.content_type not in ALLOWED_IMAGE_TYPES:
            raise InvalidFileTypeError(image.content_type)
        if len(image.content) > self._max_upload_bytes:
            raise FileTooLargeError(len(image.content), self._max_upload_bytes)

        image_cid = await self._ipfs.upload_file(image.content, image.filename, image.content_type)
        image_hash = sha256_hex(image.content)
        image_url = self._ipfs.gateway_url(image_cid)

        metadata = {
            "name": name,
            "description": description,
            "image": f"ipfs://{image_cid}",
            "attributes": [
                {"trait_type": "Category", "value": category or "uncategorized"},
                {"trait_type": "Royalty", "value": royalty},
            ],
            "properties": {
                "creator": creator,
                "imageHash": image_hash,
                "royaltyPercentage": royalty,
            },
        }
        metadata_cid = await self._ipfs.upload_json(metadata)

        nft = await self._nfts.create(
            NewNFT(
                name=name,
                description=description,
                image=image_url,
                image_hash=image_hash,
                category=category or None,
                royalty_percentage=royalty,
                creator=creator,
                metadata_hash=metadata_cid,
                metadata_uri=f"ipfs://{metadata_cid}",
                created_at=utc_now(),
            )
        )
        logger.info(
            "nft %d created by %s: image=%s metadata=%s royalty=%s",
            nft.id, creator, image_cid, metadata_cid, royalty,
        )
        return NFTOut.from_domain(nft)

    async def list_nfts(
        self,
        page: int,
        limit: int,
        category: str | None,
        sort_by: NFTSort,
    ) -> NFTListResponse:
        nfts = await self._nfts.list_nfts(category)
        _sort(nfts, sort_by)
        window, pagination = paginate(nfts, page, limit)
        return NFTListResponse(items=[NFTOut.from_domain(n) for n in window], pagination=pagination)

    async def list_owned(self, owner: str, page: int, limit: int) -> NFTListResponse:
        nfts = await self._nfts.list_by_owner(owner)
        _sort(nfts, NFTSort.CREATED_AT)
        window, pagination = paginate(nfts, page, limit)
        return NFTListResponse(items=[NFTOut.from_domain(n) for n in window], pagination=pagination)

    async def get_nft(self, nft_id: int) -> NFTOut:
        return NFTOut.from_domain(await self._require(nft_id))

    async def history(self, nft_id: int) -> NFTHistoryResponse:
        nft = await self._require(nft_id)
        events = [
            HistoryEvent(
                type=HistoryEventType.CREATED.value,
                from_address=ZERO_ADDRESS,
                to_address=nft.creator,
                timestamp=nft.created_at,
            )
        ]
        sales = await self._purchases.list_by_nft(nft_id)
        sales.sort(key=lambda p: p.timestamp)
        events.extend(
            HistoryEvent(
                type=HistoryEventType.SALE.value,
                from_address=p.seller,
                to_address=p.buyer,
                timestamp=p.timestamp,
                tx_id=p.id,
                price=p.total_price,
                quantity=p.quantity,
            )
            for p in sales
        )
        return NFTHistoryResponse(
            nft_id=nft_id,
            events=[HistoryEventOut.from_domain(e) for e in events],
        )

    @staticmethod
    def categories() -> CategoriesOut:
        return CategoriesOut(categories=list(NFT_CATEGORIES))

    async def _require(self, nft_id: int) -> NFT:
        nft = await self._nfts.get(nft_id)
        if nft is None:
            raise NFTNotFoundError(nft_id)
        return nft


def _sort(nfts: list[NFT], sort_by: NFTSort) -> None:
    if sort_by == NFTSort.NAME:
        nfts.sort(key=lambda n: (n.name.lower(), n.id))
    else:
        nfts.sort(key=lambda n: (n.created_at, n.id), reverse=True)
