"""InMemoryNFTRepository — process-local store, lost on restart."""

import asyncio
import itertools
from dataclasses import replace

from src.ba_nft.domain.models import NFT, NewNFT


class InMemoryNFTRepository:
    def __init__(self) -> None:
        self._nfts: dict[int, NFT] = {}
        self._ids = itertools.count(1)
        self._lock = asyncio.Lock()

    async def create(self, draft: NewNFT) -> NFT:
        async with self._lock:
            nft = NFT(
                id=next(self._ids),
                name=draft.name,
                description=draft.description,
                image=draft.image,
                image_hash=draft.image_hash,
                category=draft.category,
                royalty_percentage=draft.royalty_percentage,
                creator=draft.creator,
                owner=draft.creator,
                metadata_hash=draft.metadata_hash,
                metadata_uri=draft.metadata_uri,
                created_at=draft.created_at,
            )
            self._nfts[nft.id] = nft
            return replace(nft)

    async def get(self, nft_id: int) -> NFT | None:
        nft = self._nfts.get(nft_id)
        return replace(nft) if nft else None

    async def list_nfts(self, category: str | None) -> list[NFT]:
        return [
            replace(n) for n in self._nfts.values()
            if category is None or n.category == category
        ]

    async def list_by_owner(self, owner: str) -> list[NFT]:
        return [replace(n) for n in self._nfts.values() if n.owner == owner]

    async def list_by_creator(self, creator: str) -> list[NFT]:
        return [replace(n) for n in self._nfts.values() if n.creator == creator]
