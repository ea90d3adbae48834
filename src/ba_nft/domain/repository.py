"""Repository Protocol — dependency inversion for storage swapping.

The in-memory repository is the default; the SQL repository implements the
same Protocol against PostgreSQL.
"""

from typing import Protocol

from src.ba_nft.domain.models import NFT, NewNFT


class NFTRepositoryProtocol(Protocol):
    async def create(self, draft: NewNFT) -> NFT: ...

    async def get(self, nft_id: int) -> NFT | None: ...

    async def list_nfts(self, category: str | None) -> list[NFT]: ...

    async def list_by_owner(self, owner: str) -> list[NFT]: ...

    async def list_by_creator(self, creator: str) -> list[NFT]: ...
