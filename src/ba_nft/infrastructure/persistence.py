"""NFTRepository — PostgreSQL implementation of NFTRepositoryProtocol.

All queries use raw text() SQL (no ORM). Each call runs in its own
transaction opened from the injected session factory.
asyncpg NULL parameter pattern: CAST(:param AS TYPE) IS NULL required for None values.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.ba_nft.domain.models import NFT, NewNFT

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_COLUMNS = """
    id, name, description, image, image_hash, category, royalty_percentage,
    creator, owner, metadata_hash, metadata_uri, created_at
"""

_INSERT_NFT_SQL = text(f"""
    INSERT INTO nfts
        (name, description, image, image_hash, category, royalty_percentage,
         creator, owner, metadata_hash, metadata_uri, created_at)
    VALUES
        (:name, :description, :image, :image_hash, :category, :royalty_percentage,
         :creator, :creator, :metadata_hash, :metadata_uri, :created_at)
    RETURNING {_COLUMNS}
""")

_GET_NFT_SQL = text(f"SELECT {_COLUMNS} FROM nfts WHERE id = :nft_id")

_LIST_NFTS_SQL = text(f"""
    SELECT {_COLUMNS}
    FROM nfts
    WHERE CAST(:category AS TEXT) IS NULL OR category = CAST(:category AS TEXT)
    ORDER BY id
""")

_LIST_BY_OWNER_SQL = text(f"SELECT {_COLUMNS} FROM nfts WHERE owner = :owner ORDER BY id")

_LIST_BY_CREATOR_SQL = text(f"SELECT {_COLUMNS} FROM nfts WHERE creator = :creator ORDER BY id")

# ---------------------------------------------------------------------------
# Row mapper
# ---------------------------------------------------------------------------


def _row_to_nft(row: object) -> NFT:
    return NFT(
        id=row.id,  # type: ignore[attr-defined]
        name=row.name,  # type: ignore[attr-defined]
        description=row.description,  # type: ignore[attr-defined]
        image=row.image,  # type: ignore[attr-defined]
        image_hash=row.image_hash,  # type: ignore[attr-defined]
        category=row.category,  # type: ignore[attr-defined]
        royalty_percentage=float(row.royalty_percentage),  # type: ignore[attr-defined]
        creator=row.creator,  # type: ignore[attr-defined]
        owner=row.owner,  # type: ignore[attr-defined]
        metadata_hash=row.metadata_hash,  # type: ignore[attr-defined]
        metadata_uri=row.metadata_uri,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class NFTRepository:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._sessions = session_factory

    async def create(self, draft: NewNFT) -> NFT:
        async with self._sessions.begin() as db:
            result = await db.execute(
                _INSERT_NFT_SQL,
                {
                    "name": draft.name,
                    "description": draft.description,
                    "image": draft.image,
                    "image_hash": draft.image_hash,
                    "category": draft.category,
                    "royalty_percentage": draft.royalty_percentage,
                    "creator": draft.creator,
                    "metadata_hash": draft.metadata_hash,
                    "metadata_uri": draft.metadata_uri,
                    "created_at": draft.created_at,
                },
            )
            return _row_to_nft(result.fetchone())

    async def get(self, nft_id: int) -> NFT | None:
        async with self._sessions.begin() as db:
            result = await db.execute(_GET_NFT_SQL, {"nft_id": nft_id})
            row = result.fetchone()
            return _row_to_nft(row) if row else None

    async def list_nfts(self, category: str | None) -> list[NFT]:
        async with self._sessions.begin() as db:
            result = await db.execute(_LIST_NFTS_SQL, {"category": category})
            return [_row_to_nft(row) for row in result.fetchall()]

    async def list_by_owner(self, owner: str) -> list[NFT]:
        async with self._sessions.begin() as db:
            result = await db.execute(_LIST_BY_OWNER_SQL, {"owner": owner})
            return [_row_to_nft(row) for row in result.fetchall()]

    async def list_by_creator(self, creator: str) -> list[NFT]:
        async with self._sessions.begin() as db:
            result = await db.execute(_LIST_BY_CREATOR_SQL, {"creator": creator})
            return [_row_to_nft(row) for row in result.fetchall()]
