"""UserProfileRepository — PostgreSQL implementation.

Updates are a single upsert; ``social`` is JSONB and merged with ``||`` so
concurrent updates touching different keys do not overwrite each other.
"""

import json
from datetime import datetime

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.ba_user.domain.models import ProfileUpdate, UserProfile

_COLUMNS = "address, bio, avatar, banner, social, verified, created_at, updated_at"

_GET_SQL = text(f"SELECT {_COLUMNS} FROM user_profiles WHERE address = :address")

# No-op DO UPDATE so RETURNING yields the existing row on conflict.
_GET_OR_CREATE_SQL = text(f"""
    INSERT INTO user_profiles (address, created_at, updated_at)
    VALUES (:address, :now, :now)
    ON CONFLICT (address) DO UPDATE SET address = EXCLUDED.address
    RETURNING {_COLUMNS}
""")

_UPDATE_SQL = text(f"""
    INSERT INTO user_profiles (address, bio, avatar, banner, social, created_at, updated_at)
    VALUES (
        :address,
        COALESCE(CAST(:bio AS TEXT), ''),
        COALESCE(CAST(:avatar AS TEXT), ''),
        COALESCE(CAST(:banner AS TEXT), ''),
        CAST(:social AS JSONB),
        :now,
        :now
    )
    ON CONFLICT (address) DO UPDATE SET
        bio = COALESCE(CAST(:bio AS TEXT), user_profiles.bio),
        avatar = COALESCE(CAST(:avatar AS TEXT), user_profiles.avatar),
        banner = COALESCE(CAST(:banner AS TEXT), user_profiles.banner),
        social = user_profiles.social || CAST(:social AS JSONB),
        updated_at = :now
    RETURNING {_COLUMNS}
""")

_COUNT_SQL = text("SELECT COUNT(*) FROM user_profiles")


def _row_to_profile(row: object) -> UserProfile:
    social = row.social  # type: ignore[attr-defined]
    if isinstance(social, str):
        social = json.loads(social)
    return UserProfile(
        address=row.address,  # type: ignore[attr-defined]
        bio=row.bio,  # type: ignore[attr-defined]
        avatar=row.avatar,  # type: ignore[attr-defined]
        banner=row.banner,  # type: ignore[attr-defined]
        social=dict(social or {}),
        verified=row.verified,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
        updated_at=row.updated_at,  # type: ignore[attr-defined]
    )


class UserProfileRepository:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._sessions = session_factory

    async def get(self, address: str) -> UserProfile | None:
        async with self._sessions.begin() as db:
            result = await db.execute(_GET_SQL, {"address": address})
            row = result.fetchone()
            return _row_to_profile(row) if row else None

    async def get_or_create(self, address: str, now: datetime) -> UserProfile:
        async with self._sessions.begin() as db:
            result = await db.execute(_GET_OR_CREATE_SQL, {"address": address, "now": now})
            return _row_to_profile(result.fetchone())

    async def update(self, address: str, changes: ProfileUpdate, now: datetime) -> UserProfile:
        async with self._sessions.begin() as db:
            result = await db.execute(
                _UPDATE_SQL,
                {
                    "address": address,
                    "bio": changes.bio,
                    "avatar": changes.avatar,
                    "banner": changes.banner,
                    "social": json.dumps(changes.social),
                    "now": now,
                },
            )
            return _row_to_profile(result.fetchone())

    async def count(self) -> int:
        async with self._sessions.begin() as db:
            result = await db.execute(_COUNT_SQL)
            return int(result.scalar_one())
