"""InMemoryUserProfileRepository — process-local profile store."""

import asyncio
import copy
from datetime import datetime

from src.ba_user.domain.models import ProfileUpdate, UserProfile


class InMemoryUserProfileRepository:
    def __init__(self) -> None:
        self._profiles: dict[str, UserProfile] = {}
        self._lock = asyncio.Lock()

    async def get(self, address: str) -> UserProfile | None:
        profile = self._profiles.get(address)
        return copy.deepcopy(profile) if profile else None

    async def get_or_create(self, address: str, now: datetime) -> UserProfile:
        async with self._lock:
            return copy.deepcopy(self._ensure(address, now))

    async def update(self, address: str, changes: ProfileUpdate, now: datetime) -> UserProfile:
        async with self._lock:
            profile = self._ensure(address, now)
            if changes.bio is not None:
                profile.bio = changes.bio
            if changes.avatar is not None:
                profile.avatar = changes.avatar
            if changes.banner is not None:
                profile.banner = changes.banner
            profile.social.update(changes.social)
            profile.updated_at = now
            return copy.deepcopy(profile)

    async def count(self) -> int:
        return len(self._profiles)

    def _ensure(self, address: str, now: datetime) -> UserProfile:
        profile = self._profiles.get(address)
        if profile is None:
            profile = UserProfile(address=address, created_at=now, updated_at=now)
            self._profiles[address] = profile
        return profile
