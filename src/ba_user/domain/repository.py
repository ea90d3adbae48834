from datetime import datetime
from typing import Protocol

from src.ba_user.domain.models import ProfileUpdate, UserProfile


class UserProfileRepositoryProtocol(Protocol):
    async def get(self, address: str) -> UserProfile | None: ...

    async def get_or_create(self, address: str, now: datetime) -> UserProfile: ...

    async def update(self, address: str, changes: ProfileUpdate, now: datetime) -> UserProfile:
        """Apply changes atomically, creating the profile if it does not exist."""
        ...

    async def count(self) -> int: ...
