"""UserApplicationService — profile read/update.

Reading a profile creates an empty one on first access; stats are computed
by the analytics provider on every read rather than stored.
"""

import logging

from src.ba_analytics.domain.provider import AnalyticsProviderProtocol
from src.ba_common.address import normalize_address, same_address
from src.ba_common.datetime_utils import utc_now
from src.ba_common.errors import ProfileOwnershipError
from src.ba_user.application.schemas import UpdateProfileRequest, UserProfileOut
from src.ba_user.domain.models import ProfileUpdate
from src.ba_user.domain.repository import UserProfileRepositoryProtocol

logger = logging.getLogger("ba.user")


class UserApplicationService:
    def __init__(
        self,
        profiles: UserProfileRepositoryProtocol,
        stats: AnalyticsProviderProtocol,
    ) -> None:
        self._profiles = profiles
        self._stats = stats

    async def get_profile(self, address: str) -> UserProfileOut:
        address = normalize_address(address)
        profile = await self._profiles.get_or_create(address, utc_now())
        return UserProfileOut.from_domain(profile, await self._stats.user_stats(address))

    async def update_profile(
        self, address: str, caller: str, req: UpdateProfileRequest
    ) -> UserProfileOut:
        address = normalize_address(address)
        if not same_address(address, caller):
            raise ProfileOwnershipError(address)

        social = req.social.model_dump(exclude_none=True) if req.social else {}
        changes = ProfileUpdate(bio=req.bio, avatar=req.avatar, banner=req.banner, social=social)
        profile = await self._profiles.update(address, changes, utc_now())
        logger.info("profile %s updated: fields=%s", address, sorted(req.model_fields_set))
        return UserProfileOut.from_domain(profile, await self._stats.user_stats(address))
