"""Unit tests for UserApplicationService."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from src.ba_analytics.domain.models import UserStats
from src.ba_common.errors import InvalidAddressError, ProfileOwnershipError
from src.ba_user.application.schemas import SocialLinks, UpdateProfileRequest
from src.ba_user.application.service import UserApplicationService
from src.ba_user.infrastructure.memory import InMemoryUserProfileRepository
from tests.helpers import OTHER, SELLER


def _make_service() -> tuple[UserApplicationService, MagicMock]:
    stats = MagicMock()
    stats.user_stats = AsyncMock(return_value=UserStats(nfts_created=2, nfts_owned=1, total_sales=3))
    return UserApplicationService(InMemoryUserProfileRepository(), stats), stats


@pytest.mark.asyncio
async def test_profile_created_lazily_with_stats() -> None:
    service, _ = _make_service()
    profile = await service.get_profile(SELLER.upper().replace("0X", "0x"))
    assert profile.address == SELLER
    assert profile.bio == ""
    assert profile.stats.nfts_created == 2
    assert profile.stats.total_sales == 3


@pytest.mark.asyncio
async def test_invalid_address_rejected() -> None:
    service, _ = _make_service()
    with pytest.raises(InvalidAddressError):
        await service.get_profile("bob")


@pytest.mark.asyncio
async def test_only_owner_may_update() -> None:
    service, _ = _make_service()
    with pytest.raises(ProfileOwnershipError):
        await service.update_profile(SELLER, OTHER, UpdateProfileRequest(bio="x"))


@pytest.mark.asyncio
async def test_update_merges_social_links() -> None:
    service, _ = _make_service()
    await service.update_profile(
        SELLER, SELLER, UpdateProfileRequest(social=SocialLinks(twitter="@art"))
    )
    profile = await service.update_profile(
        SELLER, SELLER, UpdateProfileRequest(bio="Painter", social=SocialLinks(website="https://a.test"))
    )
    assert profile.bio == "Painter"
    assert profile.social == {"twitter": "@art", "website": "https://a.test"}
    assert profile.updated_at is not None
