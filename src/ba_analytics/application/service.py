"""AnalyticsApplicationService — marketplace stats, creator earnings, rankings.

Marketplace-wide stats are cached per window for ANALYTICS_CACHE_TTL_SECONDS.
When the provider fails and a previous value exists, the stale value is
served (flagged ``stale``) instead of an error.
"""

import logging
import time
from collections import Counter
from collections.abc import Callable
from datetime import timedelta

from src.ba_analytics.application.schemas import (
    BuyerRankingOut,
    CreatorEarningsOut,
    CreatorProfileOut,
    CreatorRankingOut,
    CreatorStatsOut,
    MarketplaceStatsOut,
    MostSoldNFTOut,
    RankingsOut,
    TrendingNFTOut,
)
from src.ba_analytics.domain.models import MarketplaceStats
from src.ba_analytics.domain.provider import AnalyticsProviderProtocol
from src.ba_common.address import normalize_address
from src.ba_common.datetime_utils import iso_or_none, utc_now
from src.ba_common.enums import RankingType
from src.ba_common.errors import InvalidRankingTypeError
from src.ba_marketplace.application.schemas import PurchaseOut
from src.ba_marketplace.domain.repository import PurchaseRepositoryProtocol
from src.ba_user.domain.repository import UserProfileRepositoryProtocol

logger = logging.getLogger("ba.analytics")

RECENT_SALES_LIMIT = 5
TRENDING_WINDOW = timedelta(hours=24)


def parse_ranking_type(value: str) -> RankingType:
    try:
        return RankingType(value)
    except ValueError:
        raise InvalidRankingTypeError(value) from None


class AnalyticsApplicationService:
    def __init__(
        self,
        provider: AnalyticsProviderProtocol,
        profiles: UserProfileRepositoryProtocol,
        purchases: PurchaseRepositoryProtocol,
        cache_ttl_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._provider = provider
        self._profiles = profiles
        self._purchases = purchases
        self._ttl = cache_ttl_seconds
        self._clock = clock
        self._cache: dict[int | None, tuple[float, MarketplaceStats]] = {}

    async def marketplace_stats(self, window_hours: int | None = None) -> MarketplaceStatsOut:
        cached = self._cache.get(window_hours)
        now = self._clock()
        if cached is not None and now - cached[0] < self._ttl:
            return MarketplaceStatsOut.from_domain(cached[1], window_hours, stale=False)

        since = utc_now() - timedelta(hours=window_hours) if window_hours else None
        try:
            stats = await self._provider.marketplace_stats(since)
        except Exception:
            if cached is None:
                raise
            logger.exception("analytics provider failed, serving cached stats")
            return MarketplaceStatsOut.from_domain(cached[1], window_hours, stale=True)

        self._cache[window_hours] = (now, stats)
        return MarketplaceStatsOut.from_domain(stats, window_hours, stale=False)

    def invalidate(self) -> None:
        self._cache.clear()

    async def top_creators(self, limit: int) -> list[CreatorRankingOut]:
        rows = await self._provider.creator_rankings(RankingType.EARNINGS, limit)
        return [CreatorRankingOut.from_domain(r) for r in rows]

    async def top_buyers(self, limit: int) -> list[BuyerRankingOut]:
        rows = await self._provider.top_buyers(limit)
        return [BuyerRankingOut.from_domain(b) for b in rows]

    async def trending(self, limit: int) -> list[TrendingNFTOut]:
        rows = await self._provider.trending_nfts(utc_now() - TRENDING_WINDOW, limit)
        return [TrendingNFTOut.from_domain(t) for t in rows]

    async def rankings(self, ranking_type: str, limit: int) -> RankingsOut:
        kind = parse_ranking_type(ranking_type)
        rows = await self._provider.creator_rankings(kind, limit)
        return RankingsOut(
            type=kind.value,
            items=[CreatorRankingOut.from_domain(r) for r in rows],
        )

    async def creator_profile(self, address: str) -> CreatorProfileOut:
        address = normalize_address(address)
        profile = await self._profiles.get(address)
        if profile is None:
            return CreatorProfileOut(address=address)
        return CreatorProfileOut(
            address=profile.address,
            bio=profile.bio,
            avatar=profile.avatar,
            banner=profile.banner,
            social=dict(profile.social),
            verified=profile.verified,
            joined_at=iso_or_none(profile.created_at),
        )

    async def creator_earnings(self, address: str) -> CreatorEarningsOut:
        address = normalize_address(address)
        return CreatorEarningsOut.from_domain(await self._provider.creator_earnings(address))

    async def creator_stats(self, address: str) -> CreatorStatsOut:
        address = normalize_address(address)
        profile = await self.creator_profile(address)
        earnings = await self._provider.creator_earnings(address)

        sales = await self._purchases.list_by_seller(address)
        sales.sort(key=lambda p: p.timestamp, reverse=True)
        units: Counter[int] = Counter()
        for p in sales:
            units[p.nft_id] += p.quantity
        most_sold = None
        if units:
            nft_id, count = units.most_common(1)[0]
            most_sold = MostSoldNFTOut(nft_id=nft_id, units_sold=count)

        return CreatorStatsOut(
            profile=profile,
            earnings=CreatorEarningsOut.from_domain(earnings),
            recent_sales=[PurchaseOut.from_domain(p) for p in sales[:RECENT_SALES_LIMIT]],
            most_sold_nft=most_sold,
        )
