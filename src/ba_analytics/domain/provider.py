"""Analytics data provider contract.

Implementations compute aggregates from whatever source they own
(repositories, an indexer, a warehouse). Contract:

- ``marketplace_stats(since)``: sales-derived fields (volume, sales count,
  average price, unique buyers/sellers) consider only sales at or after
  ``since`` (all sales when None); inventory fields (NFTs, active listings,
  floor price, users, creators) are current totals.
- ``creator_earnings(address)``: lifetime figures for sales where the
  address was the seller, plus NFTs it minted.
- ``creator_rankings(kind, limit)`` / ``top_buyers(limit)``: at most
  ``limit`` rows, descending by the ranked value, ranks starting at 1, ties
  broken by address.
- ``user_stats(address)``: counters shown on a profile.
- ``trending_nfts(since, limit)``: NFTs with at least one sale at or after
  ``since``, descending by volume then sale count, ties broken by NFT id.
  Sales of ids with no NFT record are skipped.

Addresses are lowercase on both sides of the contract.
"""

from datetime import datetime
from typing import Protocol

from src.ba_analytics.domain.models import (
    BuyerRanking,
    CreatorEarnings,
    CreatorRanking,
    MarketplaceStats,
    TrendingNFT,
    UserStats,
)
from src.ba_common.enums import RankingType


class AnalyticsProviderProtocol(Protocol):
    async def marketplace_stats(self, since: datetime | None) -> MarketplaceStats: ...

    async def creator_earnings(self, address: str) -> CreatorEarnings: ...

    async def creator_rankings(self, kind: RankingType, limit: int) -> list[CreatorRanking]: ...

    async def top_buyers(self, limit: int) -> list[BuyerRanking]: ...

    async def user_stats(self, address: str) -> UserStats: ...

    async def trending_nfts(self, since: datetime, limit: int) -> list[TrendingNFT]: ...
