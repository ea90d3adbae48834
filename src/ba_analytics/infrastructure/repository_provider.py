"""RepositoryAnalyticsProvider — aggregates computed from the live repositories.

Every call scans the underlying stores; the application service caches the
marketplace-wide figures so the scan runs at most once per TTL.
"""

from collections import defaultdict
from datetime import datetime

from src.ba_analytics.domain.models import (
    BuyerRanking,
    CreatorEarnings,
    CreatorRanking,
    MarketplaceStats,
    TrendingNFT,
    UserStats,
)
from src.ba_common.datetime_utils import utc_now
from src.ba_common.enums import RankingType
from src.ba_marketplace.domain.models import Purchase
from src.ba_marketplace.domain.repository import (
    ListingRepositoryProtocol,
    PurchaseRepositoryProtocol,
)
from src.ba_nft.domain.repository import NFTRepositoryProtocol
from src.ba_user.domain.repository import UserProfileRepositoryProtocol


def _earnings_from(address: str, sales: list[Purchase], nfts_created: int) -> CreatorEarnings:
    volume = sum(p.total_price for p in sales)
    return CreatorEarnings(
        address=address,
        total_earnings=sum(p.seller_amount for p in sales),
        total_sales=len(sales),
        total_volume=volume,
        average_price=volume / len(sales) if sales else 0.0,
        top_sale=max((p.total_price for p in sales), default=0.0),
        nfts_created=nfts_created,
        nfts_sold=len({p.nft_id for p in sales}),
        last_sale_at=max((p.timestamp for p in sales), default=None),
    )


class RepositoryAnalyticsProvider:
    def __init__(
        self,
        nfts: NFTRepositoryProtocol,
        listings: ListingRepositoryProtocol,
        purchases: PurchaseRepositoryProtocol,
        profiles: UserProfileRepositoryProtocol,
    ) -> None:
        self._nfts = nfts
        self._listings = listings
        self._purchases = purchases
        self._profiles = profiles

    async def marketplace_stats(self, since: datetime | None) -> MarketplaceStats:
        now = utc_now()
        nfts = await self._nfts.list_nfts(None)
        active = [lst for lst in await self._listings.list_active() if lst.expires_at > now]
        sales = [
            p for p in await self._purchases.list_all()
            if since is None or p.timestamp >= since
        ]
        volume = sum(p.total_price for p in sales)
        units = sum(p.quantity for p in sales)

        return MarketplaceStats(
            total_volume=volume,
            total_sales=len(sales),
            total_nfts=len(nfts),
            total_listings=len(active),
            total_users=await self._profiles.count(),
            floor_price=min((lst.price for lst in active), default=0.0),
            average_price=volume / units if units else 0.0,
            unique_creators=len({n.creator for n in nfts}),
            unique_buyers=len({p.buyer for p in sales}),
            unique_sellers=len({p.seller for p in sales}),
            last_updated=now,
        )

    async def creator_earnings(self, address: str) -> CreatorEarnings:
        sales = await self._purchases.list_by_seller(address)
        created = await self._nfts.list_by_creator(address)
        return _earnings_from(address, sales, len(created))

    async def creator_rankings(self, kind: RankingType, limit: int) -> list[CreatorRanking]:
        sales_by_seller: dict[str, list[Purchase]] = defaultdict(list)
        for p in await self._purchases.list_all():
            sales_by_seller[p.seller].append(p)
        created: dict[str, int] = defaultdict(int)
        for n in await self._nfts.list_nfts(None):
            created[n.creator] += 1

        rows = [
            _earnings_from(addr, sales_by_seller.get(addr, []), created.get(addr, 0))
            for addr in set(sales_by_seller) | set(created)
        ]

        def value(e: CreatorEarnings) -> float:
            if kind == RankingType.EARNINGS:
                return e.total_earnings
            if kind == RankingType.SALES:
                return float(e.total_sales)
            return float(e.nfts_created)

        rows.sort(key=lambda e: (-value(e), e.address))
        return [
            CreatorRanking(
                rank=i,
                address=e.address,
                value=value(e),
                nfts_created=e.nfts_created,
                total_sales=e.total_sales,
                total_earnings=e.total_earnings,
            )
            for i, e in enumerate(rows[:limit], start=1)
        ]

    async def top_buyers(self, limit: int) -> list[BuyerRanking]:
        units: dict[str, int] = defaultdict(int)
        spent: dict[str, float] = defaultdict(float)
        for p in await self._purchases.list_all():
            units[p.buyer] += p.quantity
            spent[p.buyer] += p.total_price

        ordered = sorted(spent, key=lambda addr: (-spent[addr], addr))[:limit]
        return [
            BuyerRanking(
                rank=i,
                address=addr,
                nfts_purchased=units[addr],
                total_spent=spent[addr],
                average_price=spent[addr] / units[addr],
            )
            for i, addr in enumerate(ordered, start=1)
        ]

    async def user_stats(self, address: str) -> UserStats:
        return UserStats(
            nfts_created=len(await self._nfts.list_by_creator(address)),
            nfts_owned=len(await self._nfts.list_by_owner(address)),
            total_sales=len(await self._purchases.list_by_seller(address)),
        )

    async def trending_nfts(self, since: datetime, limit: int) -> list[TrendingNFT]:
        recent: dict[int, list[Purchase]] = defaultdict(list)
        for p in await self._purchases.list_all():
            if p.timestamp >= since:
                recent[p.nft_id].append(p)

        now = utc_now()
        floor: dict[int, float] = {}
        for lst in await self._listings.list_active():
            if lst.expires_at > now and lst.nft_id in recent:
                floor[lst.nft_id] = min(lst.price, floor.get(lst.nft_id, lst.price))

        rows: list[TrendingNFT] = []
        for nft_id, sales in recent.items():
            nft = await self._nfts.get(nft_id)
            if nft is None:
                continue
            rows.append(
                TrendingNFT(
                    nft_id=nft_id,
                    name=nft.name,
                    image=nft.image,
                    creator=nft.creator,
                    sales=len(sales),
                    units_sold=sum(p.quantity for p in sales),
                    volume=sum(p.total_price for p in sales),
                    floor_price=floor.get(nft_id),
                )
            )
        rows.sort(key=lambda t: (-t.volume, -t.sales, t.nft_id))
        return rows[:limit]
