"""Dependency wiring: storage backend, outbound clients, application services.

Routers depend on the ``get_*_service`` providers below. Tests swap the
storage backend by overriding ``get_repositories`` and the IPFS client by
overriding ``get_ipfs_service`` (FastAPI ``dependency_overrides``).
"""

from dataclasses import dataclass
from functools import lru_cache

from fastapi import Depends

from config.settings import settings
from src.ba_analytics.application.service import AnalyticsApplicationService
from src.ba_analytics.infrastructure.repository_provider import RepositoryAnalyticsProvider
from src.ba_chain.application.service import ChainApplicationService
from src.ba_chain.infrastructure.rpc import BaseRPCClient
from src.ba_common.redis_client import get_redis
from src.ba_gateway.auth.challenge_store import (
    ChallengeStoreProtocol,
    InMemoryChallengeStore,
    RedisChallengeStore,
)
from src.ba_gateway.auth.service import AuthService
from src.ba_ipfs.client import IpfsServiceProtocol, PinataClient
from src.ba_marketplace.application.service import MarketplaceApplicationService
from src.ba_marketplace.domain.repository import (
    ListingRepositoryProtocol,
    PurchaseRepositoryProtocol,
)
from src.ba_marketplace.infrastructure.memory import (
    InMemoryListingRepository,
    InMemoryPurchaseRepository,
)
from src.ba_nft.application.service import NFTApplicationService
from src.ba_nft.domain.repository import NFTRepositoryProtocol
from src.ba_nft.infrastructure.memory import InMemoryNFTRepository
from src.ba_user.application.service import UserApplicationService
from src.ba_user.domain.repository import UserProfileRepositoryProtocol
from src.ba_user.infrastructure.memory import InMemoryUserProfileRepository


# eq=False keeps identity hashing, so lru_cache below keys on the instance.
@dataclass(eq=False)
class Repositories:
    nfts: NFTRepositoryProtocol
    listings: ListingRepositoryProtocol
    purchases: PurchaseRepositoryProtocol
    profiles: UserProfileRepositoryProtocol


def build_memory_repositories() -> Repositories:
    purchases = InMemoryPurchaseRepository()
    return Repositories(
        nfts=InMemoryNFTRepository(),
        listings=InMemoryListingRepository(purchases),
        purchases=purchases,
        profiles=InMemoryUserProfileRepository(),
    )


def build_postgres_repositories() -> Repositories:
    # Imported here so the memory backend never loads the database driver.
    from src.ba_common.database import get_session_factory
    from src.ba_marketplace.infrastructure.persistence import (
        ListingRepository,
        PurchaseRepository,
    )
    from src.ba_nft.infrastructure.persistence import NFTRepository
    from src.ba_user.infrastructure.persistence import UserProfileRepository

    sessions = get_session_factory()
    return Repositories(
        nfts=NFTRepository(sessions),
        listings=ListingRepository(sessions),
        purchases=PurchaseRepository(sessions),
        profiles=UserProfileRepository(sessions),
    )


def build_repositories(backend: str) -> Repositories:
    if backend == "memory":
        return build_memory_repositories()
    if backend == "postgres":
        return build_postgres_repositories()
    raise ValueError(f"Unknown STORAGE_BACKEND: {backend!r} (expected memory or postgres)")


@lru_cache(maxsize=1)
def get_repositories() -> Repositories:
    return build_repositories(settings.STORAGE_BACKEND)


# ---------------------------------------------------------------------------
# Outbound clients
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_ipfs_service() -> IpfsServiceProtocol:
    return PinataClient(
        api_url=settings.PINATA_API_URL,
        jwt=settings.PINATA_JWT,
        gateway=settings.PINATA_GATEWAY,
        timeout=settings.HTTP_TIMEOUT_SECONDS,
    )


@lru_cache(maxsize=1)
def get_rpc_client() -> BaseRPCClient:
    return BaseRPCClient(settings.BASE_RPC_URL, timeout=settings.HTTP_TIMEOUT_SECONDS)


# ---------------------------------------------------------------------------
# Application services
# ---------------------------------------------------------------------------


def get_nft_service(
    repos: Repositories = Depends(get_repositories),
    ipfs: IpfsServiceProtocol = Depends(get_ipfs_service),
) -> NFTApplicationService:
    return NFTApplicationService(
        repos.nfts, repos.purchases, ipfs, max_upload_bytes=settings.MAX_UPLOAD_BYTES
    )


def get_marketplace_service(
    repos: Repositories = Depends(get_repositories),
) -> MarketplaceApplicationService:
    return MarketplaceApplicationService(repos.listings, repos.purchases)


def _analytics_provider(repos: Repositories) -> RepositoryAnalyticsProvider:
    return RepositoryAnalyticsProvider(repos.nfts, repos.listings, repos.purchases, repos.profiles)


def get_user_service(repos: Repositories = Depends(get_repositories)) -> UserApplicationService:
    return UserApplicationService(repos.profiles, _analytics_provider(repos))


# One service (and stats cache) per repository set.
@lru_cache(maxsize=1)
def _analytics_service_for(repos: Repositories) -> AnalyticsApplicationService:
    return AnalyticsApplicationService(
        _analytics_provider(repos),
        repos.profiles,
        repos.purchases,
        cache_ttl_seconds=settings.ANALYTICS_CACHE_TTL_SECONDS,
    )


def get_analytics_service(
    repos: Repositories = Depends(get_repositories),
) -> AnalyticsApplicationService:
    return _analytics_service_for(repos)


def get_chain_service(
    rpc: BaseRPCClient = Depends(get_rpc_client),
) -> ChainApplicationService:
    return ChainApplicationService(
        rpc,
        explorer_url=settings.BASESCAN_URL,
        max_polls=settings.RECEIPT_MAX_POLLS,
        poll_interval=settings.RECEIPT_POLL_INTERVAL_SECONDS,
    )


_challenge_store: ChallengeStoreProtocol | None = None


async def get_challenge_store() -> ChallengeStoreProtocol:
    global _challenge_store  # noqa: PLW0603
    if _challenge_store is None:
        if settings.CHALLENGE_STORE == "redis":
            _challenge_store = RedisChallengeStore(await get_redis())
        else:
            _challenge_store = InMemoryChallengeStore()
    return _challenge_store


def get_auth_service(
    store: ChallengeStoreProtocol = Depends(get_challenge_store),
) -> AuthService:
    return AuthService(store, ttl_seconds=settings.AUTH_CHALLENGE_TTL_SECONDS)
