"""Shared test fixtures.

Every test gets fresh in-memory repositories and a fake IPFS client, wired
into the app through FastAPI dependency_overrides.
"""

import os

# Settings() requires JWT_SECRET; set it before anything imports config.settings.
os.environ.setdefault("JWT_SECRET", "test-secret-not-for-production")

import pytest
from httpx import ASGITransport, AsyncClient

from src.container import Repositories, build_memory_repositories, get_ipfs_service, get_repositories
from src.main import app
from tests.helpers import FakeIpfs


@pytest.fixture
def repos() -> Repositories:
    return build_memory_repositories()


@pytest.fixture
def fake_ipfs() -> FakeIpfs:
    return FakeIpfs()


@pytest.fixture
async def client(repos: Repositories, fake_ipfs: FakeIpfs) -> AsyncClient:
    """Async HTTP client for testing FastAPI endpoints."""
    app.dependency_overrides[get_repositories] = lambda: repos
    app.dependency_overrides[get_ipfs_service] = lambda: fake_ipfs
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
