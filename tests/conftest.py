"""Pytest fixtures for catalog data sources, repositories and the API."""

import random
from typing import List, Optional

import pytest

from catalog.data.datasources.local import InMemoryLocalDataSource
from catalog.data.datasources.remote import SimulatedRemoteDataSource
from catalog.data.models import NetworkInfo
from catalog.data.repository import ProductRepositoryImpl
from catalog.domain.failures import NetworkFailure
from catalog.domain.product import Product


class FlakyRemote(SimulatedRemoteDataSource):
    """Simulated remote whose connectivity and failures are switched by the test."""

    def __init__(self, products: Optional[List[Product]] = None):
        super().__init__(latency=0, error_rate=0, availability=1.0, products=products)
        self.online = True
        self.failing = False
        self.calls: List[str] = []

    async def _simulate_call(self, action: str) -> None:
        self.calls.append(action)
        if self.failing:
            raise NetworkFailure(f"Network error: Unable to {action}")

    async def is_network_available(self) -> bool:
        return self.online

    async def get_network_info(self) -> NetworkInfo:
        return NetworkInfo(
            is_connected=self.online,
            connection_type="WiFi" if self.online else "None",
            response_time_ms=120,
        )


@pytest.fixture
def sample_product():
    return Product(
        id="42",
        name="Trail Boots",
        description="Waterproof boots for rough trails",
        image_url="assets/boots.jpg",
        price=119.5,
    )


@pytest.fixture
def remote():
    """Simulated remote with no delay and no random failures."""
    return SimulatedRemoteDataSource(latency=0, error_rate=0, availability=1.0, rng=random.Random(7))


@pytest.fixture
def local():
    """In-memory cache with no simulated delay."""
    return InMemoryLocalDataSource(delay_scale=0, availability=1.0)


@pytest.fixture
def flaky_remote():
    return FlakyRemote()


@pytest.fixture
def repository(flaky_remote, local):
    return ProductRepositoryImpl(remote=flaky_remote, local=local)
