"""
Remote product data source and its simulated server.

⚠️  No network calls are made here. Every method sleeps for a configurable
    delay and fails at a configurable rate, so the repository's fallback
    behaviour can be exercised end-to-end. Swap in
    `catalog.data.datasources.remote_http.HttpRemoteDataSource` to talk to a
    real catalog API.
"""

from __future__ import annotations

import asyncio
import logging
import random
from abc import ABC, abstractmethod
from typing import List, Optional

from catalog.data.models import NetworkInfo
from catalog.domain.failures import NetworkFailure, NotFoundFailure
from catalog.domain.product import Product, matches_query, new_product_id

logger = logging.getLogger(__name__)

DEFAULT_IMAGE = "assets/photo.jpg"


# ---------------------------------------------------------------------------
# Contract
# ---------------------------------------------------------------------------

class RemoteDataSource(ABC):
    """Network-backed product operations."""

    @abstractmethod
    async def get_all_products(self) -> List[Product]:
        """Return every product known to the server."""

    @abstractmethod
    async def get_product_by_id(self, product_id: str) -> Optional[Product]:
        """Return the product, or None when the server does not know it."""

    @abstractmethod
    async def create_product(self, product: Product) -> Product:
        """Create a product; the result carries the server-generated id."""

    @abstractmethod
    async def update_product(self, product: Product) -> Product:
        """Update a product on the server."""

    @abstractmethod
    async def delete_product(self, product_id: str) -> bool:
        """Delete a product; False when the server did not have it."""

    @abstractmethod
    async def search_products(self, query: str) -> List[Product]:
        """Products matching the query on the server."""

    @abstractmethod
    async def get_products_by_category(self, category: str) -> List[Product]:
        """Products in a category on the server."""

    @abstractmethod
    async def is_network_available(self) -> bool:
        """Connectivity check."""

    @abstractmethod
    async def get_network_info(self) -> NetworkInfo:
        """Connectivity details."""


# ---------------------------------------------------------------------------
# Seed data
# ---------------------------------------------------------------------------

SEED_PRODUCTS: List[Product] = [
    Product(
        id="1",
        name="Derby Leather Shoes",
        description="Classic derby shoes made from premium leather",
        image_url=DEFAULT_IMAGE,
        price=129.99,
    ),
    Product(
        id="2",
        name="Running Sneakers",
        description="Comfortable running shoes with breathable mesh",
        image_url=DEFAULT_IMAGE,
        price=89.99,
    ),
    Product(
        id="3",
        name="Casual Loafers",
        description="Stylish casual loafers for everyday wear",
        image_url=DEFAULT_IMAGE,
        price=79.99,
    ),
    Product(
        id="4",
        name="Formal Oxford Shoes",
        description="Elegant formal oxford shoes for business occasions",
        image_url=DEFAULT_IMAGE,
        price=159.99,
    ),
]


# ---------------------------------------------------------------------------
# Simulated client
# ---------------------------------------------------------------------------

class SimulatedRemoteDataSource(RemoteDataSource):
    """
    Simulated catalog server.

    Parameters
    ----------
    latency : float
        Seconds slept before every product operation. Default 0.8.
    error_rate : float
        Probability (0–1) that a product operation raises NetworkFailure.
        Default 0.1.
    availability : float
        Probability (0–1) that `is_network_available` reports True.
        Default 0.9.
    rng : random.Random, optional
        Source of randomness; inject a seeded instance for repeatable runs.
    """

    CHECK_LATENCY = 0.1
    INFO_LATENCY = 0.2

    def __init__(
        self,
        latency: float = 0.8,
        error_rate: float = 0.1,
        availability: float = 0.9,
        products: Optional[List[Product]] = None,
        rng: Optional[random.Random] = None,
    ):
        self._latency = latency
        self._error_rate = error_rate
        self._availability = availability
        self._products: List[Product] = list(SEED_PRODUCTS if products is None else products)
        self._rng = rng or random.Random()

        logger.info(
            "[REMOTE SIM] Source initialised (latency=%.2fs, error_rate=%.0f%%, availability=%.0f%%)",
            latency, error_rate * 100, availability * 100,
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _delay(self, seconds: float) -> None:
        if seconds > 0:
            await asyncio.sleep(seconds)

    async def _simulate_call(self, action: str) -> None:
        await self._delay(self._latency)
        if self._rng.random() < self._error_rate:
            logger.debug("[REMOTE SIM] Simulated failure: %s", action)
            raise NetworkFailure(f"Network error: Unable to {action}")

    def _find(self, product_id: str) -> Optional[Product]:
        return next((p for p in self._products if p.id == product_id), None)

    # ------------------------------------------------------------------
    # Products
    # ------------------------------------------------------------------

    async def get_all_products(self) -> List[Product]:
        await self._simulate_call("fetch products")
        return list(self._products)

    async def get_product_by_id(self, product_id: str) -> Optional[Product]:
        await self._simulate_call("fetch product")
        return self._find(product_id)

    async def create_product(self, product: Product) -> Product:
        await self._simulate_call("create product")
        created = product.copy_with(id=new_product_id())
        logger.info("[REMOTE SIM] Product created id=%s name=%s", created.id, created.name)
        return created

    async def update_product(self, product: Product) -> Product:
        await self._simulate_call("update product")
        if self._find(product.id) is None:
            raise NotFoundFailure("Product not found")
        return product

    async def delete_product(self, product_id: str) -> bool:
        await self._simulate_call("delete product")
        return self._find(product_id) is not None

    async def search_products(self, query: str) -> List[Product]:
        await self._simulate_call("search products")
        if not query:
            return list(self._products)
        return [p for p in self._products if matches_query(p, query)]

    async def get_products_by_category(self, category: str) -> List[Product]:
        await self._simulate_call("fetch products by category")
        # Products carry no category field; every product belongs to every category.
        return list(self._products)

    # ------------------------------------------------------------------
    # Connectivity
    # ------------------------------------------------------------------

    async def is_network_available(self) -> bool:
        await self._delay(self.CHECK_LATENCY if self._latency > 0 else 0)
        return self._rng.random() < self._availability

    async def get_network_info(self) -> NetworkInfo:
        await self._delay(self.INFO_LATENCY if self._latency > 0 else 0)
        connected = await self.is_network_available()
        return NetworkInfo(
            is_connected=connected,
            connection_type="WiFi" if connected else "None",
            response_time_ms=self._rng.randint(100, 600),
        )
