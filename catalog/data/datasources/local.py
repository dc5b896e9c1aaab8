"""
Local product cache.

A key/value store standing in for on-device storage. Products are held as a
single JSON document plus `last_updated` and `cache_size` metadata, the way
a preferences file would hold them. Nothing is written to disk.
"""

from __future__ import annotations

import asyncio
import json
import logging
import random
from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from catalog.data.models import CacheInfo, ProductModel
from catalog.domain.failures import NotFoundFailure
from catalog.domain.product import Product, matches_query, new_product_id

logger = logging.getLogger(__name__)

PRODUCTS_KEY = "cached_products"
LAST_UPDATED_KEY = "last_updated"
CACHE_SIZE_KEY = "cache_size"

DEFAULT_EXPIRATION = timedelta(hours=24)

# Simulated storage delays, in seconds.
_DELAYS = {
    "get_all": 0.1,
    "get_by_id": 0.05,
    "save": 0.15,
    "update": 0.15,
    "delete": 0.1,
    "search": 0.08,
    "category": 0.08,
    "cache": 0.2,
    "clear": 0.1,
    "info": 0.05,
    "available": 0.03,
}


class LocalDataSource(ABC):
    """Storage-backed product operations."""

    @abstractmethod
    async def get_all_products(self) -> List[Product]:
        """Every cached product; empty when nothing is cached."""

    @abstractmethod
    async def get_product_by_id(self, product_id: str) -> Optional[Product]:
        """The cached product, or None."""

    @abstractmethod
    async def save_product(self, product: Product) -> Product:
        """Append a product, assigning a local id when it has none."""

    @abstractmethod
    async def update_product(self, product: Product) -> Product:
        """Replace a cached product."""

    @abstractmethod
    async def delete_product(self, product_id: str) -> bool:
        """Remove a cached product. False when it was not cached."""

    @abstractmethod
    async def search_products(self, query: str) -> List[Product]:
        """Cached products matching the query."""

    @abstractmethod
    async def get_products_by_category(self, category: str) -> List[Product]:
        """Cached products in a category."""

    @abstractmethod
    async def cache_products(self, products: List[Product]) -> None:
        """Replace the cached list with the given products."""

    @abstractmethod
    async def clear_cache(self) -> None:
        """Drop every cached product and all metadata."""

    @abstractmethod
    async def get_cache_info(self) -> CacheInfo:
        """Size, freshness and count of the cache."""

    @abstractmethod
    async def is_local_storage_available(self) -> bool:
        """Storage availability check."""


def calculate_cache_size(products: List[Product]) -> int:
    """Approximate byte size: string lengths plus 8 bytes per price."""
    size = 0
    for product in products:
        size += len(product.name)
        size += len(product.description)
        size += len(product.image_url)
        size += len(product.id)
        size += 8
    return size


class InMemoryLocalDataSource(LocalDataSource):
    def __init__(
        self,
        delay_scale: float = 1.0,
        expiration: timedelta = DEFAULT_EXPIRATION,
        availability: float = 0.95,
        storage: Optional[Dict[str, Any]] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._delay_scale = delay_scale
        self._expiration = expiration
        self._availability = availability
        self._storage: Dict[str, Any] = {} if storage is None else storage
        self._rng = rng or random.Random()

    async def _delay(self, operation: str) -> None:
        seconds = _DELAYS[operation] * self._delay_scale
        if seconds > 0:
            await asyncio.sleep(seconds)

    # ------------------------------------------------------------------ #
    # Reads
    # ------------------------------------------------------------------ #
    def _read_products(self) -> List[Product]:
        raw = self._storage.get(PRODUCTS_KEY)
        if raw is None:
            return []
        try:
            return [ProductModel.from_map(item).to_entity() for item in json.loads(raw)]
        except (ValueError, TypeError, ValidationError) as e:
            logger.warning("Local product cache is corrupted, clearing it: %s", e)
            self._storage.clear()
            return []

    async def get_all_products(self) -> List[Product]:
        await self._delay("get_all")
        return self._read_products()

    async def get_product_by_id(self, product_id: str) -> Optional[Product]:
        await self._delay("get_by_id")
        return next((p for p in self._read_products() if p.id == product_id), None)

    async def search_products(self, query: str) -> List[Product]:
        await self._delay("search")
        products = self._read_products()
        if not query:
            return products
        return [p for p in products if matches_query(p, query)]

    async def get_products_by_category(self, category: str) -> List[Product]:
        await self._delay("category")
        # Products carry no category field; every product belongs to every category.
        return self._read_products()

    # ------------------------------------------------------------------ #
    # Writes
    # ------------------------------------------------------------------ #
    def _write_products(self, products: List[Product]) -> None:
        self._storage[PRODUCTS_KEY] = json.dumps([ProductModel.from_entity(p).to_map() for p in products])
        self._storage[LAST_UPDATED_KEY] = datetime.now().isoformat()
        self._storage[CACHE_SIZE_KEY] = calculate_cache_size(products)

    async def save_product(self, product: Product) -> Product:
        await self._delay("save")
        to_save = product if product.id else product.copy_with(id=new_product_id())
        products = self._read_products()
        products.append(to_save)
        self._write_products(products)
        return to_save

    async def update_product(self, product: Product) -> Product:
        await self._delay("update")
        products = self._read_products()
        for index, existing in enumerate(products):
            if existing.id == product.id:
                products[index] = product
                self._write_products(products)
                return product
        raise NotFoundFailure("Product not found in local storage")

    async def delete_product(self, product_id: str) -> bool:
        await self._delay("delete")
        products = self._read_products()
        remaining = [p for p in products if p.id != product_id]
        if len(remaining) == len(products):
            return False
        self._write_products(remaining)
        return True

    async def cache_products(self, products: List[Product]) -> None:
        await self._delay("cache")
        self._write_products(list(products))
        logger.debug("Cached %d products", len(products))

    async def clear_cache(self) -> None:
        await self._delay("clear")
        self._storage.clear()

    # ------------------------------------------------------------------ #
    # Metadata
    # ------------------------------------------------------------------ #
    async def get_cache_info(self) -> CacheInfo:
        await self._delay("info")
        products = self._read_products()
        last_updated_raw = self._storage.get(LAST_UPDATED_KEY)

        last_updated: Optional[datetime] = None
        is_expired = True
        if last_updated_raw is not None:
            try:
                last_updated = datetime.fromisoformat(last_updated_raw)
                is_expired = datetime.now() - last_updated > self._expiration
            except ValueError:
                logger.warning("Invalid cache timestamp: %r", last_updated_raw)

        return CacheInfo(
            total_products=len(products),
            last_updated=last_updated or datetime.now(),
            cache_size_bytes=self._storage.get(CACHE_SIZE_KEY, 0),
            is_expired=is_expired,
        )

    async def is_local_storage_available(self) -> bool:
        await self._delay("available")
        return self._rng.random() < self._availability
