"""
Product repository backed by a remote source and a local cache.

Reads prefer fresh remote data and refresh the cache with it; when the
remote is unreachable or fails, the cache answers instead. Writes go to the
remote first and are mirrored into the cache; when the remote cannot take
them they are applied to the cache only.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from catalog.data.datasources.local import LocalDataSource
from catalog.data.datasources.remote import RemoteDataSource
from catalog.data.models import CacheInfo, NetworkInfo
from catalog.domain.failures import NetworkFailure, NotFoundFailure, ServerFailure
from catalog.domain.product import Product
from catalog.domain.repository import ProductRepository

logger = logging.getLogger(__name__)


class ProductRepositoryImpl(ProductRepository):
    def __init__(self, remote: RemoteDataSource, local: LocalDataSource):
        self._remote = remote
        self._local = local

    async def get_all_products(self) -> List[Product]:
        try:
            cached = await self._local.get_all_products()

            if not await self._remote.is_network_available():
                if cached:
                    logger.warning("Offline: serving %d cached products", len(cached))
                    return cached
                raise NetworkFailure("No network connection and no cached data available")

            try:
                products = await self._remote.get_all_products()
            except Exception as e:
                if cached:
                    logger.warning("Remote fetch failed, serving cached products: %s", e)
                    return cached
                raise

            await self._local.cache_products(products)
            return products
        except Exception as e:
            raise ServerFailure(f"Failed to get products: {e}") from e

    async def get_product_by_id(self, product_id: str) -> Optional[Product]:
        try:
            cached = await self._local.get_product_by_id(product_id)

            if not await self._remote.is_network_available():
                logger.warning("Offline: serving cached copy of product %s", product_id)
                return cached

            try:
                product = await self._remote.get_product_by_id(product_id)
            except Exception as e:
                logger.warning("Remote lookup of %s failed, serving cache: %s", product_id, e)
                return cached

            if product is None:
                if cached is not None:
                    logger.info("Product %s no longer exists remotely, evicting from cache", product_id)
                    await self._local.delete_product(product_id)
                return None

            await self._refresh_cached(product, cached)
            return product
        except Exception as e:
            raise ServerFailure(f"Failed to get product by ID: {e}") from e

    async def _refresh_cached(self, product: Product, cached: Optional[Product]) -> None:
        if cached is None:
            await self._local.save_product(product)
            return
        try:
            await self._local.update_product(product)
        except NotFoundFailure:
            await self._local.save_product(product)

    async def create_product(self, product: Product) -> Product:
        try:
            if await self._remote.is_network_available():
                try:
                    created = await self._remote.create_product(product)
                except Exception as e:
                    logger.warning("Remote create failed, saving locally only: %s", e)
                    return await self._local.save_product(product)
                return await self._local.save_product(created)
            logger.warning("Offline: saving product %s locally only", product.name)
            return await self._local.save_product(product)
        except Exception as e:
            raise ServerFailure(f"Failed to create product: {e}") from e

    async def update_product(self, product: Product) -> Product:
        try:
            if await self._remote.is_network_available():
                try:
                    updated = await self._remote.update_product(product)
                except Exception as e:
                    logger.warning("Remote update of %s failed, updating locally only: %s", product.id, e)
                    return await self._local.update_product(product)
                await self._refresh_cached(updated, await self._local.get_product_by_id(updated.id))
                return updated
            logger.warning("Offline: updating product %s locally only", product.id)
            return await self._local.update_product(product)
        except Exception as e:
            raise ServerFailure(f"Failed to update product: {e}") from e

    async def delete_product(self, product_id: str) -> bool:
        try:
            if await self._remote.is_network_available():
                try:
                    deleted = await self._remote.delete_product(product_id)
                except Exception as e:
                    logger.warning("Remote delete of %s failed, deleting locally only: %s", product_id, e)
                    return await self._local.delete_product(product_id)
                if deleted:
                    await self._local.delete_product(product_id)
                return deleted
            logger.warning("Offline: deleting product %s locally only", product_id)
            return await self._local.delete_product(product_id)
        except Exception as e:
            raise ServerFailure(f"Failed to delete product: {e}") from e

    async def search_products(self, query: str) -> List[Product]:
        try:
            if await self._remote.is_network_available():
                try:
                    results = await self._remote.search_products(query)
                except Exception as e:
                    logger.warning("Remote search failed, searching cache: %s", e)
                    return await self._local.search_products(query)
                await self._local.cache_products(results)
                return results
            logger.warning("Offline: searching cached products for %r", query)
            return await self._local.search_products(query)
        except Exception as e:
            raise ServerFailure(f"Failed to search products: {e}") from e

    async def get_products_by_category(self, category: str) -> List[Product]:
        try:
            if await self._remote.is_network_available():
                try:
                    results = await self._remote.get_products_by_category(category)
                except Exception as e:
                    logger.warning("Remote category fetch failed, reading cache: %s", e)
                    return await self._local.get_products_by_category(category)
                await self._local.cache_products(results)
                return results
            logger.warning("Offline: reading cached products for category %r", category)
            return await self._local.get_products_by_category(category)
        except Exception as e:
            raise ServerFailure(f"Failed to get products by category: {e}") from e

    # ------------------------------------------------------------------
    # Maintenance
    # ------------------------------------------------------------------

    async def get_network_info(self) -> NetworkInfo:
        return await self._remote.get_network_info()

    async def get_cache_info(self) -> CacheInfo:
        return await self._local.get_cache_info()

    async def clear_cache(self) -> None:
        await self._local.clear_cache()
        logger.info("Local product cache cleared")

    async def refresh_data(self) -> List[Product]:
        """Force a remote fetch and overwrite the cache with it."""
        try:
            products = await self._remote.get_all_products()
            await self._local.cache_products(products)
            return products
        except Exception as e:
            raise ServerFailure(f"Failed to refresh data: {e}") from e
