"""
Lightweight in-memory ProductRepository for local development.

A single list plays the part of both server and storage, with a small
artificial delay per call. It is NOT backed by any data source and keeps
nothing across restarts.
"""

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional

from catalog.data.datasources.remote import DEFAULT_IMAGE
from catalog.domain.failures import NotFoundFailure
from catalog.domain.product import Product, matches_query, new_product_id
from catalog.domain.repository import ProductRepository

logger = logging.getLogger(__name__)


def _seed_products() -> List[Product]:
    return [
        Product(
            id="1",
            name="Derby Leather Shoes",
            description="Men's premium leather derby shoes with classic design",
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
            price=149.99,
        ),
    ]


class InMemoryProductRepository(ProductRepository):
    """
    In-memory stand-in for the full remote + cache repository.

    Methods are intentionally simple; `delay_scale=0` turns off the
    simulated latency.
    """

    def __init__(self, delay_scale: float = 1.0, products: Optional[List[Product]] = None) -> None:
        self._delay_scale = delay_scale
        self._products: List[Product] = _seed_products() if products is None else list(products)

    async def _delay(self, seconds: float) -> None:
        if seconds * self._delay_scale > 0:
            await asyncio.sleep(seconds * self._delay_scale)

    def _index_of(self, product_id: str) -> int:
        return next((i for i, p in enumerate(self._products) if p.id == product_id), -1)

    async def get_all_products(self) -> List[Product]:
        await self._delay(0.5)
        return list(self._products)

    async def get_product_by_id(self, product_id: str) -> Optional[Product]:
        await self._delay(0.3)
        index = self._index_of(product_id)
        return self._products[index] if index != -1 else None

    async def create_product(self, product: Product) -> Product:
        await self._delay(0.4)
        created = product if product.id else product.copy_with(id=new_product_id())
        self._products.append(created)
        logger.info("Product created id=%s name=%s", created.id, created.name)
        return created

    async def update_product(self, product: Product) -> Product:
        await self._delay(0.4)
        index = self._index_of(product.id)
        if index == -1:
            raise NotFoundFailure("Product not found")
        self._products[index] = product
        return product

    async def delete_product(self, product_id: str) -> bool:
        await self._delay(0.3)
        index = self._index_of(product_id)
        if index == -1:
            return False
        del self._products[index]
        return True

    async def search_products(self, query: str) -> List[Product]:
        await self._delay(0.3)
        if not query:
            return list(self._products)
        return [p for p in self._products if matches_query(p, query)]

    async def get_products_by_category(self, category: str) -> List[Product]:
        await self._delay(0.3)
        return list(self._products)
