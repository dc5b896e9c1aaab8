from abc import ABC, abstractmethod
from typing import List, Optional

from catalog.domain.product import Product


class ProductRepository(ABC):
    """Every product repository must implement this interface."""

    @abstractmethod
    async def get_all_products(self) -> List[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    async def get_product_by_id(self, product_id: str) -> Optional[Product]:
        """Fetch a single product, or None when it does not exist."""

    @abstractmethod
    async def create_product(self, product: Product) -> Product:
        """Store a new product and return it with its final id."""

    @abstractmethod
    async def update_product(self, product: Product) -> Product:
        """Replace an existing product."""

    @abstractmethod
    async def delete_product(self, product_id: str) -> bool:
        """Remove a product. Returns False when nothing was deleted."""

    @abstractmethod
    async def search_products(self, query: str) -> List[Product]:
        """Products whose name or description contains the query."""

    @abstractmethod
    async def get_products_by_category(self, category: str) -> List[Product]:
        """Products in the given category."""
