"""
Product entity.

The core record of the catalog. Every layer (data sources, repository,
use cases, API) passes Products around; wire formats are handled by
`catalog.data.models.ProductModel`.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, replace
from typing import Any, Dict, List


def new_product_id() -> str:
    """Milliseconds since the epoch, as a string."""
    return str(int(time.time() * 1000))


@dataclass(frozen=True)
class Product:
    id: str
    name: str
    description: str
    image_url: str
    price: float

    def copy_with(self, **changes: Any) -> "Product":
        return replace(self, **changes)

    def to_map(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "imageUrl": self.image_url,
            "price": self.price,
        }

    @classmethod
    def from_map(cls, data: Dict[str, Any]) -> "Product":
        return cls(
            id=str(data.get("id") or ""),
            name=data.get("name") or "",
            description=data.get("description") or "",
            image_url=data.get("imageUrl") or "",
            price=float(data.get("price") or 0.0),
        )

    @classmethod
    def create(cls, name: str, description: str, image_url: str, price: float) -> "Product":
        """Build a new product with a freshly generated id."""
        return cls(
            id=new_product_id(),
            name=name,
            description=description,
            image_url=image_url,
            price=float(price),
        )

    # -- Validation --

    def validation_errors(self) -> List[str]:
        """
        Return a list of validation errors.
        Empty list means the product is valid.
        """
        errors: List[str] = []

        if not self.id:
            errors.append("Product ID is required")
        if not self.name:
            errors.append("Product name is required")
        if not self.description:
            errors.append("Product description is required")
        if not self.image_url:
            errors.append("Product image URL is required")
        if self.price <= 0:
            errors.append("Product price must be greater than 0")

        return errors

    def is_valid(self) -> bool:
        return not self.validation_errors()


def matches_query(product: Product, query: str) -> bool:
    """Case-insensitive substring match on name or description."""
    lowered = query.lower()
    return lowered in product.name.lower() or lowered in product.description.lower()
