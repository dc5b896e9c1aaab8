"""
Data-layer models.

Defines the shapes that cross the data-source boundary:
- ProductModel: the JSON form of a Product (camelCase keys on the wire)
- CacheInfo: metadata reported by the local cache
- NetworkInfo: connectivity reported by the remote source

Both the simulated and the HTTP remote, and the local cache, serialize
through ProductModel so every source reads and writes the same payload.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator

from catalog.domain.product import Product, new_product_id


class ProductModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = ""
    name: str = ""
    description: str = ""
    image_url: str = Field(default="", alias="imageUrl")
    price: float = 0.0

    @field_validator("id", "name", "description", "image_url", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, int):
            return str(value)
        return value

    @field_validator("price", mode="before")
    @classmethod
    def _none_to_zero(cls, value: Any) -> Any:
        return 0.0 if value is None else value

    # -- Wire helpers --

    @classmethod
    def from_json(cls, source: str) -> "ProductModel":
        return cls.model_validate_json(source)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_map(cls, data: Dict[str, Any]) -> "ProductModel":
        return cls.model_validate(data)

    def to_map(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)

    # -- Entity conversion --

    @classmethod
    def from_entity(cls, product: Product) -> "ProductModel":
        return cls(
            id=product.id,
            name=product.name,
            description=product.description,
            image_url=product.image_url,
            price=product.price,
        )

    def to_entity(self) -> Product:
        return Product(
            id=self.id,
            name=self.name,
            description=self.description,
            image_url=self.image_url,
            price=self.price,
        )

    @classmethod
    def create(cls, name: str, description: str, image_url: str, price: float) -> "ProductModel":
        return cls(id=new_product_id(), name=name, description=description, image_url=image_url, price=price)


class CacheInfo(BaseModel):
    total_products: int
    last_updated: datetime
    cache_size_bytes: int
    is_expired: bool


class NetworkInfo(BaseModel):
    is_connected: bool
    connection_type: str
    response_time_ms: int
