"""
Data layer.

Wire models, data sources and the repository implementations that the
domain layer's use cases run against.
"""

from .in_memory_repository import InMemoryProductRepository
from .models import CacheInfo, NetworkInfo, ProductModel
from .repository import ProductRepositoryImpl

__all__ = [
    "ProductModel",
    "CacheInfo",
    "NetworkInfo",
    "ProductRepositoryImpl",
    "InMemoryProductRepository",
]
