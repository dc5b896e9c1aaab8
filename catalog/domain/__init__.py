"""
Domain layer.

Entities, failures, the repository contract and the use cases.
Nothing in here knows about data sources, HTTP or configuration.
"""

from .failures import (
    CacheFailure,
    Failure,
    ForbiddenFailure,
    NetworkFailure,
    NotFoundFailure,
    ServerFailure,
    UnauthorizedFailure,
    ValidationFailure,
)
from .product import Product
from .repository import ProductRepository

__all__ = [
    "Product",
    "ProductRepository",
    "Failure",
    "ServerFailure",
    "CacheFailure",
    "NetworkFailure",
    "ValidationFailure",
    "NotFoundFailure",
    "UnauthorizedFailure",
    "ForbiddenFailure",
]
