"""
Use cases.

Each use case is a thin callable that invokes exactly one repository
method. Callers (API routes, scripts) depend on use cases, never on the
repository directly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Generic, List, Optional, TypeVar

from catalog.domain.product import Product
from catalog.domain.repository import ProductRepository

ResultT = TypeVar("ResultT")
ParamsT = TypeVar("ParamsT")


class UseCase(ABC, Generic[ResultT, ParamsT]):
    @abstractmethod
    async def __call__(self, params: ParamsT) -> ResultT:
        pass


@dataclass(frozen=True)
class NoParams:
    pass


@dataclass(frozen=True)
class ViewProductParams:
    id: str


@dataclass(frozen=True)
class CreateProductParams:
    product: Product


@dataclass(frozen=True)
class UpdateProductParams:
    product: Product


@dataclass(frozen=True)
class DeleteProductParams:
    id: str


@dataclass(frozen=True)
class SearchProductsParams:
    query: str


class ViewAllProductsUseCase(UseCase[List[Product], NoParams]):
    def __init__(self, repository: ProductRepository):
        self.repository = repository

    async def __call__(self, params: NoParams) -> List[Product]:
        return await self.repository.get_all_products()


class ViewProductUseCase(UseCase[Optional[Product], ViewProductParams]):
    def __init__(self, repository: ProductRepository):
        self.repository = repository

    async def __call__(self, params: ViewProductParams) -> Optional[Product]:
        return await self.repository.get_product_by_id(params.id)


class CreateProductUseCase(UseCase[Product, CreateProductParams]):
    def __init__(self, repository: ProductRepository):
        self.repository = repository

    async def __call__(self, params: CreateProductParams) -> Product:
        return await self.repository.create_product(params.product)


class UpdateProductUseCase(UseCase[Product, UpdateProductParams]):
    def __init__(self, repository: ProductRepository):
        self.repository = repository

    async def __call__(self, params: UpdateProductParams) -> Product:
        return await self.repository.update_product(params.product)


class DeleteProductUseCase(UseCase[bool, DeleteProductParams]):
    def __init__(self, repository: ProductRepository):
        self.repository = repository

    async def __call__(self, params: DeleteProductParams) -> bool:
        return await self.repository.delete_product(params.id)


class SearchProductsUseCase(UseCase[List[Product], SearchProductsParams]):
    def __init__(self, repository: ProductRepository):
        self.repository = repository

    async def __call__(self, params: SearchProductsParams) -> List[Product]:
        return await self.repository.search_products(params.query)
