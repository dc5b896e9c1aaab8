"""
Dependency injection container.

Builds data sources, the repository and the use cases from CatalogConfig.
The selection of simulated vs real HTTP remote happens here only.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any, Dict, Optional

from catalog.data.datasources.local import InMemoryLocalDataSource, LocalDataSource
from catalog.data.datasources.remote import RemoteDataSource, SimulatedRemoteDataSource
from catalog.data.datasources.remote_http import HttpRemoteDataSource
from catalog.data.in_memory_repository import InMemoryProductRepository
from catalog.data.repository import ProductRepositoryImpl
from catalog.domain.repository import ProductRepository
from catalog.domain.usecases import (
    CreateProductUseCase,
    DeleteProductUseCase,
    SearchProductsUseCase,
    UpdateProductUseCase,
    ViewAllProductsUseCase,
    ViewProductUseCase,
)
from catalog.utils.config_loader import CatalogConfig, load_catalog_config

logger = logging.getLogger(__name__)

# Backing dict for caches built with `cache.shared_storage: true`.
_SHARED_STORAGE: Dict[str, Any] = {}


def build_remote(cfg: CatalogConfig) -> RemoteDataSource:
    remote = cfg.remote
    if remote.mode == "http":
        return HttpRemoteDataSource(
            base_url=remote.base_url or None,
            api_key=remote.api_key or None,
            timeout_seconds=remote.timeout_seconds,
        )
    return SimulatedRemoteDataSource(
        latency=remote.latency * cfg.latency_scale,
        error_rate=remote.error_rate,
        availability=remote.availability,
    )


def build_local(cfg: CatalogConfig) -> LocalDataSource:
    return InMemoryLocalDataSource(
        delay_scale=cfg.latency_scale,
        expiration=timedelta(hours=cfg.cache.expiration_hours),
        availability=cfg.cache.availability,
        storage=_SHARED_STORAGE if cfg.cache.shared_storage else None,
    )


class Container:
    def __init__(
        self,
        config: Optional[CatalogConfig] = None,
        remote: Optional[RemoteDataSource] = None,
        local: Optional[LocalDataSource] = None,
        repository: Optional[ProductRepository] = None,
    ) -> None:
        self.config = config or load_catalog_config()

        self.remote_data_source = remote or build_remote(self.config)
        self.local_data_source = local or build_local(self.config)

        if repository is not None:
            self.product_repository = repository
        elif self.config.repository == "in_memory":
            self.product_repository = InMemoryProductRepository(delay_scale=self.config.latency_scale)
        else:
            self.product_repository = ProductRepositoryImpl(
                remote=self.remote_data_source,
                local=self.local_data_source,
            )

        self.view_all_products = ViewAllProductsUseCase(self.product_repository)
        self.view_product = ViewProductUseCase(self.product_repository)
        self.create_product = CreateProductUseCase(self.product_repository)
        self.update_product = UpdateProductUseCase(self.product_repository)
        self.delete_product = DeleteProductUseCase(self.product_repository)
        self.search_products = SearchProductsUseCase(self.product_repository)

    @property
    def use_cases(self) -> Dict[str, Any]:
        return {
            "viewAllProducts": self.view_all_products,
            "viewProduct": self.view_product,
            "createProduct": self.create_product,
            "updateProduct": self.update_product,
            "deleteProduct": self.delete_product,
            "searchProducts": self.search_products,
        }

    @property
    def supports_cache(self) -> bool:
        return isinstance(self.product_repository, ProductRepositoryImpl)

    async def initialize(self) -> None:
        logger.info(
            "Container initialized (repository=%s, remote=%s)",
            type(self.product_repository).__name__,
            type(self.remote_data_source).__name__,
        )

    def dispose(self) -> None:
        logger.info("Container disposed")


_container: Optional[Container] = None


def get_container() -> Container:
    """Process-wide container, built on first use."""
    global _container
    if _container is None:
        _container = Container()
    return _container


def reset_container(container: Optional[Container] = None) -> None:
    """Drop (or replace) the process-wide container."""
    global _container
    if _container is not None:
        _container.dispose()
    _container = container
