"""
Real HTTP remote data source.

Used when a catalog API base URL is configured. Talks REST over httpx and
normalizes responses through ProductModel, so the repository receives the
same Product entities as with the simulated source.
"""

from __future__ import annotations

import logging
import os
import time
from typing import Any, Dict, List, Optional

import httpx

from catalog.data.datasources.remote import RemoteDataSource
from catalog.data.models import NetworkInfo, ProductModel
from catalog.domain.failures import NetworkFailure, NotFoundFailure, ServerFailure
from catalog.domain.product import Product

logger = logging.getLogger(__name__)


class HttpRemoteDataSource(RemoteDataSource):
    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout_seconds: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = (base_url or os.getenv("CATALOG_REMOTE_URL", "")).rstrip("/")
        self.api_key = api_key or os.getenv("CATALOG_REMOTE_API_KEY", "")
        self.timeout_seconds = timeout_seconds
        self._transport = transport
        if not self.base_url:
            logger.warning("Catalog remote API URL is not set.")

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, str]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        if not self.base_url:
            raise NetworkFailure("CATALOG_REMOTE_URL is not configured.")

        url = f"{self.base_url}{path}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds, transport=self._transport) as client:
                logger.debug("%s %s params=%s", method, url, params)
                return await client.request(method, url, params=params, json=json, headers=self._headers())
        except httpx.RequestError as e:
            logger.error("Request error connecting to catalog API: %s", e)
            raise NetworkFailure(f"Network error: {e}") from e

    @staticmethod
    def _raise_for_status(response: httpx.Response) -> None:
        if response.is_success:
            return
        logger.error("HTTP error from catalog API: %s %s", response.status_code, response.text)
        raise ServerFailure(
            f"Catalog API returned {response.status_code}",
            code=str(response.status_code),
        )

    @staticmethod
    def _products_from(response: httpx.Response) -> List[Product]:
        data = response.json() if response.content else []
        if isinstance(data, dict):
            data = data.get("products") or data.get("items") or []
        return [ProductModel.from_map(item).to_entity() for item in data]

    @staticmethod
    def _product_from(response: httpx.Response) -> Product:
        return ProductModel.from_map(response.json()).to_entity()

    # -- Products --

    async def get_all_products(self) -> List[Product]:
        response = await self._request("GET", "/products")
        self._raise_for_status(response)
        return self._products_from(response)

    async def get_product_by_id(self, product_id: str) -> Optional[Product]:
        response = await self._request("GET", f"/products/{product_id}")
        if response.status_code == 404:
            return None
        self._raise_for_status(response)
        return self._product_from(response)

    async def create_product(self, product: Product) -> Product:
        payload = ProductModel.from_entity(product).to_map()
        payload.pop("id", None)
        response = await self._request("POST", "/products", json=payload)
        self._raise_for_status(response)
        return self._product_from(response)

    async def update_product(self, product: Product) -> Product:
        payload = ProductModel.from_entity(product).to_map()
        response = await self._request("PUT", f"/products/{product.id}", json=payload)
        if response.status_code == 404:
            raise NotFoundFailure("Product not found")
        self._raise_for_status(response)
        return self._product_from(response) if response.content else product

    async def delete_product(self, product_id: str) -> bool:
        response = await self._request("DELETE", f"/products/{product_id}")
        if response.status_code == 404:
            return False
        self._raise_for_status(response)
        return True

    async def search_products(self, query: str) -> List[Product]:
        response = await self._request("GET", "/products", params={"search": query} if query else None)
        self._raise_for_status(response)
        return self._products_from(response)

    async def get_products_by_category(self, category: str) -> List[Product]:
        response = await self._request("GET", "/products", params={"category": category})
        self._raise_for_status(response)
        return self._products_from(response)

    # -- Connectivity --

    async def is_network_available(self) -> bool:
        try:
            response = await self._request("GET", "/health")
        except NetworkFailure:
            return False
        return response.is_success

    async def get_network_info(self) -> NetworkInfo:
        started = time.perf_counter()
        try:
            response = await self._request("GET", "/health")
        except NetworkFailure:
            return NetworkInfo(is_connected=False, connection_type="None", response_time_ms=0)
        elapsed_ms = int((time.perf_counter() - started) * 1000)
        return NetworkInfo(
            is_connected=response.is_success,
            connection_type="WiFi" if response.is_success else "None",
            response_time_ms=elapsed_ms,
        )
