import logging

import pytest
from fastapi.testclient import TestClient

from catalog.api.dependencies import container_dependency
from catalog.api.main import app
from catalog.container import Container, reset_container
from catalog.data.datasources.local import InMemoryLocalDataSource
from catalog.data.in_memory_repository import InMemoryProductRepository
from catalog.utils.config_loader import CatalogConfig


@pytest.fixture(autouse=True)
def open_api(monkeypatch):
    monkeypatch.delenv("API_KEYS", raising=False)


def make_client(container):
    reset_container(container)
    app.dependency_overrides[container_dependency] = lambda: container
    return TestClient(app)


@pytest.fixture
def cached_container(flaky_remote):
    return Container(
        config=CatalogConfig(latency_scale=0),
        remote=flaky_remote,
        local=InMemoryLocalDataSource(delay_scale=0, availability=1.0),
    )


@pytest.fixture
def client(cached_container):
    yield make_client(cached_container)
    app.dependency_overrides.clear()
    reset_container()


@pytest.fixture
def in_memory_client():
    yield make_client(Container(config=CatalogConfig(repository="in_memory", latency_scale=0)))
    app.dependency_overrides.clear()
    reset_container()


def test_health_reports_wiring(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["repository"] == "ProductRepositoryImpl"
    assert response.json()["remote"] == "FlakyRemote"


def test_list_and_get_products(client):
    products = client.get("/api/v1/products").json()

    assert [p["id"] for p in products] == ["1", "2", "3", "4"]
    assert "imageUrl" in products[0]
    assert client.get("/api/v1/products/2").json()["name"] == "Running Sneakers"


def test_unknown_product_is_404(client):
    assert client.get("/api/v1/products/999").status_code == 404


def test_search_products(client):
    response = client.get("/api/v1/products/search", params={"q": "oxford"})

    assert [p["id"] for p in response.json()] == ["4"]


def test_create_product_returns_201(client):
    response = client.post(
        "/api/v1/products",
        json={"name": "Slippers", "description": "Soft house slippers", "imageUrl": "s.jpg", "price": 19.99},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["id"]
    assert body["name"] == "Slippers"


def test_create_invalid_product_is_422_with_errors(client):
    response = client.post("/api/v1/products", json={"name": "", "description": "", "price": -1})

    assert response.status_code == 422
    detail = response.json()["detail"]
    assert detail["message"] == "Invalid product"
    assert "Product name is required" in detail["errors"]


def test_update_product_refreshes_cache_but_not_the_simulated_server(client, flaky_remote):
    response = client.put(
        "/api/v1/products/1",
        json={"name": "Derby Classic", "description": "Updated", "imageUrl": "d.jpg", "price": 99.0},
    )

    assert response.status_code == 200
    assert response.json()["name"] == "Derby Classic"

    flaky_remote.online = False
    assert client.get("/api/v1/products/1").json()["price"] == 99.0

    flaky_remote.online = True
    assert client.get("/api/v1/products/1").json()["price"] == 129.99


def test_update_unknown_product_maps_to_404(client):
    response = client.put(
        "/api/v1/products/999",
        json={"name": "Ghost", "description": "Missing", "imageUrl": "g.jpg", "price": 1.0},
    )

    assert response.status_code == 404
    assert response.json()["type"] == "NotFoundFailure"


def test_delete_product_evicts_from_cache(client, flaky_remote):
    client.get("/api/v1/products")

    assert client.delete("/api/v1/products/3").json() == {"deleted": True, "id": "3"}

    flaky_remote.online = False
    assert client.get("/api/v1/products/3").status_code == 404
    assert client.delete("/api/v1/products/3").status_code == 404
    assert len(client.get("/api/v1/products").json()) == 3


def test_in_memory_writes_are_kept(in_memory_client):
    in_memory_client.put(
        "/api/v1/products/1",
        json={"name": "Derby Classic", "description": "Updated", "imageUrl": "d.jpg", "price": 99.0},
    )

    assert in_memory_client.get("/api/v1/products/1").json()["price"] == 99.0
    assert in_memory_client.delete("/api/v1/products/3").status_code == 200
    assert in_memory_client.delete("/api/v1/products/3").status_code == 404


def test_offline_without_cache_maps_to_503(client, flaky_remote):
    flaky_remote.online = False

    response = client.get("/api/v1/products")

    assert response.status_code == 503
    body = response.json()
    assert body["type"] == "NetworkFailure"
    assert body["metadata"]["context"]["path"] == "/api/v1/products"


def test_offline_serves_cached_products(client, flaky_remote):
    client.get("/api/v1/products")
    flaky_remote.online = False

    assert len(client.get("/api/v1/products").json()) == 4


def test_cache_endpoints(client):
    client.post("/api/v1/cache/refresh")

    info = client.get("/api/v1/cache").json()
    assert info["total_products"] == 4
    assert info["is_expired"] is False

    assert client.delete("/api/v1/cache").json() == {"cleared": True}
    assert client.get("/api/v1/cache").json()["total_products"] == 0


def test_network_endpoint(client):
    body = client.get("/api/v1/network").json()

    assert body == {"is_connected": True, "connection_type": "WiFi", "response_time_ms": 120}


def test_cache_endpoints_need_a_cached_repository(in_memory_client):
    assert in_memory_client.get("/api/v1/cache").status_code == 409
    assert in_memory_client.get("/api/v1/network").status_code == 409
    assert len(in_memory_client.get("/api/v1/products").json()) == 4


def test_api_key_required_when_configured(client, monkeypatch):
    monkeypatch.setenv("API_KEYS", "alpha,beta")

    assert client.get("/api/v1/products").status_code == 401
    assert client.get("/api/v1/products", headers={"X-API-KEY": "wrong"}).status_code == 401
    assert client.get("/api/v1/products", headers={"X-API-KEY": "beta"}).status_code == 200
    assert client.get("/health").status_code == 200


class BrokenRepository(InMemoryProductRepository):
    async def get_all_products(self):
        raise RuntimeError("kaboom")


def test_unhandled_error_is_logged_and_returned_as_json(caplog):
    container = Container(
        config=CatalogConfig(latency_scale=0),
        repository=BrokenRepository(delay_scale=0),
    )
    reset_container(container)
    app.dependency_overrides[container_dependency] = lambda: container
    try:
        client = TestClient(app, raise_server_exceptions=False)
        with caplog.at_level(logging.ERROR, logger="catalog.error_handler"):
            response = client.get("/api/v1/products")
    finally:
        app.dependency_overrides.clear()
        reset_container()

    assert response.status_code == 500
    assert response.headers["content-type"].startswith("application/json")
    body = response.json()
    assert body["type"] == "InternalError"
    assert "kaboom" in body["metadata"]["error"]
    assert body["metadata"]["context"] == {"path": "/api/v1/products"}
    assert any(r.exc_info for r in caplog.records if r.name == "catalog.error_handler")
