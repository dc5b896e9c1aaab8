import random

import pytest

from catalog.data.datasources.remote import SEED_PRODUCTS, SimulatedRemoteDataSource
from catalog.domain.failures import NetworkFailure, NotFoundFailure


@pytest.mark.asyncio
async def test_get_all_products_returns_a_copy_of_the_seed(remote):
    products = await remote.get_all_products()

    assert [p.name for p in products] == [
        "Derby Leather Shoes",
        "Running Sneakers",
        "Casual Loafers",
        "Formal Oxford Shoes",
    ]
    assert products[3].price == 159.99
    products.clear()
    assert len(await remote.get_all_products()) == 4


@pytest.mark.asyncio
async def test_get_product_by_id_returns_none_for_unknown_id(remote):
    assert (await remote.get_product_by_id("2")).name == "Running Sneakers"
    assert await remote.get_product_by_id("non-existent-id") is None


@pytest.mark.asyncio
async def test_create_assigns_server_id_without_mutating_seed(remote, sample_product):
    created = await remote.create_product(sample_product.copy_with(id=""))

    assert created.id
    assert created.name == sample_product.name
    assert len(await remote.get_all_products()) == len(SEED_PRODUCTS)


@pytest.mark.asyncio
async def test_update_unknown_product_raises_not_found(remote, sample_product):
    with pytest.raises(NotFoundFailure):
        await remote.update_product(sample_product)

    existing = SEED_PRODUCTS[0].copy_with(name="Renamed")
    assert await remote.update_product(existing) == existing


@pytest.mark.asyncio
async def test_delete_reports_whether_product_exists(remote):
    assert await remote.delete_product("1") is True
    assert await remote.delete_product("nope") is False


@pytest.mark.asyncio
async def test_search_matches_name_and_description(remote):
    assert [p.id for p in await remote.search_products("LOAFERS")] == ["3"]
    assert [p.id for p in await remote.search_products("breathable")] == ["2"]
    assert len(await remote.search_products("")) == 4


@pytest.mark.asyncio
async def test_category_returns_every_product(remote):
    assert len(await remote.get_products_by_category("shoes")) == 4


@pytest.mark.asyncio
async def test_error_rate_one_always_fails():
    source = SimulatedRemoteDataSource(latency=0, error_rate=1.0, availability=1.0)

    with pytest.raises(NetworkFailure) as exc_info:
        await source.get_all_products()

    assert exc_info.value.message == "Network error: Unable to fetch products"


@pytest.mark.asyncio
async def test_network_availability_follows_probability():
    offline = SimulatedRemoteDataSource(latency=0, availability=0.0)
    online = SimulatedRemoteDataSource(latency=0, availability=1.0)

    assert await offline.is_network_available() is False
    assert await online.is_network_available() is True


@pytest.mark.asyncio
async def test_network_info_reports_connection_and_response_time():
    source = SimulatedRemoteDataSource(latency=0, availability=1.0, rng=random.Random(1))

    info = await source.get_network_info()

    assert info.is_connected is True
    assert info.connection_type == "WiFi"
    assert 100 <= info.response_time_ms <= 600

    offline = await SimulatedRemoteDataSource(latency=0, availability=0.0).get_network_info()
    assert offline.connection_type == "None"
