# tests/test_client.py
import asyncio

import httpx
import pytest
from fastapi.testclient import TestClient

from sdk.client import ProductApiError, ProductClient

API_KEY = "test-secret"


@pytest.fixture
def sdk(app):
    return ProductClient(base_url="http://testserver", api_key=API_KEY, session=TestClient(app))


def test_queries(sdk):
    assert sdk.health() == "Hello World!"
    assert len(sdk.list_products()) == 3
    assert [p["id"] for p in sdk.list_products(page=2, limit=2)] == ["3"]
    assert sdk.search_products("lap")[0]["name"] == "Laptop"
    assert len(sdk.products_by_category("electronics")) == 2
    assert sdk.statistics() == {"electronics": 2, "kitchen": 1}
    assert sdk.get_product("3")["name"] == "Coffee Maker"


def test_mutations(sdk):
    created = sdk.create_product("Toaster", 25, "kitchen", True, "Two slots")
    assert created["id"] == "4"
    updated = sdk.update_product("4", {**created, "price": 20})
    assert updated["price"] == 20
    assert sdk.delete_product("4")["name"] == "Toaster"


def test_errors_raise_product_api_error(sdk):
    with pytest.raises(ProductApiError) as excinfo:
        sdk.get_product("999")
    assert excinfo.value.status_code == 404
    assert excinfo.value.message == "No product found with specified id"

    with pytest.raises(ProductApiError) as excinfo:
        sdk.create_product("", -1, "kitchen")
    assert excinfo.value.status_code == 400
    assert "Name must be a non-empty string." in excinfo.value.message


def test_missing_api_key(app):
    anonymous = ProductClient(base_url="http://testserver", session=TestClient(app))
    with pytest.raises(ProductApiError) as excinfo:
        anonymous.delete_product("1")
    assert excinfo.value.status_code == 401


def test_create_product_async(app):
    sdk = ProductClient(base_url="http://testserver", api_key=API_KEY)
    payload = {"name": "Mixer", "price": 60, "category": "kitchen", "inStock": True}
    created = asyncio.run(sdk.create_product_async(payload, transport=httpx.ASGITransport(app=app)))
    assert created["id"] == "4"
