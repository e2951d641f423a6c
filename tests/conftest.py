import pytest
from fastapi.testclient import TestClient

from product_api.config import Settings
from product_api.database import ProductStore
from product_api.main import create_app

API_KEY = "test-secret"


@pytest.fixture
def settings():
    return Settings(api_key=API_KEY, log_level="WARNING")


@pytest.fixture
def store():
    return ProductStore.seeded()


@pytest.fixture
def app(settings, store):
    return create_app(settings=settings, store=store)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def auth():
    return {"x-api-key": API_KEY}
