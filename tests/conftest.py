"""
Pytest fixtures for the Product API. Each test gets its own app and seeded store.
"""

import pytest
from fastapi.testclient import TestClient

from product_api.app import create_app
from product_api.config import Settings
from product_api.store import ProductStore

TEST_API_KEY = "test-secret"


@pytest.fixture
def settings():
    return Settings(api_key=TEST_API_KEY, port=3000)


@pytest.fixture
def store():
    return ProductStore()


@pytest.fixture
def app(settings, store):
    return create_app(settings=settings, store=store)


@pytest.fixture
def client(app):
    """TestClient that sends the valid API key on every request."""
    return TestClient(app, headers={"x-api-key": TEST_API_KEY}, raise_server_exceptions=False)


@pytest.fixture
def anonymous_client(app):
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def new_product():
    return {
        "name": "Blender",
        "description": "Countertop blender with 5 speeds",
        "price": 75.5,
        "category": "Kitchen",
        "inStock": True,
    }
