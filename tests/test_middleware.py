import logging

import pytest
from fastapi.testclient import TestClient

from product_api.app import create_app
from product_api.config import Settings

UNAUTHORIZED = {"error": "Unauthorized: Invalid or missing API key"}


@pytest.mark.parametrize(
    "method, path",
    [
        ("get", "/"),
        ("get", "/api/products"),
        ("get", "/api/products/stats"),
        ("get", "/api/products/1"),
        ("delete", "/api/products/1"),
        ("get", "/does/not/exist"),
    ],
)
def test_missing_key_is_rejected(anonymous_client, method, path):
    response = getattr(anonymous_client, method)(path)
    assert response.status_code == 401
    assert response.json() == UNAUTHORIZED


def test_wrong_key_is_rejected(anonymous_client):
    response = anonymous_client.get("/api/products", headers={"x-api-key": "mysecretkey"})
    assert response.status_code == 401
    assert response.json() == UNAUTHORIZED


def test_rejected_mutations_leave_store_unchanged(anonymous_client, store, new_product):
    before = store.all()

    assert anonymous_client.post("/api/products", json=new_product).status_code == 401
    assert anonymous_client.put("/api/products/1", json=new_product).status_code == 401
    assert anonymous_client.delete("/api/products/1", headers={"x-api-key": "bad"}).status_code == 401

    assert store.all() == before


def test_route_logic_does_not_run_without_key(anonymous_client, monkeypatch):
    calls = []
    monkeypatch.setattr(
        "product_api.routes.product_route.category_stats",
        lambda products: calls.append(products),
    )

    anonymous_client.get("/api/products/stats")

    assert calls == []


def test_valid_key_passes(client):
    assert client.get("/api/products").status_code == 200


def test_default_key_from_environment(monkeypatch):
    monkeypatch.delenv("API_KEY", raising=False)
    app = create_app(settings=Settings())
    client = TestClient(app)

    assert client.get("/", headers={"x-api-key": "mysecretkey"}).status_code == 200


def test_key_and_port_overridable_by_environment(monkeypatch):
    monkeypatch.setenv("API_KEY", "from-env")
    monkeypatch.setenv("PORT", "8080")

    settings = Settings()

    assert settings.api_key == "from-env"
    assert settings.port == 8080


def test_requests_are_logged_even_when_rejected(anonymous_client, caplog):
    with caplog.at_level(logging.INFO, logger="product_api"):
        anonymous_client.get("/api/products?category=kitchen")

    messages = [record.getMessage() for record in caplog.records]
    assert "GET /api/products?category=kitchen" in messages
    assert any("-> 401" in message for message in messages)


def test_successful_requests_are_logged(client, caplog):
    with caplog.at_level(logging.INFO, logger="product_api.middleware"):
        client.delete("/api/products/3")

    messages = [record.getMessage() for record in caplog.records]
    assert "DELETE /api/products/3" in messages
    assert any(message.startswith("DELETE /api/products/3 -> 200") for message in messages)


def test_log_level_comes_from_settings():
    package_logger = logging.getLogger("product_api")
    previous = package_logger.level
    try:
        create_app(settings=Settings(api_key="k", log_level="DEBUG"))
        assert package_logger.level == logging.DEBUG

        create_app(settings=Settings(api_key="k", log_level="WARNING"))
        assert package_logger.level == logging.WARNING
    finally:
        package_logger.setLevel(previous)


def test_logging_handler_attached_once():
    package_logger = logging.getLogger("product_api")
    previous = package_logger.level
    try:
        create_app(settings=Settings(api_key="k"))
        handlers = list(package_logger.handlers)
        create_app(settings=Settings(api_key="k"))
        assert package_logger.handlers == handlers
        assert len(handlers) >= 1
    finally:
        package_logger.setLevel(previous)
