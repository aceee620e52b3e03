"""Shared fixtures: fabricated settings, a fake warehouse and a wired TestClient."""

from __future__ import annotations

import asyncio
import copy
import json
from typing import Any, Callable

import httpx
import pytest
from fastapi.testclient import TestClient

from app.api.dependencies import settings_from_app, warehouse_client_from_app
from app.core.config import Settings
from app.main import app
from app.services.signature import compute_signature

WEBHOOK_SECRET = "shopify-test-secret"
WAREHOUSE_TOKEN = "warehouse-test-token"
WAREHOUSE_URL = "https://warehouse.test/api"
ORDERS_WEBHOOK = "/api/webhooks/shopify/orders-create"

SHOPIFY_ORDER: dict[str, Any] = {
    "id": 5512345678901,
    "name": "#1001",
    "email": "jane@example.com",
    "phone": "+33 6 00 00 00 00",
    "customer": {"first_name": "Jane", "last_name": "Doe", "email": "jane.customer@example.com"},
    "shipping_address": {
        "first_name": "Jane",
        "last_name": "Doe",
        "company": "Doe SARL",
        "address1": "12 Rue A",
        "address2": "Apt 4",
        "city": "Paris",
        "province": "Ile-de-France",
        "province_code": None,
        "zip": "75001",
        "country": "France",
        "country_code": "FR",
        "phone": "+33 1 23 45 67 89",
    },
    "billing_address": None,
    "line_items": [
        {"id": 111, "sku": "1042", "quantity": 2},
        {"id": 112, "sku": "2077", "quantity": 1},
    ],
}


def make_settings(**overrides: Any) -> Settings:
    values: dict[str, Any] = {
        "shopify_webhook_secret": WEBHOOK_SECRET,
        "warehouse_token": WAREHOUSE_TOKEN,
        "warehouse_base_url": WAREHOUSE_URL,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def sign(body: bytes, secret: str = WEBHOOK_SECRET) -> str:
    return compute_signature(secret, body)


class FakeWarehouse:
    """Records every request and answers with whatever `respond` returns."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.respond: Callable[[httpx.Request], httpx.Response] = lambda request: httpx.Response(
            201, json={"success": True, "order_id": 987}
        )

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.respond(request)

    @property
    def last_json(self) -> dict:
        return json.loads(self.requests[-1].content)


@pytest.fixture()
def shopify_order() -> dict[str, Any]:
    return copy.deepcopy(SHOPIFY_ORDER)


@pytest.fixture()
def test_settings() -> Settings:
    return make_settings()


@pytest.fixture()
def warehouse() -> FakeWarehouse:
    return FakeWarehouse()


@pytest.fixture()
def warehouse_client(warehouse: FakeWarehouse):
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(warehouse.handler))
    yield http_client
    asyncio.run(http_client.aclose())


@pytest.fixture()
def client(test_settings: Settings, warehouse_client: httpx.AsyncClient):
    app.dependency_overrides[settings_from_app] = lambda: test_settings
    app.dependency_overrides[warehouse_client_from_app] = lambda: warehouse_client
    yield TestClient(app)
    app.dependency_overrides.clear()
