"""Shared fixtures: a seeded JSON product file and an app built on it."""

import json

import pytest
from fastapi.testclient import TestClient

from catalog.core.config import Settings
from catalog.main import create_app
from catalog.models.product import Product

TOKEN = "12345"

SEED_PRODUCTS = [
    {
        "id": 1,
        "name": "Oil - Margarine",
        "quantity": 439,
        "code_value": "S82254D",
        "is_published": True,
        "expiration": "15/12/2031",
        "price": 71.42,
    },
    {
        "id": 2,
        "name": "Pineapple - Canned, Rings",
        "quantity": 345,
        "code_value": "M4637HG",
        "is_published": True,
        "expiration": "09/08/2031",
        "price": 352.79,
    },
    {
        "id": 3,
        "name": "Wine - Red Oakridge Merlot",
        "quantity": 367,
        "code_value": "T65812L",
        "is_published": False,
        "expiration": "24/05/2032",
        "price": 179.23,
    },
]

NEW_PRODUCT = {
    "name": "New Product",
    "quantity": 100,
    "code_value": "NewCode123",
    "is_published": True,
    "expiration": "25/10/2090",
    "price": 900,
}


@pytest.fixture
def seed_products():
    return [Product(**item) for item in SEED_PRODUCTS]


@pytest.fixture
def products_file(tmp_path):
    path = tmp_path / "products.json"
    path.write_text(json.dumps(SEED_PRODUCTS), encoding="utf-8")
    return path


@pytest.fixture
def settings(tmp_path, products_file):
    return Settings(
        token=TOKEN,
        products_file=str(products_file),
        log_dir=str(tmp_path / "logs"),
        _env_file=None,
    )


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture
def auth_headers():
    return {"token": TOKEN}
