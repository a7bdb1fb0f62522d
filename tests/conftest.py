from decimal import Decimal
from itertools import count

import pytest
from rest_framework.test import APIClient

from modules.core.container import build_container
from modules.customers.models import Customer
from modules.products.constants import ProductCategory, ProductName
from modules.products.models import Product

_sequence = count(1)


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


@pytest.fixture()
def services():
    """Freshly wired services backed by the Django repositories."""
    return build_container()


@pytest.fixture()
def make_product():
    def _make(**overrides) -> Product:
        data = {
            "name": ProductName.RACKET,
            "price": Decimal("100000.00"),
            "available_quantity": 10,
            "category": ProductCategory.PROFESSIONAL,
            "brand": "Wilson",
            "model": f"Pro Staff {next(_sequence)}",
        }
        data.update(overrides)
        return Product.objects.create(**data)

    return _make


@pytest.fixture()
def make_customer():
    def _make(**overrides) -> Customer:
        n = next(_sequence)
        data = {
            "name": f"Customer {n}",
            "email": f"customer{n}@example.com",
            "city": "Bogotá",
        }
        data.update(overrides)
        return Customer.objects.create(**data)

    return _make


@pytest.fixture()
def racket(make_product):
    return make_product(
        name=ProductName.RACKET,
        price=Decimal("100000.00"),
        available_quantity=10,
        sku="RKT-001",
    )


@pytest.fixture()
def balls(make_product):
    return make_product(
        name=ProductName.BALL,
        price=Decimal("25000.00"),
        available_quantity=50,
        category=ProductCategory.TRAINING,
        brand="Head",
        sku="BALL-001",
    )


@pytest.fixture()
def customer(make_customer):
    return make_customer(name="Ana Gómez", email="ana@example.com")
