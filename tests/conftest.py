"""
Pytest fixtures for the shop API test suite.

Every test gets its own in-memory SQLite database. Service tests use the
`db` session directly; API tests go through `client`, which runs the
application lifespan against the same database handle.
"""

import os

# Must be set before the app settings are imported
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SHOP_TIMEZONE"] = "UTC"
os.environ["DATABASE_URL"] = "sqlite://"

from datetime import datetime, timezone
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from app.database import Database
from app.main import create_app
from app.models.categories import Category
from app.models.products import Product
from app.models.sales import Sale


@pytest.fixture
def database():
    database = Database("sqlite://")
    database.create_tables()
    yield database
    database.dispose()


@pytest.fixture
def db(database):
    session = database.session()
    yield session
    session.close()


@pytest.fixture
def client(database):
    with TestClient(create_app(database)) as client:
        yield client


@pytest.fixture
def make_category(db):
    def _make(name: str = "Painting") -> Category:
        category = Category(name=name)
        db.add(category)
        db.commit()
        db.refresh(category)
        return category

    return _make


@pytest.fixture
def make_product(db, make_category):
    category_cache = {}

    def _make(
        name: str = "Sample Paint 1L",
        cost_price="200",
        selling_price="280",
        quantity: int = 50,
        min_stock=None,
        category: str = "Painting",
        **extra,
    ) -> Product:
        if category not in category_cache:
            category_cache[category] = make_category(category)

        product = Product(
            name=name,
            category_id=category_cache[category].id,
            cost_price=Decimal(cost_price),
            selling_price=Decimal(selling_price),
            quantity=quantity,
            unit="pcs",
            min_stock=min_stock,
            **extra,
        )
        db.add(product)
        db.commit()
        db.refresh(product)
        return product

    return _make


@pytest.fixture
def make_sale(db):
    """Insert a bare sale row at a fixed timestamp (reporting tests)."""

    def _make(created_at: datetime, total_amount="100", total_profit="20") -> Sale:
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)

        sale = Sale(
            total_amount=Decimal(total_amount),
            total_profit=Decimal(total_profit),
            created_at=created_at,
        )
        db.add(sale)
        db.commit()
        db.refresh(sale)
        return sale

    return _make


@pytest.fixture
def api_category(client):
    response = client.post("/categories", json={"name": "Painting"})
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def api_product(client, api_category):
    def _make(**fields) -> dict:
        body = {
            "name": "Sample Paint 1L",
            "category_id": api_category["id"],
            "cost_price": 200,
            "selling_price": 280,
            "quantity": 50,
            "min_stock": 10,
        }
        body.update(fields)

        response = client.post("/products", json=body)
        assert response.status_code == 201, response.text
        return response.json()

    return _make
