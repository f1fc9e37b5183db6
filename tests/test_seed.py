"""
Tests for `app/seed.py`.
"""

from __future__ import annotations

from app.models.categories import Category
from app.models.products import Product
from app.seed import DEFAULT_CATEGORIES, seed


def test_seed_is_idempotent(db) -> None:
    seed(db)
    seed(db)

    names = sorted(category.name for category in db.query(Category).all())
    assert names == sorted(DEFAULT_CATEGORIES)

    products = db.query(Product).all()
    assert len(products) == 1
    assert products[0].name == "Sample Paint 1L"
    assert products[0].quantity == 50
    assert products[0].min_stock == 10
