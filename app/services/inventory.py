# =========================================================
# INVENTORY STORE
#
# Categories and products. Partial product updates apply
# only the fields present in the request body.
# =========================================================

import logging
from decimal import Decimal
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from app.core.exceptions import NotFoundError, ValidationError
from app.models.categories import Category
from app.models.products import Product
from app.schemas.product import ProductCreate, ProductUpdate

logger = logging.getLogger("app")

DEFAULT_UNIT = "pcs"

# Fields that may be cleared with null or an empty string
OPTIONAL_TEXT_FIELDS = ("sku", "brand", "purchased_from")


def clean_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


# =========================================================
# CATEGORIES
# =========================================================
def list_categories(db: Session) -> list[Category]:
    return db.query(Category).order_by(Category.name.asc()).all()


def create_category(db: Session, name: Optional[str]) -> Category:
    name = clean_text(name)
    if not name:
        raise ValidationError("Name required")

    existing = db.query(Category).filter(Category.name == name).first()
    if existing:
        raise ValidationError("Category already exists")

    category = Category(name=name)
    db.add(category)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValidationError("Category already exists")

    db.refresh(category)
    return category


def _require_category(db: Session, category_id: int) -> Category:
    category = db.get(Category, category_id)
    if not category:
        raise ValidationError(f"Category not found: {category_id}")
    return category


# =========================================================
# PRODUCTS
# =========================================================
def list_products(
    db: Session,
    in_stock: bool = False,
    search: Optional[str] = None,
    category_id: Optional[int] = None,
    brand: Optional[str] = None,
    purchased_from: Optional[str] = None,
) -> list[Product]:
    query = (
        db.query(Product)
        .options(joinedload(Product.category))
    )

    if in_stock:
        query = query.filter(Product.quantity > 0)

    if category_id is not None:
        query = query.filter(Product.category_id == category_id)

    if brand:
        query = query.filter(Product.brand == brand)

    if purchased_from:
        query = query.filter(Product.purchased_from == purchased_from)

    if search and search.strip():
        pattern = f"%{search.strip()}%"
        query = query.join(Category, Product.category_id == Category.id).filter(
            or_(
                Product.name.ilike(pattern),
                Product.brand.ilike(pattern),
                Product.purchased_from.ilike(pattern),
                Category.name.ilike(pattern),
            )
        )

    return query.order_by(Product.name.asc()).all()


def get_product(db: Session, product_id: int) -> Product:
    product = (
        db.query(Product)
        .options(joinedload(Product.category))
        .filter(Product.id == product_id)
        .first()
    )

    if not product:
        raise NotFoundError("Product not found")

    return product


def create_product(db: Session, data: ProductCreate) -> Product:
    name = clean_text(data.name)
    if not name or data.category_id is None:
        raise ValidationError("Name and category required")

    _require_category(db, data.category_id)

    product = Product(
        name=name,
        category_id=data.category_id,
        cost_price=data.cost_price if data.cost_price is not None else Decimal("0"),
        selling_price=data.selling_price if data.selling_price is not None else Decimal("0"),
        quantity=data.quantity if data.quantity is not None else 0,
        unit=clean_text(data.unit) or DEFAULT_UNIT,
        min_stock=data.min_stock,
        sku=clean_text(data.sku),
        brand=clean_text(data.brand),
        purchased_from=clean_text(data.purchased_from),
    )

    db.add(product)
    db.commit()
    db.refresh(product)

    logger.info(f"Product created: {product.id} {product.name}")

    return product


def update_product(db: Session, product_id: int, data: ProductUpdate) -> Product:
    product = get_product(db, product_id)

    changes = data.model_dump(exclude_unset=True)
    resolved = {}

    # Nothing is set on the product until every field has been checked
    for field, value in changes.items():
        if field in OPTIONAL_TEXT_FIELDS:
            resolved[field] = clean_text(value)
            continue

        if field == "min_stock":
            resolved[field] = value
            continue

        if value is None:
            raise ValidationError(f"{field} cannot be null")

        if field == "name":
            value = clean_text(value)
            if not value:
                raise ValidationError("Name required")

        if field == "unit":
            value = clean_text(value) or DEFAULT_UNIT

        if field == "category_id":
            _require_category(db, value)

        resolved[field] = value

    for field, value in resolved.items():
        setattr(product, field, value)

    db.commit()
    db.refresh(product)

    return product


def delete_product(db: Session, product_id: int) -> None:
    product = db.get(Product, product_id)

    if not product:
        raise NotFoundError("Product not found")

    # Sale items keep their product_id; there is no foreign key to cascade
    db.delete(product)
    db.commit()

    logger.info(f"Product deleted: {product_id}")
