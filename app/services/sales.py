# =========================================================
# SALE TRANSACTION ENGINE
#
# COMMIT:
# - Resolves every product in one lookup
# - Checks stock against the summed draw of all lines
# - Writes sale, items and stock decrements in one transaction
# - Decrements are conditional (quantity >= requested) so a
#   concurrent sale cannot push stock below zero
#
# REVERSAL:
# - Restocks every item, deletes items and sale in one transaction
# - Items whose product was deleted are not restocked
#
# Totals are frozen at commit; metadata edits never touch them.
# =========================================================

import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation, ROUND_FLOOR, ROUND_HALF_UP
from typing import Optional

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from app.core.dates import end_of_day, start_of_day
from app.core.exceptions import (
    InsufficientStockError,
    NotFoundError,
    ShopError,
    StoreError,
    ValidationError,
)
from app.models.products import Product
from app.models.sale_items import SaleItem
from app.models.sales import Sale
from app.schemas.sale import SaleCreate, SaleUpdate
from app.services.inventory import clean_text

logger = logging.getLogger("app")

CENT = Decimal("0.01")


@dataclass
class SaleLine:
    product: Product
    quantity: int
    unit_price: Decimal
    total: Decimal
    cost_price: Decimal
    profit: Decimal


def _money(value) -> Decimal:
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def normalize_quantity(value) -> int:
    """
    Floor a requested quantity to a non-negative integer.

    Anything that does not parse as a number counts as zero.
    """
    if isinstance(value, bool) or value is None:
        return 0

    try:
        quantity = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return 0

    if not quantity.is_finite():
        return 0

    return max(0, int(quantity.to_integral_value(rounding=ROUND_FLOOR)))


def _build_lines(data: SaleCreate, product_map: dict) -> tuple[list[SaleLine], dict]:
    lines = []
    requested = defaultdict(int)

    for item in data.items:
        product = product_map.get(item.product_id)
        if not product:
            raise NotFoundError(f"Product not found: {item.product_id}")

        quantity = normalize_quantity(item.quantity)
        if quantity <= 0:
            raise ValidationError(f"Quantity must be greater than zero for {product.name}")

        # Lines for the same product draw from the same stock
        requested[product.id] += quantity
        if requested[product.id] > product.quantity:
            raise InsufficientStockError(product.name, product.quantity)

        if item.unit_price is not None:
            unit_price = _money(item.unit_price)
        else:
            unit_price = _money(product.selling_price)

        cost_price = _money(product.cost_price)

        lines.append(
            SaleLine(
                product=product,
                quantity=quantity,
                unit_price=unit_price,
                total=unit_price * quantity,
                cost_price=cost_price,
                profit=(unit_price - cost_price) * quantity,
            )
        )

    return lines, requested


# =========================================================
# COMMIT
# =========================================================
def record_sale(db: Session, data: SaleCreate) -> Sale:
    if not data.items:
        raise ValidationError("At least one item required")

    product_ids = {item.product_id for item in data.items}
    products = db.query(Product).filter(Product.id.in_(product_ids)).all()
    product_map = {product.id: product for product in products}

    lines, requested = _build_lines(data, product_map)

    total_amount = sum((line.total for line in lines), Decimal("0.00"))
    total_profit = sum((line.profit for line in lines), Decimal("0.00"))

    try:
        sale = Sale(
            total_amount=total_amount,
            total_profit=total_profit,
            note=clean_text(data.note),
            customer_name=clean_text(data.customer_name),
            customer_address=clean_text(data.customer_address),
        )
        sale.items = [
            SaleItem(
                product_id=line.product.id,
                quantity=line.quantity,
                unit_price=line.unit_price,
                total=line.total,
                cost_price=line.cost_price,
                profit=line.profit,
            )
            for line in lines
        ]
        db.add(sale)
        db.flush()

        for product_id, quantity in requested.items():
            result = db.execute(
                update(Product)
                .where(Product.id == product_id, Product.quantity >= quantity)
                .values(quantity=Product.quantity - quantity)
                .execution_options(synchronize_session=False)
            )

            if result.rowcount != 1:
                _raise_stock_conflict(db, product_map[product_id])

        db.commit()

    except ShopError:
        db.rollback()
        raise

    except SQLAlchemyError as exc:
        db.rollback()
        logger.error(f"Sale commit failed: {exc}")
        raise StoreError("Unable to complete sale") from exc

    logger.info(
        f"Sale recorded: {sale.id} "
        f"Items: {len(lines)} "
        f"Total: {total_amount} "
        f"Profit: {total_profit}"
    )

    return get_sale(db, sale.id)


def _raise_stock_conflict(db: Session, product: Product):
    # Stock moved between the check and the write
    available = (
        db.query(Product.quantity)
        .filter(Product.id == product.id)
        .scalar()
    )

    if available is None:
        raise NotFoundError(f"Product not found: {product.id}")

    raise InsufficientStockError(product.name, available)


# =========================================================
# READ
# =========================================================
def get_sale(db: Session, sale_id: int) -> Sale:
    sale = (
        db.query(Sale)
        .options(joinedload(Sale.items))
        .filter(Sale.id == sale_id)
        .first()
    )

    if not sale:
        raise NotFoundError("Sale not found")

    return sale


def list_sales(
    db: Session,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
) -> list[Sale]:
    query = db.query(Sale).options(joinedload(Sale.items))

    if date_from:
        query = query.filter(Sale.created_at >= start_of_day(date_from))

    # The end day is included up to its last instant
    if date_to:
        query = query.filter(Sale.created_at <= end_of_day(date_to))

    return query.order_by(Sale.created_at.desc(), Sale.id.desc()).all()


# =========================================================
# METADATA EDIT
# =========================================================
def update_sale(db: Session, sale_id: int, data: SaleUpdate) -> Sale:
    sale = get_sale(db, sale_id)

    changes = data.model_dump(exclude_unset=True)

    for field, value in changes.items():
        setattr(sale, field, clean_text(value))

    db.commit()

    return get_sale(db, sale_id)


# =========================================================
# REVERSAL
# =========================================================
def delete_sale(db: Session, sale_id: int) -> None:
    sale = get_sale(db, sale_id)

    restock = defaultdict(int)
    for item in sale.items:
        restock[item.product_id] += item.quantity

    try:
        for product_id, quantity in restock.items():
            result = db.execute(
                update(Product)
                .where(Product.id == product_id)
                .values(quantity=Product.quantity + quantity)
                .execution_options(synchronize_session=False)
            )

            if result.rowcount == 0:
                logger.warning(
                    f"Sale {sale_id}: product {product_id} no longer exists, "
                    f"{quantity} units not restocked"
                )

        db.delete(sale)
        db.commit()

    except SQLAlchemyError as exc:
        db.rollback()
        logger.error(f"Sale reversal failed: {exc}")
        raise StoreError("Unable to reverse sale") from exc

    logger.info(f"Sale reversed: {sale_id} Products restocked: {len(restock)}")
