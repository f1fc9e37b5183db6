# =========================================================
# AGGREGATION REPORTER (READ ONLY)
#
# - Stock valuation (quantity x cost price)
# - Revenue / profit for today, this week (Monday start),
#   this month, this year and arbitrary date ranges
# - Low stock set
#
# Windows are cut in the shop timezone and queried in UTC.
# Always returns Decimal (never None).
# =========================================================

from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Optional

from sqlalchemy import and_, func, or_
from sqlalchemy.orm import Session, joinedload

from app.core.dates import end_of_day, shop_now, start_of_day, start_of_week
from app.models.products import Product
from app.models.sales import Sale

RECENT_SALES_LIMIT = 5


def _decimal(value) -> Decimal:
    return Decimal(str(value or 0))


def stock_value(db: Session) -> Decimal:
    total = (
        db.query(func.coalesce(func.sum(Product.quantity * Product.cost_price), 0))
        .scalar()
    )
    return _decimal(total)


def low_stock_products(db: Session) -> list[Product]:
    return (
        db.query(Product)
        .options(joinedload(Product.category))
        .filter(
            or_(
                and_(
                    Product.min_stock.isnot(None),
                    Product.quantity < Product.min_stock,
                ),
                Product.quantity <= 0,
            )
        )
        .order_by(Product.quantity.asc(), Product.name.asc())
        .all()
    )


def summarize_sales(
    db: Session,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    inclusive_end: bool = False,
) -> dict:
    """
    Revenue, profit and sale count for sales in [start, end).

    With `inclusive_end` the upper bound is [start, end] instead.
    Either bound may be omitted.
    """
    filters = []

    if start is not None:
        filters.append(Sale.created_at >= start)

    if end is not None:
        if inclusive_end:
            filters.append(Sale.created_at <= end)
        else:
            filters.append(Sale.created_at < end)

    revenue, profit, count = (
        db.query(
            func.coalesce(func.sum(Sale.total_amount), 0),
            func.coalesce(func.sum(Sale.total_profit), 0),
            func.count(Sale.id),
        )
        .filter(*filters)
        .one()
    )

    return {
        "revenue": _decimal(revenue),
        "profit": _decimal(profit),
        "sales_count": count,
    }


def range_summary(
    db: Session,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
) -> dict:
    start = start_of_day(date_from) if date_from else None
    end = end_of_day(date_to) if date_to else None

    summary = summarize_sales(db, start, end, inclusive_end=True)
    summary["start_date"] = date_from
    summary["end_date"] = date_to

    return summary


def window_summaries(db: Session, now: Optional[datetime] = None) -> dict:
    today = shop_now(now).date()
    tomorrow = today + timedelta(days=1)

    return {
        "today": summarize_sales(db, start_of_day(today), start_of_day(tomorrow)),
        "this_week": summarize_sales(db, start_of_day(start_of_week(today))),
        "this_month": summarize_sales(db, start_of_day(today.replace(day=1))),
        "this_year": summarize_sales(db, start_of_day(today.replace(month=1, day=1))),
    }


def recent_sales(db: Session, now: Optional[datetime] = None) -> list[Sale]:
    today = shop_now(now).date()
    tomorrow = today + timedelta(days=1)

    return (
        db.query(Sale)
        .options(joinedload(Sale.items))
        .filter(
            Sale.created_at >= start_of_day(today),
            Sale.created_at < start_of_day(tomorrow),
        )
        .order_by(Sale.created_at.desc(), Sale.id.desc())
        .limit(RECENT_SALES_LIMIT)
        .all()
    )


def dashboard(db: Session, now: Optional[datetime] = None) -> dict:
    total_products = db.query(func.count(Product.id)).scalar()

    return {
        "stock_value": stock_value(db),
        "total_products": total_products,
        **window_summaries(db, now),
        "low_stock": low_stock_products(db),
        "recent_sales": recent_sales(db, now),
    }
