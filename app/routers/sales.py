# =========================================================
# SALES ROUTER
#
# - Create: atomic commit with stock decrement
# - List: optional inclusive date range (?from=&to=)
# - Patch: customer name / address / note only
# - Delete: reversal, stock is restored
# =========================================================

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.rate_limiter import limiter
from app.database import get_db
from app.schemas.sale import SaleCreate, SaleResponse, SaleUpdate
from app.services import sales as sale_engine

router = APIRouter(prefix="/sales", tags=["Sales"])


# =========================================================
# CREATE SALE
# =========================================================
@router.post("", response_model=SaleResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.SALE_RATE_LIMIT)
def create_sale(
    request: Request,
    sale_data: SaleCreate,
    db: Session = Depends(get_db),
):
    return sale_engine.record_sale(db, sale_data)


# =========================================================
# LIST SALES
# =========================================================
@router.get("", response_model=list[SaleResponse])
def list_sales(
    db: Session = Depends(get_db),
    date_from: Optional[date] = Query(None, alias="from"),
    date_to: Optional[date] = Query(None, alias="to"),
):
    return sale_engine.list_sales(db, date_from, date_to)


# =========================================================
# GET SINGLE SALE
# =========================================================
@router.get("/{sale_id}", response_model=SaleResponse)
def get_sale(
    sale_id: int,
    db: Session = Depends(get_db),
):
    return sale_engine.get_sale(db, sale_id)


# =========================================================
# EDIT SALE METADATA
# =========================================================
@router.patch("/{sale_id}", response_model=SaleResponse)
def update_sale(
    sale_id: int,
    sale_data: SaleUpdate,
    db: Session = Depends(get_db),
):
    return sale_engine.update_sale(db, sale_id, sale_data)


# =========================================================
# REVERSE SALE
# =========================================================
@router.delete("/{sale_id}")
def delete_sale(
    sale_id: int,
    db: Session = Depends(get_db),
):
    sale_engine.delete_sale(db, sale_id)

    return {"ok": True}
