# =========================================================
# REPORTS ROUTER
#
# - Dashboard: stock value, today / week / month / year
#   revenue and profit, low stock, today's latest sales
# - Range: revenue and profit between two dates (inclusive)
# - Low stock: below minimum or out of stock
# =========================================================

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.product import ProductResponse
from app.schemas.report import DashboardResponse, RangeReportResponse
from app.services import reports

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get("/dashboard", response_model=DashboardResponse)
def dashboard(db: Session = Depends(get_db)):
    return reports.dashboard(db)


@router.get("/range", response_model=RangeReportResponse)
def range_report(
    db: Session = Depends(get_db),
    date_from: Optional[date] = Query(None, alias="from"),
    date_to: Optional[date] = Query(None, alias="to"),
):
    return reports.range_summary(db, date_from, date_to)


@router.get("/low-stock", response_model=list[ProductResponse])
def low_stock(db: Session = Depends(get_db)):
    return reports.low_stock_products(db)
