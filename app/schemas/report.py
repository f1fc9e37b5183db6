# schemas/report.py

from pydantic import BaseModel
from datetime import date
from typing import List

from app.schemas.product import ProductResponse
from app.schemas.sale import SaleResponse


class WindowSummary(BaseModel):
    revenue: float
    profit: float
    sales_count: int


class RangeReportResponse(WindowSummary):
    start_date: date | None
    end_date: date | None


class DashboardResponse(BaseModel):
    stock_value: float
    total_products: int
    today: WindowSummary
    this_week: WindowSummary
    this_month: WindowSummary
    this_year: WindowSummary
    low_stock: List[ProductResponse]
    recent_sales: List[SaleResponse]
