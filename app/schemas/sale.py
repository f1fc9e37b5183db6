# schemas/sale.py

from pydantic import BaseModel, Field
from datetime import datetime
from typing import List, Optional, Union
from decimal import Decimal

from app.schemas.product import MAX_PRICE, ProductSummary


class SaleItemCreate(BaseModel):
    product_id: int
    # Normalised by the sale engine: floored, never negative
    quantity: Union[int, float, str, None] = None
    unit_price: Optional[Decimal] = Field(None, ge=0, lt=MAX_PRICE)


class SaleCreate(BaseModel):
    items: List[SaleItemCreate] = []
    note: Optional[str] = None
    customer_name: Optional[str] = None
    customer_address: Optional[str] = None


class SaleUpdate(BaseModel):
    customer_name: Optional[str] = None
    customer_address: Optional[str] = None
    note: Optional[str] = None


class SaleItemResponse(BaseModel):
    id: int
    product_id: int
    quantity: int
    unit_price: float
    total: float
    cost_price: float
    profit: float
    product: Optional[ProductSummary]

    class Config:
        from_attributes = True


class SaleResponse(BaseModel):
    id: int
    created_at: datetime
    total_amount: float
    total_profit: float
    customer_name: Optional[str]
    customer_address: Optional[str]
    note: Optional[str]
    items: List[SaleItemResponse]

    class Config:
        from_attributes = True
