from decimal import Decimal
from pydantic import BaseModel, Field, field_validator
from datetime import datetime

from app.schemas.category import CategoryResponse


MAX_PRICE = 100_000_000


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


class ProductCreate(BaseModel):
    name: str | None = None
    category_id: int | None = None

    cost_price: Decimal | None = Field(
        None,
        ge=0,
        lt=MAX_PRICE,
        description="Cost price must be below 100 million"
    )

    selling_price: Decimal | None = Field(
        None,
        ge=0,
        lt=MAX_PRICE,
        description="Selling price must be below 100 million"
    )

    quantity: int | None = Field(None, ge=0)
    unit: str | None = None
    min_stock: int | None = Field(None, ge=0)

    sku: str | None = None
    brand: str | None = None
    purchased_from: str | None = None

    @field_validator("min_stock", mode="before")
    @classmethod
    def blank_min_stock_clears(cls, value):
        return _blank_to_none(value)


class ProductUpdate(BaseModel):
    # Only fields present in the request body are applied
    name: str | None = None
    category_id: int | None = None
    cost_price: Decimal | None = Field(None, ge=0, lt=MAX_PRICE)
    selling_price: Decimal | None = Field(None, ge=0, lt=MAX_PRICE)
    quantity: int | None = Field(None, ge=0)
    unit: str | None = None
    min_stock: int | None = Field(None, ge=0)
    sku: str | None = None
    brand: str | None = None
    purchased_from: str | None = None

    @field_validator("min_stock", mode="before")
    @classmethod
    def blank_min_stock_clears(cls, value):
        return _blank_to_none(value)


class ProductSummary(BaseModel):
    id: int
    name: str
    unit: str
    sku: str | None
    brand: str | None

    class Config:
        from_attributes = True


class ProductResponse(BaseModel):
    id: int
    name: str
    category_id: int
    cost_price: float
    selling_price: float
    quantity: int
    unit: str
    min_stock: int | None
    sku: str | None
    brand: str | None
    purchased_from: str | None
    created_at: datetime
    updated_at: datetime
    category: CategoryResponse | None

    class Config:
        from_attributes = True
