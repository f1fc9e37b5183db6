# app/routers/products.py

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.product import (
    ProductCreate,
    ProductUpdate,
    ProductResponse,
)
from app.services import inventory

router = APIRouter(
    prefix="/products",
    tags=["Products"],
)


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_product(
    product_data: ProductCreate,
    db: Session = Depends(get_db),
):
    product = inventory.create_product(db, product_data)

    # reload with its category
    return inventory.get_product(db, product.id)


@router.get("", response_model=list[ProductResponse])
def list_products(
    db: Session = Depends(get_db),
    in_stock: bool = Query(False),
    search: Optional[str] = Query(None),
    category_id: Optional[int] = Query(None),
    brand: Optional[str] = Query(None),
    purchased_from: Optional[str] = Query(None),
):
    return inventory.list_products(
        db,
        in_stock=in_stock,
        search=search,
        category_id=category_id,
        brand=brand,
        purchased_from=purchased_from,
    )


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(
    product_id: int,
    db: Session = Depends(get_db),
):
    return inventory.get_product(db, product_id)


@router.patch("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: int,
    product_data: ProductUpdate,
    db: Session = Depends(get_db),
):
    inventory.update_product(db, product_id, product_data)

    return inventory.get_product(db, product_id)


@router.delete("/{product_id}")
def delete_product(
    product_id: int,
    db: Session = Depends(get_db),
):
    inventory.delete_product(db, product_id)

    return {"ok": True}
