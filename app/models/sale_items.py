# models/sale_items.py

from sqlalchemy import CheckConstraint, Column, Integer, ForeignKey, Numeric
from sqlalchemy.orm import relationship

from app.database import Base


class SaleItem(Base):
    __tablename__ = "sale_items"

    id = Column(Integer, primary_key=True, index=True)

    sale_id = Column(Integer, ForeignKey("sales.id"), nullable=False, index=True)

    # No foreign key: deleting a product leaves past sale items pointing at it
    product_id = Column(Integer, nullable=False, index=True)

    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(12, 2), nullable=False)
    total = Column(Numeric(12, 2), nullable=False)

    # Snapshot of the product cost at sale time
    cost_price = Column(Numeric(12, 2), nullable=False)
    profit = Column(Numeric(12, 2), nullable=False)

    sale = relationship("Sale", back_populates="items")

    product = relationship(
        "Product",
        primaryjoin="foreign(SaleItem.product_id) == Product.id",
        viewonly=True,
        lazy="joined",
    )

    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_sale_item_quantity_positive"),
    )
