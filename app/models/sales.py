# models/sales.py

from datetime import datetime, timezone

from sqlalchemy import Column, Integer, DateTime, Numeric, String
from sqlalchemy.orm import relationship

from app.database import Base


def _utcnow():
    return datetime.now(timezone.utc)


class Sale(Base):
    __tablename__ = "sales"

    id = Column(Integer, primary_key=True, index=True)

    # Frozen at commit, never recomputed
    total_amount = Column(Numeric(12, 2), nullable=False)
    total_profit = Column(Numeric(12, 2), nullable=False)

    customer_name = Column(String, nullable=True)
    customer_address = Column(String, nullable=True)
    note = Column(String, nullable=True)

    created_at = Column(
        DateTime(timezone=True),
        default=_utcnow,
        nullable=False,
        index=True,
    )

    items = relationship(
        "SaleItem",
        back_populates="sale",
        cascade="all, delete-orphan",
        order_by="SaleItem.id",
    )
