# app/seed.py
#
# Starter data for a fresh database:
#   python -m app.seed

import logging

from sqlalchemy.orm import Session

from app.core.config import settings
from app.database import Database
from app.models.categories import Category
from app.models.products import Product

logger = logging.getLogger("app")

DEFAULT_CATEGORIES = ["Painting", "Hardware", "Plumbing", "Electrical"]


def seed(db: Session) -> None:
    for name in DEFAULT_CATEGORIES:
        if not db.query(Category).filter(Category.name == name).first():
            db.add(Category(name=name))
    db.commit()

    painting = db.query(Category).filter(Category.name == "Painting").first()

    if not db.query(Product).filter(Product.name == "Sample Paint 1L").first():
        db.add(
            Product(
                name="Sample Paint 1L",
                category_id=painting.id,
                cost_price=200,
                selling_price=280,
                quantity=50,
                unit="pcs",
                min_stock=10,
            )
        )
        db.commit()

    logger.info("Seed done.")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    database = Database(settings.DATABASE_URL)
    database.create_tables()

    session = database.session()
    try:
        seed(session)
    finally:
        session.close()
        database.dispose()
