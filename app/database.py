# app/database.py

from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

Base = declarative_base()


class Database:
    """
    Owns the engine and session factory for one store.

    Created when the application starts and disposed when it stops;
    requests reach it through `get_db`, never through module state.
    """

    def __init__(self, url: str):
        self.url = url

        if url.startswith("sqlite"):
            connect_args = {"check_same_thread": False}
        else:
            connect_args = {}

        engine_kwargs = {"connect_args": connect_args}

        # In-memory SQLite lives on a single connection
        if url in ("sqlite://", "sqlite:///:memory:"):
            engine_kwargs["poolclass"] = StaticPool

        self.engine = create_engine(url, **engine_kwargs)
        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine,
        )

    def create_tables(self) -> None:
        # models must be imported so their tables are registered on Base
        from app.models import categories, products, sale_items, sales  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def session(self) -> Session:
        return self.SessionLocal()

    def dispose(self) -> None:
        self.engine.dispose()


def get_db(request: Request) -> Iterator[Session]:
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
