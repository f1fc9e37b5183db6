# Main application file



import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError

from app.database import Database
from app.core.config import settings
from app.core.exceptions import ShopError
from app.core.rate_limiter import limiter
from app.routers import (
    categories,
    products,
    sales,
    reports,
)


# LOGGING CONFIGURATION

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s | %(levelname)s | %(message)s",
)

logger = logging.getLogger("app")


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def create_app(database: Database | None = None) -> FastAPI:

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        db = database or Database(settings.DATABASE_URL)

        if settings.CREATE_TABLES_ON_STARTUP:
            db.create_tables()

        app.state.database = db
        logger.info("Database opened")

        yield

        db.dispose()
        logger.info("Database closed")

    # APP INIT

    app = FastAPI(
        title="Shop Manager API",
        description="Inventory, sales and profit tracking for a small shop",
        version="1.0.0",
        lifespan=lifespan,
    )

    # CORS

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=False,
        allow_methods=["GET", "POST", "PATCH", "DELETE"],
        allow_headers=["Content-Type"],
    )

    # RATE LIMITING

    app.state.limiter = limiter
    app.add_exception_handler(
        RateLimitExceeded,
        _rate_limit_exceeded_handler
    )

    # ERROR HANDLING

    @app.exception_handler(ShopError)
    async def shop_error_handler(request: Request, exc: ShopError):
        return _error(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        if errors:
            first = errors[0]
            location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
            message = f"{location}: {first.get('msg')}" if location else first.get("msg")
        else:
            message = "Invalid request"
        return _error(status.HTTP_400_BAD_REQUEST, message)

    @app.exception_handler(SQLAlchemyError)
    async def store_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error(f"Store error on {request.method} {request.url.path}: {exc}")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Store unavailable")

    # REQUEST LOGGING MIDDLEWARE

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.time()

        response = await call_next(request)

        duration = round((time.time() - start_time) * 1000, 2)

        logger.info(
            f"{request.method} {request.url.path} "
            f"Status: {response.status_code} "
            f"Time: {duration}ms"
        )

        return response

    # ROUTERS

    app.include_router(categories.router)
    app.include_router(products.router)
    app.include_router(sales.router)
    app.include_router(reports.router)

    # ROOT

    @app.get("/")
    def root():
        logger.info("Health check endpoint called")
        return {"message": "Shop Manager API is running"}

    return app


app = create_app()
