"""
Tests for `app/core/config.py` and `app/core/dates.py`.
"""

from __future__ import annotations

from datetime import date, datetime, timezone

from app.core import dates
from app.core.config import Settings


def test_postgres_scheme_is_rewritten() -> None:
    settings = Settings(DATABASE_URL="postgres://shop:secret@db/shop")

    assert settings.DATABASE_URL == "postgresql://shop:secret@db/shop"


def test_sqlite_url_is_untouched() -> None:
    settings = Settings(DATABASE_URL="sqlite:///./shop.db")

    assert settings.DATABASE_URL == "sqlite:///./shop.db"


def test_day_bounds_in_utc() -> None:
    assert dates.start_of_day(date(2024, 1, 15)) == datetime(2024, 1, 15, tzinfo=timezone.utc)
    assert dates.end_of_day(date(2024, 1, 15)) == datetime(
        2024, 1, 15, 23, 59, 59, 999999, tzinfo=timezone.utc
    )


def test_day_bounds_follow_shop_timezone(monkeypatch) -> None:
    monkeypatch.setattr(dates.settings, "SHOP_TIMEZONE", "Asia/Kolkata")

    # Midnight in India is 18:30 UTC the previous day
    assert dates.start_of_day(date(2024, 1, 15)) == datetime(
        2024, 1, 14, 18, 30, tzinfo=timezone.utc
    )


def test_start_of_week_is_monday() -> None:
    assert dates.start_of_week(date(2024, 1, 17)) == date(2024, 1, 15)
    assert dates.start_of_week(date(2024, 1, 15)) == date(2024, 1, 15)
    assert dates.start_of_week(date(2024, 1, 21)) == date(2024, 1, 15)
