# app/core/dates.py

from datetime import date, datetime, time, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo

from app.core.config import settings


def shop_timezone() -> tzinfo:
    if settings.SHOP_TIMEZONE.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(settings.SHOP_TIMEZONE)


def shop_now(now: datetime | None = None) -> datetime:
    if now is None:
        now = datetime.now(timezone.utc)
    return now.astimezone(shop_timezone())


def start_of_day(day: date) -> datetime:
    """Midnight of `day` in the shop timezone, as UTC."""
    local = datetime.combine(day, time.min, tzinfo=shop_timezone())
    return local.astimezone(timezone.utc)


def end_of_day(day: date) -> datetime:
    """Last instant of `day` in the shop timezone, as UTC."""
    local = datetime.combine(day, time.max, tzinfo=shop_timezone())
    return local.astimezone(timezone.utc)


def start_of_week(day: date) -> date:
    # Monday
    return day - timedelta(days=day.weekday())
