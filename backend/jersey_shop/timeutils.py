"""Shop-local clock helpers.

All timestamps are stored as naive datetimes in the shop's time zone, so the
dashboard windows and the receipt dates line up with what the shop sees.
"""

from datetime import date, datetime, time, timedelta
from typing import Optional

import pytz

from .config import get_settings


def shop_timezone():
    return pytz.timezone(get_settings().timezone)


def local_now() -> datetime:
    return datetime.now(pytz.utc).astimezone(shop_timezone()).replace(tzinfo=None)


def to_local_naive(value: datetime) -> datetime:
    """Convert an aware datetime to shop-local naive time; naive values pass through."""
    if value.tzinfo is None:
        return value
    return value.astimezone(shop_timezone()).replace(tzinfo=None)


def start_of_day(moment: datetime) -> datetime:
    return datetime.combine(moment.date(), time.min)


def start_of_week(moment: datetime, week_start: Optional[int] = None) -> datetime:
    if week_start is None:
        week_start = get_settings().week_start
    days_back = (moment.weekday() - week_start) % 7
    return start_of_day(moment) - timedelta(days=days_back)


def start_of_month(moment: datetime) -> datetime:
    return datetime.combine(moment.date().replace(day=1), time.min)


def day_start(value: date) -> datetime:
    return datetime.combine(value, time.min)


def next_day_start(value: date) -> datetime:
    # Exclusive upper bound that keeps the whole end date inside a range.
    return datetime.combine(value + timedelta(days=1), time.min)
