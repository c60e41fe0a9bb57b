"""
Wedding date helpers: display formatting and countdown
"""

from dataclasses import dataclass
from datetime import date, datetime
import re
from typing import Optional

_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

MONTHS = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]


def parse_wedding_date(value: Optional[str]) -> Optional[date]:
    """Parse a yyyy-MM-dd string; None when missing or invalid"""
    if not value or not _DATE_PATTERN.match(value):
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def format_wedding_date(value: Optional[str]) -> Optional[str]:
    """`2026-06-14` -> `June 14, 2026`"""
    parsed = parse_wedding_date(value)
    if parsed is None:
        return None
    return f"{MONTHS[parsed.month - 1]} {parsed.day}, {parsed.year}"


@dataclass(frozen=True)
class Countdown:
    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0
    is_today: bool = False


def countdown_to(value: Optional[str], now: Optional[datetime] = None) -> Optional[Countdown]:
    """
    Time left until midnight of the wedding day.

    Returns a Countdown with is_today set on the day itself, and None for past,
    missing or invalid dates.
    """
    target_day = parse_wedding_date(value)
    if target_day is None:
        return None

    now = now or datetime.now()
    today = now.date()
    if target_day == today:
        return Countdown(is_today=True)
    if target_day < today:
        return None

    remaining = int((datetime.combine(target_day, datetime.min.time()) - now).total_seconds())
    days, remainder = divmod(remaining, 86400)
    hours, remainder = divmod(remainder, 3600)
    minutes, seconds = divmod(remainder, 60)
    return Countdown(days=days, hours=hours, minutes=minutes, seconds=seconds)
