"""Time parsing and interval arithmetic for appointment scheduling.

Times of day are naive local ``HH:MM[:SS]`` strings and intervals are
half-open ``[start, end)`` pairs of minutes since midnight. There is no
timezone handling and no wraparound: an appointment that runs past midnight
simply has ``end > 1440``.
"""

from datetime import date, datetime
from typing import Optional

Interval = tuple[int, int]


def _to_int(part: Optional[str]) -> int:
    """Missing or unparsable components count as 0"""
    if part is None:
        return 0
    try:
        return int(part.strip())
    except ValueError:
        return 0


def to_minutes(time_of_day: str) -> int:
    """Minutes since midnight for an ``HH:MM[:SS]`` string (seconds ignored)"""
    parts = (time_of_day or "").split(":")
    hours = _to_int(parts[0] if len(parts) > 0 else None)
    minutes = _to_int(parts[1] if len(parts) > 1 else None)
    return hours * 60 + minutes


def to_interval(start_time: str, duration_minutes: int) -> Interval:
    """Half-open minute interval for an appointment starting at `start_time`"""
    start = to_minutes(start_time)
    return start, start + duration_minutes


def format_time(minutes: int) -> str:
    """Format minutes since midnight as ``HH:MM:00``"""
    hours, mins = divmod(minutes, 60)
    return f"{hours:02d}:{mins:02d}:00"


def normalize_time(time_of_day: str) -> str:
    """Normalize ``HH:MM`` / ``H:MM:SS`` input to the stored ``HH:MM:SS`` form"""
    parts = time_of_day.split(":")
    hours = _to_int(parts[0] if len(parts) > 0 else None)
    minutes = _to_int(parts[1] if len(parts) > 1 else None)
    seconds = _to_int(parts[2] if len(parts) > 2 else None)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def intervals_overlap(first: Interval, second: Interval) -> bool:
    """Touching boundaries (one ends at 10:00, next starts at 10:00) do not overlap"""
    return first[0] < second[1] and first[1] > second[0]


def today() -> date:
    """Default clock: the current local date"""
    return datetime.now().date()


def is_past_date(value: date, current_day: date) -> bool:
    if isinstance(value, datetime):
        value = value.date()
    return value < current_day
