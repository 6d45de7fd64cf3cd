"""Time and date display helpers for class schedules.

Class times are stored as 24-hour ``"HH:MM"`` strings in the school's
reference timezone (Egypt). Every public formatter here is safe to
interpolate straight into page text: malformed input never raises, it comes
back as ``"Invalid time"``, ``"Invalid date"`` or ``"Invalid input"``.

Code that needs to know whether formatting succeeded should use the parsers
(``TimeOfDay.parse``, ``parse_date``, ``parse_timestamp``) directly; they raise
``FormatError`` subclasses instead.
"""

import functools
import math
import re
from datetime import date, datetime, timezone
from typing import Any, Callable, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from src.academy.config import get_config
from src.academy.errors import (
    FormatError,
    InvalidDateError,
    InvalidInputError,
    InvalidTimeError,
)
from src.academy.logging import get_logger
from src.academy.models import DateTimeSnapshot

log = get_logger(__name__)

MINUTES_PER_DAY = 24 * 60

# Indexed by date.weekday() (0=Monday)
DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

# "9:05", "09:05", "09:05:00" (Postgres time columns)
_TIME_PATTERN = re.compile(r"^\s*(\d{1,2}):(\d{1,2})(?::\d{1,2}(?:\.\d+)?)?\s*$", re.ASCII)

# Student timezone label keywords -> (hour offset from Egypt, display label).
# Fixed offsets, checked in order; not a real timezone conversion.
STUDENT_TIMEZONES: tuple[tuple[tuple[str, ...], int, str], ...] = (
    (("saudi", "riyadh", "utc+3"), 1, "KSA"),
    (("uae", "dubai", "utc+4"), 2, "UAE"),
    (("egypt", "cairo", "utc+2"), 0, "Egypt"),
)
DEFAULT_STUDENT_TIMEZONE: tuple[int, str] = (0, "Local")

F = TypeVar("F", bound=Callable[..., Any])


def sentinel_on_error(func: F) -> F:
    """Return the error's display sentinel instead of raising FormatError."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except FormatError as exc:
            log.warning(
                "time_format_failed",
                function=func.__name__,
                value=args[0] if args else None,
                error=str(exc),
            )
            return exc.sentinel

    return wrapper  # type: ignore[return-value]


class TimeOfDay(BaseModel):
    """A wall-clock time with minute precision."""

    model_config = ConfigDict(frozen=True)

    hours: int = Field(ge=0, le=23)
    minutes: int = Field(ge=0, le=59)

    @classmethod
    def parse(cls, value: Any) -> "TimeOfDay":
        """Parse a 24-hour ``"HH:MM"`` string.

        Raises:
            InvalidTimeError: If the value is missing, not a string, not
                numeric, or out of range.
        """
        if not isinstance(value, str) or not value:
            raise InvalidTimeError(f"Expected 'HH:MM' string, got {value!r}")

        match = _TIME_PATTERN.match(value)
        if match is None:
            raise InvalidTimeError(f"Malformed time {value!r}")

        hours, minutes = int(match.group(1)), int(match.group(2))
        if not (0 <= hours <= 23 and 0 <= minutes <= 59):
            raise InvalidTimeError(f"Time out of range {value!r}")

        return cls(hours=hours, minutes=minutes)

    @property
    def total_minutes(self) -> int:
        return self.hours * 60 + self.minutes

    def shifted(self, minutes: int) -> "TimeOfDay":
        """Move by a signed number of minutes, wrapping around midnight."""
        total = (self.total_minutes + minutes) % MINUTES_PER_DAY
        return TimeOfDay(hours=total // 60, minutes=total % 60)

    def to_24hour(self) -> str:
        return f"{self.hours:02d}:{self.minutes:02d}"

    def to_12hour(self, *, pad_hour: bool = True) -> str:
        return clock_12hour(self.hours, self.minutes, pad_hour=pad_hour)


def clock_12hour(hours: int, minutes: int, *, pad_hour: bool = True) -> str:
    """Render a 24-hour time as ``"hh:mm AM"``. Hours 0 and 12 display as 12."""
    period = "PM" if hours >= 12 else "AM"
    display = hours % 12 or 12
    hour_text = f"{display:02d}" if pad_hour else str(display)
    return f"{hour_text}:{minutes:02d} {period}"


def parse_date(value: Any) -> date:
    """Coerce a date, datetime, or ISO-8601 string to a calendar date.

    Raises:
        InvalidDateError: If the value cannot be interpreted as a date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise InvalidDateError(f"Expected date, got {value!r}")

    text = value.strip()
    try:
        if len(text) == 10:
            return date.fromisoformat(text)
        return datetime.fromisoformat(text).date()
    except ValueError as exc:
        raise InvalidDateError(f"Unparsable date {value!r}") from exc


def parse_timestamp(value: Any) -> datetime:
    """Coerce a timestamp to an aware datetime. Naive values are taken as UTC.

    Raises:
        InvalidDateError: If the value cannot be interpreted as a timestamp.
    """
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, date):
        moment = datetime(value.year, value.month, value.day)
    elif isinstance(value, str) and value.strip():
        try:
            moment = datetime.fromisoformat(value.strip())
        except ValueError as exc:
            raise InvalidDateError(f"Unparsable timestamp {value!r}") from exc
    else:
        raise InvalidDateError(f"Expected timestamp, got {value!r}")

    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


def student_timezone(label: Any) -> tuple[int, str]:
    """Look up the (hour offset, display label) for a student's timezone label."""
    if not isinstance(label, str):
        return DEFAULT_STUDENT_TIMEZONE

    lowered = label.lower()
    for keywords, offset, display in STUDENT_TIMEZONES:
        if any(keyword in lowered for keyword in keywords):
            return offset, display
    return DEFAULT_STUDENT_TIMEZONE


@sentinel_on_error
def format_time_12hour(time: Any) -> str:
    """``"14:05"`` -> ``"02:05 PM"``."""
    return TimeOfDay.parse(time).to_12hour()


@sentinel_on_error
def format_time(time: Any) -> str:
    """``"14:05"`` -> ``"2:05 PM"``."""
    return TimeOfDay.parse(time).to_12hour(pad_hour=False)


@sentinel_on_error
def format_egypt_time(time: Any) -> str:
    """Format a stored class time with the reference timezone label attached.

    The label comes from ``reference_timezone_label`` (default "Egypt"):
    ``"09:30" -> "09:30 AM (Egypt)"``. No offset is applied.
    """
    label = get_config().reference_timezone_label
    return f"{TimeOfDay.parse(time).to_12hour()} ({label})"


@sentinel_on_error
def format_student_time(time: Any, timezone_label: Any) -> str:
    """Show a class time in the student's timezone.

    The label is matched case-insensitively against a fixed keyword table
    (Saudi +1h, UAE +2h, Egypt +0h); unknown labels get no offset and the
    label ``Local``.

    Example:
        format_student_time("10:00", "Saudi Arabia") -> "11:00 AM (KSA)"
    """
    parsed = TimeOfDay.parse(time)
    offset, display = student_timezone(timezone_label)
    hours = (parsed.hours + offset) % 24
    return f"{clock_12hour(hours, parsed.minutes, pad_hour=False)} ({display})"


@sentinel_on_error
def get_day_name(value: Any) -> str:
    return DAY_NAMES[parse_date(value).weekday()]


@sentinel_on_error
def format_date_short(value: Any) -> str:
    """``2026-10-19`` -> ``"Oct 19, 2026"``."""
    day = parse_date(value)
    return f"{MONTH_NAMES[day.month - 1][:3]} {day.day}, {day.year}"


@sentinel_on_error
def format_date_with_day(value: Any) -> str:
    """``2026-10-19`` -> ``"Monday, Oct 19, 2026"``."""
    day = parse_date(value)
    return f"{DAY_NAMES[day.weekday()]}, {format_date_short(day)}"


@sentinel_on_error
def format_relative_time(timestamp: Any, now: datetime | None = None) -> str:
    """Describe how long ago a timestamp was ("Just now", "3 hours ago", ...).

    Anything a week old or more is shown as a short date instead.

    Args:
        timestamp: ISO-8601 string or datetime. Naive values are UTC.
        now: Current time; defaults to the system clock.
    """
    moment = parse_timestamp(timestamp)
    current = parse_timestamp(now) if now is not None else datetime.now(timezone.utc)
    seconds = math.floor((current - moment).total_seconds())

    if seconds < 60:
        return "Just now"
    if seconds < 3600:
        return _ago(seconds // 60, "minute")
    if seconds < 86400:
        return _ago(seconds // 3600, "hour")
    if seconds < 604800:
        return _ago(seconds // 86400, "day")
    return format_date_short(moment)


def _ago(count: int, unit: str) -> str:
    return f"{count} {unit if count == 1 else unit + 's'} ago"


@sentinel_on_error
def add_minutes_to_time(time: Any, minutes: Any) -> str:
    """Add signed minutes to an ``"HH:MM"`` time, wrapping around midnight.

    ``add_minutes_to_time("23:50", 20) -> "00:10"``
    """
    if not isinstance(time, str) or not time:
        raise InvalidInputError(f"Expected time string, got {time!r}")
    if isinstance(minutes, bool) or not isinstance(minutes, int):
        raise InvalidInputError(f"Expected integer minutes, got {minutes!r}")
    return TimeOfDay.parse(time).shifted(minutes).to_24hour()


def class_end_time(start_time: Any, duration: Any) -> str:
    """End time of a class from its start time and duration in minutes."""
    return add_minutes_to_time(start_time, duration)


def get_current_datetime(now: datetime | None = None) -> DateTimeSnapshot:
    """Date and time for the page header, e.g. "Monday, 19 October 2026" / "09:05 AM".

    Args:
        now: Moment to render; defaults to the local system clock.
    """
    if now is None:
        now = datetime.now()

    return DateTimeSnapshot(
        date=f"{DAY_NAMES[now.weekday()]}, {now.day} {MONTH_NAMES[now.month - 1]} {now.year}",
        time=clock_12hour(now.hour, now.minute),
    )
