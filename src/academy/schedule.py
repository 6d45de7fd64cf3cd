"""Daily schedule views built from regular and trial class records.

Regular classes reference a student row; trial classes carry the prospective
student's name and phone inline. ``todays_schedule`` merges both into one
list of ScheduleItem rows ordered by start time, which is what the dashboard
and the schedule page render.
"""

from collections.abc import Iterable, Mapping
from datetime import date, datetime, timezone

from src.academy.errors import InvalidDateError, InvalidTimeError
from src.academy.logging import get_logger
from src.academy.models import (
    ClassRecord,
    ClassStatus,
    ScheduleItem,
    TrialClassRecord,
)
from src.academy.timeformat import MINUTES_PER_DAY, TimeOfDay

log = get_logger(__name__)

TRIAL_ID_PREFIX = "trial-"


def utc_today() -> date:
    """Today's date as the data layer stores it (UTC calendar date)."""
    return datetime.now(timezone.utc).date()


def month_key(month: date | str) -> tuple[int, int]:
    """(year, month) for a date or a ``"YYYY-MM"`` string.

    Raises:
        InvalidDateError: If a string month is not ``YYYY-MM``.
    """
    if isinstance(month, date):
        return month.year, month.month

    parts = str(month).strip().split("-")
    if len(parts) < 2 or not parts[0].isdigit() or not parts[1].isdigit():
        raise InvalidDateError(f"Expected 'YYYY-MM', got {month!r}")
    year, number = int(parts[0]), int(parts[1])
    if not 1 <= number <= 12:
        raise InvalidDateError(f"Month out of range {month!r}")
    return year, number


def _padded_time(value: str) -> str:
    """``"9:00"`` -> ``"09:00"`` so string order is time order; unreadable values pass through."""
    try:
        return TimeOfDay.parse(value).to_24hour()
    except InvalidTimeError:
        return value


def _class_item(record: ClassRecord, student_names: Mapping[str, str]) -> ScheduleItem:
    return ScheduleItem(
        id=record.id,
        student_id=record.student_id,
        student_name=student_names.get(record.student_id),
        teacher_id=record.teacher_id,
        subject=record.subject,
        class_date=record.class_date,
        start_time=_padded_time(record.start_time),
        duration=record.duration,
        status=record.status,
        notes=record.notes,
    )


def _trial_item(record: TrialClassRecord) -> ScheduleItem:
    return ScheduleItem(
        id=f"{TRIAL_ID_PREFIX}{record.id}",
        student_name=record.student_name,
        student_phone=record.student_phone,
        teacher_id=record.teacher_id,
        subject=record.subject,
        class_date=record.date,
        start_time=_padded_time(record.time),
        duration=record.duration,
        status=record.status,
        notes=record.notes,
        is_trial=True,
    )


def todays_schedule(
    classes: Iterable[ClassRecord],
    trial_classes: Iterable[TrialClassRecord],
    today: date | None = None,
    student_names: Mapping[str, str] | None = None,
) -> list[ScheduleItem]:
    """Merge today's regular and trial classes, ordered by start time.

    Cancelled trial classes are left out; regular classes are shown whatever
    their status. Start times are normalised to zero-padded ``HH:MM`` and then
    compared as strings.

    Args:
        classes: All regular class records.
        trial_classes: All trial class records.
        today: Date to show; defaults to the current UTC date.
        student_names: Optional student id -> name lookup for regular classes.

    Returns:
        ScheduleItem rows; trial rows have ids prefixed with "trial-".
    """
    if today is None:
        today = utc_today()
    names = student_names or {}

    regular = [_class_item(c, names) for c in classes if c.class_date == today]
    trials = [
        _trial_item(t)
        for t in trial_classes
        if t.date == today and t.status != ClassStatus.CANCELLED
    ]

    merged = regular + trials
    merged.sort(key=lambda item: item.start_time)

    log.info(
        "schedule_merged",
        date=today.isoformat(),
        classes=len(regular),
        trial_classes=len(trials),
    )
    return merged


def scheduled_classes_on(classes: Iterable[ClassRecord], day: date | None = None) -> list[ClassRecord]:
    """Classes on ``day`` that are still to be taught (status scheduled)."""
    if day is None:
        day = utc_today()
    return [c for c in classes if c.class_date == day and c.status == ClassStatus.SCHEDULED]


def _start_minutes(record: ClassRecord) -> int:
    try:
        return TimeOfDay.parse(record.start_time).total_minutes
    except InvalidTimeError:
        # Unreadable times sort after the rest of the day
        log.debug("unsortable_start_time", class_id=record.id, start_time=record.start_time)
        return MINUTES_PER_DAY


def sort_classes(classes: Iterable[ClassRecord]) -> list[ClassRecord]:
    """Classes in chronological order: by date, then by start time."""
    return sorted(classes, key=lambda c: (c.class_date, _start_minutes(c)))


def classes_in_month(
    classes: Iterable[ClassRecord],
    month: date | str,
    student_id: str | None = None,
) -> list[ClassRecord]:
    """Classes dated within a calendar month, optionally for one student.

    Args:
        classes: Class records to filter.
        month: Any date inside the month, or ``"YYYY-MM"``.
        student_id: Restrict to this student when given.

    Returns:
        Matching records in chronological order.
    """
    year, number = month_key(month)
    selected = [
        c
        for c in classes
        if (c.class_date.year, c.class_date.month) == (year, number)
        and (student_id is None or c.student_id == student_id)
    ]
    return sort_classes(selected)
