"""Summary statistics for the student, teacher, course, attendance, payments and dashboard pages.

All functions take already-fetched records and return a fresh summary model;
inputs are never modified. Empty inputs give zero counts and percentages.
"""

import math
from collections.abc import Iterable
from datetime import date

from src.academy.logging import get_logger
from src.academy.models import (
    AttendanceRecord,
    AttendanceStats,
    AttendanceStatus,
    CancellationReason,
    ClassRecord,
    ClassStatus,
    CourseRecord,
    CourseStats,
    CourseStatus,
    DashboardStats,
    InvoiceRecord,
    InvoiceStats,
    InvoiceStatus,
    MonthlyStats,
    PersonRecord,
    ProgressColor,
    TeacherStats,
    TrialClassRecord,
    TrialOutcome,
)
from src.academy.schedule import classes_in_month, month_key, utc_today

log = get_logger(__name__)

# Lower bounds, checked highest first
PROGRESS_THRESHOLDS: tuple[tuple[float, ProgressColor], ...] = (
    (80, ProgressColor.EMERALD),
    (60, ProgressColor.BLUE),
    (40, ProgressColor.AMBER),
)


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (2.5 -> 3, not 2)."""
    return math.floor(value + 0.5)


def cancellation_reasons(record: ClassRecord) -> frozenset[CancellationReason]:
    """Who cancelled a class.

    Uses the structured ``cancellation_reason`` when the row has one. Older rows
    only have free-text notes: a note mentioning "student" or "teacher"
    (case-insensitive) counts for that side, and a note mentioning both
    counts for both.
    """
    if record.cancellation_reason is not None:
        return frozenset({record.cancellation_reason})

    notes = (record.notes or "").lower()
    reasons = set()
    if "student" in notes:
        reasons.add(CancellationReason.STUDENT)
    if "teacher" in notes:
        reasons.add(CancellationReason.TEACHER)
    return frozenset(reasons or {CancellationReason.OTHER})


def _completed_hours(classes: list[ClassRecord]) -> float:
    minutes = sum(c.duration for c in classes if c.status == ClassStatus.COMPLETED)
    return minutes / 60


def student_monthly_stats(
    classes: Iterable[ClassRecord],
    student_id: str,
    month: date | str,
) -> MonthlyStats:
    """Class counts and taught hours for one student in one calendar month.

    Args:
        classes: All class records (any student, any month).
        student_id: Student to summarise.
        month: Any date inside the month, or ``"YYYY-MM"``.
    """
    selected = classes_in_month(classes, month, student_id=student_id)

    cancelled = [
        cancellation_reasons(c) for c in selected if c.status == ClassStatus.CANCELLED
    ]
    stats = MonthlyStats(
        total_classes=len(selected),
        completed=sum(1 for c in selected if c.status == ClassStatus.COMPLETED),
        student_cancelled=sum(1 for r in cancelled if CancellationReason.STUDENT in r),
        teacher_cancelled=sum(1 for r in cancelled if CancellationReason.TEACHER in r),
        total_hours=_completed_hours(selected),
    )

    year, number = month_key(month)
    log.debug(
        "student_monthly_stats",
        student_id=student_id,
        month=f"{year:04d}-{number:02d}",
        total=stats.total_classes,
    )
    return stats


def teacher_stats(classes: Iterable[ClassRecord], teacher_id: str) -> TeacherStats:
    """Lifetime class counts, taught hours and completion rate for a teacher."""
    selected = [c for c in classes if c.teacher_id == teacher_id]
    total = len(selected)
    completed = sum(1 for c in selected if c.status == ClassStatus.COMPLETED)

    return TeacherStats(
        total=total,
        completed=completed,
        scheduled=sum(1 for c in selected if c.status == ClassStatus.SCHEDULED),
        cancelled=sum(1 for c in selected if c.status == ClassStatus.CANCELLED),
        total_hours=_completed_hours(selected),
        completion_rate=completed / total if total else 0.0,
    )


def progress_color(percentage: float) -> ProgressColor:
    """Colour of a course progress bar: emerald >= 80, blue >= 60, amber >= 40, else red."""
    for threshold, color in PROGRESS_THRESHOLDS:
        if percentage >= threshold:
            return color
    return ProgressColor.RED


def course_stats(courses: Iterable[CourseRecord]) -> CourseStats:
    """Course counts by status and the mean stored progress percentage."""
    courses = list(courses)
    total = len(courses)
    avg = sum(c.progress_percentage for c in courses) / total if total else 0

    return CourseStats(
        total=total,
        active=sum(1 for c in courses if c.status == CourseStatus.ACTIVE),
        completed=sum(1 for c in courses if c.status == CourseStatus.COMPLETED),
        avg_progress=round_half_up(avg),
    )


def attendance_percentage(present_count: int, total_count: int) -> int:
    """Present over total as a whole percentage; 0 when there is nothing to count."""
    if total_count <= 0:
        return 0
    return round_half_up(present_count / total_count * 100)


def attendance_stats(
    records: Iterable[AttendanceRecord],
    month: date | str | None = None,
    status: AttendanceStatus | str | None = None,
    search: str | None = None,
) -> AttendanceStats:
    """Attendance counts over a filtered window of records.

    Args:
        records: Attendance records.
        month: Keep records whose date falls in this month (date or "YYYY-MM").
        status: Keep only records with this status.
        search: Case-insensitive substring of the student name.

    Returns:
        AttendanceStats with the filtered records, newest first.

    Raises:
        ValueError: If ``status`` is not an attendance status.
    """
    selected = list(records)

    if search:
        needle = search.lower()
        selected = [r for r in selected if needle in r.student_name.lower()]

    if month:
        year, number = month_key(month)
        prefix = f"{year:04d}-{number:02d}"
        selected = [r for r in selected if r.date.startswith(prefix)]

    if status:
        wanted = AttendanceStatus(status)
        selected = [r for r in selected if r.status == wanted]

    selected.sort(key=lambda r: r.date, reverse=True)

    present = sum(1 for r in selected if r.status == AttendanceStatus.PRESENT)
    return AttendanceStats(
        total=len(selected),
        present=present,
        absent=sum(1 for r in selected if r.status == AttendanceStatus.ABSENT),
        no_lesson=sum(1 for r in selected if r.status == AttendanceStatus.NO_LESSON),
        percentage=attendance_percentage(present, len(selected)),
        records=selected,
    )


def dashboard_stats(
    students: Iterable[PersonRecord],
    teachers: Iterable[PersonRecord],
    classes: Iterable[ClassRecord],
    trial_classes: Iterable[TrialClassRecord],
    today: date | None = None,
) -> DashboardStats:
    """Headline counts for the dashboard cards."""
    if today is None:
        today = utc_today()
    students, teachers = list(students), list(teachers)
    classes, trial_classes = list(classes), list(trial_classes)

    return DashboardStats(
        total_students=len(students),
        active_students=sum(1 for s in students if s.status == "active"),
        total_teachers=len(teachers),
        active_teachers=sum(1 for t in teachers if t.status == "active"),
        total_classes=len(classes),
        today_classes=sum(1 for c in classes if c.class_date == today),
        total_trial_classes=len(trial_classes),
        pending_trial_classes=sum(
            1 for t in trial_classes if t.outcome == TrialOutcome.PENDING
        ),
    )


def _amount(invoices: list[InvoiceRecord], status: InvoiceStatus | None = None) -> float:
    return sum(i.amount for i in invoices if status is None or i.status == status)


def invoice_stats(
    invoices: Iterable[InvoiceRecord],
    search: str | None = None,
    status: InvoiceStatus | str | None = None,
) -> InvoiceStats:
    """Payment totals for the summary cards plus the filtered invoice rows.

    Totals always cover every invoice; ``search`` and ``status`` narrow only
    the rows shown in the table and exported.

    Args:
        invoices: Invoice records.
        search: Case-insensitive substring of the student name, teacher name
            or invoice id.
        status: Keep only rows with this status.

    Raises:
        ValueError: If ``status`` is not an invoice status.
    """
    invoices = list(invoices)
    selected = invoices

    if search:
        needle = search.lower()
        selected = [
            i
            for i in selected
            if needle in i.student_name.lower()
            or needle in i.teacher_name.lower()
            or needle in i.id.lower()
        ]

    if status:
        wanted = InvoiceStatus(status)
        selected = [i for i in selected if i.status == wanted]

    return InvoiceStats(
        total=_amount(invoices),
        paid=_amount(invoices, InvoiceStatus.PAID),
        pending=_amount(invoices, InvoiceStatus.PENDING),
        overdue=_amount(invoices, InvoiceStatus.OVERDUE),
        records=selected,
    )
