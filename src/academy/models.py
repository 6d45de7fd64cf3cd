"""Pydantic models for school records and derived statistics.

Records mirror the rows handed over by the data layer (Supabase tables
``classes``, ``trial_classes``, ``courses``, ``attendance``, ``invoices``). The core only
reads them; every derived model is recomputed per view and never persisted.
"""

from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ClassStatus(str, Enum):
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"


class CancellationReason(str, Enum):
    """Who cancelled a class."""

    STUDENT = "student"
    TEACHER = "teacher"
    OTHER = "other"


class TrialOutcome(str, Enum):
    PENDING = "pending"
    ENROLLED = "enrolled"
    DECLINED = "declined"


class CourseStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    PAUSED = "paused"


class AttendanceStatus(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"
    NO_LESSON = "no_lesson"


class InvoiceStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"


class ProgressColor(str, Enum):
    """Display colour of a course progress bar."""

    EMERALD = "emerald"
    BLUE = "blue"
    AMBER = "amber"
    RED = "red"


class Record(BaseModel):
    """Base for rows coming from the data layer; unknown columns are ignored."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str


class PersonRecord(Record):
    """A student or teacher row, as far as dashboard counts need it."""

    name: str = ""
    status: str | None = None  # "active", "inactive", ...


class ClassRecord(Record):
    """A regular class session between an enrolled student and a teacher."""

    student_id: str
    teacher_id: str
    subject: str = ""
    class_date: date
    start_time: str  # "HH:MM" 24-hour, may carry ":SS"
    end_time: str | None = None
    duration: int = 60  # minutes
    status: ClassStatus = ClassStatus.SCHEDULED
    notes: str | None = None
    cancellation_reason: CancellationReason | None = None


class TrialClassRecord(Record):
    """An introductory class for a prospective student (no student row yet)."""

    student_name: str
    student_email: str = ""
    student_phone: str = ""
    teacher_id: str
    subject: str = ""
    date: date
    time: str  # "HH:MM" 24-hour
    duration: int = 30
    status: ClassStatus = ClassStatus.SCHEDULED
    outcome: TrialOutcome | None = None
    notes: str | None = None


class CourseRecord(Record):
    student_id: str
    teacher_id: str
    subject: str = ""
    total_classes: int = 0
    completed_classes: int = 0
    remaining_classes: int = 0
    progress_percentage: float = 0  # stored, never recomputed here
    monthly_fee: float = 0
    status: CourseStatus = CourseStatus.ACTIVE


class AttendanceRecord(Record):
    student_id: str
    student_name: str = ""
    date: str  # "YYYY-MM-DD"
    status: AttendanceStatus
    notes: str | None = None


class InvoiceRecord(Record):
    """A monthly fee invoice, with student and teacher names joined in."""

    student_id: str
    student_name: str = ""
    student_email: str = ""
    teacher_id: str = ""
    teacher_name: str = ""
    amount: float = 0
    description: str = ""
    due_date: date
    status: InvoiceStatus = InvoiceStatus.PENDING
    payment_method: str | None = None
    transaction_id: str | None = None


class ScheduleItem(BaseModel):
    """One row of the merged daily schedule (regular or trial class)."""

    id: str  # trial classes are prefixed "trial-"
    student_id: str | None = None
    student_name: str | None = None
    student_phone: str | None = None
    teacher_id: str
    subject: str = ""
    class_date: date
    start_time: str
    duration: int
    status: ClassStatus
    notes: str | None = None
    is_trial: bool = False


class MonthlyStats(BaseModel):
    total_classes: int = 0
    completed: int = 0
    student_cancelled: int = 0
    teacher_cancelled: int = 0
    total_hours: float = 0.0


class TeacherStats(BaseModel):
    total: int = 0
    completed: int = 0
    scheduled: int = 0
    cancelled: int = 0
    total_hours: float = 0.0
    completion_rate: float = 0.0  # completed / total, 0..1


class CourseStats(BaseModel):
    total: int = 0
    active: int = 0
    completed: int = 0
    avg_progress: int = 0


class AttendanceStats(BaseModel):
    total: int = 0
    present: int = 0
    absent: int = 0
    no_lesson: int = 0
    percentage: int = 0
    records: list[AttendanceRecord] = Field(default_factory=list)


class InvoiceStats(BaseModel):
    """Amount totals over all invoices plus the filtered rows for the table."""

    total: float = 0.0
    paid: float = 0.0
    pending: float = 0.0
    overdue: float = 0.0
    records: list[InvoiceRecord] = Field(default_factory=list)


class DashboardStats(BaseModel):
    total_students: int = 0
    active_students: int = 0
    total_teachers: int = 0
    active_teachers: int = 0
    total_classes: int = 0
    today_classes: int = 0
    total_trial_classes: int = 0
    pending_trial_classes: int = 0


class DateTimeSnapshot(BaseModel):
    """Wall-clock date and time as shown in the page header."""

    date: str  # "Monday, 19 October 2026"
    time: str  # "09:05 AM"
