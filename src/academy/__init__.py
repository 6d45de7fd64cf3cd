"""Schedule formatting and statistics for the school administration app.

Pure helpers the pages call while rendering: 12-hour and student-timezone
time display, relative times, booking slots, the merged daily schedule, and
per-student / per-teacher / attendance / payments summaries. Records are fetched and
persisted elsewhere.
"""

from src.academy.models import ClassRecord, ScheduleItem, TrialClassRecord
from src.academy.schedule import todays_schedule
from src.academy.slots import generate_time_slots, generate_time_slots_12hour
from src.academy.stats import student_monthly_stats, teacher_stats
from src.academy.timeformat import format_student_time, format_time_12hour

__all__ = [
    "ClassRecord",
    "TrialClassRecord",
    "ScheduleItem",
    "todays_schedule",
    "generate_time_slots",
    "generate_time_slots_12hour",
    "student_monthly_stats",
    "teacher_stats",
    "format_time_12hour",
    "format_student_time",
]
