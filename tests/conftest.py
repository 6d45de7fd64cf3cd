from datetime import date, datetime, timezone

import pytest

from src.academy.models import ClassRecord, TrialClassRecord

TODAY = date(2026, 10, 19)  # a Monday
NOW = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_class():
    counter = iter(range(1, 10_000))

    def _make(**overrides) -> ClassRecord:
        fields = {
            "id": f"c{next(counter)}",
            "student_id": "s1",
            "teacher_id": "t1",
            "subject": "Quran",
            "class_date": TODAY,
            "start_time": "10:00",
            "duration": 60,
            "status": "scheduled",
        }
        fields.update(overrides)
        return ClassRecord.model_validate(fields)

    return _make


@pytest.fixture
def make_trial():
    counter = iter(range(1, 10_000))

    def _make(**overrides) -> TrialClassRecord:
        fields = {
            "id": f"{next(counter)}",
            "student_name": "Omar Hassan",
            "student_phone": "+20 100 000 0000",
            "teacher_id": "t1",
            "subject": "Arabic",
            "date": TODAY,
            "time": "08:30",
            "duration": 30,
            "status": "scheduled",
        }
        fields.update(overrides)
        return TrialClassRecord.model_validate(fields)

    return _make
