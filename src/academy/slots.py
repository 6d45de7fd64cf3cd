"""Start-time options for the class and trial-class booking forms."""

from typing import Any

from src.academy.logging import get_logger
from src.academy.timeformat import clock_12hour

log = get_logger(__name__)


def _slot_minutes(start_hour: Any, end_hour: Any, interval_minutes: Any) -> list[int]:
    """Minutes since midnight for each slot, end boundary included once.

    Returns an empty list when the parameters are unusable.
    """
    params = (start_hour, end_hour, interval_minutes)
    if any(isinstance(p, bool) or not isinstance(p, int) for p in params):
        log.warning("invalid_slot_parameters", params=params)
        return []
    if not (0 <= start_hour <= 23 and 0 <= end_hour <= 23) or interval_minutes <= 0:
        log.warning("invalid_slot_parameters", params=params)
        return []

    end = end_hour * 60
    slots = list(range(start_hour * 60, end, interval_minutes))
    slots.append(end)
    return slots


def generate_time_slots(start_hour: Any, end_hour: Any, interval_minutes: Any) -> list[str]:
    """24-hour ``"HH:MM"`` slots from ``start_hour:00`` up to and including ``end_hour:00``.

    Slots step by ``interval_minutes`` and the end boundary is appended once
    even when the step does not land on it:

        generate_time_slots(9, 11, 45) -> ["09:00", "09:45", "10:30", "11:00"]
    """
    return [f"{m // 60:02d}:{m % 60:02d}" for m in _slot_minutes(start_hour, end_hour, interval_minutes)]


def generate_time_slots_12hour(start_hour: Any, end_hour: Any, interval_minutes: Any) -> list[str]:
    """Same cadence as generate_time_slots, rendered as ``"09:30 AM"``."""
    return [
        clock_12hour(m // 60, m % 60)
        for m in _slot_minutes(start_hour, end_hour, interval_minutes)
    ]
