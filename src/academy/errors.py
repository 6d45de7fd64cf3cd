"""Error hierarchy for time and date formatting.

Parsers raise these exceptions so internal callers can tell a formatted value
from a fallback. The public formatting functions convert them to a fixed
display string at the rendering boundary (see ``sentinel_on_error`` in
``src.academy.timeformat``), so templates can always interpolate the result.

Example:
    try:
        start = TimeOfDay.parse(record.start_time)
    except InvalidTimeError as exc:
        label = exc.sentinel  # "Invalid time"
"""


class FormatError(ValueError):
    """Base exception for all malformed-input errors."""

    sentinel = "Invalid input"


class InvalidTimeError(FormatError):
    """Time of day is missing, non-numeric, or out of range.

    Examples: "25:00", "", "abc", "12:60".
    """

    sentinel = "Invalid time"


class InvalidDateError(FormatError):
    """Date or timestamp cannot be parsed."""

    sentinel = "Invalid date"


class InvalidInputError(FormatError):
    """Argument has the wrong type (e.g. minutes given as a string)."""

    sentinel = "Invalid input"
