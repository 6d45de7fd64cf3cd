"""Command-line access to schedules and statistics from exported record files.

Reads JSON arrays of rows (as exported from the classes / trial_classes /
attendance tables) and prints JSON or a table to stdout. Diagnostics go to
stderr so stdout stays clean for piping.

Run with: academy today --classes data/classes.json --trials data/trial_classes.json
Table:    academy today --classes data/classes.json --table
Slots:    academy slots --12h
Student:  academy student-stats --classes data/classes.json --student-id S1 --month 2026-10
Teacher:  academy teacher-stats --classes data/classes.json --teacher-id T1
CSV:      academy attendance --records data/attendance.json --month 2026-10 --csv
Payments: academy invoices --records invoices.json --status overdue --csv

Relative record paths that do not exist in the working directory are looked
up under DATA_DIR (default "data"), so "--records invoices.json" reads
data/invoices.json.

Exit codes:
  0 = success
  1 = error (message on stderr)
"""

import argparse
import json
import sys
from datetime import date, datetime
from pathlib import Path
from typing import Any, Sequence

from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError

from src.academy.config import get_config
from src.academy.export import attendance_csv, invoice_csv
from src.academy.logging import get_logger, setup_logging
from src.academy.models import (
    AttendanceRecord,
    ClassRecord,
    InvoiceRecord,
    InvoiceStatus,
    ScheduleItem,
    TrialClassRecord,
)
from src.academy.schedule import todays_schedule
from src.academy.slots import generate_time_slots, generate_time_slots_12hour
from src.academy.stats import (
    attendance_stats,
    invoice_stats,
    student_monthly_stats,
    teacher_stats,
)
from src.academy.timeformat import class_end_time, format_time_12hour

log = get_logger(__name__)


def _parse_date(date_str: str) -> date:
    """Parse date string in YYYY-MM-DD format."""
    try:
        return datetime.strptime(date_str, "%Y-%m-%d").date()
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Invalid date format: '{date_str}'. Expected YYYY-MM-DD."
        )


def _parse_month(month_str: str) -> str:
    """Validate a YYYY-MM month string."""
    try:
        datetime.strptime(month_str, "%Y-%m")
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Invalid month format: '{month_str}'. Expected YYYY-MM."
        )
    return month_str


def build_parser() -> argparse.ArgumentParser:
    config = get_config()
    parser = argparse.ArgumentParser(
        prog="academy",
        description="School schedule views and statistics from exported records.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    commands = parser.add_subparsers(dest="command", required=True)

    slots = commands.add_parser("slots", help="List bookable start times.")
    slots.add_argument("--start", type=int, default=config.slot_start_hour, help="First hour (0-23).")
    slots.add_argument("--end", type=int, default=config.slot_end_hour, help="Last hour (0-23).")
    slots.add_argument(
        "--interval",
        type=int,
        default=config.slot_interval_minutes,
        help="Minutes between slots.",
    )
    slots.add_argument("--12h", dest="twelve_hour", action="store_true", help="Show AM/PM times.")

    today = commands.add_parser("today", help="Merged regular + trial schedule for a day.")
    today.add_argument("--classes", type=Path, required=True, help="Classes JSON file.")
    today.add_argument("--trials", type=Path, default=None, help="Trial classes JSON file.")
    today.add_argument(
        "--date",
        type=_parse_date,
        default=None,
        help="Day to show in YYYY-MM-DD format (default: today, UTC).",
    )
    today.add_argument("--table", action="store_true", help="Human-readable table instead of JSON.")

    student = commands.add_parser("student-stats", help="Monthly stats for one student.")
    student.add_argument("--classes", type=Path, required=True, help="Classes JSON file.")
    student.add_argument("--student-id", required=True)
    student.add_argument("--month", type=_parse_month, required=True, help="YYYY-MM.")

    teacher = commands.add_parser("teacher-stats", help="Lifetime stats for one teacher.")
    teacher.add_argument("--classes", type=Path, required=True, help="Classes JSON file.")
    teacher.add_argument("--teacher-id", required=True)

    attendance = commands.add_parser("attendance", help="Attendance summary or CSV export.")
    attendance.add_argument("--records", type=Path, required=True, help="Attendance JSON file.")
    attendance.add_argument("--month", type=_parse_month, default=None, help="YYYY-MM.")
    attendance.add_argument(
        "--status",
        choices=["present", "absent", "no_lesson"],
        default=None,
    )
    attendance.add_argument("--csv", action="store_true", help="Print the filtered records as CSV.")

    invoices = commands.add_parser("invoices", help="Payment totals or invoice CSV export.")
    invoices.add_argument("--records", type=Path, required=True, help="Invoices JSON file.")
    invoices.add_argument("--search", default=None, help="Student, teacher or invoice id.")
    invoices.add_argument(
        "--status",
        choices=[s.value for s in InvoiceStatus],
        default=None,
    )
    invoices.add_argument("--csv", action="store_true", help="Print the filtered invoices as CSV.")

    return parser


def resolve_data_path(path: Path, data_dir: str | Path) -> Path:
    """Relative paths missing from the working directory are read from ``data_dir``."""
    if path.is_absolute() or path.exists():
        return path
    return Path(data_dir) / path


def load_records(path: Path, model: type[BaseModel]) -> list[Any]:
    """Load a JSON array of rows and validate each into ``model``.

    Raises:
        ValueError: If the file does not hold a JSON array or a row is invalid.
    """
    path = resolve_data_path(path, get_config().data_dir)
    rows = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(rows, list):
        raise ValueError(f"{path}: expected a JSON array of rows")
    try:
        records = [model.model_validate(row) for row in rows]
    except ValidationError as exc:
        raise ValueError(f"{path}: {exc}") from exc
    log.debug("records_loaded", path=str(path), model=model.__name__, count=len(records))
    return records


def format_schedule_table(items: list[ScheduleItem]) -> str:
    """Format schedule rows as a plain-text table."""
    if not items:
        return "No classes scheduled."

    header = f"{'Time':<20} {'Student':<24} {'Subject':<16} {'Status':<10} Type"
    lines = [header, "-" * len(header)]
    for item in items:
        span = f"{format_time_12hour(item.start_time)}-{format_time_12hour(class_end_time(item.start_time, item.duration))}"
        kind = "trial" if item.is_trial else "class"
        lines.append(
            f"{span:<20} {(item.student_name or item.student_id or ''):<24} "
            f"{item.subject:<16} {item.status.value:<10} {kind}"
        )
    return "\n".join(lines)


def _dump(value: Any) -> str:
    if isinstance(value, BaseModel):
        value = value.model_dump(mode="json")
    elif isinstance(value, list):
        value = [v.model_dump(mode="json") if isinstance(v, BaseModel) else v for v in value]
    return json.dumps(value, indent=2, ensure_ascii=False)


def run(args: argparse.Namespace) -> str:
    """Execute a parsed command and return the text for stdout."""
    if args.command == "slots":
        generate = generate_time_slots_12hour if args.twelve_hour else generate_time_slots
        return _dump(generate(args.start, args.end, args.interval))

    if args.command == "today":
        classes = load_records(args.classes, ClassRecord)
        trials = load_records(args.trials, TrialClassRecord) if args.trials else []
        items = todays_schedule(classes, trials, today=args.date)
        return format_schedule_table(items) if args.table else _dump(items)

    if args.command == "student-stats":
        classes = load_records(args.classes, ClassRecord)
        return _dump(student_monthly_stats(classes, args.student_id, args.month))

    if args.command == "teacher-stats":
        classes = load_records(args.classes, ClassRecord)
        return _dump(teacher_stats(classes, args.teacher_id))

    if args.command == "attendance":
        records = load_records(args.records, AttendanceRecord)
        stats = attendance_stats(records, month=args.month, status=args.status)
        if args.csv:
            return attendance_csv(stats.records)
        return _dump(stats.model_dump(mode="json", exclude={"records"}))

    if args.command == "invoices":
        records = load_records(args.records, InvoiceRecord)
        stats = invoice_stats(records, search=args.search, status=args.status)
        if args.csv:
            return invoice_csv(stats.records)
        return _dump(stats.model_dump(mode="json", exclude={"records"}))

    raise ValueError(f"Unknown command {args.command!r}")


def main(argv: Sequence[str] | None = None) -> int:
    load_dotenv()
    config = get_config()
    setup_logging(json_output=config.log_json, log_level=config.log_level)

    args = build_parser().parse_args(argv)
    try:
        output = run(args)
    except (OSError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
