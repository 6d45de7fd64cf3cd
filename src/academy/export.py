"""CSV export of attendance records and invoices."""

import csv
import io
from collections.abc import Iterable
from datetime import date

from src.academy.models import AttendanceRecord, InvoiceRecord

ATTENDANCE_HEADER = ["Student Name", "Date", "Status", "Notes"]
INVOICE_HEADER = ["Invoice ID", "Student", "Teacher", "Amount", "Due Date", "Status"]


def attendance_csv(records: Iterable[AttendanceRecord]) -> str:
    """Render attendance records as CSV text with a header row."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(ATTENDANCE_HEADER)
    for record in records:
        writer.writerow([record.student_name, record.date, record.status.value, record.notes or ""])
    return buffer.getvalue()


def format_amount(amount: float) -> str:
    """``120.0 -> "$120"``, ``99.5 -> "$99.5"``."""
    if float(amount).is_integer():
        return f"${int(amount)}"
    return f"${amount}"


def invoice_csv(invoices: Iterable[InvoiceRecord]) -> str:
    """Render invoices as CSV text; every cell is quoted, due dates as M/D/YYYY."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(INVOICE_HEADER)
    for invoice in invoices:
        due = invoice.due_date
        writer.writerow([
            invoice.id,
            invoice.student_name,
            invoice.teacher_name,
            format_amount(invoice.amount),
            f"{due.month}/{due.day}/{due.year}",
            invoice.status.value,
        ])
    return buffer.getvalue()


def export_filename(prefix: str, today: date) -> str:
    """``export_filename("attendance", date(2026, 10, 19)) -> "attendance-2026-10-19.csv"``."""
    return f"{prefix}-{today.isoformat()}.csv"
