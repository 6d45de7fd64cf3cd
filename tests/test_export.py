from datetime import date

from src.academy.export import attendance_csv, export_filename, format_amount, invoice_csv
from src.academy.models import AttendanceRecord, InvoiceRecord


def test_attendance_csv_quotes_commas_in_notes():
    records = [
        AttendanceRecord(id="1", student_id="s1", student_name="Omar", date="2026-10-01", status="present"),
        AttendanceRecord(
            id="2",
            student_id="s2",
            student_name="Layla",
            date="2026-10-02",
            status="absent",
            notes="sick, will make up",
        ),
    ]

    assert attendance_csv(records).splitlines() == [
        "Student Name,Date,Status,Notes",
        "Omar,2026-10-01,present,",
        'Layla,2026-10-02,absent,"sick, will make up"',
    ]


def test_attendance_csv_header_only():
    assert attendance_csv([]) == "Student Name,Date,Status,Notes\n"


def test_export_filename():
    assert export_filename("invoices", date(2026, 10, 19)) == "invoices-2026-10-19.csv"


def test_invoice_csv_quotes_every_cell():
    invoices = [
        InvoiceRecord(
            id="INV-001",
            student_id="s1",
            student_name="Omar",
            teacher_name="Ali, Sheikh",
            amount=120,
            due_date=date(2026, 10, 19),
            status="paid",
        ),
        InvoiceRecord(
            id="INV-002",
            student_id="s2",
            student_name="Layla",
            amount=99.5,
            due_date=date(2026, 1, 5),
        ),
    ]

    assert invoice_csv(invoices).splitlines() == [
        '"Invoice ID","Student","Teacher","Amount","Due Date","Status"',
        '"INV-001","Omar","Ali, Sheikh","$120","10/19/2026","paid"',
        '"INV-002","Layla","","$99.5","1/5/2026","pending"',
    ]


def test_format_amount():
    assert format_amount(120.0) == "$120"
    assert format_amount(0) == "$0"
    assert format_amount(99.5) == "$99.5"
