"""CSV rendering of an already-computed attendance report."""

from __future__ import annotations

import csv
import io
from datetime import date, datetime

from ..users.model import Identity
from .model import AttendanceReport

REPORT_TITLE = "EMPLOYEE ATTENDANCE REPORT"
SYSTEM_NAME = "Employee Attendance Management System"

COLUMNS = [
    "EMPLOYEE NAME",
    "EMPLOYEE ID",
    "DEPARTMENT",
    "POSITION",
    "DATE",
    "DAY OF WEEK",
    "CHECK IN TIME",
    "CHECK OUT TIME",
    "WORKING HOURS",
    "STATUS",
]


def _display_date(value: date) -> str:
    return f"{value:%a, %b} {value.day}, {value.year}"


def report_filename(report: AttendanceReport) -> str:
    return f"Attendance_Report_{report.start:%Y-%m-%d}_to_{report.end:%Y-%m-%d}.csv"


def render_report_csv(report: AttendanceReport, *, generated_by: Identity, generated_at: datetime) -> str:
    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n")
    blank = [""] * len(COLUMNS)

    if report.user_id is not None:
        employee_label = report.rows[0].name if report.rows else "Unknown Employee"
    else:
        employee_label = "All Employees"

    writer.writerow([REPORT_TITLE])
    writer.writerow([SYSTEM_NAME])
    writer.writerow([f"Generated on: {generated_at:%B} {generated_at.day}, {generated_at.year}"])
    writer.writerow([f"Report Period: {_display_date(report.start)} to {_display_date(report.end)}"])
    writer.writerow([f"Employee(s): {employee_label}"])
    writer.writerow([f"Generated by: {generated_by.name} ({generated_by.employee_id})"])
    writer.writerow([])

    writer.writerow(COLUMNS)
    writer.writerow(blank)
    for row in report.rows:
        writer.writerow(
            [
                row.name,
                row.employee_id,
                row.department,
                row.position,
                _display_date(row.work_date),
                row.weekday,
                row.check_in_12h,
                row.check_out_12h,
                f"{row.working_hours:.2f}",
                row.status.value,
            ]
        )

    s = report.summary
    writer.writerow([])
    writer.writerow(["ATTENDANCE SUMMARY STATISTICS"])
    writer.writerow(blank)
    writer.writerow(["METRIC", "VALUE", "PERCENTAGE"])
    writer.writerow(["Total Records", s.total_records, "100.00%" if s.total_records else "0.00%"])
    writer.writerow(["Complete Records", s.complete_records, f"{s.complete_pct:.2f}%"])
    writer.writerow(["Incomplete Records", s.incomplete_records, f"{s.incomplete_pct:.2f}%"])
    writer.writerow(["Absent Records", s.absent_records, f"{s.absent_pct:.2f}%"])
    writer.writerow([])

    writer.writerow(["WORKING HOURS ANALYSIS"])
    writer.writerow(blank)
    writer.writerow(["Total Working Hours", f"{s.total_hours:.2f} hours", ""])
    writer.writerow(["Average Hours per Record", f"{s.average_hours_per_record:.2f} hours", ""])
    writer.writerow(["Average Hours (Complete Records Only)", f"{s.average_hours_complete_only:.2f} hours", ""])
    writer.writerow(["Maximum Possible Hours", f"{s.max_possible_hours:.2f} hours", f"(Assuming {s.standard_day_hours} hrs/day)"])
    writer.writerow(["Productivity Rate", f"{s.productivity_rate:.2f}%", "(Actual vs Maximum)"])
    writer.writerow([])

    writer.writerow(["ADDITIONAL INFORMATION"])
    writer.writerow(blank)
    writer.writerow(["Report Generated By", generated_by.name, generated_by.role.value])
    writer.writerow(["Generation Date", generated_at.strftime("%Y-%m-%d %H:%M:%S"), ""])
    return out.getvalue()
