# payroll_api/services/salary_report.py
from __future__ import annotations

import io
import re
from typing import Iterable, List

import openpyxl

from payroll_api.common.errors import ValidationError
from payroll_api.models.employee import Employee
from payroll_api.services.attendance_codes import AttendanceCode
from payroll_api.services.salary_calculator import (
    SalaryBreakdown, check_period, salary_for_employee, summarize,
)

BOM = "\ufeff"
CSV_MIME = "text/csv; charset=utf-8"
XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

# Column labels of the printed salary sheet (office locale is fixed)
LEAD_HEADERS = ["क्रम", "कर्मचारी नाम", "पद", "मूल वेतन", "HRA", "अन्य भत्ता"]
DAY_HEADER = "दिन {}"
TAIL_HEADERS = ["उपस्थिति", "कुल वेतन", "ESI", "PF", "अन्य कटौती", "कुल कटौती", "नेट वेतन"]


def headers(total_days: int) -> List[str]:
    return LEAD_HEADERS + [DAY_HEADER.format(i) for i in range(1, total_days + 1)] + TAIL_HEADERS


def day_symbol(code) -> str:
    return "-" if code in (None, AttendanceCode.NONE, AttendanceCode.NONE.value) else AttendanceCode(code).value


def salary_row(emp: Employee, total_days: int, b: SalaryBreakdown | None = None) -> dict:
    """One employee's computed row, as served by /api/salary and stored in salary sheets."""
    if b is None:
        b = salary_for_employee(emp, total_days)
    out = emp.to_dict()
    out.update({
        "attendanceCount": float(b.attendance_count),
        "dailyRate": float(b.daily_rate),
        "grossSalary": b.gross,
        "esi": b.esi,
        "pf": b.pf,
        "otherDeduction": b.other_deduction,
        "totalDeduction": b.total_deduction,
        "netSalary": b.net,
    })
    return out


def salary_view(employees: Iterable[Employee], total_days) -> dict:
    n = check_period(total_days)
    rows = []
    breakdowns: List[SalaryBreakdown] = []
    for emp in employees:
        b = salary_for_employee(emp, n)
        rows.append(salary_row(emp, n, b))
        breakdowns.append(b)
    return {"totalDays": n, "rows": rows, "summary": summarize(breakdowns)}


def _report_cells(employees: Iterable[Employee], total_days: int):
    for seq, emp in enumerate(employees, start=1):
        b = salary_for_employee(emp, total_days)
        attendance = emp.attendance_codes()
        yield (
            seq, emp.name, emp.position, emp.basic, emp.hra, emp.allowance,
            [day_symbol(attendance[i]) for i in range(total_days)],
            b,
        )


def _quoted(text: str) -> str:
    return '"' + str(text).replace('"', '""') + '"'


def render_csv(employees: Iterable[Employee], total_days) -> bytes:
    """UTF-8 with BOM; name and position always quoted, one line per employee."""
    n = check_period(total_days)
    lines = [",".join(headers(n))]
    for seq, name, position, basic, hra, allowance, days, b in _report_cells(employees, n):
        cells = [str(seq), _quoted(name), _quoted(position), str(basic), str(hra), str(allowance)]
        cells.extend(days)
        cells.extend([
            f"{b.attendance_count:.1f}",
            str(b.gross), str(b.esi), str(b.pf),
            str(b.other_deduction), str(b.total_deduction), str(b.net),
        ])
        lines.append(",".join(cells))
    return (BOM + "\n".join(lines) + "\n").encode("utf-8")


def render_xlsx(employees: Iterable[Employee], total_days, title: str = "Salary Sheet") -> bytes:
    n = check_period(total_days)
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = re.sub(r"[\\/?*\[\]:]", "-", title)[:31] or "Salary Sheet"
    ws.append(headers(n))
    for seq, name, position, basic, hra, allowance, days, b in _report_cells(employees, n):
        ws.append(
            [seq, name, position, basic, hra, allowance]
            + days
            + [float(b.attendance_count), b.gross, b.esi, b.pf,
               b.other_deduction, b.total_deduction, b.net]
        )
    output = io.BytesIO()
    wb.save(output)
    return output.getvalue()


def generate_file(employees: Iterable[Employee], month_year: str, total_days, output_format: str = "csv"):
    """Returns (file_bytes, file_name, mime_type)."""
    fmt = (output_format or "csv").lower()
    base = f"Salary_Sheet_{month_year}"
    if fmt == "csv":
        return render_csv(employees, total_days), f"{base}.csv", CSV_MIME
    if fmt == "xlsx":
        return render_xlsx(employees, total_days, title=month_year), f"{base}.xlsx", XLSX_MIME
    raise ValidationError("Unsupported export format", {"format": "must be csv or xlsx"})
