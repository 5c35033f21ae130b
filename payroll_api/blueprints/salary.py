# payroll_api/blueprints/salary.py
from __future__ import annotations

import io
from datetime import date

from flask import Blueprint, current_app, request, send_file

from payroll_api.common.http import ok
from payroll_api.services import salary_report
from payroll_api.services.employee_store import get_store

bp = Blueprint("salary", __name__, url_prefix="/api/salary")


def _total_days():
    raw = request.args.get("totalDays") or request.args.get("total_days")
    return raw if raw not in (None, "") else current_app.config["PAYROLL_DEFAULT_TOTAL_DAYS"]


@bp.get("")
def salary_table():
    """Computed rows for every employee plus the summary totals."""
    return ok(salary_report.salary_view(get_store().list(), _total_days()))


@bp.get("/export")
def export_salary_sheet():
    """
    Query: month=YYYY-MM (default current month), totalDays=28..31,
    format=csv|xlsx (default csv).
    """
    month = (request.args.get("month") or "").strip() or date.today().strftime("%Y-%m")
    content, file_name, mime = salary_report.generate_file(
        get_store().list(),
        month,
        _total_days(),
        request.args.get("format", "csv"),
    )
    return send_file(
        io.BytesIO(content),
        mimetype=mime,
        as_attachment=True,
        download_name=file_name,
    )
