# payroll_api/blueprints/salary_sheets.py
from __future__ import annotations

import logging

from flask import Blueprint, request
from sqlalchemy.exc import SQLAlchemyError

from payroll_api.common.errors import NotFoundError, PersistenceError
from payroll_api.common.http import ok, no_content
from payroll_api.common.validation import salary_sheet_fields
from payroll_api.extensions import db
from payroll_api.models.salary_sheet import SalarySheet
from payroll_api.services.employee_store import get_store
from payroll_api.services.salary_report import salary_row

log = logging.getLogger(__name__)

bp = Blueprint("salary_sheets", __name__, url_prefix="/api/salary-sheets")


def _commit(action: str):
    try:
        db.session.commit()
    except SQLAlchemyError as ex:
        db.session.rollback()
        log.exception("salary sheet: %s failed", action)
        raise PersistenceError(f"Failed to {action}") from ex


def _require(sheet_id: str) -> SalarySheet:
    obj = db.session.get(SalarySheet, sheet_id)
    if obj is None:
        raise NotFoundError("Salary sheet not found")
    return obj


@bp.get("")
def list_sheets():
    items = SalarySheet.query.order_by(SalarySheet.year.desc(), SalarySheet.month.desc()).all()
    return ok([x.to_dict() for x in items])


@bp.get("/<sheet_id>")
def get_sheet(sheet_id: str):
    return ok(_require(sheet_id).to_dict())


@bp.post("")
def create_sheet():
    """
    Without employeeData the sheet snapshots the current employees' computed
    rows for totalDays.
    """
    data = request.get_json(silent=True, force=True) or {}
    fields = salary_sheet_fields(data, partial=False)
    if "employee_data" not in fields:
        fields["employee_data"] = [salary_row(e, fields["total_days"]) for e in get_store().list()]
    obj = SalarySheet(**fields)
    db.session.add(obj)
    _commit("create salary sheet")
    return ok(obj.to_dict(), 201)


@bp.put("/<sheet_id>")
def update_sheet(sheet_id: str):
    obj = _require(sheet_id)
    data = request.get_json(silent=True, force=True) or {}
    for k, v in salary_sheet_fields(data, partial=True).items():
        setattr(obj, k, v)
    _commit("update salary sheet")
    return ok(obj.to_dict())


@bp.delete("/<sheet_id>")
def delete_sheet(sheet_id: str):
    obj = _require(sheet_id)
    db.session.delete(obj)
    _commit("delete salary sheet")
    return no_content()
