# payroll_api/blueprints/employees.py
from __future__ import annotations

from flask import Blueprint, current_app, request

from payroll_api.common.errors import NotFoundError
from payroll_api.common.http import ok, no_content
from payroll_api.common.validation import employee_fields
from payroll_api.services import attendance_service
from payroll_api.services.employee_store import get_store

bp = Blueprint("employees", __name__, url_prefix="/api/employees")


def _body():
    return request.get_json(silent=True, force=True) or {}


def _create_defaults() -> dict:
    cfg = current_app.config
    return {
        "esi_rate": cfg["PAYROLL_DEFAULT_ESI_RATE_BP"],
        "pf_rate": cfg["PAYROLL_DEFAULT_PF_RATE_BP"],
        "other_deduction": 0,
        "schema_version": cfg["PAYROLL_SCHEMA_VERSION"],
    }


# ---------- CRUD ----------
@bp.get("")
def list_employees():
    return ok([e.to_dict() for e in get_store().list()])


@bp.get("/<emp_id>")
def get_employee(emp_id: str):
    return ok(get_store().require(emp_id).to_dict())


@bp.post("")
def create_employee():
    fields = employee_fields(_body(), partial=False, defaults=_create_defaults())
    emp = get_store().create(fields)
    current_app.logger.info("employee %s created", emp.id)
    return ok(emp.to_dict(), 201)


@bp.put("/<emp_id>")
def update_employee(emp_id: str):
    store = get_store()
    emp = store.require(emp_id)
    fields = employee_fields(_body(), partial=True, gen=emp.generation)
    return ok(store.replace(emp_id, fields).to_dict())


@bp.delete("/<emp_id>")
def delete_employee(emp_id: str):
    if not get_store().delete(emp_id):
        raise NotFoundError("Employee not found")
    return no_content()


# ---------- attendance ----------
@bp.put("/<emp_id>/attendance")
def update_attendance(emp_id: str):
    d = _body()
    emp = attendance_service.set_day(get_store(), emp_id, d.get("day"), d.get("code"))
    return ok(emp.to_dict())


@bp.post("/mark-all-present")
def mark_all_present():
    """
    Body: {"day": 0-30, "code": "P"}. Each employee is written on its own;
    `failed` lists the ones that were not updated.
    """
    d = _body()
    result = attendance_service.mark_all(get_store(), d.get("day"), d.get("code") or "P")
    return ok(result.as_dict(f"Marked {result.count} employees"))


@bp.post("/reset-attendance")
def reset_attendance():
    result = attendance_service.reset_all(get_store())
    return ok(result.as_dict(f"Reset attendance for {result.count} employees"))
