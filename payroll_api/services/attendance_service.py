# payroll_api/services/attendance_service.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

from payroll_api.common.errors import APIError
from payroll_api.common.validation import parse_day
from payroll_api.models.employee import Employee
from payroll_api.services.attendance_codes import (
    AttendanceCode, SchemaGeneration, blank_sheet, parse_code, upgrade_attendance,
)
from payroll_api.services.employee_store import EmployeeStore

log = logging.getLogger(__name__)


@dataclass
class BulkResult:
    """Per-employee outcome of a bulk run. Earlier successes are never undone."""
    updated: List[str] = field(default_factory=list)
    failed: List[dict] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.updated)

    def as_dict(self, message: str) -> dict:
        return {"message": message, "count": self.count, "failed": self.failed}


def _replace_slot(day: int, code: AttendanceCode):
    def mutate(current: dict) -> dict:
        attendance = list(current["attendance"])
        attendance[day] = code.value
        return {"attendance": attendance}
    return mutate


def set_day(store: EmployeeStore, emp_id: str, day, code) -> Employee:
    """
    Replace exactly one slot. Day and code are both checked before the row
    is written; the code is checked against the row's own generation.
    """
    day = parse_day(day)
    emp = store.require(emp_id)
    parsed = parse_code(code, emp.generation)
    return store.apply_partial(emp_id, _replace_slot(day, parsed))


def _run_each(store: EmployeeStore, label: str, step, only=None) -> BulkResult:
    result = BulkResult()
    for emp in store.list():
        if only is not None and not only(emp):
            continue
        emp_id = emp.id
        try:
            step(emp)
        except APIError as ex:
            log.warning("%s: employee %s failed: %s", label, emp_id, ex.message)
            result.failed.append({"id": emp_id, "error": ex.message, "code": ex.code})
        else:
            result.updated.append(emp_id)
    log.info("%s: %d updated, %d failed", label, result.count, len(result.failed))
    return result


def mark_all(store: EmployeeStore, day, code="P") -> BulkResult:
    """Set slot `day` to `code` on every employee, one independent write each."""
    day = parse_day(day)
    parse_code(code if code is not None else "P", SchemaGeneration.GEN2)

    def step(emp: Employee):
        parsed = parse_code(code if code is not None else "P", emp.generation)
        store.apply_partial(emp.id, _replace_slot(day, parsed))

    return _run_each(store, "mark-all", step)


def reset_all(store: EmployeeStore) -> BulkResult:
    """Every employee's sheet back to 31 unset slots of its own generation."""
    def step(emp: Employee):
        sheet = [c.value for c in blank_sheet(emp.generation)]
        store.apply_partial(emp.id, lambda current: {"attendance": sheet})

    return _run_each(store, "reset-attendance", step)


def upgrade_all(store: EmployeeStore) -> BulkResult:
    """Explicit gen-1 -> gen-2 migration of every schema_version=1 row."""
    def step(emp: Employee):
        sheet = [c.value for c in upgrade_attendance(emp.attendance, emp.generation)]
        store.apply_partial(emp.id, lambda current: {
            "attendance": sheet,
            "esi_rate": emp.effective_esi_rate,
            "pf_rate": emp.effective_pf_rate,
            "schema_version": int(SchemaGeneration.GEN2),
        })

    return _run_each(store, "upgrade-attendance", step,
                     only=lambda emp: emp.generation == SchemaGeneration.GEN1)
