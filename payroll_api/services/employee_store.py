# payroll_api/services/employee_store.py
from __future__ import annotations

import logging
from typing import Callable, List, Optional

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from payroll_api.common.errors import NotFoundError, PersistenceError
from payroll_api.extensions import db
from payroll_api.models.employee import Employee

log = logging.getLogger(__name__)

WRITABLE_FIELDS = (
    "name", "position", "basic", "hra", "allowance",
    "esi_rate", "pf_rate", "other_deduction", "attendance", "schema_version",
)

Mutator = Callable[[dict], dict]


class EmployeeStore:
    """
    CRUD over the employees table. One commit per call; nothing here spans
    several records, so callers that loop (bulk attendance) are not atomic.
    Backend failures roll the session back and surface as PersistenceError.
    """

    def __init__(self, session=None):
        self._session = session

    @property
    def session(self):
        return self._session or db.session

    def _fail(self, action: str, ex: Exception):
        self.session.rollback()
        log.exception("employee store: %s failed", action)
        raise PersistenceError(f"Failed to {action}") from ex

    def list(self) -> List[Employee]:
        try:
            return self.session.query(Employee).order_by(Employee.name, Employee.id).all()
        except SQLAlchemyError as ex:
            self._fail("fetch employees", ex)

    def get(self, emp_id: str) -> Optional[Employee]:
        try:
            return self.session.get(Employee, emp_id)
        except SQLAlchemyError as ex:
            self._fail("fetch employee", ex)

    def require(self, emp_id: str) -> Employee:
        emp = self.get(emp_id)
        if emp is None:
            raise NotFoundError("Employee not found")
        return emp

    def create(self, fields: dict) -> Employee:
        emp = Employee(**{k: v for k, v in fields.items() if k in WRITABLE_FIELDS})
        try:
            self.session.add(emp)
            self.session.commit()
        except SQLAlchemyError as ex:
            self._fail("create employee", ex)
        return emp

    def replace(self, emp_id: str, fields: dict) -> Optional[Employee]:
        """Merge `fields` onto the stored row and write the whole row back."""
        emp = self.get(emp_id)
        if emp is None:
            return None
        for k, v in fields.items():
            if k in WRITABLE_FIELDS:
                setattr(emp, k, v)
        try:
            self.session.commit()
        except SQLAlchemyError as ex:
            self._fail("update employee", ex)
        return emp

    def delete(self, emp_id: str) -> bool:
        emp = self.get(emp_id)
        if emp is None:
            return False
        try:
            self.session.delete(emp)
            self.session.commit()
        except SQLAlchemyError as ex:
            self._fail("delete employee", ex)
        return True

    def apply_partial(self, emp_id: str, mutator: Mutator) -> Employee:
        """
        Read-modify-write of one record. `mutator` gets a copy of the current
        fields and returns the fields to write. Two concurrent calls on the
        same id are last-write-wins on the whole row.
        """
        emp = self.require(emp_id)
        snapshot = {k: getattr(emp, k) for k in WRITABLE_FIELDS}
        snapshot["attendance"] = [c.value for c in emp.attendance_codes()]
        changes = mutator(dict(snapshot))
        return self.replace(emp_id, changes)


def get_store() -> EmployeeStore:
    return current_app.extensions["employee_store"]
