# payroll_api/services/designation_registry.py
from __future__ import annotations

import logging
from typing import List, Optional

from flask import current_app
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from payroll_api.common.errors import ConflictError, NotFoundError, PersistenceError
from payroll_api.extensions import db
from payroll_api.models.designation import Designation

log = logging.getLogger(__name__)


class DesignationRegistry:
    def __init__(self, session=None):
        self._session = session

    @property
    def session(self):
        return self._session or db.session

    def _fail(self, action: str, ex: Exception):
        self.session.rollback()
        log.exception("designation registry: %s failed", action)
        raise PersistenceError(f"Failed to {action}") from ex

    def list(self, active_only: bool = True) -> List[Designation]:
        try:
            q = self.session.query(Designation)
            if active_only:
                q = q.filter(Designation.is_active == 1)
            return q.order_by(Designation.name).all()
        except SQLAlchemyError as ex:
            self._fail("fetch designations", ex)

    def get(self, desig_id: str) -> Optional[Designation]:
        try:
            return self.session.get(Designation, desig_id)
        except SQLAlchemyError as ex:
            self._fail("fetch designation", ex)

    def _find_by_name(self, name: str, exclude_id: str | None = None) -> Optional[Designation]:
        q = self.session.query(Designation).filter(func.lower(Designation.name) == name.lower())
        if exclude_id:
            q = q.filter(Designation.id != exclude_id)
        return q.order_by(Designation.is_active.desc()).first()

    def create(self, fields: dict) -> Designation:
        """
        Names are unique among active rows (case-insensitive). A name that
        only matches a deactivated row brings that row back.
        """
        try:
            existing = self._find_by_name(fields["name"])
        except SQLAlchemyError as ex:
            self._fail("create designation", ex)
        if existing is not None and existing.is_active:
            raise ConflictError("Designation with same name already exists")

        if existing is not None:
            obj = existing
            obj.name = fields["name"]
            obj.is_active = fields.get("is_active", 1)
        else:
            obj = Designation(name=fields["name"], is_active=fields.get("is_active", 1))
            self.session.add(obj)
        try:
            self.session.commit()
        except SQLAlchemyError as ex:
            self._fail("create designation", ex)
        return obj

    def update(self, desig_id: str, fields: dict) -> Designation:
        obj = self.get(desig_id)
        if obj is None:
            raise NotFoundError("Designation not found")
        if "name" in fields:
            dup = self._find_by_name(fields["name"], exclude_id=obj.id)
            if dup is not None and dup.is_active:
                raise ConflictError("Designation with same name already exists")
            obj.name = fields["name"]
        if "is_active" in fields:
            obj.is_active = fields["is_active"]
        try:
            self.session.commit()
        except SQLAlchemyError as ex:
            self._fail("update designation", ex)
        return obj

    def deactivate(self, desig_id: str) -> bool:
        """Soft delete: the row stays, it just drops out of list()."""
        obj = self.get(desig_id)
        if obj is None:
            return False
        obj.is_active = 0
        try:
            self.session.commit()
        except SQLAlchemyError as ex:
            self._fail("delete designation", ex)
        return True


def get_registry() -> DesignationRegistry:
    return current_app.extensions["designation_registry"]
