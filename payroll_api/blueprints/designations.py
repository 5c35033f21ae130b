# payroll_api/blueprints/designations.py
from __future__ import annotations

from flask import Blueprint, request

from payroll_api.common.errors import NotFoundError
from payroll_api.common.http import ok, no_content
from payroll_api.common.validation import designation_fields
from payroll_api.services.designation_registry import get_registry

bp = Blueprint("designations", __name__, url_prefix="/api/designations")


@bp.get("")
def list_designations():
    return ok([x.to_dict() for x in get_registry().list(active_only=True)])


@bp.get("/<desig_id>")
def get_designation(desig_id: str):
    x = get_registry().get(desig_id)
    if x is None:
        raise NotFoundError("Designation not found")
    return ok(x.to_dict())


@bp.post("")
def create_designation():
    data = request.get_json(silent=True, force=True) or {}
    obj = get_registry().create(designation_fields(data, partial=False))
    return ok(obj.to_dict(), 201)


@bp.put("/<desig_id>")
def update_designation(desig_id: str):
    data = request.get_json(silent=True, force=True) or {}
    obj = get_registry().update(desig_id, designation_fields(data, partial=True))
    return ok(obj.to_dict())


@bp.delete("/<desig_id>")
def delete_designation(desig_id: str):
    # Soft delete: mark inactive
    if not get_registry().deactivate(desig_id):
        raise NotFoundError("Designation not found")
    return no_content()
