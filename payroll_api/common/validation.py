# payroll_api/common/validation.py
"""
Payload checks for the JSON API. Every check collects field -> reason into
one dict and raises a single ValidationError, before any store call.
"""
from __future__ import annotations

from typing import Any

from payroll_api.common.errors import ValidationError
from payroll_api.services.attendance_codes import (
    DAYS_IN_SHEET, SchemaGeneration, generation, normalize_attendance,
)

AMOUNT_FIELDS = ("basic", "hra", "allowance")
RATE_FIELDS = ("esi_rate", "pf_rate", "other_deduction")
TEXT_FIELDS = ("name", "position")


def as_non_negative_int(val, field_name, errors: dict):
    if isinstance(val, bool) or val is None or val == "":
        errors[field_name] = "must be a non-negative integer"
        return None
    try:
        if isinstance(val, float):
            if not val.is_integer():
                raise ValueError
            num = int(val)
        else:
            num = int(str(val).strip())
    except (TypeError, ValueError):
        errors[field_name] = "must be a non-negative integer"
        return None
    if num < 0:
        errors[field_name] = "must be a non-negative integer"
        return None
    return num


def as_text(val, field_name, errors: dict):
    s = (val or "").strip() if isinstance(val, str) else ""
    if not s:
        errors[field_name] = "is required"
        return None
    return s


def parse_day(val) -> int:
    """Day index for the 31-slot sheet, 0-based."""
    if isinstance(val, bool):
        val = None
    try:
        if isinstance(val, float) and not val.is_integer():
            raise ValueError
        day = int(val)
    except (TypeError, ValueError):
        raise ValidationError("Invalid day index", {"day": "must be an integer"})
    if day < 0 or day >= DAYS_IN_SHEET:
        raise ValidationError("Invalid day index", {"day": f"must be between 0 and {DAYS_IN_SHEET - 1}"})
    return day


def employee_fields(data: Any, *, partial: bool, gen: SchemaGeneration | None = None,
                    defaults: dict | None = None) -> dict:
    """
    Validate an employee payload.

    partial=False (create): name, position, basic, hra, allowance are
    required; rates and attendance fall back to `defaults`.
    partial=True (update): only the keys present are checked and returned;
    `gen` is the stored row's generation and may not change.
    """
    if not isinstance(data, dict):
        raise ValidationError("Invalid employee data", {"body": "must be a JSON object"})

    errors: dict = {}
    out: dict = {}
    defaults = defaults or {}

    for f in TEXT_FIELDS:
        if f in data or not partial:
            out[f] = as_text(data.get(f), f, errors)

    for f in AMOUNT_FIELDS:
        if f in data or not partial:
            out[f] = as_non_negative_int(data.get(f), f, errors)

    for f in RATE_FIELDS:
        if f in data and data.get(f) is not None:
            out[f] = as_non_negative_int(data.get(f), f, errors)
        elif not partial:
            out[f] = defaults.get(f, 0)

    if partial:
        if "schema_version" in data:
            try:
                requested = generation(data.get("schema_version"))
            except ValidationError as ex:
                errors.update(ex.fields)
            else:
                if gen is not None and requested != gen:
                    errors["schema_version"] = "cannot change on update"
    else:
        try:
            gen = generation(data.get("schema_version", defaults.get("schema_version", SchemaGeneration.GEN2)))
            out["schema_version"] = int(gen)
        except ValidationError as ex:
            errors.update(ex.fields)

    if "attendance" in data or not partial:
        raw = data.get("attendance")
        # null only means "blank sheet" on create
        if (raw is None and partial) or (raw is not None and not isinstance(raw, list)):
            errors["attendance"] = "must be an array of attendance codes"
        elif gen is not None:
            try:
                out["attendance"] = [c.value for c in normalize_attendance(raw, gen)]
            except ValidationError as ex:
                errors.update(ex.fields)

    if errors:
        raise ValidationError("Invalid employee data", errors)
    return out


def designation_fields(data: Any, *, partial: bool) -> dict:
    if not isinstance(data, dict):
        raise ValidationError("Invalid designation data", {"body": "must be a JSON object"})
    errors: dict = {}
    out: dict = {}
    if "name" in data or not partial:
        out["name"] = as_text(data.get("name"), "name", errors)
    if "isActive" in data:
        v = data.get("isActive")
        if v in (1, 0, True, False) and not isinstance(v, float):
            out["is_active"] = int(v)
        else:
            errors["isActive"] = "must be 1 or 0"
    elif not partial:
        out["is_active"] = 1
    if errors:
        raise ValidationError("Invalid designation data", errors)
    return out


def salary_sheet_fields(data: Any, *, partial: bool) -> dict:
    if not isinstance(data, dict):
        raise ValidationError("Invalid salary sheet data", {"body": "must be a JSON object"})
    errors: dict = {}
    out: dict = {}
    if "month" in data or not partial:
        out["month"] = as_text(data.get("month"), "month", errors)
    if "year" in data or not partial:
        out["year"] = as_non_negative_int(data.get("year"), "year", errors)
    if "totalDays" in data or not partial:
        n = as_non_negative_int(data.get("totalDays"), "totalDays", errors)
        if n is not None and not (1 <= n <= DAYS_IN_SHEET):
            errors["totalDays"] = f"must be between 1 and {DAYS_IN_SHEET}"
        out["total_days"] = n
    if "employeeData" in data:
        rows = data.get("employeeData")
        if not isinstance(rows, list):
            errors["employeeData"] = "must be an array"
        else:
            out["employee_data"] = rows
    if errors:
        raise ValidationError("Invalid salary sheet data", errors)
    return out
