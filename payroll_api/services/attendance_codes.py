# payroll_api/services/attendance_codes.py
"""
Per-day attendance markers.

Two schema generations exist side by side in the employees table:

  GEN1 (schema_version=1): P, A, H, PP.  No explicit "unset" symbol; an
                           empty slot reads as P.
  GEN2 (schema_version=2): NONE, P, A, H, PP.  NONE is the unset state.

Parsing is generation-aware; the two are never coerced into each other
implicitly.  Use upgrade_attendance() to move a gen-1 sequence to gen 2.
"""
from __future__ import annotations

import enum
from decimal import Decimal
from typing import Iterable, List

from payroll_api.common.errors import ValidationError

DAYS_IN_SHEET = 31


class AttendanceCode(str, enum.Enum):
    NONE = "NONE"
    P = "P"      # present
    A = "A"      # absent
    H = "H"      # half day
    PP = "PP"    # double shift


class SchemaGeneration(enum.IntEnum):
    GEN1 = 1
    GEN2 = 2


WEIGHTS = {
    AttendanceCode.NONE: Decimal("0"),
    AttendanceCode.P: Decimal("1"),
    AttendanceCode.A: Decimal("0"),
    AttendanceCode.H: Decimal("0.5"),
    AttendanceCode.PP: Decimal("2"),
}

_GEN_CODES = {
    SchemaGeneration.GEN1: (AttendanceCode.P, AttendanceCode.A, AttendanceCode.H, AttendanceCode.PP),
    SchemaGeneration.GEN2: (AttendanceCode.NONE, AttendanceCode.P, AttendanceCode.A,
                            AttendanceCode.H, AttendanceCode.PP),
}


def generation(value) -> SchemaGeneration:
    try:
        return SchemaGeneration(int(value))
    except (TypeError, ValueError):
        raise ValidationError("Unknown schema version", {"schema_version": f"must be one of {[g.value for g in SchemaGeneration]}"})


def codes_for(gen: SchemaGeneration) -> tuple:
    return _GEN_CODES[gen]


def unset_code(gen: SchemaGeneration) -> AttendanceCode:
    return AttendanceCode.P if gen == SchemaGeneration.GEN1 else AttendanceCode.NONE


def weight(code: AttendanceCode) -> Decimal:
    """Day-weight contribution of a single code."""
    return WEIGHTS[AttendanceCode(code)]


def parse_code(symbol, gen: SchemaGeneration = SchemaGeneration.GEN2, field: str = "code") -> AttendanceCode:
    """Validate a raw symbol against the codes of `gen`. Unknown symbols raise ValidationError."""
    allowed = codes_for(gen)
    raw = symbol.strip().upper() if isinstance(symbol, str) else symbol
    try:
        code = AttendanceCode(raw)
    except ValueError:
        code = None
    if code is None or code not in allowed:
        raise ValidationError(
            "Invalid attendance code",
            {field: f"must be one of {[c.value for c in allowed]}"},
        )
    return code


def normalize_attendance(values: Iterable | None, gen: SchemaGeneration) -> List[AttendanceCode]:
    """
    Validate every slot and pad to DAYS_IN_SHEET with the generation's unset
    code. Sequences longer than the sheet are rejected.
    """
    values = list(values or [])
    if len(values) > DAYS_IN_SHEET:
        raise ValidationError("Invalid attendance", {"attendance": f"at most {DAYS_IN_SHEET} days"})
    out = [parse_code(v, gen, field=f"attendance[{i}]") for i, v in enumerate(values)]
    out.extend([unset_code(gen)] * (DAYS_IN_SHEET - len(out)))
    return out


def upgrade_attendance(values: Iterable | None, from_gen: SchemaGeneration) -> List[AttendanceCode]:
    """
    Convert a stored sequence to GEN2. Every gen-1 symbol is also a gen-2
    symbol; gen-1 gaps meant "present", so they are filled with P.
    """
    return normalize_attendance(values, from_gen)


def blank_sheet(gen: SchemaGeneration) -> List[AttendanceCode]:
    return [unset_code(gen)] * DAYS_IN_SHEET
