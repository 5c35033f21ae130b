from decimal import Decimal

import pytest

from payroll_api.common.errors import InvalidPeriodError
from payroll_api.models.employee import Employee
from payroll_api.services.salary_calculator import (
    attendance_count, compute_salary, salary_for_employee, summarize,
)


def test_count_uses_code_weights():
    sheet = ["P", "H", "PP", "A", "NONE"] + ["NONE"] * 26
    assert attendance_count(sheet, 31) == Decimal("3.5")


def test_count_ignores_slots_past_period():
    sheet = ["P"] * 28 + ["PP", "PP", "PP"]
    assert attendance_count(sheet, 28) == 28
    assert attendance_count(sheet, 31) == 34


@pytest.mark.parametrize("n", [1, 15, 28, 29, 30, 31])
def test_count_bounded_by_double_shift(n):
    assert attendance_count(["PP"] * 31, n) == 2 * n
    assert attendance_count(["A"] * 31, n) == 0


@pytest.mark.parametrize("n", [0, -1, 32, "x", None])
def test_invalid_period_rejected(n):
    with pytest.raises(InvalidPeriodError):
        attendance_count(["P"] * 31, n)
    with pytest.raises(InvalidPeriodError):
        compute_salary(25000, 5000, 2000, 31, n)


def test_full_month_gross_and_statutory_deductions():
    b = compute_salary(25000, 5000, 2000, Decimal("31.0"), 31, esi_rate=1750, pf_rate=1200)
    assert b.gross == 32000
    assert b.esi == 5600
    assert b.pf == 3840
    assert b.total_deduction == 9440
    assert b.net == 22560
    assert round(float(b.daily_rate), 3) == 1032.258


def test_gross_floored_once_after_multiplication():
    # 32000 / 28 * 1 = 1142.857...
    b = compute_salary(25000, 5000, 2000, 1, 28, esi_rate=1750, pf_rate=1200)
    assert b.gross == 1142
    # ESI and PF floored independently
    assert b.esi == 199
    assert b.pf == 137

    half = compute_salary(25000, 5000, 2000, Decimal("0.5"), 31)
    assert half.gross == 516


def test_net_salary_is_not_clamped():
    b = compute_salary(10000, 0, 0, 1, 30, esi_rate=1750, pf_rate=1200, other_deduction=5000)
    assert b.gross == 333
    assert b.net == 333 - (58 + 39 + 5000)
    assert b.net < 0


def test_zero_attendance_gives_zero_gross():
    b = compute_salary(25000, 5000, 2000, 0, 31, esi_rate=1750, pf_rate=1200, other_deduction=100)
    assert (b.gross, b.esi, b.pf, b.net) == (0, 0, 0, -100)


def test_salary_for_employee_applies_gen1_default_rates(app):
    emp = Employee(name="Old", position="Worker", basic=25000, hra=5000, allowance=2000,
                   esi_rate=None, pf_rate=None, other_deduction=0,
                   attendance=[], schema_version=1)
    b = salary_for_employee(emp, 31)
    # gen-1 gaps read as present
    assert b.attendance_count == 31
    assert (b.gross, b.esi, b.pf) == (32000, 5600, 3840)


def test_summarize_totals():
    a = compute_salary(25000, 5000, 2000, 31, 31, esi_rate=1750, pf_rate=1200)
    b = compute_salary(10000, 0, 0, 0, 31, other_deduction=10)
    assert summarize([a, b]) == {
        "totalEmployees": 2,
        "totalGross": 32000,
        "totalDeductions": 9450,
        "totalNet": 22560 - 10,
    }


def test_breakdown_as_dict_is_json_friendly():
    d = compute_salary(25000, 5000, 2000, Decimal("1.5"), 31).as_dict()
    assert d["attendance_count"] == 1.5
    assert isinstance(d["daily_rate"], float)
    assert d["gross"] == 1548
