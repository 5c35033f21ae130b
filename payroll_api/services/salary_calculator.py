# payroll_api/services/salary_calculator.py
from __future__ import annotations

from dataclasses import dataclass, asdict
from decimal import Decimal, ROUND_FLOOR
from typing import Iterable, Sequence

from payroll_api.common.errors import InvalidPeriodError
from payroll_api.services.attendance_codes import DAYS_IN_SHEET, AttendanceCode, weight

BASIS_POINTS = 10000


@dataclass
class SalaryBreakdown:
    total_days: int
    attendance_count: Decimal
    daily_rate: Decimal
    gross: int
    esi: int
    pf: int
    other_deduction: int
    total_deduction: int
    net: int

    def as_dict(self) -> dict:
        d = asdict(self)
        d["attendance_count"] = float(self.attendance_count)
        d["daily_rate"] = float(self.daily_rate)
        return d


def check_period(total_days) -> int:
    try:
        n = int(total_days)
    except (TypeError, ValueError):
        raise InvalidPeriodError("Invalid period length", {"totalDays": "must be an integer"})
    if n < 1 or n > DAYS_IN_SHEET:
        raise InvalidPeriodError("Invalid period length", {"totalDays": f"must be between 1 and {DAYS_IN_SHEET}"})
    return n


def attendance_count(attendance: Sequence, total_days: int) -> Decimal:
    """Sum of day weights over slots [0, total_days). Later slots are never read."""
    n = check_period(total_days)
    count = Decimal("0")
    for i in range(min(n, len(attendance))):
        count += weight(AttendanceCode(attendance[i]))
    return count


def _floor(value: Decimal) -> int:
    return int(value.to_integral_value(rounding=ROUND_FLOOR))


def compute_salary(
    basic: int,
    hra: int,
    allowance: int,
    count: Decimal,
    total_days: int,
    esi_rate: int = 0,
    pf_rate: int = 0,
    other_deduction: int = 0,
) -> SalaryBreakdown:
    """
    gross = floor(daily_rate * count), floored once after the multiplication.
    The product is formed before the division so the decimal result is exact
    for every period length; ESI/PF are integer basis-point shares of gross,
    each floored on its own. Net is not clamped at zero.
    """
    n = check_period(total_days)
    monthly = Decimal(basic) + Decimal(hra) + Decimal(allowance)
    count = Decimal(count)

    gross = _floor(monthly * count / n)
    esi = gross * int(esi_rate) // BASIS_POINTS
    pf = gross * int(pf_rate) // BASIS_POINTS
    other = int(other_deduction or 0)
    total_deduction = esi + pf + other

    return SalaryBreakdown(
        total_days=n,
        attendance_count=count,
        daily_rate=monthly / n,
        gross=gross,
        esi=esi,
        pf=pf,
        other_deduction=other,
        total_deduction=total_deduction,
        net=gross - total_deduction,
    )


def salary_for_employee(emp, total_days: int) -> SalaryBreakdown:
    """Breakdown for an Employee row (rates resolved through the model for gen-1 rows)."""
    attendance = emp.attendance_codes()
    return compute_salary(
        emp.basic, emp.hra, emp.allowance,
        attendance_count(attendance, total_days),
        total_days,
        esi_rate=emp.effective_esi_rate,
        pf_rate=emp.effective_pf_rate,
        other_deduction=emp.other_deduction or 0,
    )


def summarize(breakdowns: Iterable[SalaryBreakdown]) -> dict:
    totals = {"totalEmployees": 0, "totalGross": 0, "totalDeductions": 0, "totalNet": 0}
    for b in breakdowns:
        totals["totalEmployees"] += 1
        totals["totalGross"] += b.gross
        totals["totalDeductions"] += b.total_deduction
        totals["totalNet"] += b.net
    return totals
