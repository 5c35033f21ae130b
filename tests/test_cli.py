import openpyxl
import pytest

from payroll_api.extensions import db
from payroll_api.models.employee import Employee


@pytest.fixture
def runner(app):
    return app.test_cli_runner()


def _legacy_employee(**overrides):
    fields = dict(name="Old Timer", position="Worker", basic=25000, hra=5000, allowance=2000,
                  esi_rate=None, pf_rate=None, attendance=["A"], schema_version=1)
    fields.update(overrides)
    emp = Employee(**fields)
    db.session.add(emp)
    db.session.commit()
    return emp.id


def _stored(emp_id):
    db.session.expire_all()
    return db.session.get(Employee, emp_id)


def test_upgrade_attendance_moves_gen1_rows(runner, make_employee):
    old_id = _legacy_employee()
    new = make_employee(attendance=["H"])

    result = runner.invoke(args=["upgrade-attendance"])
    assert result.exit_code == 0, result.output
    assert "Upgraded 1 employees; 0 failed." in result.output

    old = _stored(old_id)
    assert old.schema_version == 2
    assert old.attendance == ["A"] + ["P"] * 30
    assert (old.esi_rate, old.pf_rate) == (1750, 1200)

    untouched = _stored(new["id"])
    assert untouched.attendance == ["H"] + ["NONE"] * 30


def test_upgrade_attendance_is_idempotent(runner):
    _legacy_employee()
    runner.invoke(args=["upgrade-attendance"])
    again = runner.invoke(args=["upgrade-attendance"])
    assert "Upgraded 0 employees" in again.output


def test_seed_sample_only_fills_empty_table(runner, client):
    first = runner.invoke(args=["seed-sample"])
    assert first.exit_code == 0, first.output
    assert "Seeded 3 employees" in first.output
    assert len(client.get("/api/employees").get_json()) == 3
    names = sorted(d["name"] for d in client.get("/api/designations").get_json())
    assert names == ["Assistant", "Manager", "Worker"]

    second = runner.invoke(args=["seed-sample"])
    assert "nothing seeded" in second.output
    assert len(client.get("/api/employees").get_json()) == 3


def test_reset_attendance_command(runner, client, make_employee):
    emp = make_employee(attendance=["PP"] * 31)
    result = runner.invoke(args=["reset-attendance"])
    assert result.exit_code == 0, result.output
    assert "Reset 1 employees; 0 failed." in result.output
    assert client.get(f"/api/employees/{emp['id']}").get_json()["attendance"] == ["NONE"] * 31


def test_export_sheet_writes_csv(runner, make_employee, tmp_path):
    make_employee(attendance=["P"])
    result = runner.invoke(args=[
        "export-sheet", "--month", "2025-02", "--total-days", "28", "--out", str(tmp_path),
    ])
    assert result.exit_code == 0, result.output
    path = tmp_path / "Salary_Sheet_2025-02.csv"
    text = path.read_bytes().decode("utf-8")
    assert text.startswith("\ufeff")
    assert text.rstrip("\n").splitlines()[1].endswith("1.0,1142,199,137,0,336,806")


def test_export_sheet_writes_xlsx(runner, make_employee, tmp_path):
    make_employee()
    result = runner.invoke(args=[
        "export-sheet", "--month", "2025-08", "--format", "xlsx", "--out", str(tmp_path),
    ])
    assert result.exit_code == 0, result.output
    ws = openpyxl.load_workbook(tmp_path / "Salary_Sheet_2025-08.xlsx").active
    assert ws.cell(row=2, column=2).value == "Ram Kumar"


def test_export_sheet_rejects_bad_period(runner, tmp_path):
    result = runner.invoke(args=[
        "export-sheet", "--month", "2025-08", "--total-days", "40", "--out", str(tmp_path),
    ])
    assert result.exit_code != 0
    assert not list(tmp_path.iterdir())
