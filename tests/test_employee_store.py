import pytest
from sqlalchemy.exc import OperationalError

from payroll_api.common.errors import NotFoundError, PersistenceError
from payroll_api.services.employee_store import EmployeeStore


class BrokenSession:
    """Session stand-in whose writes always fail."""

    def __init__(self):
        self.rolled_back = 0

    def add(self, obj):
        pass

    def commit(self):
        raise OperationalError("COMMIT", {}, Exception("database is gone"))

    def rollback(self):
        self.rolled_back += 1


def _fields(**overrides):
    f = dict(name="Ram Kumar", position="Manager", basic=25000, hra=5000, allowance=2000,
             esi_rate=1750, pf_rate=1200, other_deduction=0,
             attendance=["NONE"] * 31, schema_version=2)
    f.update(overrides)
    return f


def test_create_failure_rolls_back_and_raises(app):
    session = BrokenSession()
    store = EmployeeStore(session=session)
    with pytest.raises(PersistenceError) as exc:
        store.create(_fields())
    assert exc.value.status_code == 500
    assert session.rolled_back == 1


def test_apply_partial_hands_mutator_a_copy(app):
    store = EmployeeStore()
    emp = store.create(_fields(attendance=["A"]))
    seen = {}

    def mutate(current):
        seen.update(current)
        current["attendance"][3] = "H"
        return {"attendance": current["attendance"]}

    updated = store.apply_partial(emp.id, mutate)
    assert seen["name"] == "Ram Kumar"
    assert len(seen["attendance"]) == 31
    assert updated.attendance[:4] == ["A", "NONE", "NONE", "H"]


def test_apply_partial_missing_employee(app):
    with pytest.raises(NotFoundError):
        EmployeeStore().apply_partial("nope", lambda current: current)


def test_replace_and_delete_missing_return_sentinels(app):
    store = EmployeeStore()
    assert store.replace("nope", {"basic": 1}) is None
    assert store.delete("nope") is False
