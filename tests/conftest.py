import pytest

from payroll_api import create_app
from payroll_api.extensions import db


@pytest.fixture(scope="function")
def app():
    app = create_app(overrides={
        "SQLALCHEMY_DATABASE_URI": "sqlite:///:memory:",
        "TESTING": True,
    })
    with app.app_context():
        db.create_all()
        yield app


@pytest.fixture(scope="function")
def client(app):
    return app.test_client()


@pytest.fixture
def make_employee(client):
    def _make(**overrides):
        body = {
            "name": "Ram Kumar",
            "position": "Manager",
            "basic": 25000,
            "hra": 5000,
            "allowance": 2000,
        }
        body.update(overrides)
        r = client.post("/api/employees", json=body)
        assert r.status_code == 201, r.get_json()
        return r.get_json()
    return _make
