from flask import Blueprint
from sqlalchemy import text

from payroll_api.common.http import ok
from payroll_api.extensions import db

bp = Blueprint("health", __name__, url_prefix="/api")


@bp.get("/health")
def health():
    try:
        db.session.execute(text("SELECT 1"))
        database = "ok"
    except Exception as e:
        db.session.rollback()
        database = f"error: {e.__class__.__name__}"
    return ok({"status": "ok", "database": database})
