import uuid

from flask import current_app, has_app_context

from payroll_api.extensions import db
from payroll_api.services.attendance_codes import (
    SchemaGeneration, generation, normalize_attendance,
)

DEFAULT_ESI_RATE_BP = 1750
DEFAULT_PF_RATE_BP = 1200


def _new_id() -> str:
    return str(uuid.uuid4())


def _config(key, default):
    if has_app_context():
        return current_app.config.get(key, default)
    return default


class Employee(db.Model):
    __tablename__ = "employees"

    id = db.Column(db.String(36), primary_key=True, default=_new_id)
    name = db.Column(db.Text, nullable=False)
    position = db.Column(db.Text, nullable=False)  # designation name, denormalized

    # monthly amounts, whole currency units
    basic = db.Column(db.Integer, nullable=False)
    hra = db.Column(db.Integer, nullable=False)
    allowance = db.Column(db.Integer, nullable=False)

    # basis points; NULL only on schema_version=1 rows
    esi_rate = db.Column(db.Integer, nullable=True)
    pf_rate = db.Column(db.Integer, nullable=True)
    other_deduction = db.Column(db.Integer, nullable=False, default=0)

    attendance = db.Column(db.JSON, nullable=False, default=list)
    schema_version = db.Column(db.Integer, nullable=False, default=int(SchemaGeneration.GEN2))

    @property
    def generation(self) -> SchemaGeneration:
        return generation(self.schema_version or SchemaGeneration.GEN2)

    @property
    def effective_esi_rate(self) -> int:
        if self.esi_rate is None:
            return int(_config("PAYROLL_DEFAULT_ESI_RATE_BP", DEFAULT_ESI_RATE_BP))
        return self.esi_rate

    @property
    def effective_pf_rate(self) -> int:
        if self.pf_rate is None:
            return int(_config("PAYROLL_DEFAULT_PF_RATE_BP", DEFAULT_PF_RATE_BP))
        return self.pf_rate

    def attendance_codes(self):
        """The 31-slot sequence, padded on read with this row's unset code."""
        return normalize_attendance(self.attendance, self.generation)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "position": self.position,
            "basic": self.basic,
            "hra": self.hra,
            "allowance": self.allowance,
            "esi_rate": self.effective_esi_rate,
            "pf_rate": self.effective_pf_rate,
            "other_deduction": self.other_deduction or 0,
            "attendance": [c.value for c in self.attendance_codes()],
            "schema_version": int(self.generation),
        }
