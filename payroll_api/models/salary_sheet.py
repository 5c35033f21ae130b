import uuid

from payroll_api.extensions import db


class SalarySheet(db.Model):
    """Saved snapshot of one period's computed salary rows."""
    __tablename__ = "salary_sheets"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    month = db.Column(db.Text, nullable=False)
    year = db.Column(db.Integer, nullable=False)
    total_days = db.Column(db.Integer, nullable=False)
    employee_data = db.Column(db.JSON, nullable=False, default=list)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "month": self.month,
            "year": self.year,
            "totalDays": self.total_days,
            "employeeData": self.employee_data or [],
        }
