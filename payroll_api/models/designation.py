import uuid

from payroll_api.extensions import db


class Designation(db.Model):
    __tablename__ = "designations"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = db.Column(db.Text, nullable=False)
    # 1 = listed, 0 = deactivated (rows are kept)
    is_active = db.Column(db.Integer, nullable=False, default=1)

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "isActive": self.is_active}
