from portal.extensions import db
from datetime import datetime

class RoleAssignment(db.Model):
    __tablename__ = "role_assignments"

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    principal = db.Column(db.String(255), unique=True, nullable=False, index=True)
    role = db.Column(db.String(20), nullable=False)
    assigned_by = db.Column(db.String(255), nullable=True)
    assigned_at = db.Column(db.DateTime, default=datetime.utcnow)
