from portal.extensions import db
from portal.models.enums import ProjectStatus
from datetime import datetime

def isoformat_z(value):
    return value.isoformat() + "Z" if value else None

class ProjectSubmission(db.Model):
    __tablename__ = "submissions"

    __table_args__ = (
        db.Index("idx_submissions_status", "status"),
        db.Index("idx_submissions_submitted_by", "submitted_by"),
    )

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    # NULL for anonymous submissions, which no principal owns
    submitted_by = db.Column(db.String(255), nullable=True)

    client_name = db.Column(db.String(255), nullable=False)
    company_name = db.Column(db.String(255), nullable=False, default="")
    email = db.Column(db.String(255), nullable=False)

    project_description = db.Column(db.Text, nullable=False)
    timeline = db.Column(db.Text, nullable=False, default="")
    budget = db.Column(db.String(50), nullable=False)

    status = db.Column(db.String(50), nullable=False, default=ProjectStatus.NEW.value)
    status_comment = db.Column(db.Text, nullable=True)

    delivery_link = db.Column(db.String(2048), nullable=True)
    delivery_description = db.Column(db.Text, nullable=True)

    # opaque blob references, owned by the blob store
    files = db.Column(db.JSON, nullable=False, default=list)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, onupdate=datetime.utcnow)

    messages = db.relationship(
        "Message",
        back_populates="submission",
        order_by="[Message.created_at, Message.id]",
        lazy=True,
    )

    @property
    def project_status(self):
        return ProjectStatus.decode(self.status)

    def to_dict(self, include_messages=True):
        data = {
            "id": self.id,
            "clientName": self.client_name,
            "companyName": self.company_name,
            "email": self.email,
            "projectDescription": self.project_description,
            "timeline": self.timeline,
            "budget": self.budget,
            "status": self.status,
            "statusComment": self.status_comment,
            "deliveryLink": self.delivery_link,
            "deliveryDescription": self.delivery_description,
            "files": list(self.files or []),
            "submittedBy": self.submitted_by,
            "timestamp": isoformat_z(self.created_at),
        }
        if include_messages:
            data["messages"] = [m.to_dict() for m in self.messages]
        return data
