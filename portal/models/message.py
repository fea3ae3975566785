from portal.extensions import db
from portal.models.submission import isoformat_z
from datetime import datetime

class Message(db.Model):
    __tablename__ = "messages"

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    submission_id = db.Column(db.Integer, db.ForeignKey("submissions.id"), nullable=False, index=True)
    sender = db.Column(db.String(255), nullable=False)
    text = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    submission = db.relationship("ProjectSubmission", back_populates="messages", lazy=True)

    def to_dict(self):
        return {
            "sender": self.sender,
            "text": self.text,
            "timestamp": isoformat_z(self.created_at),
        }
