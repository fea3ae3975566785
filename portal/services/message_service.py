from flask import current_app
from portal.extensions import db
from portal.models.message import Message
from portal.models.submission import ProjectSubmission
from portal.services.email_service import send_new_message_email
from portal.services.role_service import is_admin
from portal.services.submission_service import get_visible_submission, list_user_submissions
from portal.utils.exceptions import ValidationError
from portal.utils.ordering import sort_thread


def add_message(submission_id, sender, text, actor=None):
    """Append a message to a submission's thread. Status is never touched."""
    if not text or not text.strip():
        raise ValidationError("Message text is required", {"field": "text"})
    if not sender or not sender.strip():
        raise ValidationError("Sender is required", {"field": "sender"})

    submission = get_visible_submission(submission_id, actor)

    msg = Message(submission_id=submission.id, sender=sender.strip(), text=text.strip())
    db.session.add(msg)
    db.session.commit()

    current_app.logger.info(f"Message {msg.id} added to submission {submission.id}")

    if is_admin(actor):
        recipient = submission.email
    else:
        recipient = current_app.config.get("ADMIN_NOTIFY_EMAIL")
    send_new_message_email(recipient, submission, msg)
    return msg


def get_thread(submission_id, actor=None):
    submission = get_visible_submission(submission_id, actor)
    return sort_thread([m.to_dict() for m in submission.messages])


def _group(submissions):
    return [
        (s.id, sort_thread([m.to_dict() for m in s.messages]))
        for s in submissions
    ]


def get_all_messages():
    submissions = ProjectSubmission.query.order_by(ProjectSubmission.id).all()
    return _group(submissions)


def get_user_messages(principal):
    return _group(sorted(list_user_submissions(principal), key=lambda s: s.id))
