from flask import current_app
from portal.extensions import db
from portal.models.enums import ProjectStatus, TRANSITION_TARGETS
from portal.services.email_service import send_status_changed_email, send_delivery_ready_email
from portal.services.role_service import is_admin
from portal.services.submission_service import get_submission
from portal.utils.exceptions import ForbiddenError, InvalidStateError, ValidationError


def change_status(submission_id, target, comment=None, actor=None):
    """Move a submission to one of the non-initial states.

    Any target is reachable from any state. A comment of None keeps the stored
    status comment; any string replaces it. The client notification is
    fire-and-forget.
    """
    if not is_admin(actor):
        raise ForbiddenError("Admin access required")

    try:
        target = ProjectStatus.decode(target)
    except ValueError as e:
        raise ValidationError(str(e), {"field": "status"})
    if target not in TRANSITION_TARGETS:
        raise ValidationError(
            f"Cannot transition to '{target.value}'",
            {"field": "status", "allowed": sorted(s.value for s in TRANSITION_TARGETS)},
        )

    submission = get_submission(submission_id)
    previous = submission.status

    submission.status = target.value
    if comment is not None:
        submission.status_comment = comment
    db.session.commit()

    current_app.logger.info(
        f"Submission {submission.id} status {previous} -> {target.value} by {actor}"
    )

    send_status_changed_email(submission, target, comment)
    return submission


def add_delivery_link(submission_id, link, description, actor=None):
    """Attach the delivery pair to a completed submission, replacing any earlier one."""
    if not is_admin(actor):
        raise ForbiddenError("Admin access required")
    if not link or not link.strip() or not description or not description.strip():
        raise ValidationError("Both link and description are required")

    submission = get_submission(submission_id)
    if submission.project_status is not ProjectStatus.COMPLETED:
        raise InvalidStateError(
            "Delivery link can only be added to completed projects",
            {"status": submission.status},
        )

    submission.delivery_link = link.strip()
    submission.delivery_description = description.strip()
    db.session.commit()

    current_app.logger.info(f"Delivery link set on submission {submission.id} by {actor}")

    send_delivery_ready_email(submission)
    return submission
