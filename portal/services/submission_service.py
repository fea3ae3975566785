from flask import current_app
from portal.extensions import db
from portal.models.enums import ProjectStatus
from portal.models.submission import ProjectSubmission
from portal.services.role_service import is_admin
from portal.utils.exceptions import ForbiddenError, NotFoundError


def create_submission(data, principal=None, files=None):
    submission = ProjectSubmission(
        submitted_by=principal or None,
        client_name=data["client_name"],
        company_name=data.get("company_name") or "",
        email=data["email"],
        project_description=data["project_description"],
        timeline=data.get("timeline") or "",
        budget=data["budget"].value,
        status=ProjectStatus.NEW.value,
        files=list(files or []),
    )
    db.session.add(submission)
    db.session.commit()

    current_app.logger.info(
        f"Submission {submission.id} created by {submission.submitted_by or 'anonymous client'}"
    )
    return submission


def get_submission(submission_id):
    submission = db.session.get(ProjectSubmission, submission_id)
    if not submission:
        raise NotFoundError(f"Submission {submission_id} not found")
    return submission


def get_visible_submission(submission_id, principal):
    """Fetch a submission the caller may see: their own, or any for admins."""
    submission = get_submission(submission_id)
    owner = submission.submitted_by is not None and submission.submitted_by == principal
    if not owner and not is_admin(principal):
        raise ForbiddenError("Not your project")
    return submission


def list_submissions(client_name=None, status=None):
    """Admin listing. `status` is an already decoded ProjectStatus."""
    q = ProjectSubmission.query
    if client_name:
        q = q.filter(ProjectSubmission.client_name == client_name)
    if status is not None:
        q = q.filter(ProjectSubmission.status == status.value)
    return q.order_by(ProjectSubmission.created_at.desc(), ProjectSubmission.id.desc()).all()


def list_user_submissions(principal):
    if principal is None:
        return []
    return (
        ProjectSubmission.query
        .filter_by(submitted_by=principal)
        .order_by(ProjectSubmission.created_at.desc(), ProjectSubmission.id.desc())
        .all()
    )
