from flask import Blueprint, request, current_app
from flask_jwt_extended import jwt_required, get_jwt_identity
from portal.extensions import db, limiter
from portal.schemas.submission_schema import (
    SubmissionInputSchema,
    AuthenticatedSubmissionInputSchema
)
from portal.schemas.message_schema import MessageInputSchema
from portal.services.submission_service import (
    create_submission,
    get_visible_submission,
    list_user_submissions
)
from portal.services.message_service import add_message, get_thread
from portal.services.email_service import send_submission_received_email
from portal.utils.auth_utils import current_principal
from portal.utils.exceptions import ServiceError
from portal.utils.response_formatter import success_response, error_response

bp = Blueprint("submissions", __name__, url_prefix="/api/v1/submissions")


def _submitted(submission):
    return success_response({
        "projectId": submission.id,
        "timestamp": submission.to_dict(include_messages=False)["timestamp"],
    }, status=201)


# ------------------------------------------------------------
# Anonymous project request from the public form
# ------------------------------------------------------------
@bp.route("/public", methods=["POST"])
@limiter.limit(lambda: current_app.config["PUBLIC_SUBMISSION_LIMIT"])
def submit_public_project():
    data = SubmissionInputSchema().load(request.get_json(silent=True) or {})

    try:
        submission = create_submission(data, principal=current_principal())
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Failed to create public submission: {e}")
        return error_response("SUBMISSION_ERROR", "Failed to submit project", status=500)

    send_submission_received_email(submission)
    return _submitted(submission)


# ------------------------------------------------------------
# Logged-in client submits a project, optionally with attachments
# ------------------------------------------------------------
@bp.route("", methods=["POST"])
@jwt_required()
def submit_authenticated_project():
    data = AuthenticatedSubmissionInputSchema().load(request.get_json(silent=True) or {})

    try:
        submission = create_submission(
            data,
            principal=get_jwt_identity(),
            files=data.get("files"),
        )
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Failed to create submission: {e}")
        return error_response("SUBMISSION_ERROR", "Failed to submit project", status=500)

    send_submission_received_email(submission)
    return _submitted(submission)


@bp.route("/mine", methods=["GET"])
@jwt_required()
def get_user_projects():
    submissions = list_user_submissions(get_jwt_identity())
    return success_response({"submissions": [s.to_dict() for s in submissions]})


@bp.route("/<int:submission_id>", methods=["GET"])
@jwt_required()
def get_submission_detail(submission_id):
    submission = get_visible_submission(submission_id, get_jwt_identity())
    return success_response({"submission": submission.to_dict()})


@bp.route("/<int:submission_id>/files", methods=["GET"])
@jwt_required()
def get_project_files(submission_id):
    submission = get_visible_submission(submission_id, get_jwt_identity())
    return success_response({"files": list(submission.files or [])})


# ------------------------------------------------------------
# Per-project message thread
# ------------------------------------------------------------
@bp.route("/<int:submission_id>/messages", methods=["GET"])
@jwt_required()
def get_project_messages(submission_id):
    return success_response({"messages": get_thread(submission_id, get_jwt_identity())})


@bp.route("/<int:submission_id>/messages", methods=["POST"])
@jwt_required()
def send_message(submission_id):
    data = MessageInputSchema().load(request.get_json(silent=True) or {})

    try:
        msg = add_message(submission_id, data["sender"], data["text"], actor=get_jwt_identity())
    except ServiceError:
        raise
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Failed to add message to submission {submission_id}: {e}")
        return error_response("MESSAGE_ERROR", "Failed to send message", status=500)

    return success_response({"message": msg.to_dict()}, status=201)
