from flask import Blueprint, request, current_app
from flask_jwt_extended import get_jwt_identity
from portal.extensions import db
from portal.models.enums import ProjectStatus
from portal.schemas.profile_schema import RoleAssignmentSchema
from portal.schemas.status_schema import StatusChangeSchema, DeliveryLinkSchema
from portal.services.message_service import get_all_messages
from portal.services.role_service import assign_role
from portal.services.status_service import change_status, add_delivery_link
from portal.services.submission_service import list_submissions
from portal.utils.auth_utils import admin_required
from portal.utils.exceptions import ServiceError, ValidationError
from portal.utils.ordering import merge_feed
from portal.utils.response_formatter import success_response, error_response

bp = Blueprint("admin", __name__, url_prefix="/api/v1/admin")


# ------------------------------------------------------------
# GET /admin/submissions: all submissions, optional ?client= / ?status=
# ------------------------------------------------------------
@bp.route("/submissions", methods=["GET"])
@admin_required
def get_all_submissions():
    client_name = request.args.get("client", "").strip() or None
    raw_status = request.args.get("status")

    status = None
    if raw_status:
        try:
            status = ProjectStatus.decode(raw_status)
        except ValueError as e:
            raise ValidationError(str(e), {"field": "status"})

    submissions = list_submissions(client_name=client_name, status=status)
    return success_response({"submissions": [s.to_dict() for s in submissions]})


# ------------------------------------------------------------
# PATCH /admin/submissions/<id>/status: one transition for every target state
# ------------------------------------------------------------
@bp.route("/submissions/<int:submission_id>/status", methods=["PATCH"])
@admin_required
def update_submission_status(submission_id):
    data = StatusChangeSchema().load(request.get_json(silent=True) or {})

    try:
        submission = change_status(
            submission_id,
            data["status"],
            comment=data.get("comment"),
            actor=get_jwt_identity(),
        )
    except ServiceError:
        raise
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Failed to update status of submission {submission_id}: {e}")
        return error_response("STATUS_UPDATE_FAILED", "Failed to update status", status=500)

    return success_response(
        {"submission": submission.to_dict()},
        message=f"Status updated to {submission.status}",
    )


@bp.route("/submissions/<int:submission_id>/delivery", methods=["POST"])
@admin_required
def add_submission_delivery(submission_id):
    data = DeliveryLinkSchema().load(request.get_json(silent=True) or {})

    try:
        submission = add_delivery_link(
            submission_id,
            data["link"],
            data["description"],
            actor=get_jwt_identity(),
        )
    except ServiceError:
        raise
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Failed to add delivery link to submission {submission_id}: {e}")
        return error_response("DELIVERY_UPDATE_FAILED", "Failed to add delivery link", status=500)

    return success_response({"submission": submission.to_dict()})


# ------------------------------------------------------------
# Messages across every submission
# ------------------------------------------------------------
@bp.route("/messages", methods=["GET"])
@admin_required
def list_all_messages():
    return success_response({
        "messages": [
            {"projectId": project_id, "messages": messages}
            for project_id, messages in get_all_messages()
        ]
    })


@bp.route("/messages/feed", methods=["GET"])
@admin_required
def message_feed():
    grouped = get_all_messages()

    project_id = request.args.get("project", type=int)
    if project_id is not None:
        grouped = [(pid, msgs) for pid, msgs in grouped if pid == project_id]

    return success_response({"messages": merge_feed(grouped)})


@bp.route("/roles", methods=["POST"])
@admin_required
def assign_user_role():
    data = RoleAssignmentSchema().load(request.get_json(silent=True) or {})
    assignment = assign_role(get_jwt_identity(), data["principal"], data["role"])
    return success_response({"principal": assignment.principal, "role": assignment.role})
