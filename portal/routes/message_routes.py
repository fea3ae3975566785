from flask import Blueprint
from flask_jwt_extended import jwt_required, get_jwt_identity
from portal.services.message_service import get_user_messages
from portal.utils.response_formatter import success_response

bp = Blueprint("messages", __name__, url_prefix="/api/v1/messages")


@bp.route("/mine", methods=["GET"])
@jwt_required()
def get_all_user_messages():
    grouped = get_user_messages(get_jwt_identity())
    return success_response({
        "messages": [
            {"projectId": project_id, "messages": messages}
            for project_id, messages in grouped
        ]
    })
