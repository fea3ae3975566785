from flask import Blueprint, request
from flask_jwt_extended import jwt_required, get_jwt_identity
from portal.schemas.profile_schema import UserProfileSchema
from portal.services.profile_service import (
    get_profile,
    get_profile_for,
    create_profile,
    update_profile,
    save_profile
)
from portal.services.role_service import get_role, is_admin
from portal.utils.auth_utils import current_principal
from portal.utils.response_formatter import success_response

bp = Blueprint("profile", __name__, url_prefix="/api/v1/profile")
roles_bp = Blueprint("roles", __name__, url_prefix="/api/v1/roles")


def _profile_payload(profile):
    return {"profile": profile.to_dict() if profile else None}


@bp.route("", methods=["GET"])
@jwt_required()
def get_caller_profile():
    return success_response(_profile_payload(get_profile(get_jwt_identity())))


@bp.route("", methods=["POST"])
@jwt_required()
def create_caller_profile():
    data = UserProfileSchema().load(request.get_json(silent=True) or {})
    profile = create_profile(get_jwt_identity(), data)
    return success_response(_profile_payload(profile), status=201)


@bp.route("", methods=["PUT"])
@jwt_required()
def update_caller_profile():
    data = UserProfileSchema().load(request.get_json(silent=True) or {})
    return success_response(_profile_payload(update_profile(get_jwt_identity(), data)))


@bp.route("", methods=["PATCH"])
@jwt_required()
def save_caller_profile():
    data = UserProfileSchema().load(request.get_json(silent=True) or {})
    return success_response(_profile_payload(save_profile(get_jwt_identity(), data)))


@bp.route("/<principal>", methods=["GET"])
@jwt_required()
def get_user_profile(principal):
    return success_response(_profile_payload(get_profile_for(get_jwt_identity(), principal)))


@roles_bp.route("/me", methods=["GET"])
def get_caller_role():
    return success_response({"role": get_role(current_principal()).value})


@roles_bp.route("/me/is-admin", methods=["GET"])
def is_caller_admin():
    return success_response({"isAdmin": is_admin(current_principal())})
