from flask import current_app
from portal.extensions import db
from portal.models.user_profile import UserProfile
from portal.services.role_service import is_admin
from portal.utils.exceptions import ConflictError, ForbiddenError, NotFoundError


def get_profile(principal):
    if not principal:
        return None
    return UserProfile.query.filter_by(principal=principal).first()


def get_profile_for(actor, principal):
    if actor != principal and not is_admin(actor):
        raise ForbiddenError("Can only view your own profile")
    return get_profile(principal)


def _apply(profile, data):
    profile.name = data["name"].strip()
    profile.email = data["email"].strip()
    profile.company = (data.get("company") or "").strip()


def create_profile(principal, data):
    if get_profile(principal):
        raise ConflictError("Profile already exists", {"principal": principal})

    profile = UserProfile(principal=principal)
    _apply(profile, data)
    db.session.add(profile)
    db.session.commit()

    current_app.logger.info(f"Profile created for {principal}")
    return profile


def update_profile(principal, data):
    profile = get_profile(principal)
    if not profile:
        raise NotFoundError("Profile does not exist")

    _apply(profile, data)
    db.session.commit()
    return profile


def save_profile(principal, data):
    profile = get_profile(principal)
    if not profile:
        return create_profile(principal, data)
    _apply(profile, data)
    db.session.commit()
    return profile
