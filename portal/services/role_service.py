from flask import current_app
from portal.extensions import db
from portal.models.enums import UserRole
from portal.models.role_assignment import RoleAssignment
from portal.utils.exceptions import ForbiddenError, ValidationError


def _configured_admins():
    raw = current_app.config.get("ADMIN_PRINCIPALS") or ""
    return {p.strip() for p in raw.split(",") if p.strip()}


def get_role(principal):
    if not principal:
        return UserRole.GUEST

    assignment = RoleAssignment.query.filter_by(principal=principal).first()
    if assignment:
        return UserRole(assignment.role)

    if principal in _configured_admins():
        return UserRole.ADMIN
    return UserRole.USER


def is_admin(principal):
    return get_role(principal) is UserRole.ADMIN


def assign_role(actor, principal, role):
    if not is_admin(actor):
        raise ForbiddenError("Admin access required")
    if not principal:
        raise ValidationError("principal is required", {"field": "principal"})

    role = UserRole(role)
    assignment = RoleAssignment.query.filter_by(principal=principal).first()
    if not assignment:
        assignment = RoleAssignment(principal=principal)
        db.session.add(assignment)

    assignment.role = role.value
    assignment.assigned_by = actor
    db.session.commit()

    current_app.logger.info(f"Role {role.value} assigned to {principal} by {actor}")
    return assignment
