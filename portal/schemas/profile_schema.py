from marshmallow import EXCLUDE
from portal.extensions import ma
from portal.models.enums import UserRole
from portal.schemas.validators import not_blank


class UserProfileSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    name = ma.String(required=True, validate=not_blank)
    email = ma.String(required=True, validate=not_blank)
    company = ma.String(load_default="")


class RoleAssignmentSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    principal = ma.String(required=True, validate=not_blank)
    role = ma.Enum(UserRole, by_value=True, required=True)
