from functools import wraps
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request
from portal.services.role_service import is_admin
from portal.utils.exceptions import ForbiddenError

def current_principal():
    """JWT subject of the caller, or None for anonymous requests."""
    verify_jwt_in_request(optional=True)
    return get_jwt_identity()

def admin_required(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        verify_jwt_in_request()
        if not is_admin(get_jwt_identity()):
            raise ForbiddenError("Admin access required")
        return fn(*args, **kwargs)
    return wrapper
