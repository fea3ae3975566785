class ServiceError(Exception):
    status = 400

    def __init__(self, code="SERVICE_ERROR", message="Service error", details=None, status=None):
        self.code = code
        self.message = message
        self.details = details or {}
        if status is not None:
            self.status = status
        super().__init__(message)


class ValidationError(ServiceError):
    status = 422

    def __init__(self, message="Invalid input", details=None):
        super().__init__("VALIDATION_ERROR", message, details)


class ForbiddenError(ServiceError):
    status = 403

    def __init__(self, message="Forbidden", details=None):
        super().__init__("FORBIDDEN", message, details)


class NotFoundError(ServiceError):
    status = 404

    def __init__(self, message="Resource not found", details=None):
        super().__init__("NOT_FOUND", message, details)


class ConflictError(ServiceError):
    status = 409

    def __init__(self, message="Resource already exists", details=None):
        super().__init__("CONFLICT", message, details)


class InvalidStateError(ServiceError):
    status = 409

    def __init__(self, message="Operation not allowed in the current state", details=None):
        super().__init__("INVALID_STATE", message, details)
