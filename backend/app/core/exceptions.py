class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(self, message: str, status_code: int = 500, details: dict = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

class ValidationError(AppError):
    """Raised when a request is missing fields or carries malformed values."""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message, status_code=400, details=details)

class InvalidStateError(AppError):
    """Raised when an operation is not possible in the entity's current state."""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message, status_code=400, details=details)

class UnauthenticatedError(AppError):
    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, status_code=401)

class ForbiddenError(AppError):
    def __init__(self, message: str = "Insufficient permissions"):
        super().__init__(message, status_code=403)

class ResourceNotFoundError(AppError):
    """Raised when a requested resource is not found."""
    def __init__(self, resource_type: str, resource_id: str | None = None, message: str | None = None):
        if message is None:
            message = f"{resource_type} not found" if resource_id is None else f"{resource_type} with id {resource_id} not found"
        super().__init__(message, status_code=404)

class ConflictError(AppError):
    """Raised when a write would violate a uniqueness constraint."""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message, status_code=409, details=details)
