class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(self, message: str, status_code: int = 500, errors: list | None = None):
        self.message = message
        self.status_code = status_code
        self.errors = errors or []
        super().__init__(self.message)

class ValidationError(AppError):
    """Raised when a request is well-formed JSON but semantically invalid."""
    def __init__(self, message: str, errors: list | None = None):
        super().__init__(message, status_code=400, errors=errors)

class ResourceNotFoundError(AppError):
    """Raised when a requested resource is not found."""
    def __init__(self, message: str):
        super().__init__(message, status_code=404)

class ConflictError(AppError):
    """Raised when a unique value is already taken."""
    def __init__(self, message: str, status_code: int = 409):
        super().__init__(message, status_code=status_code)

class ScheduleConflictError(ConflictError):
    """Raised when a teacher or audithoria is already booked for a lesson slot."""
    def __init__(self, message: str, conflicts: list | None = None):
        super().__init__(message, status_code=400)
        self.errors = conflicts or []

class AuthError(AppError):
    """Raised for missing, invalid or expired tokens and insufficient roles."""
    def __init__(self, message: str):
        super().__init__(message, status_code=403)
