"""Domain error taxonomy.

Learn: Every failure the core can produce carries exactly one ErrorKind.
Services raise ServiceError subclasses; the API layer has a single
translator (tasktrack.api.errors) that maps kind → HTTP status. Nothing
below the API layer knows about status codes.
"""

from enum import Enum


class ErrorKind(str, Enum):
    AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"
    ACCESS_DENIED = "ACCESS_DENIED"
    PROJECT_NOT_FOUND = "PROJECT_NOT_FOUND"
    TASK_NOT_FOUND = "TASK_NOT_FOUND"
    CONFLICT = "CONFLICT"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ServiceError(Exception):
    """Base class for failures surfaced to the API boundary."""

    kind: ErrorKind = ErrorKind.INTERNAL_ERROR
    default_message = "Unexpected error occurred"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class AuthenticationFailed(ServiceError):
    """Bad credentials, or a missing/invalid refresh token."""

    kind = ErrorKind.AUTHENTICATION_FAILED
    default_message = "Invalid credentials"


class AccessDenied(ServiceError):
    """Caller is anonymous or does not own the resource."""

    kind = ErrorKind.ACCESS_DENIED
    default_message = "Access denied"


class ProjectNotFound(ServiceError):
    kind = ErrorKind.PROJECT_NOT_FOUND

    def __init__(self, project_id: int):
        self.project_id = project_id
        super().__init__(f"Project not found with id: {project_id}")


class TaskNotFound(ServiceError):
    kind = ErrorKind.TASK_NOT_FOUND

    def __init__(self, task_id: int):
        self.task_id = task_id
        super().__init__(f"Task not found with id: {task_id}")


class EmailAlreadyRegistered(ServiceError):
    kind = ErrorKind.CONFLICT
    default_message = "Email already registered"
