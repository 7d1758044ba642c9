"""Custom exception classes for the application."""


class AppError(Exception):
    """Base application error class."""

    kind = "AppError"

    def __init__(self, message, status_code=400):
        """Initialize the error."""
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class UnauthenticatedError(AppError):
    """Raised when a request carries no authenticated identity."""

    kind = "Unauthenticated"

    def __init__(self, message="Not authenticated."):
        """Initialize the error."""
        super().__init__(message, 401)


class ForbiddenError(AppError):
    """Raised when the caller's role does not permit the operation."""

    kind = "Forbidden"

    def __init__(self, message="Insufficient permissions."):
        """Initialize the error."""
        super().__init__(message, 403)


class NotFoundError(AppError):
    """Raised when a resource is not found."""

    kind = "NotFound"

    def __init__(self, message="Resource not found."):
        """Initialize the error."""
        super().__init__(message, 404)


class InvalidStateError(AppError):
    """Raised when an operation is attempted outside its required status."""

    kind = "InvalidState"

    def __init__(self, message="Operation not allowed in the current state."):
        """Initialize the error."""
        super().__init__(message, 409)


class AlreadyRespondedError(InvalidStateError):
    """Raised when an invitation is no longer pending."""

    kind = "AlreadyResponded"

    def __init__(self, message="Invitation already responded to."):
        """Initialize the error."""
        super().__init__(message)


class EventFullError(InvalidStateError):
    """Raised when accepting would exceed the event's total capacity."""

    kind = "EventFull"

    def __init__(self, message="Event is full."):
        """Initialize the error."""
        super().__init__(message)


class ValidationError(AppError):
    """Raised when user input fails validation."""

    kind = "ValidationFailed"

    def __init__(self, message="Validation failed."):
        """Initialize the error."""
        super().__init__(message, 400)


class DuplicateResourceError(ValidationError):
    """Raised when trying to create a resource that already exists."""

    def __init__(self, message="Resource already exists."):
        """Initialize the error."""
        super().__init__(message)
        self.status_code = 409


class DeadlineExpiredError(AppError):
    """Raised when an invitation is answered after the event's invite deadline."""

    kind = "DeadlineExpired"

    def __init__(self, message="Invitation deadline has passed."):
        """Initialize the error."""
        super().__init__(message, 410)
