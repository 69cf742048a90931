"""Typed error kinds raised by the data-access and authorization layers."""


class JobBoardError(Exception):
    """Base class. ``code`` is what the GraphQL layer reports in ``extensions``."""
    code = "INTERNAL_ERROR"

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class NotFound(JobBoardError):
    code = "NOT_FOUND"


class ValidationError(JobBoardError):
    """Uniqueness or required-field violation."""
    code = "VALIDATION_ERROR"


class ReferentialError(JobBoardError):
    """A foreign key target is missing, or a delete is blocked by references."""
    code = "REFERENTIAL_ERROR"


class Unauthorized(JobBoardError):
    code = "UNAUTHORIZED"


class Unauthenticated(JobBoardError):
    code = "UNAUTHENTICATED"
