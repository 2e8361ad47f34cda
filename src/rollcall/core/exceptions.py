class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class ReportUnavailableError(DomainError):
    """Raised when a report cannot be built and no cached copy exists."""


class NotFoundError(DomainError):
    """Raised when a requested entity does not exist."""
