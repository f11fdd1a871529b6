class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced user, session or holiday does not exist."""


class ConflictError(DomainError):
    """Raised when an action collides with existing state (e.g. an open session)."""
