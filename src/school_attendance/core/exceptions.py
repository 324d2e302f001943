class DomainError(Exception):
    """Base exception for business rule violations."""

    http_status = 400


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when no principal could be resolved for the request."""

    http_status = 401


class AuthorizationError(DomainError):
    """Raised when a principal lacks permission for an action."""

    http_status = 403


class NotFoundError(DomainError):
    """Raised when a required entity does not exist."""

    http_status = 404


class ConflictError(DomainError):
    """Raised when a write would violate a unique key."""

    http_status = 409
