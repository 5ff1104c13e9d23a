class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when an id does not resolve to a record."""


class InvalidTransitionError(DomainError):
    """Raised when a request cannot move from its current status to the target."""


class StoreFailure(DomainError):
    """Raised when the database is unreachable or rejects an operation."""
