class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a lookup by id or document yields nothing."""


class AuthenticationError(DomainError):
    """Raised when a request needs a logged-in user and there is none."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class BackendError(DomainError):
    """Raised when a call to the data store fails."""


class StorageError(BackendError):
    """Raised when a certificate file cannot be stored."""
