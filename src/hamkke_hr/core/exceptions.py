class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class StoreError(Exception):
    """Raised when the backing row store fails.

    The message is meant to be shown to the user as-is; the driver
    error is chained as ``__cause__``.
    """
