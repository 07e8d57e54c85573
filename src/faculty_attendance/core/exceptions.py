class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class ConflictError(ValidationError):
    """Raised when a unique field is already taken.

    ``field`` names the offending request field so the response body can be
    keyed by it (e.g. ``{"email": "Faculty already exists"}``).
    """

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


class AuthenticationError(DomainError):
    """Raised when credentials or access tokens are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a requested record does not exist."""
