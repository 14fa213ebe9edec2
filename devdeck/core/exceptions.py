"""Custom exception classes for DevDeck."""


class DevDeckError(Exception):
    """Base exception for DevDeck."""

    def __init__(self, message: str = "An error occurred"):
        self.message = message
        super().__init__(self.message)


class AuthenticationError(DevDeckError):
    """Raised when credentials or tokens are missing, wrong or expired."""
    pass


class AuthorizationError(DevDeckError):
    """Raised when an authenticated user lacks permission."""
    pass


class ResourceNotFoundError(DevDeckError):
    """Raised when a requested resource is not found."""
    pass


class ValidationError(DevDeckError):
    """Raised when input is malformed, duplicated or out of range."""
    pass


class ConfigurationError(DevDeckError):
    """Raised at startup when a required server setting is missing."""
    pass
