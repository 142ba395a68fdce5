"""
Custom exceptions for the application.
"""


class ForumException(Exception):
    """Base exception for all forum application exceptions."""
    pass


class ValidationError(ForumException):
    """Raised when validation fails."""
    pass


class NotFoundError(ForumException):
    """Raised when a requested resource is not found."""
    pass


class ConflictError(ForumException):
    """Raised when there's a conflict (e.g., duplicate username)."""
    pass


class AuthenticationError(ForumException):
    """Raised when credentials or tokens are missing or invalid."""
    pass


class AuthorizationError(ForumException):
    """Raised when an authenticated user may not touch a resource."""
    pass
