"""Domain errors raised by services and rendered by the API layer."""

from __future__ import annotations

from fastapi import status


class IdeaboardError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationFailed(IdeaboardError):
    """Input was malformed or out of range."""

    status_code = status.HTTP_400_BAD_REQUEST


class Conflict(IdeaboardError):
    """A unique field is already in use."""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationFailed(IdeaboardError):
    """Credentials or token were missing, invalid or expired."""

    status_code = status.HTTP_401_UNAUTHORIZED


class PermissionDenied(IdeaboardError):
    """The caller is authenticated but lacks the privilege."""

    status_code = status.HTTP_403_FORBIDDEN


class NotFound(IdeaboardError):
    """The target record is missing or inactive."""

    status_code = status.HTTP_404_NOT_FOUND


__all__ = [
    "AuthenticationFailed",
    "Conflict",
    "IdeaboardError",
    "NotFound",
    "PermissionDenied",
    "ValidationFailed",
]
