"""Application error taxonomy mapped to HTTP status codes."""

from fastapi import status


class AppError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """Missing or malformed input."""

    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(AppError):
    """A uniqueness rule was violated (e.g. duplicate email)."""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationError(AppError):
    """No valid session for an endpoint that needs one."""

    status_code = status.HTTP_401_UNAUTHORIZED


class NotFoundError(AppError):
    """A referenced record does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class DependencyError(AppError):
    """A downstream dependency (database, push gateway) failed."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
