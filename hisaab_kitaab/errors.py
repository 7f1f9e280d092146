"""
Application errors.

Services raise these; a single exception handler in main.py
turns them into JSON responses with the matching status code.
"""


class AppError(Exception):
    """Base application error."""

    http_status: int = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(AppError):
    """A write violates a business rule the request schema cannot express."""

    http_status = 400


class NotFoundError(AppError):
    http_status = 404


class AuthenticationError(AppError):
    http_status = 401


class PersistenceError(AppError):
    """The database could not be reached, even after retrying."""

    http_status = 503

    def __init__(
        self, message: str = "Database connection error. Please try again."
    ) -> None:
        super().__init__(message)
