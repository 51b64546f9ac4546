"""Application error taxonomy.

``AppError`` is the root of every *operational* error: an anticipated
failure (bad input, missing record, insufficient privilege) whose message
is safe to show to the client.  Anything that is not an ``AppError`` is a
programming defect and is masked as a generic 500 by
``modules.core.exception_handler``.
"""

from __future__ import annotations


class AppError(Exception):
    """Base class for operational errors carrying an HTTP status code."""

    default_message = "Internal server error"
    status_code = 500
    is_operational = True

    def __init__(self, message: str | None = None, status_code: int | None = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)

    @property
    def status(self) -> str:
        """``"fail"`` for client errors (4xx), ``"error"`` otherwise."""
        return "fail" if str(self.status_code).startswith("4") else "error"


class ValidationError(AppError):
    default_message = "Validation error"
    status_code = 400


class UnauthorizedError(AppError):
    default_message = "Unauthorized access"
    status_code = 401


class ForbiddenError(AppError):
    default_message = "Forbidden access"
    status_code = 403


class NotFoundError(AppError):
    default_message = "Resource not found"
    status_code = 404


class ConflictError(AppError):
    default_message = "Resource already exists"
    status_code = 409
