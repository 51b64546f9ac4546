"""User account domain exceptions."""

from __future__ import annotations

from modules.core.errors import ConflictError, NotFoundError


class UserAlreadyExists(ConflictError):
    default_message = "User with this username already exists"


class UserNotFound(NotFoundError):
    default_message = "User not found"
