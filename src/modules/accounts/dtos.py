"""User account DTOs (Pydantic v2, immutable).

The admin forms post every field as a string, including ``id``; unknown
keys are ignored.
"""

from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, EmailStr, field_validator

from modules.accounts.models import UserRole


class CreateUserDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    username: str
    name: str = ""
    email: EmailStr | None = None
    role: UserRole = UserRole.USER
    password: str | None = None

    @field_validator("username")
    @classmethod
    def username_must_not_be_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Username must not be empty.")
        return v.strip()

    @field_validator("email", mode="before")
    @classmethod
    def blank_email_is_none(cls, v: Any) -> Any:
        return v or None


class UpdateUserDTO(BaseModel):
    """All fields optional; only supplied fields are updated."""

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    email: EmailStr | None = None
    role: UserRole | None = None
    is_active: bool | None = None

    @field_validator("email", "role", mode="before")
    @classmethod
    def blank_is_unset(cls, v: Any) -> Any:
        return v or None

    def changes(self) -> Dict[str, Any]:
        return {
            field: getattr(self, field)
            for field in type(self).model_fields
            if field in self.model_fields_set and getattr(self, field) is not None
        }
