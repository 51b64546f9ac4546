"""User model carrying the role used for authorisation decisions.

``role`` drives the product ownership rule: a manager may not edit a
product created by another manager or by a superadmin.
"""

from __future__ import annotations

from django.contrib.auth.models import AbstractUser
from django.db import models


class UserRole(models.TextChoices):
    SUPERADMIN = "superadmin", "Super admin"
    ADMIN = "admin", "Admin"
    MANAGER = "manager", "Manager"
    USER = "user", "User"


# Roles whose products are protected from edits by other managers.
PRIVILEGED_OWNER_ROLES = frozenset({UserRole.MANAGER, UserRole.SUPERADMIN})

# Roles allowed to create, edit and delete user accounts.
USER_ADMIN_ROLES = frozenset({UserRole.SUPERADMIN, UserRole.ADMIN})


class User(AbstractUser):
    name = models.CharField(max_length=255, blank=True, default="")
    role = models.CharField(
        max_length=20,
        choices=UserRole.choices,
        default=UserRole.USER,
    )

    class Meta:
        db_table = "users"
        ordering = ["username"]
        indexes = [
            models.Index(fields=["role"], name="users_role_idx"),
        ]

    @property
    def is_manager(self) -> bool:
        return self.role == UserRole.MANAGER

    @property
    def can_manage_users(self) -> bool:
        return self.is_superuser or self.role in USER_ADMIN_ROLES

    def __str__(self) -> str:
        return f"{self.name or self.username} ({self.role})"
