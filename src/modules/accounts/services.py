"""User account service layer (Use Cases).

Backs the ``/api/users`` resource used by the admin front end.  Every
mutation is recorded in the audit log with ``entity="user"``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable

import structlog
from django.db import transaction

from modules.accounts.exceptions import UserAlreadyExists, UserNotFound
from modules.accounts.models import User
from modules.audit.models import AuditAction
from modules.audit.services import log_action

if TYPE_CHECKING:
    from modules.accounts.dtos import CreateUserDTO, UpdateUserDTO
    from modules.accounts.repositories.interfaces import IUserRepository

logger = structlog.get_logger(__name__)

ENTITY = "user"


class UserService:
    def __init__(
        self,
        repository: IUserRepository,
        audit: Callable[..., None] = log_action,
    ) -> None:
        self._repo = repository
        self._audit = audit

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_user(self, dto: CreateUserDTO, actor: Any = None) -> User:
        """Raises ``UserAlreadyExists`` if the username is taken."""
        if self._repo.get_by_username(dto.username):
            logger.warning("user.duplicate_username", username=dto.username)
            raise UserAlreadyExists()

        user = User(
            username=dto.username,
            name=dto.name,
            email=dto.email or "",
            role=dto.role,
        )
        if dto.password:
            user.set_password(dto.password)
        else:
            user.set_unusable_password()
        user = self._repo.save(user)
        logger.info("user.created", user_id=str(user.pk), role=user.role)

        self._audit(
            action=AuditAction.CREATE,
            entity=ENTITY,
            entity_id=user.pk,
            user=actor,
            details={"username": user.username, "role": user.role},
        )
        return user

    @transaction.atomic
    def update_user(self, id: str, dto: UpdateUserDTO, actor: Any = None) -> User:
        """Raises ``UserNotFound`` if the user does not exist."""
        user = self._repo.get_by_id(id)
        if not user:
            raise UserNotFound()

        changes = dto.changes()
        for field, value in changes.items():
            setattr(user, field, value)

        user = self._repo.save(user)
        logger.info("user.updated", user_id=str(user.pk), updated_fields=list(changes))

        self._audit(
            action=AuditAction.UPDATE,
            entity=ENTITY,
            entity_id=user.pk,
            user=actor,
            details={"updatedFields": list(changes)},
        )
        return user

    @transaction.atomic
    def delete_user(self, id: str, actor: Any = None) -> User:
        """Raises ``UserNotFound`` if the user does not exist."""
        user = self._repo.delete(id)
        if not user:
            raise UserNotFound()
        logger.info("user.deleted", user_id=str(user.pk))

        # An account deleting itself leaves no actor to reference.
        if getattr(actor, "pk", None) == user.pk:
            actor = None

        self._audit(
            action=AuditAction.DELETE,
            entity=ENTITY,
            entity_id=user.pk,
            user=actor,
            details={"username": user.username},
        )
        return user

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_user(self, id: str) -> User:
        user = self._repo.get_by_id(id)
        if not user:
            raise UserNotFound()
        return user
