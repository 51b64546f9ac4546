"""Django ORM implementation of the User repository."""

from __future__ import annotations

from typing import List, Optional

from django.db import transaction

from modules.accounts.models import User
from modules.accounts.repositories.interfaces import IUserRepository


class UserDjangoRepository(IUserRepository):
    def get_by_id(self, id: str) -> Optional[User]:
        """Returns ``None`` for non-existent or non-numeric IDs."""
        try:
            return User.objects.filter(pk=int(id)).first()
        except (TypeError, ValueError):
            return None

    def get_by_username(self, username: str) -> Optional[User]:
        return User.objects.filter(username=username).first()

    def list(self) -> List[User]:
        return list(User.objects.all())

    def queryset(self):
        """Unevaluated queryset, for filtering and pagination in views."""
        return User.objects.all()

    @transaction.atomic
    def save(self, entity: User) -> User:
        entity.save()
        return entity

    @transaction.atomic
    def delete(self, id: str) -> Optional[User]:
        user = self.get_by_id(id)
        if not user:
            return None
        pk = user.pk
        user.delete()
        user.pk = pk
        return user
