"""Unit tests for UserService."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from modules.accounts.dtos import CreateUserDTO, UpdateUserDTO
from modules.accounts.exceptions import UserAlreadyExists, UserNotFound
from modules.accounts.models import User, UserRole
from modules.accounts.services import UserService
from modules.audit.models import AuditAction

pytestmark = pytest.mark.unit


@pytest.fixture()
def mock_repo():
    repo = MagicMock()
    repo.save.side_effect = lambda u: u
    return repo


@pytest.fixture()
def mock_audit():
    return MagicMock()


@pytest.fixture()
def service(mock_repo, mock_audit):
    return UserService(repository=mock_repo, audit=mock_audit)


class TestCreateUser:
    def test_success_with_password(self, service, mock_repo, admin_user):
        mock_repo.get_by_username.return_value = None
        dto = CreateUserDTO(
            username="jdoe", name="Jane", role="manager", password="s3cret!"
        )

        user = service.create_user(dto, actor=admin_user)

        assert user.username == "jdoe"
        assert user.role == UserRole.MANAGER
        assert user.check_password("s3cret!")

    def test_without_password_is_unusable(self, service, mock_repo):
        mock_repo.get_by_username.return_value = None
        user = service.create_user(CreateUserDTO(username="jdoe"))
        assert user.has_usable_password() is False

    def test_duplicate_username(self, service, mock_repo, mock_audit):
        mock_repo.get_by_username.return_value = User(username="jdoe")
        with pytest.raises(UserAlreadyExists):
            service.create_user(CreateUserDTO(username="jdoe"))
        mock_repo.save.assert_not_called()
        mock_audit.assert_not_called()

    def test_records_audit_entry(self, service, mock_repo, mock_audit, admin_user):
        mock_repo.get_by_username.return_value = None
        user = service.create_user(CreateUserDTO(username="jdoe"), actor=admin_user)

        mock_audit.assert_called_once_with(
            action=AuditAction.CREATE,
            entity="user",
            entity_id=user.pk,
            user=admin_user,
            details={"username": "jdoe", "role": UserRole.USER},
        )


class TestUpdateUser:
    def test_applies_changes(self, service, mock_repo, mock_audit, plain_user):
        mock_repo.get_by_id.return_value = plain_user

        user = service.update_user(
            str(plain_user.pk), UpdateUserDTO(name="Renamed", role="manager")
        )

        assert user.name == "Renamed"
        assert user.role == UserRole.MANAGER
        details = mock_audit.call_args.kwargs["details"]
        assert details == {"updatedFields": ["name", "role"]}

    def test_not_found(self, service, mock_repo):
        mock_repo.get_by_id.return_value = None
        with pytest.raises(UserNotFound):
            service.update_user("404", UpdateUserDTO(name="x"))


class TestDeleteUser:
    def test_success(self, service, mock_repo, mock_audit, plain_user):
        mock_repo.delete.return_value = plain_user
        assert service.delete_user(str(plain_user.pk)) is plain_user
        assert mock_audit.call_args.kwargs["action"] == AuditAction.DELETE

    def test_not_found(self, service, mock_repo):
        mock_repo.delete.return_value = None
        with pytest.raises(UserNotFound):
            service.delete_user("404")


class TestGetUser:
    def test_not_found(self, service, mock_repo):
        mock_repo.get_by_id.return_value = None
        with pytest.raises(UserNotFound):
            service.get_user("404")


class TestDeleteOwnAccount:
    def test_audit_entry_has_no_actor(self, service, mock_repo, mock_audit, admin_user):
        mock_repo.delete.return_value = admin_user

        service.delete_user(str(admin_user.pk), actor=admin_user)

        assert mock_audit.call_args.kwargs["user"] is None
        assert mock_audit.call_args.kwargs["entity_id"] == admin_user.pk

    def test_other_accounts_keep_actor(self, service, mock_repo, mock_audit, admin_user, plain_user):
        mock_repo.delete.return_value = plain_user
        service.delete_user(str(plain_user.pk), actor=admin_user)
        assert mock_audit.call_args.kwargs["user"] is admin_user
