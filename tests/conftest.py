import pytest

from django.contrib.auth import get_user_model

from rest_framework.test import APIClient

from modules.accounts.models import UserRole

User = get_user_model()


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


@pytest.fixture()
def make_user():
    """Factory creating a persisted user with the given role."""

    def _make_user(username: str, role: str = UserRole.USER, **extra):
        extra.setdefault("name", username.title())
        extra.setdefault("email", f"{username}@example.com")
        return User.objects.create_user(
            username=username, password="testpass123", role=role, **extra
        )

    return _make_user


@pytest.fixture()
def client_for():
    """Factory returning an APIClient force-authenticated as ``user``."""

    def _client_for(user):
        client = APIClient()
        client.force_authenticate(user=user)
        return client

    return _client_for


@pytest.fixture()
def manager(make_user):
    return make_user("manager1", role=UserRole.MANAGER, name="Maria Manager")


@pytest.fixture()
def other_manager(make_user):
    return make_user("manager2", role=UserRole.MANAGER, name="Marco Manager")


@pytest.fixture()
def superadmin(make_user):
    return make_user("root", role=UserRole.SUPERADMIN, name="Root Admin")


@pytest.fixture()
def admin_user(make_user):
    return make_user("officeadmin", role=UserRole.ADMIN, name="Office Admin")


@pytest.fixture()
def plain_user(make_user):
    return make_user("staff", role=UserRole.USER, name="Sam Staff")
