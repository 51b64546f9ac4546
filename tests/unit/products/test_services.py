"""Unit tests for ProductService.

Covers:
- create_product: happy path, duplicate name, creator stamping, audit.
- update_product: changes applied, not found, manager ownership rule.
- delete_product: happy path, not found.
- get_product / list_products: delegation to repository.
- Unique-index race surfaced as ProductAlreadyExists.
"""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from django.db import IntegrityError

from modules.audit.models import AuditAction
from modules.products.dtos import CreateProductDTO, UpdateProductDTO
from modules.products.exceptions import (
    ProductAlreadyExists,
    ProductEditForbidden,
    ProductNotFound,
)
from modules.products.models import Product
from modules.products.services import ProductService

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def mock_repo():
    repo = MagicMock()
    repo.save.side_effect = lambda p: p
    return repo


@pytest.fixture()
def mock_audit():
    return MagicMock()


@pytest.fixture()
def service(mock_repo, mock_audit):
    return ProductService(repository=mock_repo, audit=mock_audit)


def _product(**overrides) -> Product:
    defaults = {"name": "Widget", "price": Decimal("9.00")}
    defaults.update(overrides)
    return Product(**defaults)


# ===========================================================================
# create_product
# ===========================================================================


class TestCreateProduct:
    def test_success(self, service, mock_repo, manager):
        mock_repo.get_by_name.return_value = None

        dto = CreateProductDTO(name="Widget", price=Decimal("9.00"))
        product = service.create_product(dto, actor=manager)

        assert product.name == "Widget"
        assert product.price == Decimal("9.00")
        mock_repo.save.assert_called_once()

    def test_created_by_is_actor(self, service, mock_repo, manager):
        mock_repo.get_by_name.return_value = None
        product = service.create_product(CreateProductDTO(name="Widget"), actor=manager)
        assert product.created_by == manager

    def test_client_supplied_creator_ignored(self, service, mock_repo, manager):
        mock_repo.get_by_name.return_value = None
        dto = CreateProductDTO.model_validate({"name": "Widget", "createdBy": 999})
        product = service.create_product(dto, actor=manager)
        assert product.created_by == manager
        assert product.attributes == {}

    def test_anonymous_actor_leaves_creator_empty(self, service, mock_repo):
        mock_repo.get_by_name.return_value = None
        product = service.create_product(CreateProductDTO(name="Widget"), actor=None)
        assert product.created_by is None

    def test_extra_keys_stored_as_attributes(self, service, mock_repo, manager):
        mock_repo.get_by_name.return_value = None
        dto = CreateProductDTO.model_validate({"name": "Widget", "color": "blue"})
        product = service.create_product(dto, actor=manager)
        assert product.attributes == {"color": "blue"}

    def test_duplicate_name_raises_with_existing(self, service, mock_repo, manager):
        existing = _product(name="Widget")
        mock_repo.get_by_name.return_value = existing

        with pytest.raises(ProductAlreadyExists) as exc_info:
            service.create_product(CreateProductDTO(name="Widget"), actor=manager)

        assert exc_info.value.existing is existing
        assert exc_info.value.status_code == 409
        mock_repo.save.assert_not_called()

    def test_duplicate_name_not_audited(self, service, mock_repo, mock_audit):
        mock_repo.get_by_name.return_value = _product()
        with pytest.raises(ProductAlreadyExists):
            service.create_product(CreateProductDTO(name="Widget"))
        mock_audit.assert_not_called()

    def test_records_audit_entry(self, service, mock_repo, mock_audit, manager):
        mock_repo.get_by_name.return_value = None
        product = service.create_product(CreateProductDTO(name="Widget"), actor=manager)

        mock_audit.assert_called_once_with(
            action=AuditAction.CREATE,
            entity="product",
            entity_id=product.id,
            user=manager,
            details={"name": "Widget"},
        )

    def test_integrity_error_becomes_conflict(self, service, mock_repo, manager):
        existing = _product(name="Widget")
        mock_repo.get_by_name.side_effect = [None, existing]
        mock_repo.save.side_effect = IntegrityError("UNIQUE constraint failed")

        with pytest.raises(ProductAlreadyExists) as exc_info:
            service.create_product(CreateProductDTO(name="Widget"), actor=manager)

        assert exc_info.value.existing is existing

    def test_unrelated_integrity_error_propagates(self, service, mock_repo):
        mock_repo.get_by_name.return_value = None
        mock_repo.save.side_effect = IntegrityError("NOT NULL constraint failed")

        with pytest.raises(IntegrityError):
            service.create_product(CreateProductDTO(name="Widget"))


# ===========================================================================
# update_product
# ===========================================================================


class TestUpdateProduct:
    def test_applies_supplied_fields(self, service, mock_repo, manager):
        product = _product(created_by=manager)
        mock_repo.get_by_id.return_value = product

        dto = UpdateProductDTO(price=Decimal("12.50"))
        updated = service.update_product(str(product.id), dto, actor=manager)

        assert updated.price == Decimal("12.50")
        assert updated.name == "Widget"
        mock_repo.save.assert_called_once_with(product)

    def test_not_found(self, service, mock_repo, manager):
        mock_repo.get_by_id.return_value = None
        with pytest.raises(ProductNotFound):
            service.update_product("missing", UpdateProductDTO(price=1), actor=manager)

    def test_creator_is_never_changed(self, service, mock_repo, manager, superadmin):
        product = _product(created_by=manager)
        mock_repo.get_by_id.return_value = product

        dto = UpdateProductDTO.model_validate({"createdBy": superadmin.pk, "price": 3})
        updated = service.update_product(str(product.id), dto, actor=superadmin)

        assert updated.created_by == manager

    def test_malformed_specs_keep_previous_value(self, service, mock_repo, manager):
        product = _product(created_by=manager, specs={"ram": "8GB"})
        mock_repo.get_by_id.return_value = product

        dto = UpdateProductDTO.model_validate({"specs": [], "price": 5})
        updated = service.update_product(str(product.id), dto, actor=manager)

        assert updated.specs == {"ram": "8GB"}
        assert updated.price == Decimal("5")

    def test_extra_keys_merged_into_attributes(self, service, mock_repo, manager):
        product = _product(created_by=manager, attributes={"color": "blue"})
        mock_repo.get_by_id.return_value = product

        dto = UpdateProductDTO.model_validate({"weight": "2kg"})
        updated = service.update_product(str(product.id), dto, actor=manager)

        assert updated.attributes == {"color": "blue", "weight": "2kg"}

    def test_records_updated_fields(self, service, mock_repo, mock_audit, manager):
        product = _product(created_by=manager)
        mock_repo.get_by_id.return_value = product

        dto = UpdateProductDTO.model_validate({"price": 12.5, "color": "red"})
        service.update_product(str(product.id), dto, actor=manager)

        mock_audit.assert_called_once_with(
            action=AuditAction.UPDATE,
            entity="product",
            entity_id=product.id,
            user=manager,
            details={"updatedFields": ["price", "color"]},
        )

    def test_rename_to_taken_name_conflicts(self, service, mock_repo, manager):
        product = _product(created_by=manager)
        other = _product(name="Gadget")
        mock_repo.get_by_id.return_value = product
        mock_repo.get_by_name.return_value = other
        mock_repo.save.side_effect = IntegrityError("UNIQUE constraint failed")

        with pytest.raises(ProductAlreadyExists):
            service.update_product(
                str(product.id), UpdateProductDTO(name="Gadget"), actor=manager
            )


class TestUpdateOwnershipRule:
    def test_manager_blocked_on_other_managers_product(
        self, service, mock_repo, mock_audit, manager, other_manager
    ):
        product = _product(created_by=other_manager)
        mock_repo.get_by_id.return_value = product

        with pytest.raises(ProductEditForbidden) as exc_info:
            service.update_product(str(product.id), UpdateProductDTO(price=1), actor=manager)

        assert exc_info.value.status_code == 403
        mock_repo.save.assert_not_called()
        mock_audit.assert_not_called()

    def test_manager_blocked_on_superadmin_product(
        self, service, mock_repo, manager, superadmin
    ):
        mock_repo.get_by_id.return_value = _product(created_by=superadmin)
        with pytest.raises(ProductEditForbidden):
            service.update_product("x", UpdateProductDTO(price=1), actor=manager)

    def test_manager_may_edit_plain_users_product(
        self, service, mock_repo, manager, plain_user
    ):
        mock_repo.get_by_id.return_value = _product(created_by=plain_user)
        updated = service.update_product("x", UpdateProductDTO(price=1), actor=manager)
        assert updated.price == Decimal("1")

    def test_admin_may_edit_any_product(
        self, service, mock_repo, admin_user, superadmin
    ):
        mock_repo.get_by_id.return_value = _product(created_by=superadmin)
        updated = service.update_product("x", UpdateProductDTO(price=2), actor=admin_user)
        assert updated.price == Decimal("2")


# ===========================================================================
# delete_product
# ===========================================================================


class TestDeleteProduct:
    def test_success_returns_removed_product(self, service, mock_repo, mock_audit, manager):
        product = _product()
        mock_repo.delete.return_value = product

        removed = service.delete_product(str(product.id), actor=manager)

        assert removed is product
        mock_audit.assert_called_once_with(
            action=AuditAction.DELETE,
            entity="product",
            entity_id=product.id,
            user=manager,
            details={"name": "Widget"},
        )

    def test_not_found(self, service, mock_repo, mock_audit):
        mock_repo.delete.return_value = None
        with pytest.raises(ProductNotFound):
            service.delete_product("missing")
        mock_audit.assert_not_called()


# ===========================================================================
# Queries
# ===========================================================================


class TestQueries:
    def test_list_delegates_to_repository(self, service, mock_repo):
        products = [_product(name="A"), _product(name="B")]
        mock_repo.list.return_value = products
        assert service.list_products() == products

    def test_get_product(self, service, mock_repo):
        product = _product()
        mock_repo.get_by_id.return_value = product
        assert service.get_product(str(product.id)) is product

    def test_get_product_not_found(self, service, mock_repo):
        mock_repo.get_by_id.return_value = None
        with pytest.raises(ProductNotFound):
            service.get_product("missing")
