"""Product service layer (Use Cases).

Orchestrates business logic for the Product aggregate, delegating
persistence to the injected ``IProductRepository`` and recording every
successful mutation in the audit log.

Business rules enforced here:
- Product name is unique (existence check plus UNIQUE index).
- ``created_by`` is stamped from the actor at creation, never on update.
- Managers cannot edit products owned by another manager or a superadmin.
- Malformed ``specs`` are dropped (done by the DTOs).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, List

import structlog
from django.db import IntegrityError, transaction

from modules.audit.models import AuditAction
from modules.audit.services import log_action
from modules.products.exceptions import (
    ProductAlreadyExists,
    ProductEditForbidden,
    ProductNotFound,
)
from modules.products.models import Product
from modules.products.policies import can_edit

if TYPE_CHECKING:
    from modules.products.dtos import CreateProductDTO, UpdateProductDTO
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)

ENTITY = "product"


def _actor_user(actor: Any) -> Any:
    """The actor when it is a persisted, authenticated user, else ``None``."""
    if actor is not None and getattr(actor, "is_authenticated", False):
        if getattr(actor, "pk", None) is not None:
            return actor
    return None


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` via constructor injection (DIP).
    ``audit`` defaults to ``log_action`` and is swappable in tests.
    """

    def __init__(
        self,
        repository: IProductRepository,
        audit: Callable[..., None] = log_action,
    ) -> None:
        self._repo = repository
        self._audit = audit

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_product(self, dto: CreateProductDTO, actor: Any = None) -> Product:
        """Create a new product owned by ``actor``.

        Raises:
            ProductAlreadyExists: if the name is already taken; carries the
                existing product.
        """
        log = logger.bind(name=dto.name)

        existing = self._repo.get_by_name(dto.name)
        if existing:
            log.warning("product.duplicate_name", product_id=str(existing.id))
            raise ProductAlreadyExists(existing=existing)

        product = Product(
            name=dto.name,
            description=dto.description,
            category=dto.category,
            price=dto.price,
            specs=dto.specs,
            attributes=dto.extra_attributes,
            created_by=_actor_user(actor),
        )
        product = self._save(product)
        log.info("product.created", product_id=str(product.id))

        self._audit(
            action=AuditAction.CREATE,
            entity=ENTITY,
            entity_id=product.id,
            user=actor,
            details={"name": product.name},
        )
        return product

    @transaction.atomic
    def update_product(
        self, id: str, dto: UpdateProductDTO, actor: Any = None
    ) -> Product:
        """Apply the supplied fields to an existing product.

        Raises:
            ProductNotFound: if the product does not exist.
            ProductEditForbidden: if a manager targets a product owned by
                another manager or a superadmin.
            ProductAlreadyExists: if the new name is already taken.
        """
        product = self._repo.get_by_id(id)
        if not product:
            raise ProductNotFound()

        log = logger.bind(product_id=str(product.id))

        if not can_edit(actor, product):
            log.warning(
                "product.update_forbidden",
                actor_id=str(getattr(actor, "pk", "")),
                owner_id=str(product.created_by_id),
            )
            raise ProductEditForbidden()

        for field, value in dto.changes().items():
            setattr(product, field, value)
        if dto.extra_attributes:
            product.attributes = {**(product.attributes or {}), **dto.extra_attributes}

        product = self._save(product)
        updated_fields = dto.updated_fields()
        log.info("product.updated", updated_fields=updated_fields)

        self._audit(
            action=AuditAction.UPDATE,
            entity=ENTITY,
            entity_id=product.id,
            user=actor,
            details={"updatedFields": updated_fields},
        )
        return product

    @transaction.atomic
    def delete_product(self, id: str, actor: Any = None) -> Product:
        """Physically delete a product and return the removed record.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = self._repo.delete(id)
        if not product:
            raise ProductNotFound()
        logger.info("product.deleted", product_id=str(product.id))

        self._audit(
            action=AuditAction.DELETE,
            entity=ENTITY,
            entity_id=product.id,
            user=actor,
            details={"name": product.name},
        )
        return product

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_products(self) -> List[Product]:
        """Return every product, creators resolved. No filtering or paging."""
        return self._repo.list()

    def get_product(self, id: str) -> Product:
        """Retrieve a single product by ID.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = self._repo.get_by_id(id)
        if not product:
            raise ProductNotFound()
        return product

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _save(self, product: Product) -> Product:
        try:
            return self._repo.save(product)
        except IntegrityError:
            existing = self._repo.get_by_name(product.name)
            if existing is None:
                raise
            logger.warning("product.duplicate_name_on_save", name=product.name)
            raise ProductAlreadyExists(existing=existing) from None
