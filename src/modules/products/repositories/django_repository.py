"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern: look-ups return ``None``
instead of raising HTTP-level exceptions; the Service Layer decides
how to translate a missing entity into an API response.
"""

from __future__ import annotations

from typing import List, Optional

from django.core.exceptions import ValidationError
from django.db import transaction

from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM.

    Every read resolves ``created_by`` in the same query.
    """

    def _queryset(self):
        return Product.objects.select_related("created_by")

    def get_by_id(self, id: str) -> Optional[Product]:
        """Retrieve a product by primary key.

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return self._queryset().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_by_name(self, name: str) -> Optional[Product]:
        return self._queryset().filter(name=name.strip()).first()

    def list(self) -> List[Product]:
        return list(self._queryset().all())

    @transaction.atomic
    def save(self, entity: Product) -> Product:
        """Persist (create or update) a product.

        Runs in its own savepoint so a UNIQUE violation leaves the outer
        transaction usable.
        """
        entity.save()
        return entity

    @transaction.atomic
    def delete(self, id: str) -> Optional[Product]:
        """Physically delete a product by ID.

        Returns the removed instance (with its ``id`` restored), or ``None``
        when no product exists with the given ID.
        """
        product = self.get_by_id(id)
        if not product:
            return None
        pk = product.pk
        product.delete()
        product.pk = pk
        return product
