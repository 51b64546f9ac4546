"""Authorisation rules for product mutations."""

from __future__ import annotations

from typing import Any

from modules.accounts.models import PRIVILEGED_OWNER_ROLES
from modules.products.models import Product


def can_edit(actor: Any, product: Product) -> bool:
    """Whether ``actor`` may update ``product``.

    Only managers are restricted: a manager may edit their own products and
    products whose creator is neither a manager nor a superadmin.
    """
    if not getattr(actor, "is_manager", False):
        return True
    creator = product.created_by
    if creator is None or creator.pk == actor.pk:
        return True
    return creator.role not in PRIVILEGED_OWNER_ROLES
