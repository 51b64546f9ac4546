"""Product domain exceptions.

Raised by the Service Layer when business rules are violated.  They are
operational errors (``AppError`` subclasses), so the centralized exception
handler turns them into ``{status, message}`` responses.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from modules.core.errors import ConflictError, ForbiddenError, NotFoundError

if TYPE_CHECKING:
    from modules.products.models import Product


class ProductAlreadyExists(ConflictError):
    """A product with the same name already exists.

    ``existing`` carries the stored record so the API can return it.
    """

    def __init__(
        self,
        message: str = "Product with this name already exists",
        existing: Optional[Product] = None,
    ) -> None:
        super().__init__(message)
        self.existing = existing


class ProductNotFound(NotFoundError):
    default_message = "Product not found"


class ProductEditForbidden(ForbiddenError):
    default_message = (
        "Managers cannot edit products created by another manager or superadmin."
    )
