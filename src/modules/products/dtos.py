"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (Views) and the
Service layer.  DTOs are immutable (``frozen=True``).

- ``CreateProductDTO``: input for product creation.
- ``UpdateProductDTO``: input for partial product updates.

Both accept unknown keys (``extra="allow"``); those become free-form
descriptive attributes of the product.  A malformed ``specs`` value is
dropped before validation instead of being rejected.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

# Keys a client may send that must never reach the product record.
RESERVED_KEYS = frozenset(
    {
        "id",
        "_id",
        "created_by",
        "createdBy",
        "created_at",
        "createdAt",
        "updated_at",
        "updatedAt",
        "attributes",
        "csrfmiddlewaretoken",
    }
)


def is_valid_specs(value: Any) -> bool:
    """``True`` when ``value`` is a non-empty plain key/value mapping."""
    return isinstance(value, dict) and len(value) > 0


class _ProductInput(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    @model_validator(mode="before")
    @classmethod
    def _sanitize(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        cleaned = {k: v for k, v in data.items() if k not in RESERVED_KEYS}
        if "specs" in cleaned and not is_valid_specs(cleaned["specs"]):
            del cleaned["specs"]
        return cleaned

    @field_validator("price", check_fields=False)
    @classmethod
    def price_must_not_be_negative(cls, v: Decimal | None) -> Decimal | None:
        if v is not None and v < 0:
            raise ValueError("Price cannot be negative.")
        return v

    @property
    def extra_attributes(self) -> Dict[str, Any]:
        """Unknown keys supplied by the client."""
        return dict(self.model_extra or {})


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateProductDTO(_ProductInput):
    """Immutable DTO for product creation requests.

    Validates:
    - ``name`` is a non-empty string (stripped).
    - ``price``, when given, is not negative.
    """

    name: str
    description: str = ""
    category: str = ""
    price: Decimal | None = None
    specs: Dict[str, Any] | None = None

    @field_validator("name")
    @classmethod
    def name_must_not_be_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Name must not be empty.")
        return v.strip()


class UpdateProductDTO(_ProductInput):
    """Immutable DTO for product update requests.

    Only the keys present in the request are applied; see ``changes()``.
    """

    name: str | None = None
    description: str | None = None
    category: str | None = None
    price: Decimal | None = None
    specs: Dict[str, Any] | None = None

    @field_validator("name")
    @classmethod
    def name_must_not_be_empty(cls, v: str | None) -> str:
        if v is None or not v.strip():
            raise ValueError("Name must not be empty.")
        return v.strip()

    @field_validator("description", "category")
    @classmethod
    def blank_instead_of_null(cls, v: str | None) -> str:
        return v or ""

    def changes(self) -> Dict[str, Any]:
        """Declared fields explicitly supplied by the client."""
        return {
            field: getattr(self, field)
            for field in type(self).model_fields
            if field in self.model_fields_set
        }

    def updated_fields(self) -> List[str]:
        return list(self.changes()) + list(self.extra_attributes)
