"""Product model.

Business rules implemented:
- ``name`` is unique (UNIQUE INDEX); a racing duplicate insert fails at
  the storage layer instead of slipping past the service's existence check.
- ``specs`` is either NULL or a non-empty key/value mapping.
- ``attributes`` holds free-form descriptive fields.
- ``created_by`` is stamped once at creation time.
- Deletion is physical.
"""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel
from modules.products.dtos import is_valid_specs


class Product(BaseModel):
    name = models.CharField(max_length=255, unique=True)
    description = models.TextField(blank=True, default="")
    category = models.CharField(max_length=100, blank=True, default="")
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal("0"))],
    )
    specs = models.JSONField(null=True, blank=True, default=None)
    attributes = models.JSONField(default=dict, blank=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="products",
    )

    class Meta:
        db_table = "products"
        ordering = ["name"]

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def clean(self) -> None:
        super().clean()
        if self.name:
            self.name = self.name.strip()
        if self.specs is not None and not is_valid_specs(self.specs):
            raise ValidationError(
                {"specs": "Specs must be a non-empty key/value mapping."}
            )

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, *args, **kwargs) -> None:
        if self.name:
            self.name = self.name.strip()
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return self.name
