"""Product DRF serializers for API output.

Input goes through the Pydantic DTOs in ``dtos.py``; these serializers
only render products.  ``created_by`` is reduced to the creator's name and
email.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.accounts.serializers import UserSummarySerializer
from modules.products.models import Product


class ProductSerializer(serializers.ModelSerializer):
    """Read serializer for the Product resource."""

    created_by = UserSummarySerializer(read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "description",
            "category",
            "price",
            "specs",
            "attributes",
            "created_by",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
