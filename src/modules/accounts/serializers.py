"""User DRF serializers (output only; input goes through ``dtos.py``)."""

from __future__ import annotations

from rest_framework import serializers

from modules.accounts.models import User


class UserSummarySerializer(serializers.ModelSerializer):
    """Reduced projection used wherever a user is referenced by another resource."""

    class Meta:
        model = User
        fields = ["name", "email"]
        read_only_fields = fields


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = [
            "id",
            "username",
            "name",
            "email",
            "role",
            "is_active",
            "date_joined",
        ]
        read_only_fields = fields
