"""Audit trail of mutations performed through the admin API.

Entries are append-only: written once by ``modules.audit.tasks`` and never
edited.  ``user`` is nullable so the trail survives user deletion.
"""

from __future__ import annotations

from django.conf import settings
from django.db import models

from modules.core.models import BaseModel


class AuditAction(models.TextChoices):
    CREATE = "create", "Create"
    UPDATE = "update", "Update"
    DELETE = "delete", "Delete"


class AuditLogEntry(BaseModel):
    action = models.CharField(max_length=20, choices=AuditAction.choices)
    entity = models.CharField(max_length=50)
    entity_id = models.CharField(max_length=64)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="audit_entries",
    )
    details = models.JSONField(default=dict, blank=True)
    request_id = models.CharField(max_length=64, blank=True, default="")

    class Meta:
        db_table = "audit_log_entries"
        ordering = ["-created_at"]
        indexes = [
            models.Index(
                fields=["entity", "entity_id"],
                name="audit_entity_idx",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.action} {self.entity}:{self.entity_id}"
