"""Celery tasks for the audit module."""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from celery import shared_task
from django.contrib.auth import get_user_model

from modules.audit.models import AuditLogEntry

logger = structlog.get_logger(__name__)


@shared_task(name="audit.write_entry")
def write_audit_entry(
    action: str,
    entity: str,
    entity_id: str,
    user_id: Optional[int] = None,
    details: Optional[Dict[str, Any]] = None,
    request_id: str = "",
) -> str:
    """Persist one ``AuditLogEntry`` and return its id.

    The actor may have been deleted before the task runs (an admin
    removing their own account); the entry is then kept without a user.
    """
    if user_id is not None and not get_user_model().objects.filter(pk=user_id).exists():
        user_id = None

    entry = AuditLogEntry.objects.create(
        action=action,
        entity=entity,
        entity_id=entity_id,
        user_id=user_id,
        details=details or {},
        request_id=request_id,
    )
    logger.info(
        "audit.entry_written",
        audit_id=str(entry.id),
        action=action,
        entity=entity,
        entity_id=entity_id,
    )
    return str(entry.id)
