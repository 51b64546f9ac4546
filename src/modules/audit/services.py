"""Fire-and-forget audit logging.

``log_action`` is called by the application services after every
successful mutation.  The entry is written by a Celery task that is only
dispatched once the mutation's transaction commits, so an audit failure
can neither roll back nor outlive the change it describes.  Dispatch is
best-effort: a broker outage or a failing task is logged and the
caller's response is unaffected.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.db import transaction

from modules.audit.tasks import write_audit_entry
from modules.core.middleware import correlation_id_var

logger = structlog.get_logger(__name__)


def log_action(
    *,
    action: str,
    entity: str,
    entity_id: Any,
    user: Any = None,
    details: Optional[Dict[str, Any]] = None,
) -> None:
    # Resolved now: the request context is gone by the time the commit hook runs.
    payload = {
        "action": action,
        "entity": entity,
        "entity_id": str(entity_id),
        "user_id": getattr(user, "pk", None) if user is not None else None,
        "details": details or {},
        "request_id": correlation_id_var.get(),
    }
    transaction.on_commit(lambda: _dispatch(payload))


def _dispatch(payload: Dict[str, Any]) -> None:
    log = logger.bind(
        action=payload["action"],
        entity=payload["entity"],
        entity_id=payload["entity_id"],
    )
    try:
        write_audit_entry.delay(**payload)
    except Exception:
        log.warning("audit.dispatch_failed", exc_info=True)
