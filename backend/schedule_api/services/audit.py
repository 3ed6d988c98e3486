from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from schedule_api.core.security import CurrentUser
from schedule_api.models.activity_log import ActivityLog, EntityKind

logger = logging.getLogger(__name__)


def log_activity(
    db: Session,
    *,
    user: CurrentUser | None,
    entity: EntityKind,
    action: str,
    entity_id: str,
    details: dict | None = None,
) -> ActivityLog:
    """Stage an audit row in the caller's transaction; it is written by the caller's commit."""
    record = ActivityLog(
        actor_id=user.id if user is not None else None,
        entity=entity,
        entity_id=entity_id,
        action=action,
        details=details or {},
    )
    db.add(record)
    logger.debug("%s %s %s by %s", entity.value, entity_id, action, record.actor_id or "anonymous")
    return record
