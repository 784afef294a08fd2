from typing import Optional

from concierge.core.auth import User
from concierge.models.audit_log import AuditLog
from sqlalchemy.orm import Session


def log_audit(
    db: Session,
    *,
    actor: User,
    action: str,
    entity_type: str,
    entity_id: str,
    source: str = "api",
    description: Optional[str] = None,
) -> AuditLog:
    log = AuditLog(
        actor_id=actor.id,
        actor_email=actor.email,
        actor_role=actor.role,
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        source=source,
        description=description,
    )
    db.add(log)
    db.commit()
    db.refresh(log)
    return log
