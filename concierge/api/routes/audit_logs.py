from datetime import datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from concierge.api.deps import get_db
from concierge.core.auth import get_current_user, User
from concierge.models.audit_log import AuditLog
from concierge.schemas.audit_log import AuditLogOut

router = APIRouter(prefix="/api/audit-logs", tags=["audit-logs"])


def _parse_datetime(value: str, field: str) -> datetime:
    try:
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid {field}, expected ISO date-time")
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


@router.get("", response_model=List[AuditLogOut])
def list_audit_logs(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    start_date: Optional[str] = Query(None, description="ISO date-time"),
    end_date: Optional[str] = Query(None, description="ISO date-time"),
    actor: Optional[str] = Query(None, description="Filter by actor email"),
    entity_type: Optional[str] = Query(None),
    entity_id: Optional[str] = Query(None),
    action: Optional[str] = Query(None),
    source: Optional[str] = Query(None),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
):
    q = db.query(AuditLog)

    if start_date:
        q = q.filter(AuditLog.created_at >= _parse_datetime(start_date, "start_date"))
    if end_date:
        q = q.filter(AuditLog.created_at <= _parse_datetime(end_date, "end_date"))
    if actor:
        q = q.filter(AuditLog.actor_email == actor)
    if entity_type:
        q = q.filter(AuditLog.entity_type == entity_type)
    if entity_id:
        q = q.filter(AuditLog.entity_id == entity_id)
    if action:
        q = q.filter(AuditLog.action == action)
    if source:
        q = q.filter(AuditLog.source == source)

    return q.order_by(AuditLog.created_at.desc(), AuditLog.id.desc()).offset(offset).limit(limit).all()


@router.get("/stats")
def audit_log_stats(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    now = datetime.now(timezone.utc)
    start_today = now.replace(hour=0, minute=0, second=0, microsecond=0)

    total = db.query(AuditLog).count()
    today = db.query(AuditLog).filter(AuditLog.created_at >= start_today).count()
    deletions = db.query(AuditLog).filter(AuditLog.action == "deleted").count()
    lease_changes = db.query(AuditLog).filter(AuditLog.entity_type == "lease").count()

    return {
        "total": total,
        "today": today,
        "deletions": deletions,
        "leaseChanges": lease_changes,
    }
