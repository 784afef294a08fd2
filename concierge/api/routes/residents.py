from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from concierge.api.deps import get_db, commit_or_400
from concierge.core.audit import log_audit
from concierge.core.auth import get_current_user, require_role, User, PROPERTY_ROLES
from concierge.enums import ResidentRole, ResidentType
from concierge.models.resident import Resident
from concierge.schemas.resident import ResidentCreate, ResidentOut, ResidentUpdate

router = APIRouter(prefix="/api/residents", tags=["residents"])


@router.get("", response_model=List[ResidentOut])
def list_residents(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    type: Optional[ResidentType] = Query(None),
    role: Optional[ResidentRole] = Query(None),
    q: Optional[str] = Query(None),  # search in name/email
):
    query = db.query(Resident)

    if type:
        query = query.filter(Resident.type == type)
    if role:
        query = query.filter(Resident.role == role)
    if q:
        like = f"%{q.strip()}%"
        query = query.filter(Resident.name.ilike(like) | Resident.email.ilike(like))

    return query.order_by(Resident.name).all()


@router.get("/{resident_id}", response_model=ResidentOut)
def get_resident(
    resident_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    resident = db.query(Resident).filter(Resident.id == resident_id).first()
    if not resident:
        raise HTTPException(status_code=404, detail="Resident not found")
    return resident


@router.post("", response_model=ResidentOut, status_code=201)
def create_resident(
    payload: ResidentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(*PROPERTY_ROLES)),
):
    resident = Resident(**payload.model_dump())
    db.add(resident)
    commit_or_400(db, "Invalid resident data")
    db.refresh(resident)
    log_audit(
        db,
        actor=current_user,
        action="created",
        entity_type="resident",
        entity_id=resident.id,
        description=f"Resident created: {resident.name}",
    )
    return resident


@router.put("/{resident_id}", response_model=ResidentOut)
def update_resident(
    resident_id: str,
    payload: ResidentUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(*PROPERTY_ROLES)),
):
    resident = db.query(Resident).filter(Resident.id == resident_id).first()
    if not resident:
        raise HTTPException(status_code=404, detail="Resident not found")

    data = payload.model_dump(exclude_unset=True)
    for k, v in data.items():
        setattr(resident, k, v)

    commit_or_400(db, "Invalid resident data")
    db.refresh(resident)
    log_audit(
        db,
        actor=current_user,
        action="updated",
        entity_type="resident",
        entity_id=resident.id,
        description=f"Resident updated: {resident.name}",
    )
    return resident


@router.delete("/{resident_id}", status_code=204)
def delete_resident(
    resident_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(*PROPERTY_ROLES)),
):
    resident = db.query(Resident).filter(Resident.id == resident_id).first()
    if not resident:
        raise HTTPException(status_code=404, detail="Resident not found")

    name = resident.name
    db.delete(resident)
    commit_or_400(db, "Resident is still referenced by leases or service requests")
    log_audit(
        db,
        actor=current_user,
        action="deleted",
        entity_type="resident",
        entity_id=resident_id,
        description=f"Resident deleted: {name}",
    )
    return None
