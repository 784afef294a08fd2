from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from concierge.api.deps import get_db, commit_or_400
from concierge.core.audit import log_audit
from concierge.core.auth import get_current_user, require_role, User, PROPERTY_ROLES
from concierge.models.funder import Funder, LeaseFunder, RevenueEvent
from concierge.schemas.funder import (
    FunderCreate,
    FunderOut,
    FunderUpdate,
    LeaseFunderOut,
    RevenueEventOut,
)

router = APIRouter(prefix="/api", tags=["funders"])


@router.get("/funders", response_model=List[FunderOut])
def list_funders(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return db.query(Funder).order_by(Funder.name).all()


@router.get("/funders/{funder_id}", response_model=FunderOut)
def get_funder(
    funder_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    funder = db.query(Funder).filter(Funder.id == funder_id).first()
    if not funder:
        raise HTTPException(status_code=404, detail="Funder not found")
    return funder


@router.post("/funders", response_model=FunderOut, status_code=201)
def create_funder(
    payload: FunderCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(*PROPERTY_ROLES)),
):
    funder = Funder(**payload.model_dump())
    db.add(funder)
    commit_or_400(db, "Invalid funder data")
    db.refresh(funder)
    log_audit(
        db,
        actor=current_user,
        action="created",
        entity_type="funder",
        entity_id=funder.id,
        description=f"Funder created: {funder.name}",
    )
    return funder


@router.put("/funders/{funder_id}", response_model=FunderOut)
def update_funder(
    funder_id: str,
    payload: FunderUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(*PROPERTY_ROLES)),
):
    funder = db.query(Funder).filter(Funder.id == funder_id).first()
    if not funder:
        raise HTTPException(status_code=404, detail="Funder not found")

    data = payload.model_dump(exclude_unset=True)
    for k, v in data.items():
        setattr(funder, k, v)

    commit_or_400(db, "Invalid funder data")
    db.refresh(funder)
    log_audit(
        db,
        actor=current_user,
        action="updated",
        entity_type="funder",
        entity_id=funder.id,
        description=f"Funder updated: {funder.name}",
    )
    return funder


@router.delete("/funders/{funder_id}", status_code=204)
def delete_funder(
    funder_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(*PROPERTY_ROLES)),
):
    """
    Delete a funder. Funders still committed to a lease are refused (400).
    """
    funder = db.query(Funder).filter(Funder.id == funder_id).first()
    if not funder:
        raise HTTPException(status_code=404, detail="Funder not found")

    name = funder.name
    db.delete(funder)
    commit_or_400(db, "Funder is still funding one or more leases")
    log_audit(
        db,
        actor=current_user,
        action="deleted",
        entity_type="funder",
        entity_id=funder_id,
        description=f"Funder deleted: {name}",
    )
    return None


@router.get("/lease-funders/{lease_id}", response_model=List[LeaseFunderOut])
def list_lease_funders(
    lease_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Funding rows for one lease."""
    return (
        db.query(LeaseFunder)
        .filter(LeaseFunder.lease_id == lease_id)
        .order_by(LeaseFunder.created_at)
        .all()
    )


@router.get("/revenue-events", response_model=List[RevenueEventOut])
def list_revenue_events(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    month: Optional[str] = Query(None, pattern=r"^\d{4}-\d{2}$", description="YYYY-MM"),
    funder_id: Optional[str] = Query(None, alias="funderId"),
):
    q = db.query(RevenueEvent)

    if month:
        q = q.filter(RevenueEvent.month == month)
    if funder_id:
        q = q.filter(RevenueEvent.funder_id == funder_id)

    return q.order_by(RevenueEvent.event_date, RevenueEvent.lease_id).all()


@router.get("/revenue-events/{lease_id}", response_model=List[RevenueEventOut])
def list_lease_revenue_events(
    lease_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return (
        db.query(RevenueEvent)
        .filter(RevenueEvent.lease_id == lease_id)
        .order_by(RevenueEvent.event_date)
        .all()
    )
