from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from concierge.api.deps import get_db, commit_or_400
from concierge.core.audit import log_audit
from concierge.core.auth import get_current_user, require_role, User, PROPERTY_ROLES
from concierge.core.lease_funding import (
    LeaseFundingError,
    create_lease_with_funding,
    delete_lease_funding,
    replace_lease_funding,
)
from concierge.models.lease import Lease
from concierge.schemas.lease import (
    LeaseCreate,
    LeaseFundingUpdate,
    LeaseOut,
    LeaseUpdate,
    LeaseWithFundingCreate,
    LeaseWithFundingOut,
)

router = APIRouter(prefix="/api", tags=["leases"])


@router.get("/leases", response_model=List[LeaseOut])
def list_leases(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    resident_id: Optional[str] = Query(None, alias="residentId"),
    space_id: Optional[str] = Query(None, alias="spaceId"),
):
    q = db.query(Lease)

    if resident_id is not None:
        q = q.filter(Lease.resident_id == resident_id)
    if space_id is not None:
        q = q.filter(Lease.space_id == space_id)

    return q.order_by(Lease.start_date.desc()).all()


@router.get("/leases/{lease_id}", response_model=LeaseOut)
def get_lease(
    lease_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    lease = db.query(Lease).filter(Lease.id == lease_id).first()
    if not lease:
        raise HTTPException(status_code=404, detail="Lease not found")
    return lease


@router.post("/leases", response_model=LeaseOut, status_code=201)
def create_lease(
    payload: LeaseCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(*PROPERTY_ROLES)),
):
    """
    Create a bare lease with no funders (and therefore no revenue events).
    """
    lease = Lease(**payload.model_dump())
    db.add(lease)
    commit_or_400(db, "Invalid lease data")
    db.refresh(lease)
    log_audit(
        db,
        actor=current_user,
        action="created",
        entity_type="lease",
        entity_id=lease.id,
        description=f"Lease created for space {lease.space_id}",
    )
    return lease


@router.post("/leases-with-funding", response_model=LeaseWithFundingOut, status_code=201)
def create_funded_lease(
    payload: LeaseWithFundingCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(*PROPERTY_ROLES)),
):
    """
    Create a lease together with its funders and monthly revenue events.

    Runs as one transaction: on any failure nothing is persisted and the
    caller gets a 400.

    **Example:**
    ```
    POST /api/leases-with-funding
    {
        "lease": {"residentId": "...", "spaceId": "...", "rentalAmount": "350.00",
                  "marketValue": "1200.00", "startDate": "2025-01-15", "endDate": "2025-12-31"},
        "funders": [{"funderId": "...", "amount": "850.00"}, {"funderId": "...", "amount": "350.00"}]
    }
    ```
    """
    try:
        lease = create_lease_with_funding(db, payload.lease, payload.funders)
    except LeaseFundingError as e:
        raise HTTPException(status_code=400, detail=str(e))

    log_audit(
        db,
        actor=current_user,
        action="created",
        entity_type="lease",
        entity_id=lease.id,
        description=f"Lease created with {len(payload.funders)} funder(s) for space {lease.space_id}",
    )
    return LeaseWithFundingOut(lease=LeaseOut.model_validate(lease), message="Lease created successfully with revenue events generated")


@router.put("/leases/{lease_id}/funding", response_model=LeaseWithFundingOut)
def update_lease_funding(
    lease_id: str,
    payload: LeaseFundingUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(*PROPERTY_ROLES)),
):
    """
    Replace a lease's funders and regenerate its revenue events from the
    lease's current dates.
    """
    lease = db.query(Lease).filter(Lease.id == lease_id).first()
    if not lease:
        raise HTTPException(status_code=404, detail="Lease not found")

    try:
        lease = replace_lease_funding(db, lease, payload.funders)
    except LeaseFundingError as e:
        raise HTTPException(status_code=400, detail=str(e))

    log_audit(
        db,
        actor=current_user,
        action="updated",
        entity_type="lease",
        entity_id=lease.id,
        description=f"Lease funding recomputed with {len(payload.funders)} funder(s)",
    )
    return LeaseWithFundingOut(lease=LeaseOut.model_validate(lease), message="Lease funding updated and revenue events regenerated")


@router.put("/leases/{lease_id}", response_model=LeaseOut)
def update_lease(
    lease_id: str,
    payload: LeaseUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(*PROPERTY_ROLES)),
):
    """
    Update lease terms. Funders and revenue events are left as they are.
    """
    lease = db.query(Lease).filter(Lease.id == lease_id).first()
    if not lease:
        raise HTTPException(status_code=404, detail="Lease not found")

    data = payload.model_dump(exclude_unset=True)
    for k, v in data.items():
        setattr(lease, k, v)

    commit_or_400(db, "Invalid lease data")
    db.refresh(lease)
    log_audit(
        db,
        actor=current_user,
        action="updated",
        entity_type="lease",
        entity_id=lease.id,
        description=f"Lease updated: {', '.join(data) or 'no changes'}",
    )
    return lease


@router.delete("/leases/{lease_id}", status_code=204)
def delete_lease(
    lease_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(*PROPERTY_ROLES)),
):
    """
    Delete a lease along with its funders and revenue events.
    """
    lease = db.query(Lease).filter(Lease.id == lease_id).first()
    if not lease:
        raise HTTPException(status_code=404, detail="Lease not found")

    # children before parent due to FKs
    delete_lease_funding(db, lease_id)
    db.delete(lease)
    commit_or_400(db, "Failed to delete lease")
    log_audit(
        db,
        actor=current_user,
        action="deleted",
        entity_type="lease",
        entity_id=lease_id,
        description="Lease deleted with its funders and revenue events",
    )
    return None
