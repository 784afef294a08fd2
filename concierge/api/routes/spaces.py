from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from concierge.api.deps import get_db, commit_or_400
from concierge.core.audit import log_audit
from concierge.core.auth import get_current_user, require_role, User, PROPERTY_ROLES
from concierge.models.space import Space, SpaceType
from concierge.schemas.space import (
    SpaceCreate,
    SpaceOut,
    SpaceTypeCreate,
    SpaceTypeOut,
    SpaceUpdate,
)

router = APIRouter(prefix="/api/spaces", tags=["spaces"])
space_types_router = APIRouter(prefix="/api/space-types", tags=["spaces"])


@space_types_router.get("", response_model=List[SpaceTypeOut])
def list_space_types(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return db.query(SpaceType).order_by(SpaceType.name).all()


@space_types_router.get("/{space_type_id}", response_model=SpaceTypeOut)
def get_space_type(
    space_type_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    space_type = db.query(SpaceType).filter(SpaceType.id == space_type_id).first()
    if not space_type:
        raise HTTPException(status_code=404, detail="Space type not found")
    return space_type


@space_types_router.post("", response_model=SpaceTypeOut, status_code=201)
def create_space_type(
    payload: SpaceTypeCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(*PROPERTY_ROLES)),
):
    space_type = SpaceType(**payload.model_dump())
    db.add(space_type)
    commit_or_400(db, "Space type already exists")
    db.refresh(space_type)
    log_audit(
        db,
        actor=current_user,
        action="created",
        entity_type="space_type",
        entity_id=space_type.id,
        description=f"Space type created: {space_type.name}",
    )
    return space_type


@router.get("", response_model=List[SpaceOut])
def list_spaces(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    site_id: Optional[str] = Query(None, alias="siteId", description="Filter by site"),
    space_type_id: Optional[str] = Query(None, alias="spaceTypeId"),
):
    q = db.query(Space)

    if site_id is not None:
        q = q.filter(Space.site_id == site_id)
    if space_type_id is not None:
        q = q.filter(Space.space_type_id == space_type_id)

    return q.order_by(Space.site_id, Space.identifier).all()


@router.get("/{space_id}", response_model=SpaceOut)
def get_space(
    space_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    space = db.query(Space).filter(Space.id == space_id).first()
    if not space:
        raise HTTPException(status_code=404, detail="Space not found")
    return space


@router.post("", response_model=SpaceOut, status_code=201)
def create_space(
    payload: SpaceCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(*PROPERTY_ROLES)),
):
    space = Space(**payload.model_dump())
    db.add(space)
    commit_or_400(db, "Invalid space data")
    db.refresh(space)
    log_audit(
        db,
        actor=current_user,
        action="created",
        entity_type="space",
        entity_id=space.id,
        description=f"Space created: {space.identifier}",
    )
    return space


@router.put("/{space_id}", response_model=SpaceOut)
def update_space(
    space_id: str,
    payload: SpaceUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(*PROPERTY_ROLES)),
):
    space = db.query(Space).filter(Space.id == space_id).first()
    if not space:
        raise HTTPException(status_code=404, detail="Space not found")

    data = payload.model_dump(exclude_unset=True)
    for k, v in data.items():
        setattr(space, k, v)

    commit_or_400(db, "Invalid space data")
    db.refresh(space)
    log_audit(
        db,
        actor=current_user,
        action="updated",
        entity_type="space",
        entity_id=space.id,
        description=f"Space updated: {space.identifier}",
    )
    return space


@router.delete("/{space_id}", status_code=204)
def delete_space(
    space_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(*PROPERTY_ROLES)),
):
    space = db.query(Space).filter(Space.id == space_id).first()
    if not space:
        raise HTTPException(status_code=404, detail="Space not found")

    identifier = space.identifier
    db.delete(space)
    commit_or_400(db, "Space is still referenced by leases or service requests")
    log_audit(
        db,
        actor=current_user,
        action="deleted",
        entity_type="space",
        entity_id=space_id,
        description=f"Space deleted: {identifier}",
    )
    return None
