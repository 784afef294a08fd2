from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from concierge.api.deps import get_db, commit_or_400
from concierge.core.audit import log_audit
from concierge.core.auth import get_current_user, require_role, User, PROPERTY_ROLES
from concierge.models.site import Site
from concierge.models.space import Space
from concierge.schemas.site import SiteCreate, SiteOut, SiteUpdate
from concierge.schemas.space import SpaceOut

router = APIRouter(prefix="/api/sites", tags=["sites"])


@router.get("", response_model=List[SiteOut])
def list_sites(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    search: Optional[str] = Query(None, description="search by name/address/nickname"),
):
    q = db.query(Site)

    if search:
        like = f"%{search.strip()}%"
        q = q.filter(
            Site.name.ilike(like)
            | Site.address.ilike(like)
            | Site.property_nickname.ilike(like)
        )

    return q.order_by(Site.name).all()


@router.get("/{site_id}", response_model=SiteOut)
def get_site(
    site_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    site = db.query(Site).filter(Site.id == site_id).first()
    if not site:
        raise HTTPException(status_code=404, detail="Site not found")
    return site


@router.get("/{site_id}/spaces", response_model=List[SpaceOut])
def list_site_spaces(
    site_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    site = db.query(Site).filter(Site.id == site_id).first()
    if not site:
        raise HTTPException(status_code=404, detail="Site not found")
    return db.query(Space).filter(Space.site_id == site_id).order_by(Space.identifier).all()


@router.post("", response_model=SiteOut, status_code=201)
def create_site(
    payload: SiteCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(*PROPERTY_ROLES)),
):
    site = Site(**payload.model_dump())
    db.add(site)
    commit_or_400(db, "Invalid site data")
    db.refresh(site)
    log_audit(
        db,
        actor=current_user,
        action="created",
        entity_type="site",
        entity_id=site.id,
        description=f"Site created: {site.name}",
    )
    return site


@router.put("/{site_id}", response_model=SiteOut)
def update_site(
    site_id: str,
    payload: SiteUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(*PROPERTY_ROLES)),
):
    site = db.query(Site).filter(Site.id == site_id).first()
    if not site:
        raise HTTPException(status_code=404, detail="Site not found")

    data = payload.model_dump(exclude_unset=True)
    for k, v in data.items():
        setattr(site, k, v)

    commit_or_400(db, "Invalid site data")
    db.refresh(site)
    log_audit(
        db,
        actor=current_user,
        action="updated",
        entity_type="site",
        entity_id=site.id,
        description=f"Site updated: {site.name}",
    )
    return site


@router.delete("/{site_id}", status_code=204)
def delete_site(
    site_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(*PROPERTY_ROLES)),
):
    """
    Delete a site. Sites that still have spaces are refused (400).
    """
    site = db.query(Site).filter(Site.id == site_id).first()
    if not site:
        raise HTTPException(status_code=404, detail="Site not found")

    name = site.name
    db.delete(site)
    commit_or_400(db, "Site still has spaces")
    log_audit(
        db,
        actor=current_user,
        action="deleted",
        entity_type="site",
        entity_id=site_id,
        description=f"Site deleted: {name}",
    )
    return None
