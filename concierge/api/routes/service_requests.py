from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from concierge.api.deps import get_db, commit_or_400
from concierge.core.audit import log_audit
from concierge.core.auth import get_current_user, require_role, User, FACILITY_ROLES
from concierge.enums import ServiceRequestPriority, ServiceRequestStatus
from concierge.models.service import (
    ServiceOrder,
    ServiceRequest,
    ServiceRequestServiceOrder,
    ServiceRequestWorkOrder,
    WorkOrder,
)
from concierge.schemas.service import (
    ServiceOrderOut,
    ServiceRequestCreate,
    ServiceRequestLinkOut,
    ServiceRequestOut,
    ServiceRequestUpdate,
    WorkOrderOut,
)

router = APIRouter(prefix="/api/service-requests", tags=["service-requests"])


def _get_request_or_404(db: Session, request_id: str) -> ServiceRequest:
    service_request = db.query(ServiceRequest).filter(ServiceRequest.id == request_id).first()
    if not service_request:
        raise HTTPException(status_code=404, detail="Service request not found")
    return service_request


@router.get("", response_model=List[ServiceRequestOut])
def list_service_requests(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    status: Optional[ServiceRequestStatus] = Query(None),
    priority: Optional[ServiceRequestPriority] = Query(None),
    resident_id: Optional[str] = Query(None, alias="residentId"),
    space_id: Optional[str] = Query(None, alias="spaceId"),
):
    q = db.query(ServiceRequest)

    if status:
        q = q.filter(ServiceRequest.status == status)
    if priority:
        q = q.filter(ServiceRequest.priority == priority)
    if resident_id is not None:
        q = q.filter(ServiceRequest.resident_id == resident_id)
    if space_id is not None:
        q = q.filter(ServiceRequest.space_id == space_id)

    return q.order_by(ServiceRequest.created_at.desc()).all()


@router.get("/{request_id}", response_model=ServiceRequestOut)
def get_service_request(
    request_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return _get_request_or_404(db, request_id)


@router.post("", response_model=ServiceRequestOut, status_code=201)
def create_service_request(
    payload: ServiceRequestCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Any signed-in user may file a request. It starts as `submitted`.
    """
    service_request = ServiceRequest(**payload.model_dump())
    db.add(service_request)
    commit_or_400(db, "Invalid service request data")
    db.refresh(service_request)
    log_audit(
        db,
        actor=current_user,
        action="created",
        entity_type="service_request",
        entity_id=service_request.id,
        description=f"Service request created: {service_request.title}",
    )
    return service_request


@router.put("/{request_id}", response_model=ServiceRequestOut)
def update_service_request(
    request_id: str,
    payload: ServiceRequestUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(*FACILITY_ROLES)),
):
    service_request = _get_request_or_404(db, request_id)

    data = payload.model_dump(exclude_unset=True)
    for k, v in data.items():
        setattr(service_request, k, v)

    commit_or_400(db, "Invalid service request data")
    db.refresh(service_request)
    log_audit(
        db,
        actor=current_user,
        action="updated",
        entity_type="service_request",
        entity_id=service_request.id,
        description=f"Service request updated: {', '.join(data) or 'no changes'}",
    )
    return service_request


@router.delete("/{request_id}", status_code=204)
def delete_service_request(
    request_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(*FACILITY_ROLES)),
):
    service_request = _get_request_or_404(db, request_id)

    # drop link rows first; the orders themselves stay
    db.query(ServiceRequestServiceOrder).filter(
        ServiceRequestServiceOrder.service_request_id == request_id
    ).delete(synchronize_session=False)
    db.query(ServiceRequestWorkOrder).filter(
        ServiceRequestWorkOrder.service_request_id == request_id
    ).delete(synchronize_session=False)
    db.delete(service_request)
    commit_or_400(db, "Failed to delete service request")
    log_audit(
        db,
        actor=current_user,
        action="deleted",
        entity_type="service_request",
        entity_id=request_id,
        description="Service request deleted",
    )
    return None


@router.get("/{request_id}/service-orders", response_model=List[ServiceOrderOut])
def list_linked_service_orders(
    request_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return _get_request_or_404(db, request_id).service_orders


@router.post(
    "/{request_id}/service-orders/{order_id}",
    response_model=ServiceRequestLinkOut,
    status_code=201,
)
def link_service_order(
    request_id: str,
    order_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(*FACILITY_ROLES)),
):
    """
    Attach a service order to a request. A pair can only be linked once.
    """
    _get_request_or_404(db, request_id)
    if not db.query(ServiceOrder).filter(ServiceOrder.id == order_id).first():
        raise HTTPException(status_code=404, detail="Service order not found")

    link = ServiceRequestServiceOrder(service_request_id=request_id, service_order_id=order_id)
    db.add(link)
    commit_or_400(db, "Service order is already linked to this request")
    db.refresh(link)
    log_audit(
        db,
        actor=current_user,
        action="linked",
        entity_type="service_request",
        entity_id=request_id,
        description=f"Service order {order_id} linked",
    )
    return link


@router.get("/{request_id}/work-orders", response_model=List[WorkOrderOut])
def list_linked_work_orders(
    request_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return _get_request_or_404(db, request_id).work_orders


@router.post(
    "/{request_id}/work-orders/{order_id}",
    response_model=ServiceRequestLinkOut,
    status_code=201,
)
def link_work_order(
    request_id: str,
    order_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(*FACILITY_ROLES)),
):
    _get_request_or_404(db, request_id)
    if not db.query(WorkOrder).filter(WorkOrder.id == order_id).first():
        raise HTTPException(status_code=404, detail="Work order not found")

    link = ServiceRequestWorkOrder(service_request_id=request_id, work_order_id=order_id)
    db.add(link)
    commit_or_400(db, "Work order is already linked to this request")
    db.refresh(link)
    log_audit(
        db,
        actor=current_user,
        action="linked",
        entity_type="service_request",
        entity_id=request_id,
        description=f"Work order {order_id} linked",
    )
    return link
