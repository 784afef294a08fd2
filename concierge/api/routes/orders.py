"""
Service orders (staff work) and work orders (contractor work).

Both share the same order status lifecycle and can be linked to any number of
service requests through /api/service-requests/{id}/...
"""
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from concierge.api.deps import get_db, commit_or_400
from concierge.core.audit import log_audit
from concierge.core.auth import get_current_user, require_role, User, FACILITY_ROLES
from concierge.enums import OrderStatus
from concierge.models.service import (
    ServiceOrder,
    ServiceRequestServiceOrder,
    ServiceRequestWorkOrder,
    WorkOrder,
)
from concierge.schemas.service import (
    ServiceOrderCreate,
    ServiceOrderOut,
    ServiceOrderUpdate,
    ServiceRequestOut,
    WorkOrderCreate,
    WorkOrderOut,
    WorkOrderUpdate,
)

service_orders_router = APIRouter(prefix="/api/service-orders", tags=["orders"])
work_orders_router = APIRouter(prefix="/api/work-orders", tags=["orders"])


# ---------- service orders ----------

@service_orders_router.get("", response_model=List[ServiceOrderOut])
def list_service_orders(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    status: Optional[OrderStatus] = Query(None),
    assigned_staff_id: Optional[str] = Query(None, alias="assignedStaffId"),
):
    q = db.query(ServiceOrder)

    if status:
        q = q.filter(ServiceOrder.status == status)
    if assigned_staff_id is not None:
        q = q.filter(ServiceOrder.assigned_staff_id == assigned_staff_id)

    return q.order_by(ServiceOrder.created_at.desc()).all()


@service_orders_router.get("/{order_id}", response_model=ServiceOrderOut)
def get_service_order(
    order_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    order = db.query(ServiceOrder).filter(ServiceOrder.id == order_id).first()
    if not order:
        raise HTTPException(status_code=404, detail="Service order not found")
    return order


@service_orders_router.get("/{order_id}/service-requests", response_model=List[ServiceRequestOut])
def list_service_order_requests(
    order_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    order = db.query(ServiceOrder).filter(ServiceOrder.id == order_id).first()
    if not order:
        raise HTTPException(status_code=404, detail="Service order not found")
    return order.service_requests


@service_orders_router.post("", response_model=ServiceOrderOut, status_code=201)
def create_service_order(
    payload: ServiceOrderCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(*FACILITY_ROLES)),
):
    order = ServiceOrder(**payload.model_dump())
    db.add(order)
    commit_or_400(db, "Invalid service order data")
    db.refresh(order)
    log_audit(
        db,
        actor=current_user,
        action="created",
        entity_type="service_order",
        entity_id=order.id,
        description=f"Service order created: {order.title}",
    )
    return order


@service_orders_router.put("/{order_id}", response_model=ServiceOrderOut)
def update_service_order(
    order_id: str,
    payload: ServiceOrderUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(*FACILITY_ROLES)),
):
    order = db.query(ServiceOrder).filter(ServiceOrder.id == order_id).first()
    if not order:
        raise HTTPException(status_code=404, detail="Service order not found")

    data = payload.model_dump(exclude_unset=True)
    for k, v in data.items():
        setattr(order, k, v)

    commit_or_400(db, "Invalid service order data")
    db.refresh(order)
    log_audit(
        db,
        actor=current_user,
        action="updated",
        entity_type="service_order",
        entity_id=order.id,
        description=f"Service order updated: {', '.join(data) or 'no changes'}",
    )
    return order


@service_orders_router.delete("/{order_id}", status_code=204)
def delete_service_order(
    order_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(*FACILITY_ROLES)),
):
    order = db.query(ServiceOrder).filter(ServiceOrder.id == order_id).first()
    if not order:
        raise HTTPException(status_code=404, detail="Service order not found")

    db.query(ServiceRequestServiceOrder).filter(
        ServiceRequestServiceOrder.service_order_id == order_id
    ).delete(synchronize_session=False)
    db.delete(order)
    commit_or_400(db, "Failed to delete service order")
    log_audit(
        db,
        actor=current_user,
        action="deleted",
        entity_type="service_order",
        entity_id=order_id,
        description="Service order deleted",
    )
    return None


# ---------- work orders ----------

@work_orders_router.get("", response_model=List[WorkOrderOut])
def list_work_orders(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    status: Optional[OrderStatus] = Query(None),
    contractor: Optional[str] = Query(None, description="search by contractor name"),
):
    q = db.query(WorkOrder)

    if status:
        q = q.filter(WorkOrder.status == status)
    if contractor:
        q = q.filter(WorkOrder.contractor_name.ilike(f"%{contractor.strip()}%"))

    return q.order_by(WorkOrder.created_at.desc()).all()


@work_orders_router.get("/{order_id}", response_model=WorkOrderOut)
def get_work_order(
    order_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    order = db.query(WorkOrder).filter(WorkOrder.id == order_id).first()
    if not order:
        raise HTTPException(status_code=404, detail="Work order not found")
    return order


@work_orders_router.get("/{order_id}/service-requests", response_model=List[ServiceRequestOut])
def list_work_order_requests(
    order_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    order = db.query(WorkOrder).filter(WorkOrder.id == order_id).first()
    if not order:
        raise HTTPException(status_code=404, detail="Work order not found")
    return order.service_requests


@work_orders_router.post("", response_model=WorkOrderOut, status_code=201)
def create_work_order(
    payload: WorkOrderCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(*FACILITY_ROLES)),
):
    order = WorkOrder(**payload.model_dump())
    db.add(order)
    commit_or_400(db, "Invalid work order data")
    db.refresh(order)
    log_audit(
        db,
        actor=current_user,
        action="created",
        entity_type="work_order",
        entity_id=order.id,
        description=f"Work order created: {order.title}",
    )
    return order


@work_orders_router.put("/{order_id}", response_model=WorkOrderOut)
def update_work_order(
    order_id: str,
    payload: WorkOrderUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(*FACILITY_ROLES)),
):
    order = db.query(WorkOrder).filter(WorkOrder.id == order_id).first()
    if not order:
        raise HTTPException(status_code=404, detail="Work order not found")

    data = payload.model_dump(exclude_unset=True)
    for k, v in data.items():
        setattr(order, k, v)

    commit_or_400(db, "Invalid work order data")
    db.refresh(order)
    log_audit(
        db,
        actor=current_user,
        action="updated",
        entity_type="work_order",
        entity_id=order.id,
        description=f"Work order updated: {', '.join(data) or 'no changes'}",
    )
    return order


@work_orders_router.delete("/{order_id}", status_code=204)
def delete_work_order(
    order_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(*FACILITY_ROLES)),
):
    order = db.query(WorkOrder).filter(WorkOrder.id == order_id).first()
    if not order:
        raise HTTPException(status_code=404, detail="Work order not found")

    db.query(ServiceRequestWorkOrder).filter(
        ServiceRequestWorkOrder.work_order_id == order_id
    ).delete(synchronize_session=False)
    db.delete(order)
    commit_or_400(db, "Failed to delete work order")
    log_audit(
        db,
        actor=current_user,
        action="deleted",
        entity_type="work_order",
        entity_id=order_id,
        description="Work order deleted",
    )
    return None
