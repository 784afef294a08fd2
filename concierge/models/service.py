from sqlalchemy import Column, String, DateTime, ForeignKey, Numeric, Enum, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from concierge.core.database import Base, generate_id
from concierge.enums import OrderStatus, ServiceRequestPriority, ServiceRequestStatus

# one postgres type shared by both order tables
order_status_enum = Enum(OrderStatus, name="order_status")


class ServiceRequest(Base):
    __tablename__ = "service_requests"

    id = Column(String, primary_key=True, index=True, default=generate_id)

    title = Column(String, nullable=False)
    description = Column(String, nullable=False)
    priority = Column(
        Enum(ServiceRequestPriority, name="service_request_priority"),
        nullable=False,
        default=ServiceRequestPriority.medium,
    )
    status = Column(
        Enum(ServiceRequestStatus, name="service_request_status"),
        nullable=False,
        default=ServiceRequestStatus.submitted,
        index=True,
    )

    resident_id = Column(String, ForeignKey("residents.id"), nullable=False, index=True)
    space_id = Column(String, ForeignKey("spaces.id"), nullable=False, index=True)

    notes = Column(String, nullable=True)

    service_orders = relationship("ServiceOrder", secondary="service_request_service_orders", viewonly=True)
    work_orders = relationship("WorkOrder", secondary="service_request_work_orders", viewonly=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    # set by the caller alongside the matching status
    acknowledged_at = Column(DateTime(timezone=True), nullable=True)
    triaged_at = Column(DateTime(timezone=True), nullable=True)
    resolved_at = Column(DateTime(timezone=True), nullable=True)


class ServiceOrder(Base):
    """Work performed by staff."""
    __tablename__ = "service_orders"

    id = Column(String, primary_key=True, index=True, default=generate_id)

    title = Column(String, nullable=False)
    description = Column(String, nullable=False)
    status = Column(order_status_enum, nullable=False, default=OrderStatus.pending, index=True)

    assigned_staff_id = Column(String, nullable=True, index=True)
    estimated_cost = Column(Numeric(10, 2), nullable=True)
    actual_cost = Column(Numeric(10, 2), nullable=True)
    completion_notes = Column(String, nullable=True)

    service_requests = relationship("ServiceRequest", secondary="service_request_service_orders", viewonly=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    completed_at = Column(DateTime(timezone=True), nullable=True)


class WorkOrder(Base):
    """Work performed by an outside contractor."""
    __tablename__ = "work_orders"

    id = Column(String, primary_key=True, index=True, default=generate_id)

    title = Column(String, nullable=False)
    description = Column(String, nullable=False)
    status = Column(order_status_enum, nullable=False, default=OrderStatus.pending, index=True)

    contractor_name = Column(String, nullable=True)
    contractor_contact = Column(String, nullable=True)
    estimated_cost = Column(Numeric(10, 2), nullable=True)
    actual_cost = Column(Numeric(10, 2), nullable=True)
    completion_notes = Column(String, nullable=True)

    service_requests = relationship("ServiceRequest", secondary="service_request_work_orders", viewonly=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    completed_at = Column(DateTime(timezone=True), nullable=True)


class ServiceRequestServiceOrder(Base):
    __tablename__ = "service_request_service_orders"
    __table_args__ = (UniqueConstraint("service_request_id", "service_order_id"),)

    id = Column(String, primary_key=True, index=True, default=generate_id)
    service_request_id = Column(String, ForeignKey("service_requests.id"), nullable=False, index=True)
    service_order_id = Column(String, ForeignKey("service_orders.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class ServiceRequestWorkOrder(Base):
    __tablename__ = "service_request_work_orders"
    __table_args__ = (UniqueConstraint("service_request_id", "work_order_id"),)

    id = Column(String, primary_key=True, index=True, default=generate_id)
    service_request_id = Column(String, ForeignKey("service_requests.id"), nullable=False, index=True)
    work_order_id = Column(String, ForeignKey("work_orders.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
