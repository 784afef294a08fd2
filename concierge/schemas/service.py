from pydantic import Field, field_validator
from datetime import datetime
from decimal import Decimal
from typing import Optional

from concierge.enums import OrderStatus, ServiceRequestPriority, ServiceRequestStatus
from concierge.schemas.base import CamelModel, Money, strip_string


class ServiceRequestCreate(CamelModel):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    priority: ServiceRequestPriority = ServiceRequestPriority.medium
    resident_id: str
    space_id: str
    notes: Optional[str] = None

    @field_validator('title', 'description', mode='before')
    @classmethod
    def strip_strings(cls, v):
        return strip_string(v)


class ServiceRequestUpdate(CamelModel):
    # Any status may follow any other; timestamps are recorded as supplied.
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    priority: Optional[ServiceRequestPriority] = None
    status: Optional[ServiceRequestStatus] = None
    notes: Optional[str] = None
    acknowledged_at: Optional[datetime] = None
    triaged_at: Optional[datetime] = None
    resolved_at: Optional[datetime] = None


class ServiceRequestOut(CamelModel):
    id: str
    title: str
    description: str
    priority: ServiceRequestPriority
    status: ServiceRequestStatus
    resident_id: str
    space_id: str
    notes: Optional[str]
    created_at: datetime
    acknowledged_at: Optional[datetime]
    triaged_at: Optional[datetime]
    resolved_at: Optional[datetime]


class OrderBase(CamelModel):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    estimated_cost: Optional[Money] = None

    @field_validator('title', 'description', mode='before')
    @classmethod
    def strip_strings(cls, v):
        return strip_string(v)


class ServiceOrderCreate(OrderBase):
    assigned_staff_id: Optional[str] = None


class ServiceOrderUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    status: Optional[OrderStatus] = None
    assigned_staff_id: Optional[str] = None
    estimated_cost: Optional[Money] = None
    actual_cost: Optional[Money] = None
    completion_notes: Optional[str] = None
    completed_at: Optional[datetime] = None


class ServiceOrderOut(CamelModel):
    id: str
    title: str
    description: str
    status: OrderStatus
    assigned_staff_id: Optional[str]
    estimated_cost: Optional[Decimal]
    actual_cost: Optional[Decimal]
    completion_notes: Optional[str]
    created_at: datetime
    completed_at: Optional[datetime]


class WorkOrderCreate(OrderBase):
    contractor_name: Optional[str] = None
    contractor_contact: Optional[str] = None


class WorkOrderUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    status: Optional[OrderStatus] = None
    contractor_name: Optional[str] = None
    contractor_contact: Optional[str] = None
    estimated_cost: Optional[Money] = None
    actual_cost: Optional[Money] = None
    completion_notes: Optional[str] = None
    completed_at: Optional[datetime] = None


class WorkOrderOut(CamelModel):
    id: str
    title: str
    description: str
    status: OrderStatus
    contractor_name: Optional[str]
    contractor_contact: Optional[str]
    estimated_cost: Optional[Decimal]
    actual_cost: Optional[Decimal]
    completion_notes: Optional[str]
    created_at: datetime
    completed_at: Optional[datetime]


class ServiceRequestLinkOut(CamelModel):
    id: str
    service_request_id: str
    service_order_id: Optional[str] = None
    work_order_id: Optional[str] = None
    created_at: datetime
