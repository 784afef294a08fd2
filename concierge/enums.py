from enum import Enum


class ResidentType(str, Enum):
    primary_tenant = "primary_tenant"
    co_tenant = "co_tenant"
    authorized_occupant = "authorized_occupant"


class ResidentRole(str, Enum):
    leaseholder = "leaseholder"
    emergency_contact = "emergency_contact"
    guarantor = "guarantor"


class ServiceRequestStatus(str, Enum):
    submitted = "submitted"
    acknowledged = "acknowledged"
    triaged = "triaged"
    in_progress = "in_progress"
    resolved = "resolved"
    closed = "closed"


class ServiceRequestPriority(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"
    urgent = "urgent"


# shared by service orders (staff) and work orders (contractors)
class OrderStatus(str, Enum):
    pending = "pending"
    assigned = "assigned"
    in_progress = "in_progress"
    completed = "completed"
    cancelled = "cancelled"
