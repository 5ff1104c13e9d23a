from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for dashboard routing and route gating."""

    ADMIN = "admin"
    DRIVER = "driver"
    HOD = "hod"
    EMPLOYEE = "employee"


class RequestStatus(str, Enum):
    """Lifecycle of a travel request form."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class RequestKind(str, Enum):
    DRIVER_BOOKING = "driver_booking"
    EMPLOYEE_TO_HOD = "employee_to_hod"
    HOD_TO_ADMIN = "hod_to_admin"
