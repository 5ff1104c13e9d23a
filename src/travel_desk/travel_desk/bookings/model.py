from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional

from ..core.constants import DATE_FORMAT


@dataclass(frozen=True)
class NewDriverBooking:
    driver_id: str
    date: date
    passenger_name: Optional[str] = None
    pickup_location: Optional[str] = None
    drop_location: Optional[str] = None
    pickup_time: Optional[str] = None
    purpose: Optional[str] = None
    distance_traveled: Optional[float] = None
    toll_usage: Optional[str] = None
    created_by: Optional[str] = None
    extra: dict = field(default_factory=dict)


@dataclass(frozen=True)
class DriverBooking:
    booking_id: int
    driver_id: str
    date: date
    passenger_name: Optional[str] = None
    pickup_location: Optional[str] = None
    drop_location: Optional[str] = None
    pickup_time: Optional[str] = None
    purpose: Optional[str] = None
    distance_traveled: Optional[float] = None
    toll_usage: Optional[str] = None
    created_by: Optional[str] = None
    extra: dict = field(default_factory=dict)
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.booking_id,
            "driverId": self.driver_id,
            "date": self.date.strftime(DATE_FORMAT),
            "passengerName": self.passenger_name,
            "pickupLocation": self.pickup_location,
            "dropLocation": self.drop_location,
            "pickupTime": self.pickup_time,
            "purpose": self.purpose,
            "distanceTraveled": self.distance_traveled,
            "tollUsage": self.toll_usage,
            "createdBy": self.created_by,
            "extra": dict(self.extra),
        }
