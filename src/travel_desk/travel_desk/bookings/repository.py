from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..common.datetime_utils import DateRange
from .model import DriverBooking, NewDriverBooking


class BookingRepository(Protocol):
    def create(self, booking: NewDriverBooking) -> int:
        raise NotImplementedError

    def get(self, booking_id: int) -> Optional[DriverBooking]:
        raise NotImplementedError

    def list(
        self,
        *,
        driver_id: Optional[str] = None,
        date_range: Optional[DateRange] = None,
        limit: int = 500,
    ) -> Sequence[DriverBooking]:
        raise NotImplementedError

    def update_trip(
        self,
        booking_id: int,
        *,
        distance_traveled: Optional[float],
        toll_usage: Optional[str],
    ) -> bool:
        """Set distance/toll on an existing booking. False when the id does not resolve."""

        raise NotImplementedError
