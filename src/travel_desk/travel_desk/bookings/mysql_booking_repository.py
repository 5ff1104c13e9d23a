from __future__ import annotations

from typing import Optional, Sequence

from ..common.datetime_utils import DateRange
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_where, db_cursor, dump_extra, fetchall, fetchone, load_extra
from .model import DriverBooking, NewDriverBooking
from .repository import BookingRepository

_COLUMNS = """
    booking_id, driver_id, booking_date, passenger_name, pickup_location, drop_location,
    pickup_time, purpose, distance_traveled, toll_usage, created_by, extra, created_at
"""


def _to_booking(r: dict) -> DriverBooking:
    distance = r.get("distance_traveled")
    return DriverBooking(
        booking_id=int(r["booking_id"]),
        driver_id=r["driver_id"],
        date=r["booking_date"],
        passenger_name=r.get("passenger_name"),
        pickup_location=r.get("pickup_location"),
        drop_location=r.get("drop_location"),
        pickup_time=r.get("pickup_time"),
        purpose=r.get("purpose"),
        distance_traveled=float(distance) if distance is not None else None,
        toll_usage=r.get("toll_usage"),
        created_by=r.get("created_by"),
        extra=load_extra(r.get("extra")),
        created_at=r.get("created_at"),
    )


class MySQLBookingRepository(BookingRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, booking: NewDriverBooking) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO driver_bookings(
                    driver_id, booking_date, passenger_name, pickup_location, drop_location,
                    pickup_time, purpose, distance_traveled, toll_usage, created_by, extra
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    booking.driver_id,
                    booking.date,
                    booking.passenger_name,
                    booking.pickup_location,
                    booking.drop_location,
                    booking.pickup_time,
                    booking.purpose,
                    booking.distance_traveled,
                    booking.toll_usage,
                    booking.created_by,
                    dump_extra(booking.extra),
                ),
            )
            return int(cur.lastrowid)

    def get(self, booking_id: int) -> Optional[DriverBooking]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM driver_bookings WHERE booking_id=%s", (int(booking_id),))
            r = fetchone(cur)
            return _to_booking(r) if r else None

    def list(
        self,
        *,
        driver_id: Optional[str] = None,
        date_range: Optional[DateRange] = None,
        limit: int = 500,
    ) -> Sequence[DriverBooking]:
        clauses: list[str] = []
        params: list[object] = []

        if driver_id is not None:
            clauses.append("driver_id=%s")
            params.append(driver_id)
        if date_range is not None:
            clauses.append("booking_date >= %s AND booking_date < %s")
            params.extend([date_range.start, date_range.stop])

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM driver_bookings
                WHERE {build_where(clauses)}
                ORDER BY booking_date DESC, booking_id DESC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            return [_to_booking(r) for r in fetchall(cur)]

    def update_trip(
        self,
        booking_id: int,
        *,
        distance_traveled: Optional[float],
        toll_usage: Optional[str],
    ) -> bool:
        assignments = []
        params: list = []
        if distance_traveled is not None:
            assignments.append("distance_traveled=%s")
            params.append(distance_traveled)
        if toll_usage is not None:
            assignments.append("toll_usage=%s")
            params.append(toll_usage)
        if not assignments:
            return self.get(int(booking_id)) is not None

        params.append(int(booking_id))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE driver_bookings SET {', '.join(assignments)} WHERE booking_id=%s",
                tuple(params),
            )
            return cur.rowcount > 0
