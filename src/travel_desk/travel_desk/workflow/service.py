from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Callable, Mapping, Optional, Union

from ..bookings.model import DriverBooking, NewDriverBooking
from ..bookings.repository import BookingRepository
from ..common.datetime_utils import DateRange, now_local
from ..common.validators import optional_text, parse_optional_float
from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import RequestKind, RequestStatus, Role
from ..core.exceptions import AuthorizationError, InvalidTransitionError, NotFoundError
from ..travel_requests.model import NewTravelRequest, TravelRequest
from ..travel_requests.repository import TravelRequestRepository
from ..users.gate import AuthContext
from .schemas import parse_payload
from .transitions import APPROVER_ROLE, CREATOR_ROLE, parse_decision, transition

logger = logging.getLogger(__name__)

Record = Union[TravelRequest, DriverBooking]


class WorkflowService:
    """Travel request workflow: dashboard queries, submissions and decisions.

    Every call takes the AuthContext issued by the session gate; the service
    never reads roles from request data.
    """

    def __init__(
        self,
        travel_requests: TravelRequestRepository,
        bookings: BookingRepository,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._requests = travel_requests
        self._bookings = bookings
        self._clock = clock

    def today(self) -> date:
        return self._clock().date()

    @staticmethod
    def _require_role(ctx: AuthContext, role: Role) -> None:
        if ctx.role != role:
            raise AuthorizationError("You are not allowed to perform this action")

    # -------- Queries --------
    def list_for_role(self, ctx: AuthContext, date_range: Optional[DateRange] = None) -> dict:
        """Dashboard data for the acting user; an empty result is never an error."""
        today_range = DateRange.for_day(self.today())
        date_range = date_range or today_range

        if ctx.role == Role.EMPLOYEE:
            return {
                "date_range": date_range,
                "requests": self._requests.list(
                    RequestKind.EMPLOYEE_TO_HOD,
                    requester_id=ctx.user_id,
                    date_range=date_range,
                    limit=DEFAULT_LIST_LIMIT,
                ),
            }

        if ctx.role == Role.HOD:
            return {
                "date_range": date_range,
                "received": self._requests.list(
                    RequestKind.EMPLOYEE_TO_HOD,
                    approver_id=ctx.user_id,
                    status=RequestStatus.PENDING,
                    date_range=date_range,
                    limit=DEFAULT_LIST_LIMIT,
                ),
                "sent": self._requests.list(
                    RequestKind.HOD_TO_ADMIN,
                    requester_id=ctx.user_id,
                    date_range=date_range,
                    limit=DEFAULT_LIST_LIMIT,
                ),
                # Not scoped to the HOD: every HOD sees all bookings in range.
                "bookings": self._bookings.list(date_range=date_range, limit=DEFAULT_LIST_LIMIT),
            }

        if ctx.role == Role.ADMIN:
            return {
                "date_range": date_range,
                "requests": self._requests.list(
                    RequestKind.HOD_TO_ADMIN,
                    date_range=date_range,
                    limit=DEFAULT_LIST_LIMIT,
                ),
            }

        if ctx.role == Role.DRIVER:
            # Drivers always see today only.
            return {
                "date_range": today_range,
                "bookings": self._bookings.list(
                    driver_id=ctx.user_id,
                    date_range=today_range,
                    limit=DEFAULT_LIST_LIMIT,
                ),
            }

        raise AuthorizationError("Unknown role")

    def driver_history(self, ctx: AuthContext):
        self._require_role(ctx, Role.DRIVER)
        return self._bookings.list(driver_id=ctx.user_id, limit=DEFAULT_LIST_LIMIT)

    def list_admin_requests(self, ctx: AuthContext):
        self._require_role(ctx, Role.ADMIN)
        return self._requests.list(RequestKind.HOD_TO_ADMIN, limit=DEFAULT_LIST_LIMIT)

    # -------- Submissions --------
    def create_request(self, ctx: AuthContext, kind: RequestKind, payload: Mapping[str, Any]) -> Record:
        self._require_role(ctx, CREATOR_ROLE[kind])

        payload = dict(payload)
        self._bind_requester(ctx, kind, payload)
        parsed = parse_payload(kind, payload, today=self.today())

        if kind == RequestKind.DRIVER_BOOKING:
            booking_id = self._bookings.create(
                NewDriverBooking(created_by=ctx.user_id, extra=parsed.extra, **parsed.fields)
            )
            logger.info("Driver booking %s created by %s for driver %s", booking_id, ctx.user_id, parsed.fields["driver_id"])
            created = self._bookings.get(booking_id)
        else:
            request_id = self._requests.create(NewTravelRequest(kind=kind, extra=parsed.extra, **parsed.fields))
            logger.info("%s request %s submitted by %s", kind.value, request_id, ctx.user_id)
            created = self._requests.get(kind, request_id)

        if created is None:
            raise NotFoundError("Created record could not be read back")
        return created

    @staticmethod
    def _bind_requester(ctx: AuthContext, kind: RequestKind, payload: dict) -> None:
        key = {
            RequestKind.EMPLOYEE_TO_HOD: "employeeCode",
            RequestKind.HOD_TO_ADMIN: "hodId",
        }.get(kind)
        if key is None:
            return
        given = optional_text(payload.get(key))
        if given is None:
            payload[key] = ctx.user_id
        elif given != ctx.user_id:
            raise AuthorizationError("You can only submit requests on your own behalf")

    # -------- Decisions --------
    def apply_decision(self, ctx: AuthContext, kind: RequestKind, request_id: int, decision: Any) -> TravelRequest:
        """Move a pending request to approved/rejected.

        Raises NotFoundError (no write happens) or InvalidTransitionError when
        the request is no longer pending, including when a concurrent decision
        won the conditional update.
        """
        self._require_role(ctx, APPROVER_ROLE[kind])
        target = parse_decision(decision)

        current = self._requests.get(kind, int(request_id))
        if current is None:
            raise NotFoundError("Request not found")
        transition(current.status, target)

        won = self._requests.decide(
            kind,
            request_id=int(request_id),
            status=target,
            decided_by=ctx.user_id,
            expected=RequestStatus.PENDING,
        )
        if not won:
            latest = self._requests.get(kind, int(request_id))
            if latest is None:
                raise NotFoundError("Request not found")
            logger.warning("Decision on %s %s lost to a concurrent update", kind.value, request_id)
            raise InvalidTransitionError(f"Request is already {latest.status.value}")

        logger.info("%s request %s %s by %s", kind.value, request_id, target.value, ctx.user_id)
        updated = self._requests.get(kind, int(request_id))
        if updated is None:
            raise NotFoundError("Request not found")
        return updated

    # -------- Driver trip details --------
    def update_driver_booking(
        self,
        ctx: AuthContext,
        booking_id: int,
        *,
        distance_traveled: Any,
        toll_usage: Any,
    ) -> DriverBooking:
        distance = parse_optional_float(distance_traveled, "distanceTraveled")
        toll = optional_text(toll_usage)

        booking = self._bookings.get(int(booking_id))
        if booking is None:
            raise NotFoundError("Booking not found")
        if ctx.role == Role.DRIVER and booking.driver_id != ctx.user_id:
            raise AuthorizationError("This booking is assigned to another driver")

        if not self._bookings.update_trip(int(booking_id), distance_traveled=distance, toll_usage=toll):
            raise NotFoundError("Booking not found")
        logger.info("Booking %s updated by %s (distance=%s, toll=%s)", booking_id, ctx.user_id, distance, toll)

        updated = self._bookings.get(int(booking_id))
        if updated is None:
            raise NotFoundError("Booking not found")
        return updated
