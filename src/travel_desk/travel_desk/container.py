from __future__ import annotations

from dataclasses import dataclass

from .bookings.mysql_booking_repository import MySQLBookingRepository
from .bookings.repository import BookingRepository
from .database.connection import DBConfig, DatabaseConnection
from .travel_requests.mysql_travel_request_repository import MySQLTravelRequestRepository
from .travel_requests.repository import TravelRequestRepository
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService
from .workflow.service import WorkflowService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    bookings_repo: BookingRepository
    travel_requests_repo: TravelRequestRepository

    auth_service: AuthService
    user_service: UserService
    workflow_service: WorkflowService


def wire(
    *,
    users_repo: UserRepository,
    bookings_repo: BookingRepository,
    travel_requests_repo: TravelRequestRepository,
    **workflow_kwargs,
) -> Container:
    return Container(
        users_repo=users_repo,
        bookings_repo=bookings_repo,
        travel_requests_repo=travel_requests_repo,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        workflow_service=WorkflowService(travel_requests_repo, bookings_repo, **workflow_kwargs),
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return wire(
        users_repo=MySQLUserRepository(conn),
        bookings_repo=MySQLBookingRepository(conn),
        travel_requests_repo=MySQLTravelRequestRepository(conn),
    )
