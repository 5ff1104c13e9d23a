from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from ..common.datetime_utils import DateRange
from ..core.enums import RequestKind, RequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import build_where, db_cursor, dump_extra, fetchall, fetchone, load_extra
from .model import NewTravelRequest, TravelRequest
from .repository import TravelRequestRepository


@dataclass(frozen=True)
class _Table:
    name: str
    requester_col: str
    requester_name_col: str
    approver_col: Optional[str]


_TABLES = {
    RequestKind.EMPLOYEE_TO_HOD: _Table("emp_travel_requests", "employee_code", "employee_name", "hod_id"),
    RequestKind.HOD_TO_ADMIN: _Table("hod_travel_requests", "hod_id", "hod_name", None),
}

_TRIP_COLUMNS = (
    "department",
    "date_of_request",
    "travel_date",
    "return_date",
    "origin",
    "destination",
    "purpose",
    "mode_of_travel",
    "remarks",
)


def _table(kind: RequestKind) -> _Table:
    try:
        return _TABLES[kind]
    except KeyError:
        raise ValueError(f"Not a travel request kind: {kind!r}")


def _select_columns(t: _Table) -> str:
    cols = ["request_id", f"{t.requester_col} AS requester_id", f"{t.requester_name_col} AS requester_name"]
    cols.append(f"{t.approver_col} AS approver_id" if t.approver_col else "NULL AS approver_id")
    cols.extend(_TRIP_COLUMNS)
    cols.extend(["status", "decision", "decided_by", "decided_at", "extra", "created_at"])
    return ", ".join(cols)


def _to_request(kind: RequestKind, r: dict) -> TravelRequest:
    return TravelRequest(
        kind=kind,
        request_id=int(r["request_id"]),
        requester_id=r["requester_id"],
        approver_id=r.get("approver_id"),
        requester_name=r.get("requester_name"),
        department=r.get("department"),
        date_of_request=r["date_of_request"],
        travel_date=r.get("travel_date"),
        return_date=r.get("return_date"),
        origin=r.get("origin"),
        destination=r.get("destination"),
        purpose=r.get("purpose"),
        mode_of_travel=r.get("mode_of_travel"),
        remarks=r.get("remarks"),
        status=RequestStatus(r["status"]),
        decision=RequestStatus(r["decision"]) if r.get("decision") else None,
        decided_by=r.get("decided_by"),
        decided_at=r.get("decided_at"),
        extra=load_extra(r.get("extra")),
        created_at=r.get("created_at"),
    )


class MySQLTravelRequestRepository(TravelRequestRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, request: NewTravelRequest) -> int:
        t = _table(request.kind)
        columns = [t.requester_col, t.requester_name_col]
        values: list[object] = [request.requester_id, request.requester_name]
        if t.approver_col:
            columns.append(t.approver_col)
            values.append(request.approver_id)
        columns.extend(_TRIP_COLUMNS)
        values.extend(getattr(request, c) for c in _TRIP_COLUMNS)
        columns.extend(["status", "extra"])
        values.extend([RequestStatus.PENDING.value, dump_extra(request.extra)])

        placeholders = ",".join(["%s"] * len(columns))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"INSERT INTO {t.name}({', '.join(columns)}) VALUES({placeholders})",
                tuple(values),
            )
            return int(cur.lastrowid)

    def get(self, kind: RequestKind, request_id: int) -> Optional[TravelRequest]:
        t = _table(kind)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_select_columns(t)} FROM {t.name} WHERE request_id=%s",
                (int(request_id),),
            )
            r = fetchone(cur)
            return _to_request(kind, r) if r else None

    def list(
        self,
        kind: RequestKind,
        *,
        requester_id: Optional[str] = None,
        approver_id: Optional[str] = None,
        status: Optional[RequestStatus] = None,
        date_range: Optional[DateRange] = None,
        limit: int = 500,
    ) -> Sequence[TravelRequest]:
        t = _table(kind)
        clauses: list[str] = []
        params: list[object] = []

        if requester_id is not None:
            clauses.append(f"{t.requester_col}=%s")
            params.append(requester_id)
        if approver_id is not None:
            if not t.approver_col:
                return []
            clauses.append(f"{t.approver_col}=%s")
            params.append(approver_id)
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)
        if date_range is not None:
            clauses.append("date_of_request >= %s AND date_of_request < %s")
            params.extend([date_range.start, date_range.stop])

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_select_columns(t)}
                FROM {t.name}
                WHERE {build_where(clauses)}
                ORDER BY date_of_request DESC, request_id DESC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            return [_to_request(kind, r) for r in fetchall(cur)]

    def decide(
        self,
        kind: RequestKind,
        *,
        request_id: int,
        status: RequestStatus,
        decided_by: str,
        expected: RequestStatus = RequestStatus.PENDING,
    ) -> bool:
        t = _table(kind)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                UPDATE {t.name}
                SET status=%s, decision=%s, decided_by=%s, decided_at=NOW()
                WHERE request_id=%s AND status=%s
                """,
                (status.value, status.value, decided_by, int(request_id), expected.value),
            )
            return cur.rowcount > 0
