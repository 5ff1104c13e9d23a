"""Explicit payload schemas for each request kind.

Form and JSON payloads use the public camelCase names. Known names are parsed
into typed attributes; anything else lands in the `extra` extension map.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Callable, Mapping, Optional

from ..common.datetime_utils import parse_iso_date
from ..common.validators import optional_text, parse_optional_float
from ..core.enums import RequestKind
from ..core.exceptions import ValidationError

logger = logging.getLogger(__name__)

# Lifecycle fields owned by the workflow, never taken from a payload.
RESERVED_KEYS = frozenset({"id", "_id", "status", "decision", "decidedBy", "decidedAt", "createdAt"})


def _text(value: Any, label: str) -> Optional[str]:
    return optional_text(value)


def _date(value: Any, label: str) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = optional_text(value)
    if text is None:
        return None
    try:
        if len(text) == 10:
            return parse_iso_date(text)
        # full ISO timestamps from JSON clients
        if text[10:11] not in ("T", " "):
            raise ValueError(text)
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        return datetime.fromisoformat(text).date()
    except ValueError:
        raise ValidationError(f"{label} must be a date (YYYY-MM-DD)")


def _number(value: Any, label: str) -> Optional[float]:
    return parse_optional_float(value, label)


@dataclass(frozen=True)
class FieldSpec:
    key: str
    attr: str
    parse: Callable[[Any, str], Any] = _text
    required: bool = False


_TRIP_FIELDS = (
    FieldSpec("department", "department"),
    FieldSpec("travelDate", "travel_date", _date),
    FieldSpec("returnDate", "return_date", _date),
    FieldSpec("origin", "origin"),
    FieldSpec("destination", "destination"),
    FieldSpec("purpose", "purpose"),
    FieldSpec("modeOfTravel", "mode_of_travel"),
    FieldSpec("remarks", "remarks"),
)

SCHEMAS: dict[RequestKind, tuple[FieldSpec, ...]] = {
    RequestKind.EMPLOYEE_TO_HOD: (
        FieldSpec("employeeCode", "requester_id", required=True),
        FieldSpec("employeeName", "requester_name"),
        FieldSpec("hodId", "approver_id", required=True),
        FieldSpec("dateOfRequest", "date_of_request", _date),
    )
    + _TRIP_FIELDS,
    RequestKind.HOD_TO_ADMIN: (
        FieldSpec("hodId", "requester_id", required=True),
        FieldSpec("hodName", "requester_name"),
        FieldSpec("dateOfRequest", "date_of_request", _date),
    )
    + _TRIP_FIELDS,
    RequestKind.DRIVER_BOOKING: (
        FieldSpec("driverId", "driver_id", required=True),
        FieldSpec("date", "date", _date),
        FieldSpec("passengerName", "passenger_name"),
        FieldSpec("pickupLocation", "pickup_location"),
        FieldSpec("dropLocation", "drop_location"),
        FieldSpec("pickupTime", "pickup_time"),
        FieldSpec("purpose", "purpose"),
        FieldSpec("distanceTraveled", "distance_traveled", _number),
        FieldSpec("tollUsage", "toll_usage"),
    ),
}

# Field holding the record's calendar date; defaults to today when omitted.
DATE_ATTR = {
    RequestKind.EMPLOYEE_TO_HOD: "date_of_request",
    RequestKind.HOD_TO_ADMIN: "date_of_request",
    RequestKind.DRIVER_BOOKING: "date",
}


@dataclass(frozen=True)
class ParsedPayload:
    fields: dict
    extra: dict


def parse_payload(kind: RequestKind, payload: Mapping[str, Any], *, today: date) -> ParsedPayload:
    specs = SCHEMAS[kind]
    known = {s.key for s in specs}
    fields: dict[str, Any] = {}

    for spec in specs:
        value = spec.parse(payload.get(spec.key), spec.key)
        if value is None and spec.required:
            raise ValidationError(f"{spec.key} is required")
        fields[spec.attr] = value

    date_attr = DATE_ATTR[kind]
    if fields.get(date_attr) is None:
        fields[date_attr] = today

    extra: dict[str, Any] = {}
    for key, value in payload.items():
        if key in known:
            continue
        if key in RESERVED_KEYS:
            logger.debug("Ignoring reserved field %r in %s payload", key, kind.value)
            continue
        extra[key] = value

    return ParsedPayload(fields=fields, extra=extra)
