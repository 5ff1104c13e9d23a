from __future__ import annotations

from flask import jsonify, request

from ..core.exceptions import AuthorizationError, InvalidTransitionError, NotFoundError, ValidationError

_STATUS = {
    ValidationError: 400,
    AuthorizationError: 403,
    NotFoundError: 404,
    InvalidTransitionError: 409,
}


def wants_json() -> bool:
    return request.is_json


def request_payload() -> dict:
    """Body as a flat dict, from JSON or form encoding."""
    if request.is_json:
        data = request.get_json(silent=True)
        return dict(data) if isinstance(data, dict) else {}
    return request.form.to_dict()


def status_for(error: Exception) -> int:
    for exc_type, status in _STATUS.items():
        if isinstance(error, exc_type):
            return status
    return 500


def json_error(error: Exception):
    return jsonify({"error": str(error)}), status_for(error)
