from __future__ import annotations

import dataclasses
import logging
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from functools import wraps
from typing import Any

from flask import Flask, jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_HIDDEN_FIELDS = {"password_hash"}

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (ConflictError, 409),
)


def to_json(value: Any) -> Any:
    """Convert domain objects (dataclasses, Decimal, dates, enums) into JSON-safe values."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            f.name: to_json(getattr(value, f.name))
            for f in dataclasses.fields(value)
            if f.name not in _HIDDEN_FIELDS
        }
    if isinstance(value, dict):
        return {k: to_json(v) for k, v in value.items() if k not in _HIDDEN_FIELDS}
    if isinstance(value, (list, tuple)):
        return [to_json(v) for v in value]
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


def json_body() -> dict:
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body


def current_employee_id() -> int:
    return int(session["employee_id"])


def current_role() -> Role:
    return Role(session["role"])


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "employee_id" not in session:
            return jsonify({"message": "No session, not authorized"}), 401
        return view(*args, **kwargs)

    return wrapper


def roles_required(*roles: Role):
    allowed = {r.value for r in roles}

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "employee_id" not in session:
                return jsonify({"message": "No session, not authorized"}), 401
            if session.get("role") not in allowed:
                return jsonify({"message": f"User role {session.get('role')} is not authorized"}), 403
            return view(*args, **kwargs)

        return wrapper

    return decorator


def register_error_handlers(app: Flask) -> None:
    def _make_handler(status: int):
        def handler(error):
            return jsonify({"message": str(error)}), status

        return handler

    for error_cls, status in _STATUS_BY_ERROR:
        app.register_error_handler(error_cls, _make_handler(status))

    @app.errorhandler(Exception)
    def unexpected_error(error):
        # HTTPExceptions (404 for unknown routes, 405, ...) keep their own status.
        code = getattr(error, "code", None)
        if isinstance(code, int) and 400 <= code < 500:
            return jsonify({"message": getattr(error, "description", str(error))}), code
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        if app.config.get("DEBUG"):
            return jsonify({"message": f"Internal server error: {error}"}), 500
        return jsonify({"message": "Internal server error"}), 500
