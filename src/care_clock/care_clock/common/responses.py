from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify, request

from ..core.exceptions import (
    AuthorizationError,
    ConflictError,
    DomainError,
    NotFoundError,
    OutsidePerimeterError,
)

logger = logging.getLogger(__name__)


def ok(status: int = 200, **payload):
    return jsonify({"success": True, **payload}), status


def fail(message: str, status: int, **payload):
    return jsonify({"success": False, "error": message, **payload}), status


def error_status(exc: DomainError) -> int:
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, ConflictError):
        return 409
    if isinstance(exc, (AuthorizationError, OutsidePerimeterError)):
        return 403
    return 400


def json_api(view):
    """Translate domain errors into the JSON error envelope."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except OutsidePerimeterError as e:
            return fail(str(e), 403, code="OUTSIDE_PERIMETER", distanceMeters=round(e.distance_meters, 1))
        except DomainError as e:
            logger.warning("%s %s rejected: %s", request.method, request.path, e)
            return fail(str(e), error_status(e))
        except ValueError as e:
            # bad query-string dates and similar parsing problems
            return fail(f"Invalid request: {e}", 400)
        except Exception:
            logger.exception("Unhandled error on %s %s", request.method, request.path)
            return fail("Internal server error", 500)

    return wrapper


def json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}
