"""JSON request/response helpers shared by the feature controllers."""
from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify, request

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def error_response(message: str, status: int):
    return jsonify({"message": message}), status


def api_view(view):
    """Map domain exceptions raised by a view to JSON error responses."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except ConflictError as e:
            return jsonify({e.field: str(e)}), 400
        except ValidationError as e:
            return error_response(str(e), 400)
        except AuthenticationError as e:
            return error_response(str(e), 401)
        except AuthorizationError as e:
            return error_response(str(e), 403)
        except NotFoundError as e:
            return error_response(str(e), 404)
        except Exception as e:
            logger.exception("Unhandled error on %s %s", request.method, request.path)
            return jsonify({"message": "Server error", "error": str(e)}), 500

    return wrapper
