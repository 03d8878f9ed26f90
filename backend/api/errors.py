"""Error taxonomy shared by the CRUD engine, the upload gateway and the views.

Every failure that reaches a view is one of these kinds; the view layer maps
the kind to an HTTP status so two routes with the same failure always answer
the same way.
"""

import json
import logging
from functools import wraps

from django.http import JsonResponse

logger = logging.getLogger(__name__)


class ApiError(Exception):
    status = 500
    default_message = "Internal server error"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationFailed(ApiError):
    status = 400
    default_message = "Invalid request"


class Conflict(ApiError):
    status = 400
    default_message = "Record already exists"


class Unauthorized(ApiError):
    status = 401
    default_message = "Invalid email or password"


class NotFound(ApiError):
    status = 404
    default_message = "Not found"


class StorageFailure(ApiError):
    status = 500
    default_message = "Storage operation failed"


class InternalError(ApiError):
    status = 500


def error_response(message: str, status: int) -> JsonResponse:
    return JsonResponse({"success": False, "message": message}, status=status)


def parse_json_body(request) -> dict:
    """Decode a JSON object body; an empty body is an empty payload."""
    if not request.body:
        return {}
    try:
        data = json.loads(request.body)
    except (ValueError, UnicodeDecodeError) as e:
        raise ValidationFailed(f"Malformed JSON body: {e}") from e
    if not isinstance(data, dict):
        raise ValidationFailed("Request body must be a JSON object")
    return data


def api_view(*methods):
    """Restrict a view to `methods` and turn raised errors into JSON envelopes."""
    allowed = {m.upper() for m in methods}

    def decorator(f):
        @wraps(f)
        def wrapper(request, *args, **kwargs):
            if request.method not in allowed:
                return error_response("Method not allowed", 405)
            try:
                return f(request, *args, **kwargs)
            except ApiError as e:
                level = logging.ERROR if e.status >= 500 else logging.WARNING
                logger.log(level, "[api] %s %s → %s %s", request.method, request.path,
                           e.status, e.message)
                return error_response(e.message, e.status)
            except Exception as e:
                logger.error("[api] %s %s failed: %s", request.method, request.path, e,
                             exc_info=True)
                return error_response(InternalError.default_message, 500)
        return wrapper
    return decorator
