import logging

from django.db.models import ProtectedError
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

error_log = logging.getLogger("evaluation_app.errors")


# ── Domain errors ────────────────────────────────────────────────────────
class CapacityExceeded(APIException):
    """A criterion weight would push its type past 100%."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_code = "capacity_exceeded"

    def __init__(self, remaining, *, excluding_row=False):
        self.remaining = float(remaining)
        label = "Remaining (excluding this row)" if excluding_row else "Remaining"
        super().__init__(
            f"Weight exceeds remaining allocation for this type. {label}: {self.remaining:.2f}"
        )


class ScoreInputError(APIException):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, value, key=None):
        self.value = value
        self.key = key
        super().__init__(self.describe())

    def describe(self):
        raise NotImplementedError


class InvalidLevel(ScoreInputError):
    default_code = "invalid_level"

    def describe(self):
        where = f" for {self.key}" if self.key else ""
        return f"Invalid level score{where}: {self.value}. Must be between 1 and 4."


class InvalidTeamScore(ScoreInputError):
    default_code = "invalid_team_score"

    def describe(self):
        return f"Invalid team evaluation score: {self.value}. Must be between 1 and 5."


class Conflict(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Resource is still referenced."
    default_code = "conflict"


# ── Top-level handler / error sink ───────────────────────────────────────
def _first_message(data):
    if isinstance(data, dict):
        for value in data.values():
            return _first_message(value)
    if isinstance(data, (list, tuple)):
        return _first_message(data[0]) if data else ""
    return str(data)


def api_exception_handler(exc, context):
    """
    Normalise every error body to ``{"error": ...}`` and log it once.

    Anything DRF does not recognise is reported as a generic 500 so storage
    or programming errors never leak to the client.
    """
    request = context.get("request")
    log_extra = {
        "method": getattr(request, "method", "-"),
        "path": getattr(request, "path", "-"),
    }

    if isinstance(exc, ProtectedError):
        exc = Conflict("Cannot delete: record is still referenced by other rows.")

    response = exception_handler(exc, context)
    if response is None:
        error_log.error(
            "Unhandled %s: %s", type(exc).__name__, exc,
            exc_info=(type(exc), exc, exc.__traceback__),
            extra={**log_extra, "status": 500},
        )
        return Response(
            {"status": "error", "message": "Internal server error"},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    data = response.data
    if isinstance(data, dict) and set(data) == {"detail"}:
        body = {"error": str(data["detail"])}
    else:
        body = {"error": _first_message(data), "details": data}

    if isinstance(exc, CapacityExceeded):
        body["remaining"] = exc.remaining
    elif isinstance(exc, ScoreInputError):
        body["value"] = exc.value

    error_log.warning(body["error"], extra={**log_extra, "status": response.status_code})
    response.data = body
    return response
