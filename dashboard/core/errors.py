"""
Domain-specific exceptions for the Transaction Dashboard API.

These exceptions are raised by the backend client and the query layer and
are mapped to HTTP status codes in the API layer.
"""

from typing import Any


class DashboardError(Exception):
    """Base exception for all dashboard domain errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(DashboardError):
    """
    Raised when user-supplied input is rejected before any request is issued.

    Examples:
    - Hour outside 0-23 or minute outside 0-59
    - Date not in YYYY-MM-DD form
    - Range start after range end

    HTTP Status: 400 Bad Request
    """

    pass


class NotFoundError(DashboardError):
    """
    Raised when neither the transaction record nor its history exists.

    HTTP Status: 404 Not Found
    """

    pass


class MalformedResponseError(DashboardError):
    """
    Raised when the backend answers with a body that cannot be decoded
    into the expected JSON shape.

    HTTP Status: 502 Bad Gateway
    """

    pass


class BackendUnavailableError(DashboardError):
    """
    Raised on transport failures talking to the backend.

    Examples:
    - Connection refused or DNS failure
    - Request timeout
    - Non-2xx response other than 404

    HTTP Status: 503 Service Unavailable
    """

    pass


ERROR_STATUS_MAP = {
    ValidationError: 400,
    NotFoundError: 404,
    MalformedResponseError: 502,
    BackendUnavailableError: 503,
}


def get_status_code(error: Exception) -> int:
    """
    Get the HTTP status code for a given exception.

    Args:
        error: The exception instance

    Returns:
        HTTP status code (defaults to 500 for unknown errors)
    """
    return ERROR_STATUS_MAP.get(type(error), 500)
