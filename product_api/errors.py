"""
Error taxonomy and the terminal error translator.

Handlers and middleware raise these errors; ``translate_error`` is the only
place that decides what the client sees. Operational errors reveal their
message, anything else is logged and answered with a generic 500.
"""

import logging
from typing import Any, Dict, Tuple

logger = logging.getLogger(__name__)

HTTP_400 = 400
HTTP_404 = 404
HTTP_500 = 500


class OperationalError(Exception):
    """Anticipated failure that is safe to report to the caller."""

    is_operational = True

    def __init__(self, message: str, status_code: int = HTTP_400) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)

    @property
    def status(self) -> str:
        return "fail" if 400 <= self.status_code < 500 else "error"


class NotFoundError(OperationalError):
    """No record matches the requested id or filter."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, HTTP_404)


class ValidationError(OperationalError):
    """Client input was rejected."""

    def __init__(self, message: str = "Invalid Input") -> None:
        super().__init__(message, HTTP_400)


def error_body(status: str, message: str) -> Dict[str, Any]:
    return {"status": status, "message": message}


def translate_error(exc: BaseException) -> Tuple[int, Dict[str, Any]]:
    """Map a raised error to the status code and JSON body sent to the client."""
    if getattr(exc, "is_operational", False):
        status_code = getattr(exc, "status_code", None) or HTTP_500
        status = getattr(exc, "status", None) or "error"
        logger.warning("Operational error (%d): %s", status_code, exc)
        return status_code, error_body(status, str(exc))

    logger.error("Unexpected error: %s", type(exc).__name__, exc_info=exc)
    return HTTP_500, {"message": "Error"}
