# =============================================================================
# gazetteer/errors.py  —  Error taxonomy for tool calls
# =============================================================================
#
# Every failure a caller can see belongs to one of three codes:
#
#   InvalidParams   bad input (detected before any network call), or an
#                   upstream 404 on an id-addressed lookup
#   MethodNotFound  unknown tool name
#   InternalError   transport failures, non-404 HTTP errors, unparseable
#                   payloads
#
# Missing fields inside a payload are NOT errors; they only remove sections
# from the rendered report.
# =============================================================================

from enum import Enum
from typing import Optional


class ErrorCode(str, Enum):
    """Error codes of the tool-call error envelope."""

    INVALID_PARAMS = "InvalidParams"
    METHOD_NOT_FOUND = "MethodNotFound"
    INTERNAL_ERROR = "InternalError"


class GazetteerError(Exception):
    """Base class for errors surfaced to the tool caller."""

    code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def envelope(self) -> dict:
        """The error envelope: a code plus a human-readable message."""
        return {"code": self.code.value, "message": self.message}


class InvalidParamsError(GazetteerError):
    code = ErrorCode.INVALID_PARAMS


class MethodNotFoundError(GazetteerError):
    code = ErrorCode.METHOD_NOT_FOUND


class InternalError(GazetteerError):
    code = ErrorCode.INTERNAL_ERROR


class UpstreamError(Exception):
    """Raised by the HTTP layer when the gazetteer service call fails.

    ``status`` is the HTTP status code when the service answered with an
    error response, and None for timeouts and connection failures.
    """

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status
