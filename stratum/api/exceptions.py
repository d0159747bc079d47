"""API exception hierarchy.

All API exceptions inherit from StratumAPIError, which carries the
status_code and error_code used by the global exception handler.
"""

from stratum.api.models.errors import ErrorCode


class StratumAPIError(Exception):
    """Base exception for all API errors."""

    status_code: int = 500
    error_code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class SettingNotFoundError(StratumAPIError):
    """Raised when no provider holds the requested setting."""

    status_code = 404
    error_code = ErrorCode.SETTING_NOT_FOUND


class SettingNotWritableError(StratumAPIError):
    """Raised when every provider refused a write."""

    status_code = 409
    error_code = ErrorCode.SETTING_NOT_WRITABLE
