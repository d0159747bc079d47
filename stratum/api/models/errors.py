"""Error response models for consistent API error handling."""

from enum import Enum

from pydantic import BaseModel


class ErrorCode(str, Enum):
    """Standardized error codes for API responses."""

    INVALID_REQUEST = "INVALID_REQUEST"
    """Request validation failed (malformed JSON, missing fields, etc.)."""

    PROVIDER_NOT_FOUND = "PROVIDER_NOT_FOUND"
    """The named provider is not part of the chain."""

    SETTING_NOT_FOUND = "SETTING_NOT_FOUND"
    """No provider holds the requested setting."""

    SETTING_NOT_WRITABLE = "SETTING_NOT_WRITABLE"
    """No provider in the chain accepted the write."""

    PROVIDER_UNAVAILABLE = "PROVIDER_UNAVAILABLE"
    """The named provider failed to serve the request."""

    INTERNAL_ERROR = "INTERNAL_ERROR"
    """An unexpected internal error occurred."""


class ErrorDetail(BaseModel):
    """Field-level error information for validation failures."""

    field: str | None = None
    message: str


class ErrorBody(BaseModel):
    """Error body content for API error responses."""

    code: ErrorCode
    message: str
    details: list[ErrorDetail] | None = None


class ErrorResponse(BaseModel):
    """Standard error response format for all API errors.

    Example:
        {
            "error": {
                "code": "SETTING_NOT_FOUND",
                "message": "Setting 'dark_mode' not found in domain 'default'"
            }
        }
    """

    error: ErrorBody
