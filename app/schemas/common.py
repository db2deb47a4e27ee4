"""Common Pydantic schemas and error helpers used across the application."""

from typing import Any

from fastapi import HTTPException, status
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response format."""

    success: bool = False
    error: str
    code: str | None = None


# Error bodies documented on every /api route
ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
}


def raise_api_error(
    code: str,
    message: str,
    status_code: int = status.HTTP_400_BAD_REQUEST,
    extra: dict[str, Any] | None = None,
) -> None:
    """
    Raise an HTTPException with standardized error format.

    The application's exception handler renders ``detail`` as the body,
    so clients receive ``{"success": false, "error": ..., "code": ...}``.

    Args:
        code: Machine-readable error code (e.g., "DOMAIN_NOT_FOUND")
        message: Human-readable error message suitable for display
        status_code: HTTP status code (default: 400)
        extra: Optional additional fields merged into the body
    """
    detail: dict[str, Any] = {
        "success": False,
        "error": message,
        "code": code,
    }
    if extra:
        detail.update(extra)
    raise HTTPException(status_code=status_code, detail=detail)
