"""Translate adapter errors into user-facing UseCaseError instances."""

from __future__ import annotations

from typing import Optional

from ragdesk.adapters.api_errors import ApiConnectionError, ApiError, ApiTimeoutError
from ragdesk.domain.metrics_normalizer import MetricsPayloadError
from ragdesk.domain.ports import UseCaseError


def map_api_error(
    exc: Exception,
    *,
    default_code: str,
    default_message: Optional[str] = None,
) -> UseCaseError:
    """Map adapter exceptions to UseCaseError codes.

    The message is the service-supplied error text when the response carried
    one, otherwise the generic transport message.
    """
    if isinstance(exc, UseCaseError):
        return exc
    if isinstance(exc, ApiTimeoutError):
        return UseCaseError("REQUEST_TIMEOUT", str(exc) or "Request timed out.")
    if isinstance(exc, ApiConnectionError):
        return UseCaseError("SERVICE_UNREACHABLE", str(exc) or "Service unreachable.")
    if isinstance(exc, ApiError):
        return UseCaseError(default_code, exc.server_message or str(exc))
    if isinstance(exc, MetricsPayloadError):
        return UseCaseError("INVALID_METRICS", f"Invalid benchmark response ({exc})")

    message = str(exc) or default_message or "Unexpected error."
    return UseCaseError(default_code, message)


__all__ = ["map_api_error"]
