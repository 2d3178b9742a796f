from __future__ import annotations

from typing import Any, Optional


class ApiError(RuntimeError):
    """Base class for RAG service adapter failures."""

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        payload: Any = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.payload = payload

    @property
    def server_message(self) -> Optional[str]:
        """Error text supplied by the service in a JSON error body, if any."""
        if not isinstance(self.payload, dict):
            return None
        return first_string(self.payload)


class ApiClientError(ApiError):
    """HTTP 4xx from the RAG service."""

    def __init__(self, message: str, *, status: int, payload: Any = None) -> None:
        super().__init__(message, status=status, payload=payload)


class ApiServerError(ApiError):
    """HTTP 5xx from the RAG service."""

    def __init__(self, message: str, *, status: int, payload: Any = None) -> None:
        super().__init__(message, status=status, payload=payload)


class ApiTimeoutError(ApiError):
    """The service did not answer within the request timeout."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ApiConnectionError(ApiError):
    """The service could not be reached (refused, DNS, reset)."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


def parse_error_payload(resp: Any) -> Any:
    """Best-effort extraction of error payload without raising."""
    try:
        return resp.json()
    except ValueError:
        snippet = getattr(resp, "text", "")
        if not snippet:
            return None
        return snippet[:400]


def build_error_message(ctx: str, status: int) -> str:
    """Generic transport message for a non-2xx response."""
    return f"{ctx}: HTTP {status}"


def first_string(payload: Any) -> Optional[str]:
    """Return the first non-empty error string in a decoded error body.

    The RAG service reports failures as ``{"error": "..."}``; FastAPI-style
    ``detail`` and generic ``message``/``title`` keys are accepted as well.
    """
    if isinstance(payload, str):
        text = payload.strip()
        return text or None
    if isinstance(payload, dict):
        for key in ("error", "detail", "message", "title"):
            value = payload.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
            if isinstance(value, (list, dict)):
                candidate = first_string(value)
                if candidate:
                    return candidate
    if isinstance(payload, list):
        for item in payload:
            candidate = first_string(item)
            if candidate:
                return candidate
    return None


__all__ = [
    "ApiClientError",
    "ApiConnectionError",
    "ApiError",
    "ApiServerError",
    "ApiTimeoutError",
    "build_error_message",
    "first_string",
    "parse_error_payload",
]
