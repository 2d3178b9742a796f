"""Shared async HTTP transport for the RAG service adapter.

This module provides a thin wrapper around ``httpx.AsyncClient`` so the
adapter shares one base URL, one timeout policy, JSON headers, and a retry
loop for idempotent reads.

Dependencies:
    - ``httpx`` for async network I/O.
    - ``ragdesk.adapters.api_errors`` for typed timeout and connection failures.

Call context:
    - Constructed by ``ragdesk/adapters/rag_rest.py``.
    - Used only inside adapter methods; use cases interact through ports.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from ragdesk.adapters.api_errors import ApiConnectionError, ApiError, ApiTimeoutError

DEFAULT_BASE_URL = "http://localhost:5005/"


def _transport_error(path: str, exc: httpx.HTTPError) -> ApiError:
    # ConnectTimeout is a TimeoutException, so it reads as a timeout here.
    if isinstance(exc, httpx.TimeoutException):
        return ApiTimeoutError(f"Timeout contacting {path}: {exc}")
    return ApiConnectionError(f"Cannot reach {path}: {exc}")


@dataclass
class HttpConfig:
    """Timeout and retry configuration for adapter HTTP calls.

    Attributes:
        request_timeout_s: Default timeout in seconds for CRUD and search calls.
        benchmark_timeout_s: Timeout in seconds for benchmark runs.
        retries: Retry attempts after the initial GET. POSTs are sent once.
    """
    request_timeout_s: float = 10
    benchmark_timeout_s: float = 120
    retries: int = 0


class AsyncRetryingClient:
    """Shared ``httpx.AsyncClient`` wrapper with JSON headers and GET retries.

    This class is intentionally transport-only. Callers provide endpoint paths
    and decide how to map non-2xx responses into adapter errors.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        cfg: Optional[HttpConfig] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Create the underlying async client.

        Args:
            base_url: Service root; request paths are resolved against it.
            cfg: Shared timeout and retry settings.
            transport: Optional transport override (tests pass
                ``httpx.MockTransport``).
        """
        self.cfg = cfg or HttpConfig()
        self.base_url = base_url
        self.client = httpx.AsyncClient(
            base_url=base_url,
            timeout=self.cfg.request_timeout_s,
            headers={"Accept": "application/json", "Content-Type": "application/json"},
            transport=transport,
        )

    async def get(self, path: str, *, timeout: Optional[float] = None) -> httpx.Response:
        """Send a GET request, retrying on timeout/connectivity failures.

        Raises:
            ApiTimeoutError: If the last attempt timed out.
            ApiConnectionError: If the last attempt could not reach the service.
            ApiError: For any other transport failure.
        """
        last_err: ApiError | None = None
        attempts = max(0, int(self.cfg.retries)) + 1
        for _ in range(attempts):
            try:
                return await self.client.get(path, timeout=timeout or self.cfg.request_timeout_s)
            except (httpx.TimeoutException, httpx.NetworkError) as exc:
                last_err = _transport_error(path, exc)
            except httpx.HTTPError as exc:
                raise ApiError(str(exc) or exc.__class__.__name__) from exc
        raise last_err

    async def post(
        self,
        path: str,
        *,
        json_body: Optional[Dict[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> httpx.Response:
        """Send a single JSON POST request.

        Raises:
            ApiTimeoutError: On timeout.
            ApiConnectionError: When the service cannot be reached.
            ApiError: For any other transport failure.
        """
        try:
            return await self.client.post(
                path,
                json=json_body,
                timeout=timeout or self.cfg.request_timeout_s,
            )
        except (httpx.TimeoutException, httpx.NetworkError) as exc:
            raise _transport_error(path, exc) from exc
        except httpx.HTTPError as exc:
            raise ApiError(str(exc) or exc.__class__.__name__) from exc

    async def aclose(self) -> None:
        await self.client.aclose()


__all__ = ["AsyncRetryingClient", "DEFAULT_BASE_URL", "HttpConfig"]
