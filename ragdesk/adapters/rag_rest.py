"""REST adapter implementing the RAG service transport contract."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

import httpx

from ragdesk.domain.entities import Document, SearchQuery
from ragdesk.domain.ports import RagPort

from ragdesk.adapters.api_errors import (
    ApiClientError,
    ApiError,
    ApiServerError,
    build_error_message,
    parse_error_payload,
)
from ragdesk.adapters.http_client import (
    DEFAULT_BASE_URL,
    AsyncRetryingClient,
    HttpConfig,
)

LOGGER = logging.getLogger(__name__)


class RagRestAdapter(RagPort):
    """HTTP adapter for the `/rag/*` and `/rag_metrics` endpoints."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        request_timeout_s: float = 10,
        benchmark_timeout_s: float = 120,
        retries: int = 0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if not str(base_url or "").strip():
            raise ValueError("RagRestAdapter requires a base URL")
        self.cfg = HttpConfig(
            request_timeout_s=request_timeout_s,
            benchmark_timeout_s=benchmark_timeout_s,
            retries=retries,
        )
        self.http = AsyncRetryingClient(base_url, self.cfg, transport=transport)

    async def __aenter__(self) -> "RagRestAdapter":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.http.aclose()

    # ---------- RagPort ----------

    async def list_documents(self) -> List[Document]:
        """Fetch the full corpus from `/rag/list`."""
        resp = await self.http.get("/rag/list")
        self._ensure_ok(resp, "list_documents")
        payload = self._json_dict(resp, "list_documents")
        raw_docs = payload.get("documents") or []
        if not isinstance(raw_docs, list):
            raise ApiError("list_documents: expected documents list")
        return self._parse_documents(raw_docs)

    async def clear_documents(self) -> None:
        """Wipe the corpus via `/rag/clear`; the body is ignored."""
        resp = await self.http.post("/rag/clear")
        self._ensure_ok(resp, "clear_documents")

    async def add_document(self, text: str) -> None:
        """Index one document via `/rag/add`; the body is ignored."""
        resp = await self.http.post("/rag/add", json_body={"text": text})
        self._ensure_ok(resp, "add_document")

    async def search(self, query: SearchQuery) -> List[str]:
        """Run a similarity search via `/rag/search`."""
        resp = await self.http.post("/rag/search", json_body=query.to_payload())
        self._ensure_ok(resp, "search")
        payload = self._json_dict(resp, "search")
        results = payload.get("results") or []
        if not isinstance(results, list):
            raise ApiError("search: expected results list")
        return [str(item) for item in results]

    async def run_benchmark(
        self, llm_name: Optional[str] = None, *, timeout_s: Optional[float] = None
    ) -> Mapping[str, Any]:
        """Start a benchmark via `/rag_metrics` and return the raw payload."""
        body: Dict[str, Any] = {"llm_name": llm_name} if llm_name else {}
        resp = await self.http.post(
            "/rag_metrics",
            json_body=body,
            timeout=timeout_s or self.cfg.benchmark_timeout_s,
        )
        self._ensure_ok(resp, "run_benchmark")
        return self._json_dict(resp, "run_benchmark")

    # ------------------------------------------------------------------
    @staticmethod
    def _parse_documents(raw_docs: List[Any]) -> List[Document]:
        """Convert every listed entry; one malformed entry rejects the whole list."""
        docs: List[Document] = []
        for index, entry in enumerate(raw_docs):
            if not isinstance(entry, dict):
                raise ApiError(f"list_documents: documents[{index}] is not an object")
            doc_id = entry.get("id")
            if doc_id is None or not str(doc_id).strip():
                LOGGER.debug("Rejecting document list, entry without id: %r", entry)
                raise ApiError(f"list_documents: documents[{index}] has no id")
            text = entry.get("text")
            docs.append(Document(id=str(doc_id), text="" if text is None else str(text)))
        return docs

    @staticmethod
    def _ensure_ok(resp: httpx.Response, ctx: str) -> None:
        """Raise typed adapter errors for non-2xx responses."""
        if 200 <= resp.status_code < 300:
            return
        status = resp.status_code
        payload = parse_error_payload(resp)
        message = build_error_message(ctx, status)
        if 400 <= status < 500:
            raise ApiClientError(message, status=status, payload=payload)
        if 500 <= status < 600:
            raise ApiServerError(message, status=status, payload=payload)
        raise ApiError(message, status=status, payload=payload)

    @staticmethod
    def _json_dict(resp: httpx.Response, ctx: str) -> Dict[str, Any]:
        try:
            data = resp.json()
        except ValueError:
            snippet = resp.text[:400]
            raise ApiError(f"Invalid JSON response: {snippet}") from None
        if not isinstance(data, dict):
            raise ApiError(f"{ctx}: expected object response")
        return data


__all__ = ["RagRestAdapter"]
