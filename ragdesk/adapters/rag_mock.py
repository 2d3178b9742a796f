from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional
from uuid import uuid4

from ragdesk.domain.entities import Document, SearchQuery
from ragdesk.domain.ports import RagPort


@dataclass
class RagServiceMock(RagPort):
    """Offline substitute for ``RagRestAdapter`` with deterministic responses."""

    delay_s: float = 0.0
    documents: List[Document] = field(default_factory=list)

    async def _pause(self) -> None:
        if self.delay_s > 0:
            await asyncio.sleep(self.delay_s)

    # ---------- RagPort ----------

    async def list_documents(self) -> List[Document]:
        await self._pause()
        return list(self.documents)

    async def clear_documents(self) -> None:
        await self._pause()
        self.documents = []

    async def add_document(self, text: str) -> None:
        await self._pause()
        cleaned = str(text or "").strip()
        if not cleaned:
            raise ValueError("add_document: text is required")
        self.documents.append(Document(id=uuid4().hex[:12], text=cleaned))

    async def search(self, query: SearchQuery) -> List[str]:
        await self._pause()
        terms = {token.lower() for token in query.query.split() if token}
        scored = []
        for doc in self.documents:
            words = {token.lower() for token in doc.text.split()}
            if not terms:
                continue
            score = len(terms & words) / len(terms)
            if score >= query.similarity_threshold and score > 0:
                scored.append((score, doc.text))
        scored.sort(key=lambda item: item[0], reverse=True)
        return [text for _, text in scored[: query.top_k]]

    async def run_benchmark(
        self, llm_name: Optional[str] = None, *, timeout_s: Optional[float] = None
    ) -> Mapping[str, Any]:
        await self._pause()
        count = len(self.documents)
        payload: Dict[str, Any] = {
            "ok": True,
            "documents_indexed": count,
            "indexing_time_s": 0.0125 * max(count, 1),
            "index_size": {
                "index_file_mb": 0.0015 * count,
                "metadata_file_mb": 0.0002 * count,
                "total_mb": 0.0017 * count,
            },
            "memory": {
                "baseline_rss_mb": 512.0,
                "after_indexing_rss_mb": 512.0 + 1.5 * count,
                "indexing_increase_mb": 1.5 * count,
            },
            "relevance": {
                "avg_recall_at_3": 1.0 if count else 0.0,
                "perfect_recalls": min(count, 5),
                "queries_evaluated": min(count, 5),
            },
            "restoration": {
                "original_doc_count": count,
                "restored_doc_count": count,
            },
            "retrieval_performance": {
                "avg_query_time_ms": 4.2,
                "min_query_time_ms": 3.1,
                "max_query_time_ms": 7.9,
                "topk_avg_times_ms": {"1": 3.4, "3": 4.1, "5": 4.8},
            },
            "vram": {
                "baseline_used_mb": 0.0,
                "after_indexing_used_mb": 0.0,
            },
        }
        if llm_name:
            payload["rag_impact"] = {
                "skipped": f"LLM '{llm_name}' is not available in offline mode"
            }
        return payload
