"""Use case and input guard for similarity search."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, List, Optional

from ragdesk.domain.entities import SearchQuery
from ragdesk.domain.ports import RagPort
from ragdesk.usecases.error_mapping import map_api_error


def validate_search_query(
    query: Any,
    top_k: Any,
    similarity_threshold: Any,
    *,
    max_top_k: Optional[int] = None,
) -> Optional[SearchQuery]:
    """Build a SearchQuery from raw form values, or ``None`` if any is out of range.

    Rejection is silent: callers treat ``None`` as a no-op, not an error.
    """
    text = str(query or "").strip()
    if not text:
        return None
    if isinstance(top_k, bool) or not isinstance(top_k, (int, float)):
        return None
    if isinstance(top_k, float) and not top_k.is_integer():
        return None
    k = int(top_k)
    if k < 1 or (max_top_k is not None and k > max_top_k):
        return None
    if isinstance(similarity_threshold, bool) or not isinstance(similarity_threshold, (int, float)):
        return None
    if not math.isfinite(similarity_threshold) or not 0.0 <= similarity_threshold <= 1.0:
        return None
    return SearchQuery(query=text, top_k=k, similarity_threshold=similarity_threshold)


@dataclass
class SearchDocuments:
    rag_port: RagPort

    async def __call__(self, query: SearchQuery) -> List[str]:
        try:
            results = await self.rag_port.search(query)
        except Exception as exc:
            raise map_api_error(exc, default_code="SEARCH_FAILED") from exc
        return [str(item) for item in results or []]


__all__ = ["SearchDocuments", "validate_search_query"]
