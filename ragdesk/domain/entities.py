from __future__ import annotations

"""Domain value objects shared across adapters, use-cases, and view models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Document:
    """One indexed text document as listed by the RAG service."""

    id: str
    """Opaque server-assigned identifier, unique within the corpus."""

    text: str
    """Full document text as stored by the service."""

    def __post_init__(self) -> None:
        if not isinstance(self.id, str) or not self.id.strip():
            raise ValueError("Document id must be a non-empty string.")
        if not isinstance(self.text, str):
            raise ValueError("Document text must be a string.")


@dataclass(frozen=True)
class SearchQuery:
    """Similarity search request sent to the RAG service."""

    query: str
    """Trimmed, non-empty query text."""

    top_k: int
    """Maximum number of results requested (>= 1)."""

    similarity_threshold: float
    """Minimum similarity score in the closed range [0, 1]."""

    def __post_init__(self) -> None:
        if not isinstance(self.query, str) or not self.query.strip():
            raise ValueError("SearchQuery query must be a non-empty string.")
        if isinstance(self.top_k, bool) or not isinstance(self.top_k, int):
            raise ValueError("SearchQuery top_k must be an integer.")
        if self.top_k < 1:
            raise ValueError("SearchQuery top_k must be >= 1.")
        if isinstance(self.similarity_threshold, bool) or not isinstance(
            self.similarity_threshold, (int, float)
        ):
            raise ValueError("SearchQuery similarity_threshold must be numeric.")
        if not 0.0 <= float(self.similarity_threshold) <= 1.0:
            raise ValueError("SearchQuery similarity_threshold must be within [0, 1].")

    def to_payload(self) -> dict:
        """Return the JSON body expected by ``POST /rag/search``."""
        return {
            "query": self.query,
            "top_k": self.top_k,
            "similarity_threshold": self.similarity_threshold,
        }


__all__ = ["Document", "SearchQuery"]
