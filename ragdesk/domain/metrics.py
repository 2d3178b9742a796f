"""Typed domain objects for benchmark run telemetry."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union


@dataclass(frozen=True)
class IndexSize:
    """On-disk footprint of the vector index in megabytes."""

    index_file_mb: float
    metadata_file_mb: float
    total_mb: float


@dataclass(frozen=True)
class MemoryUsage:
    """Resident memory of the service before and after indexing."""

    baseline_rss_mb: float
    after_indexing_rss_mb: float
    indexing_increase_mb: float


@dataclass(frozen=True)
class Relevance:
    """Recall measured over the benchmark's evaluation queries."""

    avg_recall_at_3: float
    perfect_recalls: int
    queries_evaluated: int


@dataclass(frozen=True)
class Restoration:
    """Document counts before the benchmark and after the corpus was restored."""

    original_doc_count: int
    restored_doc_count: int


@dataclass(frozen=True)
class RetrievalPerformance:
    """Query latency statistics in milliseconds."""

    avg_query_time_ms: float
    min_query_time_ms: float
    max_query_time_ms: float
    topk_avg_times_ms: Tuple[Tuple[str, float], ...] = ()
    """(K, average ms) pairs in the order the service reported them."""


@dataclass(frozen=True)
class VramUsage:
    """GPU memory in use before and after indexing."""

    baseline_used_mb: float
    after_indexing_used_mb: float


@dataclass(frozen=True)
class RagImpactSkipped:
    """LLM comparison was requested but the service skipped it."""

    reason: str


@dataclass(frozen=True)
class RagImpactResult:
    """Answer comparison for one query with and without retrieved context."""

    query: str
    contexts_used: int
    answer_length_diff: int
    answer_with_rag: str
    answer_without_rag: str
    inference_time_with_rag_s: float
    inference_time_without_rag_s: float
    rag_overhead_s: float


RagImpact = Union[RagImpactSkipped, RagImpactResult]


@dataclass(frozen=True)
class BenchmarkMetrics:
    """Validated benchmark response; ``rag_impact`` is ``None`` for no-LLM runs."""

    ok: bool
    documents_indexed: int
    indexing_time_s: float
    index_size: IndexSize
    memory: MemoryUsage
    relevance: Relevance
    restoration: Restoration
    retrieval_performance: RetrievalPerformance
    vram: VramUsage
    rag_impact: Optional[RagImpact] = None

    @property
    def used_llm(self) -> bool:
        """Return whether the run included an LLM comparison section."""
        return self.rag_impact is not None


__all__ = [
    "BenchmarkMetrics",
    "IndexSize",
    "MemoryUsage",
    "RagImpact",
    "RagImpactResult",
    "RagImpactSkipped",
    "Relevance",
    "Restoration",
    "RetrievalPerformance",
    "VramUsage",
]
