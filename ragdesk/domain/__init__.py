"""Domain package exports for value objects and aggregates."""

from .corpus_state import CorpusState, SequenceTracker
from .entities import Document, SearchQuery
from .metrics import (
    BenchmarkMetrics,
    IndexSize,
    MemoryUsage,
    RagImpact,
    RagImpactResult,
    RagImpactSkipped,
    Relevance,
    Restoration,
    RetrievalPerformance,
    VramUsage,
)
from .metrics_normalizer import MetricsPayloadError, normalize_metrics

__all__ = [
    "BenchmarkMetrics",
    "CorpusState",
    "Document",
    "IndexSize",
    "MemoryUsage",
    "MetricsPayloadError",
    "RagImpact",
    "RagImpactResult",
    "RagImpactSkipped",
    "Relevance",
    "Restoration",
    "RetrievalPerformance",
    "SearchQuery",
    "SequenceTracker",
    "VramUsage",
    "normalize_metrics",
]
