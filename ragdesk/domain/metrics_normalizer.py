from __future__ import annotations

"""Validate raw benchmark payloads into the BenchmarkMetrics aggregate."""

import math
from typing import Any, Mapping, Optional, Tuple

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

REQUIRED_SECTIONS = (
    "index_size",
    "indexing_time_s",
    "memory",
    "relevance",
    "restoration",
    "retrieval_performance",
    "vram",
    "ok",
    "documents_indexed",
)

RAG_IMPACT_FIELDS = (
    "query",
    "contexts_used",
    "answer_length_diff",
    "answer_with_rag",
    "answer_without_rag",
    "inference_time_with_rag_s",
    "inference_time_without_rag_s",
    "rag_overhead_s",
)


class MetricsPayloadError(ValueError):
    """Benchmark payload is missing a section or carries a malformed value."""

    def __init__(self, path: str, problem: str) -> None:
        super().__init__(f"{path}: {problem}")
        self.path = path
        self.problem = problem


def _section(payload: Mapping[str, Any], key: str, *, parent: str = "") -> Mapping[str, Any]:
    path = f"{parent}.{key}" if parent else key
    value = payload.get(key)
    if value is None:
        raise MetricsPayloadError(path, "missing")
    if not isinstance(value, Mapping):
        raise MetricsPayloadError(path, "expected object")
    return value


def _number(payload: Mapping[str, Any], key: str, *, parent: str) -> float:
    path = f"{parent}.{key}" if parent else key
    value = payload.get(key)
    if value is None:
        raise MetricsPayloadError(path, "missing")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MetricsPayloadError(path, "expected number")
    numeric = float(value)
    if not math.isfinite(numeric):
        raise MetricsPayloadError(path, "expected finite number")
    return numeric


def _count(payload: Mapping[str, Any], key: str, *, parent: str) -> int:
    numeric = _number(payload, key, parent=parent)
    if not numeric.is_integer():
        path = f"{parent}.{key}" if parent else key
        raise MetricsPayloadError(path, "expected integer")
    return int(numeric)


def _text(payload: Mapping[str, Any], key: str, *, parent: str) -> str:
    value = payload.get(key)
    if value is None:
        raise MetricsPayloadError(f"{parent}.{key}", "missing")
    if not isinstance(value, str):
        raise MetricsPayloadError(f"{parent}.{key}", "expected string")
    return value


def _topk_times(raw: Any) -> Tuple[Tuple[str, float], ...]:
    parent = "retrieval_performance.topk_avg_times_ms"
    if raw is None:
        raise MetricsPayloadError(parent, "missing")
    if not isinstance(raw, Mapping):
        raise MetricsPayloadError(parent, "expected object")
    # Keys are K values as the service reports them; keep response order.
    return tuple((str(key), _number(raw, key, parent=parent)) for key in raw)


def _skipped_reason(raw: Mapping[str, Any]) -> Optional[str]:
    value = raw.get("skipped")
    if value is None:
        return None
    if not isinstance(value, str):
        raise MetricsPayloadError("rag_impact.skipped", "expected string")
    return value.strip() or None


def _rag_impact(payload: Mapping[str, Any]) -> Optional[RagImpact]:
    raw = payload.get("rag_impact")
    if raw is None:
        return None
    if not isinstance(raw, Mapping):
        raise MetricsPayloadError("rag_impact", "expected object")

    reason = _skipped_reason(raw)
    if reason is not None:
        # A skip reason wins over any comparison fields sent alongside it.
        return RagImpactSkipped(reason=reason)

    parent = "rag_impact"
    return RagImpactResult(
        query=_text(raw, "query", parent=parent),
        contexts_used=_count(raw, "contexts_used", parent=parent),
        answer_length_diff=_count(raw, "answer_length_diff", parent=parent),
        answer_with_rag=_text(raw, "answer_with_rag", parent=parent),
        answer_without_rag=_text(raw, "answer_without_rag", parent=parent),
        inference_time_with_rag_s=_number(raw, "inference_time_with_rag_s", parent=parent),
        inference_time_without_rag_s=_number(raw, "inference_time_without_rag_s", parent=parent),
        rag_overhead_s=_number(raw, "rag_overhead_s", parent=parent),
    )


def normalize_metrics(raw: Mapping[str, Any] | BenchmarkMetrics | None) -> BenchmarkMetrics:
    """
    Convert a decoded ``/rag_metrics`` response into a BenchmarkMetrics record.

    Every mandatory section is checked before anything is built, so a payload
    with a missing section is rejected as a whole. Numbers keep full precision;
    rounding is left to the view models.

    Raises:
        MetricsPayloadError: If a section or field is missing or malformed.
    """
    if isinstance(raw, BenchmarkMetrics):
        return raw
    if not isinstance(raw, Mapping):
        raise MetricsPayloadError("<root>", "expected object")

    missing = [key for key in REQUIRED_SECTIONS if raw.get(key) is None]
    if missing:
        raise MetricsPayloadError(", ".join(missing), "missing")

    ok = raw.get("ok")
    if not isinstance(ok, bool):
        raise MetricsPayloadError("ok", "expected boolean")

    index_size = _section(raw, "index_size")
    memory = _section(raw, "memory")
    relevance = _section(raw, "relevance")
    restoration = _section(raw, "restoration")
    retrieval = _section(raw, "retrieval_performance")
    vram = _section(raw, "vram")

    return BenchmarkMetrics(
        ok=ok,
        documents_indexed=_count(raw, "documents_indexed", parent=""),
        indexing_time_s=_number(raw, "indexing_time_s", parent=""),
        index_size=IndexSize(
            index_file_mb=_number(index_size, "index_file_mb", parent="index_size"),
            metadata_file_mb=_number(index_size, "metadata_file_mb", parent="index_size"),
            total_mb=_number(index_size, "total_mb", parent="index_size"),
        ),
        memory=MemoryUsage(
            baseline_rss_mb=_number(memory, "baseline_rss_mb", parent="memory"),
            after_indexing_rss_mb=_number(memory, "after_indexing_rss_mb", parent="memory"),
            indexing_increase_mb=_number(memory, "indexing_increase_mb", parent="memory"),
        ),
        relevance=Relevance(
            avg_recall_at_3=_number(relevance, "avg_recall_at_3", parent="relevance"),
            perfect_recalls=_count(relevance, "perfect_recalls", parent="relevance"),
            queries_evaluated=_count(relevance, "queries_evaluated", parent="relevance"),
        ),
        restoration=Restoration(
            original_doc_count=_count(restoration, "original_doc_count", parent="restoration"),
            restored_doc_count=_count(restoration, "restored_doc_count", parent="restoration"),
        ),
        retrieval_performance=RetrievalPerformance(
            avg_query_time_ms=_number(retrieval, "avg_query_time_ms", parent="retrieval_performance"),
            min_query_time_ms=_number(retrieval, "min_query_time_ms", parent="retrieval_performance"),
            max_query_time_ms=_number(retrieval, "max_query_time_ms", parent="retrieval_performance"),
            topk_avg_times_ms=_topk_times(retrieval.get("topk_avg_times_ms")),
        ),
        vram=VramUsage(
            baseline_used_mb=_number(vram, "baseline_used_mb", parent="vram"),
            after_indexing_used_mb=_number(vram, "after_indexing_used_mb", parent="vram"),
        ),
        rag_impact=_rag_impact(raw),
    )


__all__ = ["MetricsPayloadError", "REQUIRED_SECTIONS", "normalize_metrics"]
