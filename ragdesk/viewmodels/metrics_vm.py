from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from ragdesk.domain.metrics import BenchmarkMetrics, RagImpactResult, RagImpactSkipped

from .metrics_format import (
    bar_pct,
    fmt_index_mb,
    fmt_mb,
    fmt_ms,
    fmt_ratio,
    fmt_seconds,
    preview,
)

Row = Tuple[str, str]

# Bar scales for the resource cards, in MB.
MEMORY_BAR_SCALE_MB = 2000.0
VRAM_BAR_SCALE_MB = 4000.0


@dataclass(frozen=True)
class MetricCard:
    """One dashboard card: labelled rows plus an optional progress bar."""

    key: str
    title: str
    rows: Tuple[Row, ...]
    bar_pct: Optional[float] = None
    wide: bool = False


class MetricsVM:
    """Projects a BenchmarkMetrics record into display-ready cards."""

    def build_cards(self, metrics: Optional[BenchmarkMetrics]) -> List[MetricCard]:
        """Return the card list, empty while no metrics are available."""
        if metrics is None:
            return []
        cards = [
            self._indexing(metrics),
            self._restoration(metrics),
            self._retrieval(metrics),
            self._relevance(metrics),
            self._memory(metrics),
            self._vram(metrics),
        ]
        impact = self._rag_impact(metrics)
        if impact is not None:
            cards.append(impact)
        return cards

    # ------------------------------------------------------------------
    @staticmethod
    def _indexing(metrics: BenchmarkMetrics) -> MetricCard:
        size = metrics.index_size
        return MetricCard(
            key="indexing",
            title="Indexing",
            rows=(
                ("Indexed", f"{metrics.documents_indexed} docs"),
                ("Time", fmt_seconds(metrics.indexing_time_s)),
                ("Index data", fmt_index_mb(size.index_file_mb)),
                ("Index meta", fmt_index_mb(size.metadata_file_mb)),
                ("Index total", fmt_index_mb(size.total_mb)),
            ),
        )

    @staticmethod
    def _restoration(metrics: BenchmarkMetrics) -> MetricCard:
        restoration = metrics.restoration
        restored = restoration.restored_doc_count
        pct = bar_pct(restored, restoration.original_doc_count) if restored > 0 else 0.0
        return MetricCard(
            key="restoration",
            title="Restoration",
            rows=(
                ("Original", f"{restoration.original_doc_count} docs"),
                ("Restored", f"{restored} docs"),
            ),
            bar_pct=pct,
        )

    @staticmethod
    def _retrieval(metrics: BenchmarkMetrics) -> MetricCard:
        perf = metrics.retrieval_performance
        rows: List[Row] = [
            ("Avg Query", fmt_ms(perf.avg_query_time_ms)),
            ("Min Query", fmt_ms(perf.min_query_time_ms)),
            ("Max Query", fmt_ms(perf.max_query_time_ms)),
        ]
        rows.extend((f"Top {k}", fmt_ms(value)) for k, value in perf.topk_avg_times_ms)
        return MetricCard(key="retrieval", title="Retrieval Performance", rows=tuple(rows))

    @staticmethod
    def _relevance(metrics: BenchmarkMetrics) -> MetricCard:
        rel = metrics.relevance
        return MetricCard(
            key="relevance",
            title="Relevance",
            rows=(
                ("Avg Recall@3", fmt_ratio(rel.avg_recall_at_3)),
                ("Perfect Recalls", f"{rel.perfect_recalls}/{rel.queries_evaluated}"),
            ),
            bar_pct=bar_pct(rel.avg_recall_at_3, 1.0),
        )

    @staticmethod
    def _memory(metrics: BenchmarkMetrics) -> MetricCard:
        mem = metrics.memory
        return MetricCard(
            key="memory",
            title="Memory (RAM)",
            rows=(
                ("Baseline", fmt_mb(mem.baseline_rss_mb)),
                ("After Index", fmt_mb(mem.after_indexing_rss_mb)),
                ("Increase", fmt_mb(mem.indexing_increase_mb)),
            ),
            bar_pct=bar_pct(mem.indexing_increase_mb, MEMORY_BAR_SCALE_MB),
        )

    @staticmethod
    def _vram(metrics: BenchmarkMetrics) -> MetricCard:
        vram = metrics.vram
        return MetricCard(
            key="vram",
            title="VRAM",
            rows=(
                ("Baseline", fmt_mb(vram.baseline_used_mb)),
                ("After Index", fmt_mb(vram.after_indexing_used_mb)),
            ),
            bar_pct=bar_pct(vram.after_indexing_used_mb, VRAM_BAR_SCALE_MB),
        )

    @staticmethod
    def _rag_impact(metrics: BenchmarkMetrics) -> Optional[MetricCard]:
        impact = metrics.rag_impact
        if isinstance(impact, RagImpactSkipped):
            return MetricCard(
                key="rag_impact_skipped",
                title="RAG Impact",
                rows=(("Skipped", impact.reason),),
                wide=True,
            )
        if isinstance(impact, RagImpactResult):
            return MetricCard(
                key="rag_impact",
                title="RAG Impact (with LLM)",
                rows=(
                    ("Query", impact.query),
                    ("Contexts Used", str(impact.contexts_used)),
                    ("Answer Length Diff", str(impact.answer_length_diff)),
                    ("Inference w/RAG", fmt_seconds(impact.inference_time_with_rag_s)),
                    ("Inference w/o RAG", fmt_seconds(impact.inference_time_without_rag_s)),
                    ("RAG Overhead", fmt_seconds(impact.rag_overhead_s)),
                    ("Answer with RAG", preview(impact.answer_with_rag)),
                    ("Answer without RAG", preview(impact.answer_without_rag)),
                ),
                wide=True,
            )
        return None


__all__ = ["MetricCard", "MetricsVM"]
