"""Use case for running a benchmark and validating its telemetry."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ragdesk.domain.metrics import BenchmarkMetrics
from ragdesk.domain.metrics_normalizer import normalize_metrics
from ragdesk.domain.ports import RagPort
from ragdesk.usecases.error_mapping import map_api_error


@dataclass
class RunBenchmark:
    """Call ``/rag_metrics`` with the long timeout and normalize the response."""

    rag_port: RagPort
    timeout_s: float = 120

    async def __call__(self, llm_name: Optional[str] = None) -> BenchmarkMetrics:
        try:
            raw = await self.rag_port.run_benchmark(llm_name, timeout_s=self.timeout_s)
            return normalize_metrics(raw)
        except Exception as exc:
            raise map_api_error(exc, default_code="BENCHMARK_FAILED") from exc


__all__ = ["RunBenchmark"]
