"""State container for the corpus view, search results, metrics and activity log.

``CorpusState`` performs no I/O. The orchestrator writes completed operation
results into it and views read from it. ``SequenceTracker`` numbers
operations at start and stamps them at completion so the last-writer-wins
policy for overlapping requests can be audited.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from .entities import Document
from .metrics import BenchmarkMetrics


@dataclass(frozen=True)
class Completion:
    """Bookkeeping for one completed operation.

    Attributes:
        kind: Operation kind (``refresh``, ``search``, ``benchmark`` ...).
        seq: Start sequence number assigned by ``SequenceTracker.begin``.
        stamp: Global completion counter value, increasing across all kinds.
        out_of_order: ``True`` when an operation of the same kind that started
            later had already completed.
    """

    kind: str
    seq: int
    stamp: int
    out_of_order: bool


class SequenceTracker:
    """Per-kind start numbering plus a shared completion counter."""

    def __init__(self) -> None:
        self._started: Dict[str, int] = {}
        self._last_applied: Dict[str, int] = {}
        self._completions = 0

    def begin(self, kind: str) -> int:
        """Return the next start sequence number for ``kind`` (1-based)."""
        seq = self._started.get(kind, 0) + 1
        self._started[kind] = seq
        return seq

    def latest_started(self, kind: str) -> int:
        return self._started.get(kind, 0)

    def last_applied(self, kind: str) -> Optional[int]:
        """Return the start number of the result most recently applied."""
        return self._last_applied.get(kind)

    def complete(self, kind: str, seq: int) -> Completion:
        """Record that ``seq`` finished and its result is being applied."""
        self._completions += 1
        previous = self._last_applied.get(kind)
        self._last_applied[kind] = seq
        return Completion(
            kind=kind,
            seq=seq,
            stamp=self._completions,
            out_of_order=previous is not None and previous > seq,
        )


@dataclass
class CorpusState:
    """Single source of truth rendered by the UI.

    Each setter replaces exactly one field, so a failed operation that never
    reaches its setter leaves everything untouched.
    """

    docs: List[Document] = field(default_factory=list)
    search_results: List[str] = field(default_factory=list)
    metrics: Optional[BenchmarkMetrics] = None
    logs: List[str] = field(default_factory=list)

    def replace_documents(self, docs: Sequence[Document]) -> None:
        self.docs = list(docs)

    def clear_documents(self) -> None:
        self.docs = []

    def replace_search_results(self, results: Sequence[str]) -> None:
        self.search_results = [str(item) for item in results]

    def set_metrics(self, metrics: Optional[BenchmarkMetrics]) -> None:
        self.metrics = metrics

    def clear_metrics(self) -> None:
        self.metrics = None

    def append_log(self, line: str) -> None:
        """Append one activity line; the log is never pruned."""
        self.logs.append(str(line))

    @property
    def document_count(self) -> int:
        return len(self.docs)


__all__ = ["Completion", "CorpusState", "SequenceTracker"]
