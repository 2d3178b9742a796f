"""Async operation orchestrator for the RAG client.

``RagOrchestrator`` exposes one coroutine per user action (refresh, clear,
add, search, benchmark). It owns the ``CorpusState`` and the per-kind busy
flags, calls the use cases, and writes completed results into the state.

Failures never escape an operation: use cases raise ``UseCaseError``, which is
recorded as an activity-log line while the previous state stays in place.

Overlapping operations of the same kind are not cancelled. Each is numbered
at start by ``SequenceTracker``; document lists are applied last-writer-wins
(the result that completes last is kept), while a benchmark result is only
stored if no newer benchmark started in the meantime.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Callable, Dict, Iterator, Optional

from ragdesk.domain.corpus_state import CorpusState, SequenceTracker
from ragdesk.domain.ports import RagPort, UseCaseError
from ragdesk.usecases.add_document import AddDocument, normalize_text
from ragdesk.usecases.clear_documents import ClearDocuments
from ragdesk.usecases.list_documents import ListDocuments
from ragdesk.usecases.run_benchmark import RunBenchmark
from ragdesk.usecases.search_documents import SearchDocuments, validate_search_query
from ragdesk.viewmodels.settings_vm import SettingsConfig

LOGGER = logging.getLogger(__name__)

BUSY_KINDS = ("loading", "clearing", "adding", "searching", "benchmarking")


class BusyFlags:
    """In-flight counters per operation kind; a flag is set while its count > 0."""

    def __init__(self) -> None:
        self._counts: Dict[str, int] = {kind: 0 for kind in BUSY_KINDS}

    def is_set(self, kind: str) -> bool:
        return self._counts[kind] > 0

    @contextmanager
    def hold(self, kind: str) -> Iterator[None]:
        """Mark ``kind`` busy for the duration of the block, on every exit path."""
        if kind not in self._counts:
            raise KeyError(f"Unknown busy flag '{kind}'")
        self._counts[kind] += 1
        try:
            yield
        finally:
            self._counts[kind] -= 1


class RagOrchestrator:
    """Serializes user-triggered operations against one shared CorpusState."""

    def __init__(
        self,
        rag_port: RagPort,
        *,
        settings: Optional[SettingsConfig] = None,
        state: Optional[CorpusState] = None,
        on_change: Optional[Callable[[], None]] = None,
    ) -> None:
        self.settings = settings or SettingsConfig()
        self.state = state if state is not None else CorpusState()
        self.on_change = on_change
        self.busy = BusyFlags()
        self.sequence = SequenceTracker()

        self._list_documents = ListDocuments(rag_port)
        self._clear_documents = ClearDocuments(rag_port)
        self._add_document = AddDocument(rag_port)
        self._search_documents = SearchDocuments(rag_port)
        self._run_benchmark = RunBenchmark(
            rag_port, timeout_s=self.settings.benchmark_timeout_s
        )

    # ------------------------------------------------------------------
    # Busy flags
    # ------------------------------------------------------------------
    @property
    def loading(self) -> bool:
        return self.busy.is_set("loading")

    @property
    def clearing(self) -> bool:
        return self.busy.is_set("clearing")

    @property
    def adding(self) -> bool:
        return self.busy.is_set("adding")

    @property
    def searching(self) -> bool:
        return self.busy.is_set("searching")

    @property
    def is_benchmarking(self) -> bool:
        return self.busy.is_set("benchmarking")

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    async def refresh(self) -> None:
        """Reload the full document list; the last load to complete wins."""
        seq = self.sequence.begin("refresh")
        try:
            with self.busy.hold("loading"):
                self._notify()
                try:
                    docs = await self._list_documents()
                except UseCaseError as err:
                    self._fail("refresh", err, f"Failed to load: {err.message}")
                    return
                done = self.sequence.complete("refresh", seq)
                if done.out_of_order:
                    LOGGER.debug(
                        "Refresh #%d completed after a later refresh (completion %d); "
                        "applying as last writer",
                        seq,
                        done.stamp,
                    )
                self.state.replace_documents(docs)
                self._log(f"Loaded {len(docs)} documents")
        finally:
            self._notify()

    async def clear(self) -> None:
        """Wipe the corpus. On failure local documents are left as they were."""
        try:
            with self.busy.hold("clearing"):
                self._notify()
                try:
                    await self._clear_documents()
                except UseCaseError as err:
                    self._fail("clear", err, f"Failed to clear: {err.message}")
                    return
                self.state.clear_documents()
                self._log("Cleared documents")
        finally:
            self._notify()

    async def add(self, text: str) -> bool:
        """Add one document and reload the corpus.

        Returns:
            ``True`` when the service accepted the document (the caller clears
            its draft); ``False`` for blank input or a failed request (the
            caller keeps the draft for retry).
        """
        cleaned = normalize_text(text)
        if cleaned is None:
            return False
        try:
            with self.busy.hold("adding"):
                self._notify()
                try:
                    await self._add_document(cleaned)
                except UseCaseError as err:
                    self._fail("add", err, f"Failed to add: {err.message}")
                    return False
                self._log("Added document")
                # The add response carries no corpus, so resynchronize.
                await self.refresh()
                return True
        finally:
            self._notify()

    async def search(self, query: str, top_k: int, similarity_threshold: float) -> None:
        """Search the corpus; out-of-range input is ignored without a request."""
        request = validate_search_query(query, top_k, similarity_threshold)
        if request is None:
            return
        seq = self.sequence.begin("search")
        try:
            with self.busy.hold("searching"):
                self._notify()
                try:
                    results = await self._search_documents(request)
                except UseCaseError as err:
                    self._fail("search", err, f"Failed to search: {err.message}")
                    return
                self.sequence.complete("search", seq)
                self.state.replace_search_results(results)
                self._log(
                    f"Search found {len(results)} results "
                    f"(top_k={request.top_k}, threshold={request.similarity_threshold})"
                )
        finally:
            self._notify()

    async def benchmark(self, with_llm: bool, llm_name: Optional[str] = None) -> None:
        """Run a benchmark, clearing the previous metrics before the request."""
        name: Optional[str] = None
        if with_llm:
            name = normalize_text(llm_name)
            if name is None:
                return
        seq = self.sequence.begin("benchmark")
        label = f"RAG with LLM ({name})" if with_llm else "RAG without LLM"
        try:
            with self.busy.hold("benchmarking"):
                self.state.clear_metrics()
                self._log(f"Starting benchmark: {label}...")
                self._notify()
                try:
                    metrics = await self._run_benchmark(name)
                except UseCaseError as err:
                    self._fail("benchmark", err, f"Benchmark error: {err.message}")
                    return
                self.sequence.complete("benchmark", seq)
                latest = self.sequence.latest_started("benchmark")
                if seq != latest:
                    LOGGER.info("Benchmark #%d superseded by #%d; result dropped", seq, latest)
                    self._log("Discarded superseded benchmark result")
                    return
                self.state.set_metrics(metrics)
                self._log("Benchmark completed successfully!")
        finally:
            self._notify()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _log(self, line: str) -> None:
        self.state.append_log(line)
        LOGGER.info("%s", line)

    def _fail(self, operation: str, err: UseCaseError, line: str) -> None:
        LOGGER.warning("%s failed (%s): %s", operation, err.code, err.message)
        self.state.append_log(line)

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change()


__all__ = ["BUSY_KINDS", "BusyFlags", "RagOrchestrator"]
