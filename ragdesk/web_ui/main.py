"""NiceGUI entrypoint for the RAG document store console."""

from __future__ import annotations

import argparse
import logging
import os

from nicegui import app, ui

from ragdesk.adapters.rag_mock import RagServiceMock
from ragdesk.adapters.rag_rest import RagRestAdapter
from ragdesk.app.orchestrator import RagOrchestrator
from ragdesk.domain.ports import RagPort
from ragdesk.utils.logging import configure_root
from ragdesk.viewmodels.metrics_vm import MetricCard, MetricsVM
from ragdesk.viewmodels.settings_vm import SettingsConfig, SettingsVM
from ragdesk.web_ui.viewmodels import WebRagFormVM

LOGGER = logging.getLogger(__name__)


def _install_theme() -> None:
    """Install global CSS for the console."""
    ui.add_head_html(
        """
<style>
.rag-card { border-radius: 10px; }
.rag-mono { font-family: ui-monospace, monospace; font-size: 12px; }
.rag-log { height: 10rem; overflow-y: auto; }
</style>
        """
    )


def _render_card(card: MetricCard) -> None:
    classes = "rag-card q-pa-md col-12" if card.wide else "rag-card q-pa-md col-5"
    with ui.card().classes(classes):
        ui.label(card.title).classes("text-subtitle1 text-weight-bold")
        for label, value in card.rows:
            with ui.row().classes("q-gutter-xs no-wrap"):
                ui.label(f"{label}:").classes("text-weight-medium")
                ui.label(value).classes("text-body2")
        if card.bar_pct is not None:
            ui.linear_progress(value=card.bar_pct / 100.0, show_value=False).classes("q-mt-sm")


def _build_ui(port: RagPort, settings: SettingsConfig) -> None:
    """Register the NiceGUI page bound to one orchestrator per browser tab."""

    metrics_vm = MetricsVM()

    @ui.page("/")
    async def index() -> None:
        form = WebRagFormVM.from_settings(settings)
        orchestrator = RagOrchestrator(port, settings=settings)
        state = orchestrator.state

        @ui.refreshable
        def render_logs() -> None:
            with ui.column().classes("rag-log rag-mono w-full"):
                for line in state.logs:
                    ui.label(line)

        @ui.refreshable
        def render_documents() -> None:
            ui.label(f"Documents ({state.document_count})").classes("text-h6")
            if not state.docs:
                ui.label("No RAG documents available.").classes("text-grey")
            for doc in state.docs:
                with ui.card().classes("rag-card w-full q-pa-sm"):
                    ui.label(f"ID: {doc.id}").classes("text-caption text-grey")
                    ui.label(doc.text).style("white-space: pre-wrap")

        @ui.refreshable
        def render_results() -> None:
            if not state.search_results:
                return
            ui.label(f"Search Results ({len(state.search_results)})").classes("text-h6")
            for result in state.search_results:
                ui.label(result).classes("rag-card q-pa-sm w-full")

        @ui.refreshable
        def render_metrics() -> None:
            cards = metrics_vm.build_cards(state.metrics)
            if not cards:
                return
            ui.label("RAG Benchmark Metrics").classes("text-h6")
            with ui.row().classes("w-full q-gutter-md"):
                for card in cards:
                    _render_card(card)

        def on_change() -> None:
            render_logs.refresh()
            render_documents.refresh()
            render_results.refresh()
            render_metrics.refresh()

        orchestrator.on_change = on_change

        async def add_document() -> None:
            accepted = await orchestrator.add(form.new_text)
            form.after_add(accepted)

        async def run_llm_benchmark() -> None:
            form.show_llm_option = False
            await orchestrator.benchmark(True, form.llm_name)

        with ui.row().classes("w-full no-wrap q-gutter-md"):
            with ui.card().classes("rag-card q-pa-md").style("width: 33%"):
                ui.label("RAG").classes("text-h5")
                ui.button("Refresh RAG", on_click=orchestrator.refresh).classes(
                    "w-full"
                ).bind_enabled_from(orchestrator, "loading", backward=lambda busy: not busy)
                ui.button("Clear RAG", color="negative", on_click=orchestrator.clear).classes(
                    "w-full"
                ).bind_enabled_from(orchestrator, "clearing", backward=lambda busy: not busy)

                ui.label("Search RAG").classes("text-subtitle1 q-mt-md")
                ui.input(placeholder="Enter query...").classes("w-full").bind_value(form, "query")
                with ui.row().classes("w-full no-wrap"):
                    ui.number(
                        "Top K", value=form.top_k, min=1, max=form.max_top_k, step=1,
                        on_change=lambda e: form.set_top_k(e.value),
                    )
                    ui.number(
                        "Similarity Threshold", value=form.similarity, min=0, max=1, step=0.01,
                        on_change=lambda e: form.set_similarity(e.value),
                    )
                ui.button(
                    "Search",
                    color="positive",
                    on_click=lambda: orchestrator.search(form.query, form.top_k, form.similarity),
                ).classes("w-full").bind_enabled_from(
                    orchestrator, "searching", backward=lambda busy: not busy
                )

                ui.label("Benchmark RAG").classes("text-subtitle1 q-mt-md")
                ui.button(
                    "Benchmark (No LLM)", on_click=lambda: orchestrator.benchmark(False)
                ).classes("w-full").bind_enabled_from(
                    orchestrator, "is_benchmarking", backward=lambda busy: not busy
                )
                ui.button(
                    "Benchmark (With LLM)", color="purple", on_click=form.toggle_llm_option
                ).classes("w-full").bind_enabled_from(
                    orchestrator, "is_benchmarking", backward=lambda busy: not busy
                )
                with ui.column().classes("w-full").bind_visibility_from(form, "show_llm_option"):
                    ui.input("LLM Name", placeholder="llama").classes("w-full").bind_value(
                        form, "llm_name"
                    )
                    ui.button("Start Benchmark", color="purple", on_click=run_llm_benchmark).bind_enabled_from(
                        orchestrator, "is_benchmarking", backward=lambda busy: not busy
                    )

                ui.label("Logs:").classes("text-caption q-mt-md")
                render_logs()

            with ui.card().classes("rag-card q-pa-md").style("width: 67%"):
                render_documents()
                ui.label("Add RAG Document").classes("text-subtitle1 q-mt-md")
                ui.textarea(placeholder="Enter text to add to RAG...").classes(
                    "w-full"
                ).bind_value(form, "new_text")
                ui.button("Add RAG", color="positive", on_click=add_document).bind_enabled_from(
                    orchestrator, "adding", backward=lambda busy: not busy
                )
                render_results()
                render_metrics()

        ui.timer(0.1, orchestrator.refresh, once=True)


def _parse_args() -> argparse.Namespace:
    """Parse CLI args for web runtime startup."""
    parser = argparse.ArgumentParser(description="Run the RAG console web UI.")
    parser.add_argument("--base-url", default=os.environ.get("RAGDESK_BASE_URL"))
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8080)
    parser.add_argument("--mock", action="store_true", help="Use the in-memory RAG service.")
    parser.add_argument("--reload", action="store_true")
    parser.add_argument("--smoke-test", action="store_true")
    return parser.parse_args()


def _make_port(settings: SettingsConfig, *, mock: bool) -> RagPort:
    if mock:
        return RagServiceMock(delay_s=0.2)
    return RagRestAdapter(
        settings.base_url,
        request_timeout_s=settings.request_timeout_s,
        benchmark_timeout_s=settings.benchmark_timeout_s,
        retries=settings.retries,
    )


def main() -> None:
    """CLI entrypoint for the NiceGUI runtime."""
    configure_root()
    args = _parse_args()
    settings_vm = SettingsVM()
    if args.base_url:
        settings_vm.apply_dict({"base_url": args.base_url})
    settings = settings_vm.config
    if args.smoke_test:
        print("web-smoke-ok", sorted(settings_vm.to_dict()))
        return
    port = _make_port(settings, mock=args.mock)
    if isinstance(port, RagRestAdapter):
        app.on_shutdown(port.aclose)
    LOGGER.info("RAG service: %s", "in-memory mock" if args.mock else settings.base_url)

    _install_theme()
    _build_ui(port, settings)
    ui.run(
        host=args.host,
        port=args.port,
        title="RAG Console",
        reload=args.reload,
        show=False,
    )


if __name__ == "__main__":
    main()
