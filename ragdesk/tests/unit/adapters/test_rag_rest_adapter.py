"""Transport-level tests for the RAG REST adapter."""

from __future__ import annotations

import asyncio
import json
from typing import Any, Callable, List

import httpx
import pytest

from ragdesk.adapters.api_errors import (
    ApiClientError,
    ApiConnectionError,
    ApiError,
    ApiServerError,
    ApiTimeoutError,
)
from ragdesk.adapters.rag_rest import RagRestAdapter
from ragdesk.domain.entities import Document, SearchQuery


class _Recorder:
    """MockTransport handler that records requests and replays one response."""

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response]) -> None:
        self.responder = responder
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    def body(self, index: int = 0) -> Any:
        content = self.requests[index].content
        return json.loads(content) if content else None


def _run(recorder: _Recorder, call, **adapter_kwargs):
    async def scenario():
        async with RagRestAdapter(
            "http://rag.local:5005/",
            transport=httpx.MockTransport(recorder),
            **adapter_kwargs,
        ) as adapter:
            return await call(adapter)

    return asyncio.run(scenario())


def test_list_documents_parses_documents() -> None:
    recorder = _Recorder(
        lambda req: httpx.Response(
            200,
            json={"documents": [{"id": "1", "text": "hello"}, {"id": 2, "text": "two"}]},
        )
    )

    docs = _run(recorder, lambda adapter: adapter.list_documents())

    assert docs == [Document(id="1", text="hello"), Document(id="2", text="two")]
    request = recorder.requests[0]
    assert request.method == "GET"
    assert str(request.url) == "http://rag.local:5005/rag/list"
    assert request.headers["Accept"] == "application/json"


@pytest.mark.parametrize(
    "entries, problem",
    [
        ([{"id": "1", "text": "a"}, {"text": "no id"}], "documents[1] has no id"),
        ([{"id": "1", "text": "a"}, "junk"], "documents[1] is not an object"),
        ([{"id": " ", "text": "blank id"}], "documents[0] has no id"),
    ],
)
def test_list_documents_rejects_malformed_entries(entries, problem) -> None:
    recorder = _Recorder(lambda req: httpx.Response(200, json={"documents": entries}))

    with pytest.raises(ApiError) as excinfo:
        _run(recorder, lambda adapter: adapter.list_documents())

    assert str(excinfo.value) == f"list_documents: {problem}"


def test_list_documents_without_documents_key_is_empty() -> None:
    recorder = _Recorder(lambda req: httpx.Response(200, json={}))

    assert _run(recorder, lambda adapter: adapter.list_documents()) == []


def test_list_documents_rejects_non_object_body() -> None:
    recorder = _Recorder(lambda req: httpx.Response(200, json=["a", "b"]))

    with pytest.raises(ApiError):
        _run(recorder, lambda adapter: adapter.list_documents())


def test_add_document_posts_text() -> None:
    recorder = _Recorder(lambda req: httpx.Response(200, json={"ok": True}))

    _run(recorder, lambda adapter: adapter.add_document("hello"))

    request = recorder.requests[0]
    assert request.method == "POST"
    assert request.url.path == "/rag/add"
    assert recorder.body() == {"text": "hello"}
    assert request.headers["Content-Type"] == "application/json"


def test_clear_documents_posts_without_body() -> None:
    recorder = _Recorder(lambda req: httpx.Response(200, json={"cleared": 4}))

    _run(recorder, lambda adapter: adapter.clear_documents())

    assert recorder.requests[0].url.path == "/rag/clear"
    assert recorder.body() is None


def test_search_sends_query_and_returns_strings() -> None:
    recorder = _Recorder(lambda req: httpx.Response(200, json={"results": ["a", 7]}))
    query = SearchQuery(query="x", top_k=3, similarity_threshold=0.35)

    results = _run(recorder, lambda adapter: adapter.search(query))

    assert results == ["a", "7"]
    assert recorder.body() == {"query": "x", "top_k": 3, "similarity_threshold": 0.35}


def test_benchmark_without_llm_sends_empty_object_with_long_timeout() -> None:
    recorder = _Recorder(lambda req: httpx.Response(200, json={"ok": True}))

    payload = _run(recorder, lambda adapter: adapter.run_benchmark())

    assert payload == {"ok": True}
    request = recorder.requests[0]
    assert request.url.path == "/rag_metrics"
    assert recorder.body() == {}
    assert request.extensions["timeout"]["read"] == 120


def test_benchmark_with_llm_sends_llm_name() -> None:
    recorder = _Recorder(lambda req: httpx.Response(200, json={"ok": True}))

    _run(recorder, lambda adapter: adapter.run_benchmark("llama", timeout_s=90))

    assert recorder.body() == {"llm_name": "llama"}
    assert recorder.requests[0].extensions["timeout"]["read"] == 90


def test_crud_calls_use_default_timeout() -> None:
    recorder = _Recorder(lambda req: httpx.Response(200, json={"documents": []}))

    _run(recorder, lambda adapter: adapter.list_documents())

    assert recorder.requests[0].extensions["timeout"]["read"] == 10


def test_server_error_keeps_service_message() -> None:
    recorder = _Recorder(lambda req: httpx.Response(500, json={"error": "index locked"}))

    with pytest.raises(ApiServerError) as excinfo:
        _run(recorder, lambda adapter: adapter.run_benchmark())

    err = excinfo.value
    assert err.status == 500
    assert err.server_message == "index locked"
    assert str(err) == "run_benchmark: HTTP 500"


def test_client_error_with_text_body_has_no_service_message() -> None:
    recorder = _Recorder(lambda req: httpx.Response(404, text="<html>not found</html>"))

    with pytest.raises(ApiClientError) as excinfo:
        _run(recorder, lambda adapter: adapter.list_documents())

    assert excinfo.value.server_message is None
    assert str(excinfo.value) == "list_documents: HTTP 404"


def test_get_retries_on_connect_timeout() -> None:
    def responder(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    recorder = _Recorder(responder)

    with pytest.raises(ApiTimeoutError):
        _run(recorder, lambda adapter: adapter.list_documents(), retries=2)

    assert len(recorder.requests) == 3


def test_post_is_not_retried() -> None:
    def responder(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    recorder = _Recorder(responder)

    with pytest.raises(ApiConnectionError) as excinfo:
        _run(recorder, lambda adapter: adapter.add_document("x"), retries=2)

    assert len(recorder.requests) == 1
    assert str(excinfo.value).startswith("Cannot reach /rag/add")


def test_get_connection_refused_is_not_reported_as_timeout() -> None:
    def responder(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    recorder = _Recorder(responder)

    with pytest.raises(ApiConnectionError) as excinfo:
        _run(recorder, lambda adapter: adapter.list_documents(), retries=1)

    assert not isinstance(excinfo.value, ApiTimeoutError)
    assert "Timeout" not in str(excinfo.value)
    assert len(recorder.requests) == 2


def test_invalid_json_raises_api_error() -> None:
    recorder = _Recorder(lambda req: httpx.Response(200, text="not json"))

    with pytest.raises(ApiError) as excinfo:
        _run(recorder, lambda adapter: adapter.search(SearchQuery("x", 1, 0.0)))

    assert "Invalid JSON response" in str(excinfo.value)


def test_adapter_requires_base_url() -> None:
    with pytest.raises(ValueError):
        RagRestAdapter(" ")
