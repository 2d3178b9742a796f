from __future__ import annotations

import pytest

from ragdesk.domain.corpus_state import CorpusState, SequenceTracker
from ragdesk.domain.entities import Document, SearchQuery


def test_replace_documents_copies_the_snapshot() -> None:
    state = CorpusState()
    docs = [Document(id="1", text="hello")]

    state.replace_documents(docs)
    docs.append(Document(id="2", text="later"))

    assert state.document_count == 1


def test_log_is_append_only_in_order() -> None:
    state = CorpusState()

    state.append_log("first")
    state.append_log("second")

    assert state.logs == ["first", "second"]


def test_sequence_tracker_numbers_each_kind_independently() -> None:
    tracker = SequenceTracker()

    assert tracker.begin("refresh") == 1
    assert tracker.begin("refresh") == 2
    assert tracker.begin("search") == 1
    assert tracker.latest_started("refresh") == 2
    assert tracker.latest_started("search") == 1
    assert tracker.latest_started("benchmark") == 0


def test_sequence_tracker_flags_out_of_order_completion() -> None:
    tracker = SequenceTracker()
    first = tracker.begin("refresh")
    second = tracker.begin("refresh")

    done_second = tracker.complete("refresh", second)
    done_first = tracker.complete("refresh", first)

    assert done_second.out_of_order is False
    assert done_first.out_of_order is True
    assert done_first.stamp > done_second.stamp
    assert tracker.last_applied("refresh") == first


def test_document_requires_identifier() -> None:
    with pytest.raises(ValueError):
        Document(id=" ", text="x")


@pytest.mark.parametrize(
    "kwargs",
    [
        {"query": "", "top_k": 3, "similarity_threshold": 0.3},
        {"query": "x", "top_k": 0, "similarity_threshold": 0.3},
        {"query": "x", "top_k": True, "similarity_threshold": 0.3},
        {"query": "x", "top_k": 3, "similarity_threshold": 1.5},
    ],
)
def test_search_query_rejects_out_of_range_values(kwargs) -> None:
    with pytest.raises(ValueError):
        SearchQuery(**kwargs)


def test_search_query_payload_uses_wire_names() -> None:
    query = SearchQuery(query="x", top_k=3, similarity_threshold=0.35)

    assert query.to_payload() == {"query": "x", "top_k": 3, "similarity_threshold": 0.35}
