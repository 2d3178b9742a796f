from __future__ import annotations

import copy
from typing import Any, Dict

import pytest

_BASE_METRICS: Dict[str, Any] = {
    "ok": True,
    "documents_indexed": 12,
    "indexing_time_s": 1.23456,
    "index_size": {
        "index_file_mb": 0.018432,
        "metadata_file_mb": 0.002211,
        "total_mb": 0.020643,
    },
    "memory": {
        "baseline_rss_mb": 812.3456,
        "after_indexing_rss_mb": 845.1,
        "indexing_increase_mb": 32.7544,
    },
    "relevance": {
        "avg_recall_at_3": 0.83333,
        "perfect_recalls": 4,
        "queries_evaluated": 6,
    },
    "restoration": {
        "original_doc_count": 10,
        "restored_doc_count": 10,
    },
    "retrieval_performance": {
        "avg_query_time_ms": 5.4321,
        "min_query_time_ms": 3.001,
        "max_query_time_ms": 9.87654,
        "topk_avg_times_ms": {"5": 5.1, "1": 3.25, "10": 6.789},
    },
    "vram": {
        "baseline_used_mb": 1024.0,
        "after_indexing_used_mb": 1536.5,
    },
}

_RAG_IMPACT: Dict[str, Any] = {
    "query": "What does the index store?",
    "contexts_used": 3,
    "answer_length_diff": 42,
    "answer_with_rag": "The index stores embeddings " * 10,
    "answer_without_rag": "I am not sure.",
    "inference_time_with_rag_s": 2.34567,
    "inference_time_without_rag_s": 1.98765,
    "rag_overhead_s": 0.35802,
}


@pytest.fixture
def metrics_payload() -> Dict[str, Any]:
    """Fresh no-LLM benchmark payload as returned by ``/rag_metrics``."""
    return copy.deepcopy(_BASE_METRICS)


@pytest.fixture
def llm_metrics_payload() -> Dict[str, Any]:
    """Fresh benchmark payload including a full ``rag_impact`` section."""
    payload = copy.deepcopy(_BASE_METRICS)
    payload["rag_impact"] = copy.deepcopy(_RAG_IMPACT)
    return payload
