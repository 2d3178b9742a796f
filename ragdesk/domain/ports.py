from __future__ import annotations
from typing import Any, List, Mapping, Optional, Protocol

from .entities import Document, SearchQuery


# ---- Error model ----
class UseCaseError(Exception):
    """Base class for use case level errors (user-presentable)."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


# ---- Ports (Hexagonal boundaries) ----
class RagPort(Protocol):
    """List/clear/add/search/benchmark operations against the RAG service."""

    async def list_documents(self) -> List[Document]: ...
    async def clear_documents(self) -> None: ...
    async def add_document(self, text: str) -> None: ...
    async def search(self, query: SearchQuery) -> List[str]: ...
    async def run_benchmark(
        self, llm_name: Optional[str] = None, *, timeout_s: Optional[float] = None
    ) -> Mapping[str, Any]: ...  # raw payload, normalized by the use case
