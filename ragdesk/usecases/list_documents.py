"""Use case for loading the full corpus snapshot."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from ragdesk.domain.entities import Document
from ragdesk.domain.ports import RagPort
from ragdesk.usecases.error_mapping import map_api_error


@dataclass
class ListDocuments:
    rag_port: RagPort

    async def __call__(self) -> List[Document]:
        try:
            return list(await self.rag_port.list_documents())
        except Exception as exc:
            raise map_api_error(exc, default_code="LIST_FAILED") from exc


__all__ = ["ListDocuments"]
