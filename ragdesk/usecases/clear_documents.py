from __future__ import annotations

from dataclasses import dataclass

from ragdesk.domain.ports import RagPort
from ragdesk.usecases.error_mapping import map_api_error


@dataclass
class ClearDocuments:
    rag_port: RagPort

    async def __call__(self) -> None:
        try:
            await self.rag_port.clear_documents()
        except Exception as exc:
            raise map_api_error(exc, default_code="CLEAR_FAILED") from exc
