"""Use case for indexing one new document."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ragdesk.domain.ports import RagPort
from ragdesk.usecases.error_mapping import map_api_error


def normalize_text(value: Any) -> Optional[str]:
    """Return trimmed text, or ``None`` when nothing is left to send."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass
class AddDocument:
    """Send trimmed text to the service. The caller re-lists afterwards."""

    rag_port: RagPort

    async def __call__(self, text: str) -> None:
        try:
            await self.rag_port.add_document(text)
        except Exception as exc:
            raise map_api_error(exc, default_code="ADD_FAILED") from exc


__all__ = ["AddDocument", "normalize_text"]
