"""Thin web-facing viewmodels for NiceGUI bindings.

These viewmodels hold browser form state and translate raw widget values
into the types the orchestrator expects, without adding I/O.
"""

from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Any

from ragdesk.viewmodels.settings_vm import SettingsConfig


def _as_int(value: Any, default: int) -> int:
    """Convert mixed values to int with deterministic fallback."""
    if isinstance(value, bool):
        return int(default)
    try:
        number = float(value)
    except (TypeError, ValueError):
        return int(default)
    if not math.isfinite(number):
        return int(default)
    return int(number)


def _as_float(value: Any, default: float) -> float:
    """Convert mixed values to a finite float with deterministic fallback."""
    if isinstance(value, bool):
        return float(default)
    try:
        number = float(value)
    except (TypeError, ValueError):
        return float(default)
    return number if math.isfinite(number) else float(default)


@dataclass
class WebRagFormVM:
    """Browser-editable inputs for the RAG page."""

    new_text: str = ""
    query: str = ""
    top_k: int = 3
    similarity: float = 0.35
    llm_name: str = "llama"
    show_llm_option: bool = False
    max_top_k: int = 20

    @classmethod
    def from_settings(cls, config: SettingsConfig) -> "WebRagFormVM":
        """Seed form defaults from the client settings."""
        return cls(
            top_k=config.default_top_k,
            similarity=config.default_similarity,
            llm_name=config.default_llm_name,
            max_top_k=config.max_top_k,
        )

    def set_top_k(self, value: Any) -> None:
        """Store the number input value clamped to [1, max_top_k]."""
        number = _as_int(value, self.top_k)
        self.top_k = min(max(number, 1), self.max_top_k)

    def set_similarity(self, value: Any) -> None:
        """Store the number input value clamped to [0, 1]."""
        number = _as_float(value, self.similarity)
        self.similarity = min(max(number, 0.0), 1.0)

    @property
    def can_add(self) -> bool:
        return bool(self.new_text.strip())

    @property
    def can_search(self) -> bool:
        return bool(self.query.strip())

    @property
    def can_start_llm_benchmark(self) -> bool:
        return bool(self.llm_name.strip())

    def toggle_llm_option(self) -> None:
        self.show_llm_option = not self.show_llm_option

    def after_add(self, accepted: bool) -> None:
        """Clear the draft only when the service accepted it."""
        if accepted:
            self.new_text = ""


__all__ = ["WebRagFormVM"]
