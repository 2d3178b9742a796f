from __future__ import annotations

import math
from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, Mapping, Optional


@dataclass(frozen=True)
class SettingsConfig:
    """Typed client settings shared by the adapter, orchestrator and forms."""

    base_url: str = "http://localhost:5005/"
    request_timeout_s: int = 10
    benchmark_timeout_s: int = 120
    retries: int = 0
    default_top_k: int = 3
    max_top_k: int = 20
    default_similarity: float = 0.35
    default_llm_name: str = "llama"


class SettingsVM:
    """Keeps client settings and their validation, no I/O here."""

    def __init__(self, *, config: Optional[SettingsConfig] = None) -> None:
        self.config = config or SettingsConfig()

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self.config)

    def apply_dict(self, payload: Mapping[str, Any]) -> SettingsConfig:
        """Validate ``payload`` and replace the known keys in the config.

        Unknown keys are ignored. Nothing is applied if any value is invalid.

        Raises:
            ValueError: If a value cannot be coerced or is out of range.
        """
        if not isinstance(payload, Mapping):
            raise ValueError("Settings payload must be a mapping.")
        updates: Dict[str, Any] = {}
        if "base_url" in payload:
            updates["base_url"] = self._coerce_url(payload["base_url"])
        for key in ("request_timeout_s", "benchmark_timeout_s", "default_top_k", "max_top_k"):
            if key in payload:
                updates[key] = self._coerce_int(key, payload[key], minimum=1)
        if "retries" in payload:
            updates["retries"] = self._coerce_int("retries", payload["retries"], minimum=0)
        if "default_similarity" in payload:
            updates["default_similarity"] = self._coerce_ratio(
                "default_similarity", payload["default_similarity"]
            )
        if "default_llm_name" in payload:
            updates["default_llm_name"] = str(payload["default_llm_name"] or "").strip()

        candidate = replace(self.config, **updates)
        if candidate.default_top_k > candidate.max_top_k:
            raise ValueError("default_top_k must not exceed max_top_k.")
        self.config = candidate
        return candidate

    # ------------------------------------------------------------------
    @staticmethod
    def _coerce_url(value: Any) -> str:
        text = str(value or "").strip()
        if not text:
            raise ValueError("base_url must be a non-empty string.")
        if not text.startswith(("http://", "https://")):
            raise ValueError(f"base_url must start with http:// or https:// (got {text!r}).")
        return text

    @staticmethod
    def _coerce_int(name: str, value: Any, *, minimum: int) -> int:
        if isinstance(value, bool):
            raise ValueError(f"{name} must be an integer.")
        try:
            number = int(str(value).strip())
        except (TypeError, ValueError):
            raise ValueError(f"{name} must be an integer.") from None
        if number < minimum:
            raise ValueError(f"{name} must be >= {minimum}.")
        return number

    @staticmethod
    def _coerce_ratio(name: str, value: Any) -> float:
        if isinstance(value, bool):
            raise ValueError(f"{name} must be a number.")
        try:
            number = float(value)
        except (TypeError, ValueError):
            raise ValueError(f"{name} must be a number.") from None
        if not math.isfinite(number) or not 0.0 <= number <= 1.0:
            raise ValueError(f"{name} must be within [0, 1].")
        return number


__all__ = ["SettingsConfig", "SettingsVM"]
