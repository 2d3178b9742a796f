"""Fixed-precision display helpers for benchmark metrics.

Call context:
    ``MetricsVM`` calls these helpers when building metric cards. Stored
    metrics keep full precision; rounding happens only here.
"""

from __future__ import annotations

from typing import Optional

PREVIEW_CHARS = 150


def fmt_seconds(value: float) -> str:
    """Durations in seconds, 3 decimals (``0.123s``)."""
    return f"{value:.3f}s"


def fmt_ms(value: float) -> str:
    """Millisecond timings, 2 decimals (``4.20 ms``)."""
    return f"{value:.2f} ms"


def fmt_index_mb(value: float) -> str:
    """Index file sizes, 4 decimals (``0.0015 MB``)."""
    return f"{value:.4f} MB"


def fmt_mb(value: float) -> str:
    """Memory and VRAM sizes, 2 decimals (``512.00 MB``)."""
    return f"{value:.2f} MB"


def fmt_ratio(value: float) -> str:
    """Recall ratios, 3 decimals."""
    return f"{value:.3f}"


def preview(text: Optional[str], limit: int = PREVIEW_CHARS) -> str:
    """Return the first ``limit`` characters followed by an ellipsis."""
    return f"{(text or '')[:limit]}..."


def bar_pct(value: float, scale: float) -> float:
    """Express ``value`` as a percentage of ``scale``, clamped to [0, 100]."""
    if scale <= 0:
        return 0.0
    pct = value / scale * 100.0
    return min(max(pct, 0.0), 100.0)


__all__ = [
    "PREVIEW_CHARS",
    "bar_pct",
    "fmt_index_mb",
    "fmt_mb",
    "fmt_ms",
    "fmt_ratio",
    "fmt_seconds",
    "preview",
]
