from __future__ import annotations

import logging
import os
from typing import Optional

_DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_DEFAULT_DATEFMT = "%H:%M:%S"
_LEVEL_ENV_VAR = "RAGDESK_LOG_LEVEL"
_DEBUG_FLAG = "RAGDESK_DEBUG"
_NOISY_LOGGERS = ("httpx", "httpcore")


def resolve_env_level() -> Optional[int]:
    """Return the level forced by the environment, or ``None``.

    Unknown level names fall back to INFO.
    """
    value = (os.getenv(_LEVEL_ENV_VAR) or "").strip()
    if value:
        level = logging.getLevelName(value.upper())
        return level if isinstance(level, int) else logging.INFO
    if (os.getenv(_DEBUG_FLAG) or "").strip().lower() in {"1", "true", "yes", "on"}:
        return logging.DEBUG
    return None


def configure_root(default_level: int = logging.INFO) -> int:
    """
    Configure the root logger with a compact format.

    Environment overrides:
      - RAGDESK_LOG_LEVEL: explicit log level
      - RAGDESK_DEBUG: truthy -> DEBUG

    httpx/httpcore request chatter stays at WARNING unless DEBUG is active.
    """
    env_level = resolve_env_level()
    effective = env_level if env_level is not None else int(default_level)

    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=effective, format=_DEFAULT_FORMAT, datefmt=_DEFAULT_DATEFMT)
    root.setLevel(effective)
    transport_level = logging.DEBUG if effective <= logging.DEBUG else logging.WARNING
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(transport_level)
    return effective
