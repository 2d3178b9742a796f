from __future__ import annotations

import logging

import pytest

from ragdesk.utils.logging import configure_root, resolve_env_level


@pytest.fixture(autouse=True)
def _restore_levels():
    root = logging.getLogger()
    saved = (root.level, logging.getLogger("httpx").level, logging.getLogger("httpcore").level)
    yield
    root.setLevel(saved[0])
    logging.getLogger("httpx").setLevel(saved[1])
    logging.getLogger("httpcore").setLevel(saved[2])


def test_env_level_overrides_default(monkeypatch) -> None:
    monkeypatch.setenv("RAGDESK_LOG_LEVEL", "warning")
    monkeypatch.delenv("RAGDESK_DEBUG", raising=False)

    assert configure_root(logging.INFO) == logging.WARNING
    assert logging.getLogger().level == logging.WARNING


def test_unknown_env_level_falls_back_to_info(monkeypatch) -> None:
    monkeypatch.setenv("RAGDESK_LOG_LEVEL", "chatty")

    assert resolve_env_level() == logging.INFO


def test_debug_flag_enables_transport_logs(monkeypatch) -> None:
    monkeypatch.delenv("RAGDESK_LOG_LEVEL", raising=False)
    monkeypatch.setenv("RAGDESK_DEBUG", "yes")

    assert configure_root() == logging.DEBUG
    assert logging.getLogger("httpx").level == logging.DEBUG


def test_default_level_quiets_transport(monkeypatch) -> None:
    monkeypatch.delenv("RAGDESK_LOG_LEVEL", raising=False)
    monkeypatch.delenv("RAGDESK_DEBUG", raising=False)

    assert resolve_env_level() is None
    assert configure_root(logging.INFO) == logging.INFO
    assert logging.getLogger("httpcore").level == logging.WARNING
