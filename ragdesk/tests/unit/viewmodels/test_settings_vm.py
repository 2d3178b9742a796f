from __future__ import annotations

import pytest

from ragdesk.viewmodels.settings_vm import SettingsConfig, SettingsVM


def test_defaults_match_service_conventions() -> None:
    config = SettingsConfig()

    assert config.base_url == "http://localhost:5005/"
    assert config.request_timeout_s == 10
    assert config.benchmark_timeout_s == 120
    assert config.default_top_k == 3
    assert config.default_similarity == pytest.approx(0.35)


def test_apply_dict_coerces_and_ignores_unknown_keys() -> None:
    vm = SettingsVM()

    config = vm.apply_dict(
        {
            "base_url": " https://rag.example:8443/ ",
            "request_timeout_s": "15",
            "retries": 2,
            "default_similarity": "0.5",
            "default_llm_name": " mistral ",
            "theme": "dark",
        }
    )

    assert config.base_url == "https://rag.example:8443/"
    assert config.request_timeout_s == 15
    assert config.retries == 2
    assert config.default_similarity == pytest.approx(0.5)
    assert config.default_llm_name == "mistral"
    assert vm.to_dict()["retries"] == 2


@pytest.mark.parametrize(
    "payload",
    [
        {"base_url": ""},
        {"base_url": "ftp://rag"},
        {"request_timeout_s": 0},
        {"benchmark_timeout_s": "soon"},
        {"retries": -1},
        {"retries": True},
        {"default_similarity": 1.2},
        {"default_top_k": 30},
        "not a mapping",
    ],
)
def test_apply_dict_rejects_invalid_values(payload) -> None:
    vm = SettingsVM()
    before = vm.config

    with pytest.raises(ValueError):
        vm.apply_dict(payload)

    assert vm.config == before
