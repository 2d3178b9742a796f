from __future__ import annotations

from ragdesk.viewmodels.settings_vm import SettingsConfig
from ragdesk.web_ui.viewmodels import WebRagFormVM


def test_form_seeds_from_settings() -> None:
    form = WebRagFormVM.from_settings(SettingsConfig(default_top_k=5, max_top_k=8))

    assert form.top_k == 5
    assert form.max_top_k == 8
    assert form.similarity == 0.35
    assert form.llm_name == "llama"


def test_top_k_is_clamped_to_range() -> None:
    form = WebRagFormVM()

    form.set_top_k(50)
    assert form.top_k == 20
    form.set_top_k(0)
    assert form.top_k == 1
    form.set_top_k("7")
    assert form.top_k == 7
    form.set_top_k(None)
    assert form.top_k == 7


def test_similarity_is_clamped_to_unit_interval() -> None:
    form = WebRagFormVM()

    form.set_similarity(1.7)
    assert form.similarity == 1.0
    form.set_similarity(-0.2)
    assert form.similarity == 0.0
    form.set_similarity(float("nan"))
    assert form.similarity == 0.0


def test_buttons_follow_trimmed_inputs() -> None:
    form = WebRagFormVM(new_text="   ", query=" q ", llm_name=" ")

    assert form.can_add is False
    assert form.can_search is True
    assert form.can_start_llm_benchmark is False


def test_draft_kept_until_add_accepted() -> None:
    form = WebRagFormVM(new_text="draft")

    form.after_add(False)
    assert form.new_text == "draft"
    form.after_add(True)
    assert form.new_text == ""


def test_llm_option_toggles() -> None:
    form = WebRagFormVM()

    form.toggle_llm_option()
    assert form.show_llm_option is True
    form.toggle_llm_option()
    assert form.show_llm_option is False
