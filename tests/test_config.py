"""
Tests for persisted settings and project helpers (config.py)
"""

import json

import pytest

import config
from config import (
    DEFAULT_AI_PROMPT,
    DEFAULT_MODEL,
    OutlineEditorSettings,
    get_project_path,
    load_settings,
    mask_key,
    save_settings,
    slugify_project,
)


@pytest.fixture(autouse=True)
def no_env_key(monkeypatch):
    monkeypatch.delenv("OPENROUTER_API_KEY", raising=False)


def test_missing_file_gives_defaults(settings_file):
    settings = load_settings()

    assert settings == OutlineEditorSettings()
    assert settings.model == DEFAULT_MODEL
    assert settings.ai_prompt == DEFAULT_AI_PROMPT
    assert not settings.ai_enabled


def test_stored_values_merge_over_defaults(settings_file):
    settings_file.write_text(json.dumps({"apiKey": "k", "unknown": 1}), encoding="utf-8")

    settings = load_settings()

    assert settings.api_key == "k"
    assert settings.model == DEFAULT_MODEL
    assert settings.ai_enabled


def test_corrupt_file_falls_back(settings_file):
    settings_file.write_text("{not json", encoding="utf-8")
    assert load_settings() == OutlineEditorSettings()


def test_env_key_seeds_default(settings_file, monkeypatch):
    monkeypatch.setenv("OPENROUTER_API_KEY", "from-env")
    assert load_settings().api_key == "from-env"


def test_save_then_load(settings_file):
    save_settings(OutlineEditorSettings(api_key="abc", model="openai/gpt-4-turbo", ai_prompt="Shorter."))

    assert json.loads(settings_file.read_text(encoding="utf-8")) == {
        "apiKey": "abc",
        "model": "openai/gpt-4-turbo",
        "aiPrompt": "Shorter.",
    }
    assert load_settings() == OutlineEditorSettings(api_key="abc", model="openai/gpt-4-turbo", ai_prompt="Shorter.")


def test_apply_returns_copy():
    original = OutlineEditorSettings()
    changed = original.apply({"aiPrompt": "Be terse.", "model": None})

    assert changed.ai_prompt == "Be terse."
    assert changed.model == DEFAULT_MODEL
    assert original.ai_prompt == DEFAULT_AI_PROMPT


def test_mask_key():
    assert mask_key("short") == "***"
    assert mask_key("sk-or-v1-0123456789abcdef") == "sk-or-v1...cdef"


def test_project_paths(projects_dir):
    assert slugify_project("My Great Notes!") == "my-great-notes"
    assert slugify_project("") == "outline"
    assert get_project_path("My Great Notes!") == projects_dir / "my-great-notes.md"
    assert config.PROJECTS_DIR == projects_dir
