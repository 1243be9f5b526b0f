"""
Test configuration and fixtures
"""
import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import config
import state
from config import OutlineEditorSettings


SAMPLE_DOCUMENT = "\n".join([
    "# Project Notes",
    "Intro paragraph.",
    "",
    "## Goals",
    "- ship it",
    "## Risks",
    "Some risk text.",
    "### Timeline",
])


@pytest.fixture
def projects_dir(tmp_path, monkeypatch):
    """Point document storage at a temporary directory."""
    path = tmp_path / "projects"
    path.mkdir()
    monkeypatch.setattr(config, "PROJECTS_DIR", path)
    return path


@pytest.fixture
def settings_file(tmp_path, monkeypatch):
    path = tmp_path / "settings.json"
    monkeypatch.setattr(config, "SETTINGS_FILE", path)
    return path


@pytest.fixture(autouse=True)
def clean_state(monkeypatch):
    """Fresh session table and default settings for every test."""
    state.OUTLINE_SESSIONS.clear()
    monkeypatch.setitem(state.SETTINGS, "current", OutlineEditorSettings())
    yield
    state.OUTLINE_SESSIONS.clear()


@pytest.fixture
def ai_settings(monkeypatch):
    settings = OutlineEditorSettings(api_key="sk-or-v1-test-key-0123456789")
    monkeypatch.setitem(state.SETTINGS, "current", settings)
    return settings


@pytest.fixture
def sample_document(projects_dir):
    """Write the sample document as project 'notes' and return its path."""
    path = projects_dir / "notes.md"
    path.write_text(SAMPLE_DOCUMENT, encoding="utf-8")
    return path


@pytest.fixture
def client(projects_dir, settings_file):
    from app import create_app
    app = create_app()
    app.config["TESTING"] = True
    return app.test_client()


@pytest.fixture
def sample_text():
    return SAMPLE_DOCUMENT
