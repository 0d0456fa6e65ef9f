from __future__ import annotations

import pytest

from chatcbt.core.settings import Settings
from chatcbt.services.prompts import DEFAULT_SYSTEM_PROMPT


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in (
        "OPENROUTER_API_KEY",
        "OPENAI_API_KEY",
        "DEEPSEEK_API_KEY",
        "OPENROUTER_MODEL",
        "OPENAI_MODEL",
        "ASSISTANT_NAME",
        "CHATCBT_LANGUAGE",
        "CHATCBT_PROMPT",
        "CUSTOM_PROMPTS",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.mode == "openrouter"
    assert settings.language == "English"
    assert settings.assistant_name == "ChatCBT"
    assert settings.prompt == DEFAULT_SYSTEM_PROMPT
    assert settings.openrouter_model == ""
    assert settings.current_model == settings.openrouter_default_model
    assert settings.provider_timeout is None


def test_legacy_openai_key_is_migrated(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-legacy")
    assert Settings(_env_file=None).openrouter_api_key == "sk-legacy"


def test_openrouter_key_takes_precedence(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-legacy")
    monkeypatch.setenv("OPENROUTER_API_KEY", "sk-or")
    assert Settings(_env_file=None).openrouter_api_key == "sk-or"


def test_bare_openai_model_gets_vendor_prefix(monkeypatch):
    monkeypatch.setenv("OPENAI_MODEL", "gpt-4o")
    assert Settings(_env_file=None).openrouter_model == "openai/gpt-4o"


def test_qualified_model_is_kept(monkeypatch):
    monkeypatch.setenv("OPENROUTER_MODEL", "anthropic/claude-3.5-sonnet")
    assert Settings(_env_file=None).current_model == "anthropic/claude-3.5-sonnet"


def test_blank_assistant_name_falls_back(monkeypatch):
    monkeypatch.setenv("ASSISTANT_NAME", "   ")
    assert Settings(_env_file=None).assistant_name == "ChatCBT"


def test_custom_prompts_from_json(monkeypatch):
    monkeypatch.setenv("CUSTOM_PROMPTS", '[{"id": "r", "name": "Reframe", "prompt": "Reframe it"}]')
    settings = Settings(_env_file=None)
    assert settings.get_custom_prompt("r").prompt == "Reframe it"
    assert settings.get_custom_prompt("missing") is None
