from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from chatcbt.services.prompts import DEFAULT_SYSTEM_PROMPT

DEFAULT_ASSISTANT_NAME = "ChatCBT"
DEFAULT_LANGUAGE = "English"


class CustomPrompt(BaseModel):
    id: str
    name: str
    prompt: str


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    app_name: str = Field(default="ChatCBT", alias="APP_NAME")
    environment: Literal["local", "dev", "staging", "prod"] = Field(
        default="local", alias="ENVIRONMENT"
    )
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    mode: Literal["openrouter"] = Field(default="openrouter", alias="CHATCBT_MODE")

    # Older installs stored an OpenAI or DeepSeek key; those are accepted as
    # the OpenRouter key.
    openrouter_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "OPENROUTER_API_KEY", "OPENAI_API_KEY", "DEEPSEEK_API_KEY"
        ),
    )
    openrouter_model: str = Field(
        default="",
        validation_alias=AliasChoices("OPENROUTER_MODEL", "OPENAI_MODEL"),
    )
    openrouter_default_model: str = Field(
        default="openai/gpt-4o-mini", alias="OPENROUTER_DEFAULT_MODEL"
    )
    openrouter_url: str = Field(
        default="https://openrouter.ai/api/v1/chat/completions",
        alias="OPENROUTER_URL",
    )
    openrouter_referer: str = Field(
        default="https://github.com/clairefro/obsidian-chat-cbt-plugin",
        alias="OPENROUTER_REFERER",
    )
    openrouter_title: str = Field(default="ChatCBT", alias="OPENROUTER_TITLE")
    provider_timeout: float | None = Field(default=None, alias="PROVIDER_TIMEOUT")

    language: str = Field(default=DEFAULT_LANGUAGE, alias="CHATCBT_LANGUAGE")
    prompt: str = Field(default=DEFAULT_SYSTEM_PROMPT, alias="CHATCBT_PROMPT")
    assistant_name: str = Field(default=DEFAULT_ASSISTANT_NAME, alias="ASSISTANT_NAME")
    custom_prompts: list[CustomPrompt] = Field(
        default_factory=list, alias="CUSTOM_PROMPTS"
    )

    @field_validator("openrouter_model", mode="before")
    @classmethod
    def _qualify_model(cls, value: str | None) -> str:
        # Bare OpenAI model names predate OpenRouter's vendor/model ids.
        value = (value or "").strip()
        if value and "/" not in value:
            return f"openai/{value}"
        return value

    @field_validator("assistant_name", mode="before")
    @classmethod
    def _default_assistant_name(cls, value: str | None) -> str:
        return (value or "").strip() or DEFAULT_ASSISTANT_NAME

    @field_validator("language", mode="before")
    @classmethod
    def _default_language(cls, value: str | None) -> str:
        return (value or "").strip() or DEFAULT_LANGUAGE

    @property
    def current_model(self) -> str:
        return self.openrouter_model or self.openrouter_default_model

    def get_custom_prompt(self, prompt_id: str) -> CustomPrompt | None:
        for custom in self.custom_prompts:
            if custom.id == prompt_id:
                return custom
        return None


@lru_cache
def get_settings() -> Settings:
    return Settings()
