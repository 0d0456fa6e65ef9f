from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Role = Literal["system", "user", "assistant"]


class ChatMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: Role
    content: str


class ChatRequest(BaseModel):
    """One dispatch to the provider. Built fresh per call, never stored."""

    model_config = ConfigDict(frozen=True)

    api_key: str
    messages: list[ChatMessage] = Field(min_length=1)
    is_summary: bool = False
    mode: str = "openrouter"
    model: str | None = None
    language: str = "English"
    prompt: str = ""
    custom_prompt: str | None = None


class JournalChatRequest(BaseModel):
    document: str
    custom_prompt: str | None = None
    custom_prompt_id: str | None = None


class JournalSummaryRequest(BaseModel):
    document: str


class JournalResponse(BaseModel):
    response: str
    append_text: str
    document: str
    notices: list[str] = Field(default_factory=list)


class CustomPromptRead(BaseModel):
    id: str
    name: str
    prompt: str
