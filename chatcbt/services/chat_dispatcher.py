from __future__ import annotations

import logging
from collections.abc import Callable, Mapping

from chatcbt.core.exceptions import UnknownModeError
from chatcbt.models.chat import ChatMessage, ChatRequest
from chatcbt.services.prompts import language_directive, summary_prompt
from chatcbt.services.providers import ChatProvider

logger = logging.getLogger(__name__)

Notify = Callable[[str], None]


class ChatDispatcher:
    """Shapes a :class:`ChatRequest` into provider messages and sends it.

    Holds only immutable configuration. Each ``chat`` call issues exactly one
    provider request and never retries.
    """

    def __init__(self, *, providers: Mapping[str, ChatProvider], default_model: str):
        self._providers = dict(providers)
        self._default_model = default_model

    @property
    def modes(self) -> list[str]:
        return list(self._providers)

    def build_messages(self, request: ChatRequest) -> list[ChatMessage]:
        system = ChatMessage(
            role="system",
            content=language_directive(request.language) + request.prompt,
        )
        messages = [system, *request.messages]

        if request.is_summary:
            messages.append(ChatMessage(role="user", content=summary_prompt(request.language)))

        if request.custom_prompt:
            messages.append(ChatMessage(role="user", content=request.custom_prompt))

        return messages

    def resolve_model(self, request: ChatRequest, notify: Notify | None = None) -> str:
        if request.model:
            return request.model
        (notify or logger.warning)(
            f"No model selected in settings; using default model {self._default_model}"
        )
        return self._default_model

    async def chat(self, request: ChatRequest, notify: Notify | None = None) -> str:
        provider = self._providers.get(request.mode)
        if provider is None:
            raise UnknownModeError(request.mode)

        messages = self.build_messages(request)
        model = self.resolve_model(request, notify)

        logger.info(
            "Sending %d messages to %s with model %s (summary=%s)",
            len(messages),
            request.mode,
            model,
            request.is_summary,
        )
        response = await provider.send_chat(
            api_key=request.api_key, model=model, messages=messages
        )
        logger.info("Received response from %s", request.mode)
        return response
