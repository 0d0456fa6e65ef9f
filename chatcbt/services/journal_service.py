from __future__ import annotations

import logging
from dataclasses import dataclass, field

from chatcbt.core.exceptions import (
    EmptyDocument,
    MissingApiKey,
    UnknownCustomPrompt,
    UnknownModeError,
)
from chatcbt.core.secrets import SecretStore
from chatcbt.core.settings import Settings, get_settings
from chatcbt.models.chat import ChatRequest
from chatcbt.services.chat_dispatcher import ChatDispatcher
from chatcbt.services.messages import (
    append_to_document,
    build_assistant_reply,
    build_summary_append,
    drop_open_turn,
    open_next_turn,
    parse_document,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JournalReply:
    response: str
    append_text: str
    document: str
    notices: list[str] = field(default_factory=list)


class JournalService:
    """Answers a journal document the way the Chat and Summarize commands do."""

    def __init__(
        self,
        *,
        dispatcher: ChatDispatcher,
        secrets: SecretStore,
        settings: Settings | None = None,
    ):
        self._dispatcher = dispatcher
        self._secrets = secrets
        self._settings = settings or get_settings()

    def _resolve_custom_prompt(
        self, custom_prompt: str | None, custom_prompt_id: str | None
    ) -> str | None:
        if custom_prompt_id:
            custom = self._settings.get_custom_prompt(custom_prompt_id)
            if custom is None:
                raise UnknownCustomPrompt(custom_prompt_id)
            return custom.prompt
        return custom_prompt or None

    async def respond(
        self,
        document: str,
        *,
        is_summary: bool = False,
        custom_prompt: str | None = None,
        custom_prompt_id: str | None = None,
    ) -> JournalReply:
        settings = self._settings

        if settings.mode not in self._dispatcher.modes:
            raise UnknownModeError(settings.mode)
        if not settings.openrouter_api_key:
            raise MissingApiKey()
        if not document.strip():
            raise EmptyDocument()

        prompt = self._resolve_custom_prompt(custom_prompt, custom_prompt_id)
        messages = drop_open_turn(parse_document(document, settings.assistant_name))

        logger.info(
            "Asking ChatCBT (mode=%s, model=%s, turns=%d)",
            settings.mode,
            settings.current_model,
            len(messages),
        )

        notices: list[str] = []
        request = ChatRequest(
            api_key=self._secrets.decrypt(settings.openrouter_api_key),
            messages=messages,
            is_summary=is_summary,
            mode=settings.mode,
            model=settings.openrouter_model or None,
            language=settings.language,
            prompt=settings.prompt,
            custom_prompt=prompt,
        )
        response = await self._dispatcher.chat(request, notify=notices.append)

        if is_summary:
            new_document = append_to_document(
                document, build_summary_append(response), separate=False
            )
        else:
            new_document = append_to_document(
                document,
                build_assistant_reply(response, settings.assistant_name) + open_next_turn(),
            )
        append_text = new_document[len(document):]

        return JournalReply(
            response=response,
            append_text=append_text,
            document=new_document,
            notices=notices,
        )
