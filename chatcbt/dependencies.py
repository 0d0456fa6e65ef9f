from __future__ import annotations

from functools import lru_cache

from chatcbt.core.secrets import PlaintextSecretStore, SecretStore
from chatcbt.core.settings import get_settings
from chatcbt.services.chat_dispatcher import ChatDispatcher
from chatcbt.services.journal_service import JournalService
from chatcbt.services.providers import OpenRouterProvider


@lru_cache
def get_secret_store() -> SecretStore:
    return PlaintextSecretStore()


@lru_cache
def get_chat_dispatcher() -> ChatDispatcher:
    settings = get_settings()
    return ChatDispatcher(
        providers={"openrouter": OpenRouterProvider.from_settings(settings)},
        default_model=settings.openrouter_default_model,
    )


@lru_cache
def get_journal_service() -> JournalService:
    return JournalService(
        dispatcher=get_chat_dispatcher(),
        secrets=get_secret_store(),
        settings=get_settings(),
    )
