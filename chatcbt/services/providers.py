from __future__ import annotations

import logging
from typing import Any, Protocol
from urllib.parse import urlparse

import httpx

from chatcbt.core.exceptions import (
    EmptyResponse,
    Forbidden,
    ModelNotFound,
    ProviderPayloadError,
    ProviderServerError,
    RateLimited,
    Unauthorized,
)
from chatcbt.core.settings import Settings
from chatcbt.models.chat import ChatMessage

logger = logging.getLogger(__name__)

TEMPERATURE = 0.7


class ChatProvider(Protocol):
    async def send_chat(
        self, *, api_key: str, model: str, messages: list[ChatMessage]
    ) -> str: ...


class OpenRouterProvider:
    """Chat-completions client for OpenRouter and OpenAI-compatible endpoints."""

    def __init__(
        self,
        *,
        url: str,
        referer: str | None = None,
        title: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._url = url
        self._referer = referer
        self._title = title
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(
        cls, settings: Settings, transport: httpx.AsyncBaseTransport | None = None
    ) -> "OpenRouterProvider":
        return cls(
            url=settings.openrouter_url,
            referer=settings.openrouter_referer,
            title=settings.openrouter_title,
            timeout=settings.provider_timeout,
            transport=transport,
        )

    def _is_openrouter(self) -> bool:
        host = urlparse(self._url).hostname or ""
        return host == "openrouter.ai" or host.endswith(".openrouter.ai")

    def build_headers(self, api_key: str) -> dict[str, str]:
        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }
        # OpenRouter uses these for app attribution and rate limits.
        if self._is_openrouter():
            if self._referer:
                headers["HTTP-Referer"] = self._referer
            if self._title:
                headers["X-Title"] = self._title
        return headers

    async def send_chat(
        self, *, api_key: str, model: str, messages: list[ChatMessage]
    ) -> str:
        payload = {
            "model": model,
            "messages": [m.model_dump() for m in messages],
            "temperature": TEMPERATURE,
        }

        async with httpx.AsyncClient(
            timeout=self._timeout, transport=self._transport
        ) as client:
            response = await client.post(
                self._url, headers=self.build_headers(api_key), json=payload
            )

        return _extract_content(response, model)


def _json_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


def _embedded_error(body: Any) -> tuple[str, Any] | None:
    if not isinstance(body, dict) or not body.get("error"):
        return None
    error = body["error"]
    if isinstance(error, dict):
        return error.get("message") or "Unknown error", error.get("code")
    return str(error), None


def _extract_content(response: httpx.Response, model: str) -> str:
    body = _json_body(response)
    embedded = _embedded_error(body)

    status = response.status_code
    if status >= 400:
        logger.warning("Provider returned HTTP %s for model %s", status, model)

    # Known statuses keep their normalized error; the provider's own message
    # rides along as detail.
    detail = embedded[0] if embedded else None
    if status == 401:
        raise Unauthorized(detail=detail)
    if status == 403:
        raise Forbidden(detail=detail)
    if status == 404:
        raise ModelNotFound(model, detail=detail)
    if status == 429:
        raise RateLimited(detail=detail)
    if status >= 500:
        raise ProviderServerError(detail=detail)

    # Some providers answer 200 with an error object.
    if embedded:
        raise ProviderPayloadError(embedded[0], code=embedded[1])

    # Anything else unexpected keeps httpx's own message.
    response.raise_for_status()

    body = response.json()
    choices = body.get("choices") if isinstance(body, dict) else None
    if not isinstance(choices, list) or not choices:
        raise EmptyResponse()

    choice = choices[0] if isinstance(choices[0], dict) else {}
    message = choice.get("message") or {}
    content = message.get("content") if isinstance(message, dict) else None
    if not isinstance(content, str):
        raise EmptyResponse()
    return content
