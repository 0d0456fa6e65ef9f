"""Error taxonomy shared by the dispatcher, the journal service and the API.

Each error carries a human-readable ``message`` and the HTTP ``status_code``
the API layer answers with. Provider errors are never retried here; the
caller decides whether to resubmit.
"""

from __future__ import annotations


class ChatCbtError(Exception):
    status_code: int = 500
    default_message: str = "ChatCBT request failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


# Provider errors, normalized independently of the HTTP library.


class ProviderError(ChatCbtError):
    status_code = 502

    def __init__(self, message: str | None = None, *, detail: str | None = None):
        self.detail = detail
        message = message or self.default_message
        if detail:
            message = f"{message} (provider said: {detail})"
        super().__init__(message)


class Unauthorized(ProviderError):
    status_code = 401
    default_message = "invalid API key. Please check your OpenRouter API key in settings."


class Forbidden(ProviderError):
    status_code = 403
    default_message = (
        "insufficient permissions. Please verify your OpenRouter API key has "
        "proper permissions."
    )


class ModelNotFound(ProviderError):
    status_code = 404

    def __init__(self, model: str | None = None, *, detail: str | None = None):
        self.model = model
        super().__init__(
            f"model '{model}' not found, check model name in settings."
            if model
            else "model not found, check model name in settings.",
            detail=detail,
        )


class RateLimited(ProviderError):
    status_code = 429
    default_message = "rate limit exceeded, retry later."


class ProviderServerError(ProviderError):
    default_message = "provider service error, retry later."


class ProviderPayloadError(ProviderError):
    """The provider answered with an embedded ``error`` object."""

    def __init__(self, detail: str | None = None, code: object | None = None):
        self.code = code
        super().__init__(f"API error: {detail or 'Unknown error'}")


class EmptyResponse(ProviderError):
    default_message = "no completions returned"


# Request validation errors raised before anything is sent.


class UnknownModeError(ChatCbtError):
    status_code = 400

    def __init__(self, mode: str):
        self.mode = mode
        super().__init__(
            f"Invalid mode '{mode}' detected. Update ChatCBT settings and select a valid mode"
        )


class MissingApiKey(ChatCbtError):
    status_code = 400
    default_message = "Missing OpenRouter API key - update in ChatCBT settings"


class EmptyDocument(ChatCbtError):
    status_code = 400
    default_message = "First, share how you are feeling in a note"


class UnknownCustomPrompt(ChatCbtError):
    status_code = 404

    def __init__(self, prompt_id: str):
        self.prompt_id = prompt_id
        super().__init__(f"Custom prompt '{prompt_id}' not found")
