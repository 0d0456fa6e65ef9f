from fastapi.testclient import TestClient

from chatcbt.core.exceptions import MissingApiKey, RateLimited, Unauthorized
from chatcbt.core.settings import CustomPrompt, Settings
from chatcbt.main import create_app
from chatcbt.services.journal_service import JournalReply


class _FakeJournalService:
    def __init__(self, error: Exception | None = None):
        self.error = error
        self.calls: list[dict] = []

    async def respond(self, document, *, is_summary=False, custom_prompt=None, custom_prompt_id=None):
        self.calls.append(
            {
                "document": document,
                "is_summary": is_summary,
                "custom_prompt": custom_prompt,
                "custom_prompt_id": custom_prompt_id,
            }
        )
        if self.error is not None:
            raise self.error
        append_text = f"\n\necho:{document}"
        return JournalReply(
            response=f"echo:{document}",
            append_text=append_text,
            document=document + append_text,
            notices=["No model selected"],
        )


def _client(service: _FakeJournalService) -> TestClient:
    app = create_app()

    # Lazy import to avoid building the real dispatcher
    import chatcbt.api.chat as chat_api

    app.dependency_overrides[chat_api.get_journal_service] = lambda: service
    return TestClient(app)


def test_chat_happy_path():
    service = _FakeJournalService()
    r = _client(service).post("/api/v1/chat", json={"document": "hi", "custom_prompt": "Reframe"})
    assert r.status_code == 200
    assert r.json() == {
        "response": "echo:hi",
        "append_text": "\n\necho:hi",
        "document": "hi\n\necho:hi",
        "notices": ["No model selected"],
    }
    assert service.calls[0]["custom_prompt"] == "Reframe"
    assert service.calls[0]["is_summary"] is False


def test_summarize_sets_summary_flag():
    service = _FakeJournalService()
    r = _client(service).post("/api/v1/summarize", json={"document": "hi"})
    assert r.status_code == 200
    assert service.calls[0]["is_summary"] is True


def test_provider_errors_keep_their_message():
    r = _client(_FakeJournalService(error=Unauthorized())).post("/api/v1/chat", json={"document": "hi"})
    assert r.status_code == 401
    assert "invalid API key" in r.json()["detail"]

    r = _client(_FakeJournalService(error=RateLimited())).post("/api/v1/chat", json={"document": "hi"})
    assert r.status_code == 429
    assert "rate limit" in r.json()["detail"]


def test_validation_errors_are_client_errors():
    r = _client(_FakeJournalService(error=MissingApiKey())).post("/api/v1/summarize", json={"document": "hi"})
    assert r.status_code == 400


def test_document_is_required():
    r = _client(_FakeJournalService()).post("/api/v1/chat", json={})
    assert r.status_code == 422


def test_list_custom_prompts():
    app = create_app()

    import chatcbt.api.chat as chat_api

    settings = Settings(
        _env_file=None,
        custom_prompts=[CustomPrompt(id="r", name="Reframe", prompt="Reframe it")],
    )
    app.dependency_overrides[chat_api.get_settings] = lambda: settings

    r = TestClient(app).get("/api/v1/prompts")
    assert r.status_code == 200
    assert r.json() == [{"id": "r", "name": "Reframe", "prompt": "Reframe it"}]


def test_chat_end_to_end_with_mocked_provider():
    import httpx

    from chatcbt.core.secrets import PlaintextSecretStore
    from chatcbt.services.chat_dispatcher import ChatDispatcher
    from chatcbt.services.journal_service import JournalService
    from chatcbt.services.providers import OpenRouterProvider

    bodies = [
        {"choices": [{"message": {"content": "Hello"}}]},
        {"error": {"message": "boom"}},
    ]

    def _handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=bodies.pop(0))

    settings = Settings(_env_file=None, openrouter_api_key="sk-test", assistant_name="Bot")
    provider = OpenRouterProvider.from_settings(settings, transport=httpx.MockTransport(_handler))
    service = JournalService(
        dispatcher=ChatDispatcher(
            providers={"openrouter": provider},
            default_model=settings.openrouter_default_model,
        ),
        secrets=PlaintextSecretStore(),
        settings=settings,
    )
    client = _client(service)

    r = client.post("/api/v1/chat", json={"document": "I feel anxious today"})
    assert r.status_code == 200
    assert r.json()["response"] == "Hello"
    assert r.json()["append_text"] == "\n\n---\n\n**Bot:** Hello\n\n---\n\n"

    r = client.post("/api/v1/chat", json={"document": "I feel anxious today"})
    assert r.status_code == 502
    assert "boom" in r.json()["detail"]
