import json
import os
import tempfile
from datetime import datetime, timedelta, timezone

# isolate config before anything under app/ is imported
_TMP = tempfile.mkdtemp(prefix="notebrief-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{_TMP}/test.db"
os.environ["AUTH_DEMO"] = "false"
os.environ["ENV"] = "test"
os.environ["JWT_KEY"] = "test-secret"

import httpx
import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.shared.db import Base, engine, init_db
from app.shared.auth import create_access_token, create_refresh_token
from app.ai.provider import CompletionProvider, get_provider
from app.client.session import Session, SessionProvider
from app.client.hooks import NotesClient
from app.client.ai import AIClient


@pytest.fixture(autouse=True)
def fresh_db():
    init_db()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def client():
    return TestClient(app)


def auth_headers(email: str, sub: str | None = None) -> dict:
    token = create_access_token(sub=sub or email.split("@")[0], email=email)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def alice():
    return auth_headers("alice@example.com")


@pytest.fixture()
def bob():
    return auth_headers("bob@example.com")


def make_session(email: str, minutes: int = 60) -> Session:
    sub = email.split("@")[0]
    return Session(
        access_token=create_access_token(sub=sub, email=email),
        refresh_token=create_refresh_token(sub=sub, email=email),
        email=email,
        expires_at=datetime.now(timezone.utc) + timedelta(minutes=minutes),
    )


@pytest.fixture()
def sessions(client):
    provider = SessionProvider(client)
    provider.use(make_session("alice@example.com"))
    return provider


@pytest.fixture()
def notes_client(client, sessions):
    return NotesClient(client, sessions)


class FakeLLM:
    """OpenAI-compatible endpoint behind httpx.MockTransport.

    Output length follows the requested max_tokens so size ordering is visible.
    """

    def __init__(self):
        self.requests: list[dict] = []
        self.fail = False
        self.models_fail = False
        self.models = [{"id": "llama3-70b-8192"}, {"id": "mixtral-8x7b-32768"}]
        self.calls = 0

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path.endswith("/chat/completions"):
            body = json.loads(request.content)
            self.requests.append(body)
            if self.fail:
                return httpx.Response(503, json={"error": {"message": "overloaded"}})
            self.calls += 1
            words = " ".join(["point"] * (body["max_tokens"] // 64))
            content = f"Summary #{self.calls}: {words}"
            return httpx.Response(200, json={"choices": [{"message": {"role": "assistant", "content": content}}]})
        if path.endswith("/models"):
            if self.models_fail:
                return httpx.Response(500, json={"error": "down"})
            return httpx.Response(200, json={"object": "list", "data": self.models})
        return httpx.Response(404, json={"error": "not found"})


@pytest.fixture()
def llm():
    fake = FakeLLM()

    def _provider():
        provider = CompletionProvider(
            base_url="https://llm.test/v1",
            api_key="test-key",
            transport=httpx.MockTransport(fake.handler),
        )
        try:
            yield provider
        finally:
            provider.close()

    app.dependency_overrides[get_provider] = _provider
    yield fake
    app.dependency_overrides.pop(get_provider, None)


@pytest.fixture()
def ai_client(client):
    return AIClient(client)
