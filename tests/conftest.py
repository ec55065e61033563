from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from main import create_app
from painpal.core.config import make_engine
from painpal.storage import DatabaseStorage, MemoryStorage


class FakeClock:
    """Manually driven replacement for ``datetime.now``."""

    def __init__(self, start: datetime):
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


class FakeCompletionClient:
    """Records prompts and answers with a canned reply (or raises it)."""

    def __init__(self, reply="Sounds like a good day for a gentle stretch."):
        self.reply = reply
        self.calls = []

    def complete(self, messages, *, max_tokens, temperature):
        self.calls.append(
            {"messages": messages, "max_tokens": max_tokens, "temperature": temperature}
        )
        if isinstance(self.reply, Exception):
            raise self.reply
        return self.reply


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 10, 19, 9, 0, 0))


@pytest.fixture(params=["memory", "database"])
def storage(request, clock):
    if request.param == "memory":
        yield MemoryStorage(clock=clock)
        return

    backend = DatabaseStorage(make_engine("sqlite://"), clock=clock)
    backend.create_all()
    yield backend
    backend.engine.dispose()


@pytest.fixture
def completion_client():
    return FakeCompletionClient()


@pytest.fixture
def client(storage, completion_client):
    app = create_app(storage=storage, completion_client=completion_client)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def alice(client):
    """Registered user; returns the identity headers for requests."""
    response = client.post(
        "/api/users",
        json={"email": "alice@example.com", "name": "Alice", "external_id": "uid-alice"},
    )
    assert response.status_code == 200
    return {"x-firebase-uid": "uid-alice"}


@pytest.fixture
def bob(client):
    response = client.post(
        "/api/users",
        json={"email": "bob@example.com", "name": "Bob", "external_id": "uid-bob"},
    )
    assert response.status_code == 200
    return {"x-firebase-uid": "uid-bob"}
