from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from app.api.v1.chat import get_session_store
from app.main import app
from app.services.conversation import ConversationOrchestrator
from app.services.sessions import SessionStore
from app.tests.utils import FakeChatClient, FakePriceClient, ok_result


@pytest.fixture
def chat() -> FakeChatClient:
    return FakeChatClient()


@pytest.fixture
def prices() -> FakePriceClient:
    return FakePriceClient(ok_result())


@pytest.fixture
def store(chat: FakeChatClient, prices: FakePriceClient) -> SessionStore:
    return SessionStore(factory=lambda: ConversationOrchestrator(chat, prices))


@pytest.fixture
def client(store: SessionStore) -> Generator[TestClient, None, None]:
    app.dependency_overrides[get_session_store] = lambda: store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
