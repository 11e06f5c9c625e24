"""
Pytest fixtures for the chat API tests.

The knowledge lookup and the language model are replaced by in-memory fakes
injected through create_app, so no network access is needed.
"""
import pytest
from fastapi.testclient import TestClient

from ingres_api.app.config import Settings
from ingres_api.app.main import create_app
from ingres_api.app.services.chat_service import ChatService
from tests.fakes import FakeKnowledge, FakeLLM


@pytest.fixture
def settings():
    return Settings(_env_file=None, LOG_DIR=None)


@pytest.fixture
def knowledge():
    return FakeKnowledge()


@pytest.fixture
def llm():
    return FakeLLM()


@pytest.fixture
def service(knowledge, llm):
    return ChatService(knowledge=knowledge, llm=llm, chat_model="test-model", keep_alive="1m")


@pytest.fixture
def client(settings, service):
    with TestClient(create_app(settings=settings, chat_service=service)) as client:
        yield client
