import pytest
from fastapi.testclient import TestClient

from main import create_app
from mentor_buddy.core.ai_engine import ChatModel, PromptMessage
from mentor_buddy.db.session import init_db, make_engine, make_session_factory
from mentor_buddy.storage import DatabaseStorage, MemStorage


class FakeChatModel(ChatModel):
    """Records prompts, answers with a canned reply or raises a canned error."""

    def __init__(self, reply: str | None = "Here is some career advice.", error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.calls: list[list[PromptMessage]] = []

    def complete(self, messages):
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def mem_storage():
    return MemStorage()


@pytest.fixture
def db_storage():
    engine = make_engine("sqlite://")
    init_db(engine)
    yield DatabaseStorage(make_session_factory(engine))
    engine.dispose()


@pytest.fixture(params=["memory", "database"])
def storage(request):
    return request.getfixturevalue("mem_storage" if request.param == "memory" else "db_storage")


@pytest.fixture
def chat_model():
    return FakeChatModel()


@pytest.fixture
def client(storage, chat_model):
    return TestClient(create_app(storage=storage, chat_model=chat_model))


@pytest.fixture
def db_client(db_storage, chat_model):
    return TestClient(create_app(storage=db_storage, chat_model=chat_model))
