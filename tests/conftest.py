import os

# Settings are loaded at import time and require a key; tests never reach OpenAI with it.
os.environ.setdefault("OPENAI_API_KEY", "test-key")

import pytest
from fastapi.testclient import TestClient
from langchain_core.messages import AIMessage
from app.main import app
from app.api.vision import get_vision_llm


class FakeVisionLLM:
    """Stands in for ChatOpenAI: records every call and answers with a fixed reply or error."""

    def __init__(self, content="A cat sitting on a windowsill.", error=None):
        self.content = content
        self.error = error
        self.calls = []

    async def ainvoke(self, messages):
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return AIMessage(content=self.content)


@pytest.fixture
def fake_llm():
    return FakeVisionLLM()


@pytest.fixture
def vision_app(fake_llm):
    app.dependency_overrides[get_vision_llm] = lambda: fake_llm
    try:
        yield app
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def client(vision_app):
    return TestClient(vision_app)
