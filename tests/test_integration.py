import os
import pytest
from fastapi.testclient import TestClient
from app.main import app

# 1x1 transparent PNG
PNG_1PX_B64 = "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII="


@pytest.mark.skipif(not os.getenv("OPENAI_LIVE_TEST"), reason="OPENAI_LIVE_TEST not set")
def test_integration_openai_vision():
    """
    Hits the real OpenAI API through the app lifespan, so the ChatOpenAI model built at
    start-up, the multimodal message shape and the response extraction are exercised together.
    """
    app.dependency_overrides.clear()
    with TestClient(app) as client:
        r = client.post(
            "/api/assistants/vision",
            json={"imageBase64": PNG_1PX_B64, "question": "Describe this image in one short sentence."},
        )
    assert r.status_code == 200
    assert r.json()["result"].strip()
