import logging
import pytest
from app.config import _load_settings
from app.logging import configure_logging


def test_defaults(monkeypatch):
    for name in ("MODEL_NAME", "VISION_DETAIL", "VISION_MAX_TOKENS", "CORS_ORIGINS", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    s = _load_settings()
    assert s.MODEL_NAME == "gpt-4o-mini"
    assert s.VISION_DETAIL == "auto"
    assert s.VISION_MAX_TOKENS == 300
    assert s.CORS_ORIGINS == ["http://localhost:3000"]
    assert s.LOG_LEVEL == "INFO"


def test_missing_api_key(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    with pytest.raises(ValueError, match="OPENAI_API_KEY"):
        _load_settings()


def test_cors_wildcard_rejected(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "http://a.example, *")
    with pytest.raises(ValueError):
        _load_settings()


def test_cors_origins_split(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "http://a.example, http://b.example,")
    assert _load_settings().CORS_ORIGINS == ["http://a.example", "http://b.example"]


def test_invalid_detail_rejected(monkeypatch):
    monkeypatch.setenv("VISION_DETAIL", "ultra")
    with pytest.raises(ValueError):
        _load_settings()


def test_configure_logging_does_not_stack_handlers():
    root = logging.getLogger()
    before = len(root.handlers)
    configure_logging("INFO")
    configure_logging("DEBUG")
    assert len(root.handlers) == before
    assert root.level == logging.DEBUG
    configure_logging("INFO")
