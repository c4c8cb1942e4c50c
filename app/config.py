import os
from dataclasses import dataclass
from typing import List
from dotenv import load_dotenv

load_dotenv()

# Hard limit of the vision API for a single image.
MAX_IMAGE_BYTES = 20 * 1024 * 1024

@dataclass
class Settings:
    MODEL_NAME: str
    VISION_DETAIL: str
    VISION_MAX_TOKENS: int
    CORS_ORIGINS: List[str]
    LOG_LEVEL: str

def _required(name: str) -> str:
    v = os.getenv(name)
    if not v:
        raise ValueError(f"{name} required")
    return v

def _load_settings() -> Settings:
    # ChatOpenAI reads the key from the environment itself; fail early if it is absent.
    _required("OPENAI_API_KEY")

    cors_origins_str = os.getenv("CORS_ORIGINS", "http://localhost:3000")
    cors_origins = [o.strip() for o in cors_origins_str.split(",") if o.strip()]

    if "*" in cors_origins:
        raise ValueError("CORS_ORIGINS must not contain '*' when using credentials")

    detail = os.getenv("VISION_DETAIL", "auto")
    if detail not in ("low", "high", "auto"):
        raise ValueError("VISION_DETAIL must be one of low, high, auto")

    return Settings(
        MODEL_NAME=os.getenv("MODEL_NAME", "gpt-4o-mini"),
        VISION_DETAIL=detail,
        VISION_MAX_TOKENS=int(os.getenv("VISION_MAX_TOKENS", "300")),
        CORS_ORIGINS=cors_origins,
        LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO").upper(),
    )

settings = _load_settings()
