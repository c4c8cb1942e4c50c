from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, field_validator


class VisionRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")
    # Optional at the schema level so a missing image is reported as a 400 by the handler, not a 422.
    imageBase64: Optional[str] = None
    question: str = ""

    @field_validator("question", mode="before")
    @classmethod
    def normalize_question(cls, v: Any) -> str:
        if v is None:
            return ""
        if isinstance(v, str):
            return v
        raise ValueError("Expected string question")


class VisionResponse(BaseModel):
    result: str


class ErrorResponse(BaseModel):
    error: str
