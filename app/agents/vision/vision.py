from langchain_openai import ChatOpenAI
from langchain_core.messages import HumanMessage

from app.config import settings
from app.agents.vision.prompts import IMAGE_DATA_URI_PREFIX


def build_vision_message(question: str, image_base64: str, detail: str = "auto") -> HumanMessage:
    content = [
        {"type": "text", "text": question},
        {
            "type": "image_url",
            "image_url": {"url": f"{IMAGE_DATA_URI_PREFIX}{image_base64}", "detail": detail},
        },
    ]
    return HumanMessage(content=content)


def build_vision_llm() -> ChatOpenAI:
    # Single attempt per request: the client library would otherwise retry on its own.
    return ChatOpenAI(
        model=settings.MODEL_NAME,
        max_tokens=settings.VISION_MAX_TOKENS,
        streaming=False,
        max_retries=0,
    )


async def ask_vision(llm, question: str, image_base64: str) -> str:
    """Run one single-turn completion and return the answer text ("" if there is none)."""
    message = build_vision_message(question, image_base64, settings.VISION_DETAIL)
    response = await llm.ainvoke([message])
    content = getattr(response, "content", None)
    return content if isinstance(content, str) else ""
