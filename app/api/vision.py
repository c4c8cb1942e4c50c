import base64
import binascii
import re
import time
import uuid
from fastapi import APIRouter, Depends, Request
from app.logging import get_logger
from app.api.models import VisionRequest, VisionResponse, ErrorResponse
from app.api.errors import (
    VisionError,
    classify_upstream_error,
    err_empty_response,
    err_image_missing,
    err_image_not_base64,
    err_image_too_large,
)
from app.config import MAX_IMAGE_BYTES
from app.agents.vision.vision import ask_vision

router = APIRouter(prefix="/api/assistants")
logger = get_logger("vision")

_NON_BASE64 = re.compile(r"[^A-Za-z0-9+/]")


def get_vision_llm(req: Request):
    return req.app.state.vision_llm


def decoded_size(image_base64: str) -> int:
    """Byte length of the decoded image.

    Characters outside the base64 alphabet are skipped and missing padding is restored.
    """
    cleaned = _NON_BASE64.sub("", image_base64)
    try:
        return len(base64.b64decode(cleaned + "=" * (-len(cleaned) % 4)))
    except (binascii.Error, ValueError):
        raise err_image_not_base64()


@router.post(
    "/vision",
    response_model=VisionResponse,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse},
               429: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def vision(request: VisionRequest, llm=Depends(get_vision_llm)):
    request_id = str(uuid.uuid4())[:8]

    # Validation errors short-circuit before the model is called.
    if not request.imageBase64:
        logger.info(f"[{request_id}] rejected | no image data")
        raise err_image_missing()

    size_in_bytes = decoded_size(request.imageBase64)
    if size_in_bytes > MAX_IMAGE_BYTES:
        logger.info(f"[{request_id}] rejected | image_bytes={size_in_bytes}")
        raise err_image_too_large()

    logger.info(f"[{request_id}] request | image_bytes={size_in_bytes} question_chars={len(request.question)}")
    start_time = time.time()

    try:
        result = await ask_vision(llm, request.question, request.imageBase64)
        if not result:
            raise err_empty_response()
    except Exception as e:
        error = classify_upstream_error(e)
        logger.error(f"[{request_id}] error in vision analysis | status={error.status_code} | {e}")
        raise error

    elapsed = time.time() - start_time
    logger.info(f"[{request_id}] complete | elapsed={elapsed:.2f}s | answer_chars={len(result)}")
    return VisionResponse(result=result)
