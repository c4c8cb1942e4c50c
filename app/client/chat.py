"""Client side of the vision chat: transcript state plus the HTTP call to the proxy.

`ChatSession` holds everything a chat page renders (transcript, selected image and
preview, visible error, loading flag) and implements the two user actions, selecting
an image and submitting. Rendering is left to whatever front end drives the session.
"""

from __future__ import annotations

import asyncio
import base64
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Literal, Optional

import httpx
from pydantic import BaseModel

from app.agents.vision.prompts import DEFAULT_QUESTION
from app.config import MAX_IMAGE_BYTES
from app.logging import get_logger

logger = get_logger("client")

VISION_PATH = "/api/assistants/vision"

ALLOWED_IMAGE_TYPES = ("image/jpeg", "image/png", "image/webp", "image/gif")

# Animated GIFs are not supported by the model, but nothing here inspects frames.
UNSUPPORTED_TYPE_MESSAGE = "Only JPEG, PNG, WEBP, and non-animated GIF files are supported"
TOO_LARGE_MESSAGE = "Image size must be less than 20MB"
READ_FAILED_MESSAGE = "Failed to read image file"
PROCESS_FAILED_MESSAGE = "Failed to process image"
ANALYZE_FAILED_MESSAGE = "Failed to analyze image"


class Message(BaseModel):
    role: Literal["user", "assistant"]
    text: str
    imageUrl: Optional[str] = None


@dataclass
class ImageAttachment:
    content_type: str
    size: int
    filename: str = ""
    data: Optional[bytes] = None
    path: Optional[Path] = None

    @classmethod
    def from_bytes(cls, data: bytes, content_type: str, filename: str = "") -> "ImageAttachment":
        return cls(content_type=content_type, size=len(data), filename=filename, data=data)

    @classmethod
    def from_path(cls, path: str | Path) -> "ImageAttachment":
        path = Path(path)
        content_type, _ = mimetypes.guess_type(path.name)
        return cls(
            content_type=content_type or "application/octet-stream",
            size=path.stat().st_size,
            filename=path.name,
            path=path,
        )

    def read_bytes(self) -> bytes:
        if self.data is not None:
            return self.data
        if self.path is None:
            raise OSError("attachment has neither data nor path")
        return self.path.read_bytes()


def validate_attachment(attachment: ImageAttachment) -> Optional[str]:
    """Return the user-facing reason an attachment is refused, or None if it is acceptable."""
    if attachment.size > MAX_IMAGE_BYTES:
        return TOO_LARGE_MESSAGE
    if attachment.content_type not in ALLOWED_IMAGE_TYPES:
        return UNSUPPORTED_TYPE_MESSAGE
    return None


def _encode_data_uri(attachment: ImageAttachment) -> str:
    encoded = base64.b64encode(attachment.read_bytes()).decode("ascii")
    return f"data:{attachment.content_type};base64,{encoded}"


async def read_as_data_uri(attachment: ImageAttachment) -> str:
    return await asyncio.to_thread(_encode_data_uri, attachment)


class VisionClientError(Exception):
    pass


class VisionProxyClient:
    """Thin async HTTP client for the vision proxy endpoint."""

    def __init__(
        self,
        base_url: str,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: Optional[float] = None,
    ):
        # No timeout of our own: the transport defaults govern.
        self._client = httpx.AsyncClient(base_url=base_url, transport=transport, timeout=timeout)

    async def analyze(self, image_base64: str, question: str) -> str:
        try:
            resp = await self._client.post(
                VISION_PATH,
                json={"imageBase64": image_base64, "question": question},
            )
        except httpx.HTTPError as e:
            raise VisionClientError(str(e) or ANALYZE_FAILED_MESSAGE) from e

        if not resp.is_success:
            raise VisionClientError(_error_message(resp))

        try:
            data = resp.json()
        except ValueError:
            raise VisionClientError(ANALYZE_FAILED_MESSAGE)
        result = data.get("result") if isinstance(data, dict) else None
        if not isinstance(result, str) or not result:
            raise VisionClientError(ANALYZE_FAILED_MESSAGE)
        return result

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "VisionProxyClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


def _error_message(resp: httpx.Response) -> str:
    try:
        data = resp.json()
    except ValueError:
        return ANALYZE_FAILED_MESSAGE
    if isinstance(data, dict) and isinstance(data.get("error"), str) and data["error"]:
        return data["error"]
    return ANALYZE_FAILED_MESSAGE


class ChatSession:
    def __init__(self, proxy, on_scroll: Optional[Callable[[int], None]] = None):
        self.proxy = proxy
        self.messages: list[Message] = []
        self.user_input = ""
        self.selected_image: Optional[ImageAttachment] = None
        self.image_preview = ""
        self.error = ""
        self.is_loading = False
        self._on_scroll = on_scroll

    @property
    def can_submit(self) -> bool:
        return not self.is_loading and bool(self.user_input.strip() or self.selected_image)

    async def select_image(self, attachment: ImageAttachment) -> bool:
        """Validate and store an image. A refused image leaves the current selection alone."""
        # The file input is disabled while a request is in flight.
        if self.is_loading:
            return False

        reason = validate_attachment(attachment)
        if reason:
            self.error = reason
            return False

        try:
            preview = await read_as_data_uri(attachment)
        except OSError as e:
            logger.error(f"preview failed for {attachment.filename!r}: {e}")
            self.error = READ_FAILED_MESSAGE
            return False

        self.selected_image = attachment
        self.image_preview = preview
        self.error = ""
        return True

    def clear_image(self) -> None:
        self.selected_image = None
        self.image_preview = ""

    async def submit(self, text: Optional[str] = None) -> None:
        if self.is_loading:
            return
        if text is not None:
            self.user_input = text
        if not self.user_input.strip() and not self.selected_image:
            return

        self.is_loading = True
        self.error = ""

        try:
            if self.selected_image:
                await self._submit_image()
            elif self.user_input.strip():
                # Text-only chat goes no further than the transcript.
                self._append(Message(role="user", text=self.user_input))
        except OSError as e:
            logger.error(f"reading image failed: {e}")
            self.error = READ_FAILED_MESSAGE
        except VisionClientError as e:
            logger.error(f"submission failed: {e}")
            self.error = str(e) or "An error occurred"
        finally:
            self.user_input = ""
            self.is_loading = False
            self.scroll_to_bottom()

    async def _submit_image(self) -> None:
        attachment = self.selected_image
        question = self.user_input if self.user_input.strip() else DEFAULT_QUESTION

        # The user message is shown before the proxy answers.
        self._append(Message(role="user", text=question, imageUrl=self.image_preview))

        data_uri = await read_as_data_uri(attachment)
        image_base64 = data_uri.split(",", 1)[1] if "," in data_uri else ""
        if not image_base64:
            raise VisionClientError(PROCESS_FAILED_MESSAGE)

        result = await self.proxy.analyze(image_base64, question)

        self._append(Message(role="assistant", text=result))
        self.clear_image()

    def _append(self, message: Message) -> None:
        self.messages.append(message)
        self.scroll_to_bottom()

    def scroll_to_bottom(self) -> None:
        if self._on_scroll and self.messages:
            self._on_scroll(len(self.messages) - 1)
