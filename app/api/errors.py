from __future__ import annotations


class VisionError(Exception):
    """Base for every failure the vision endpoint reports as `{"error": message}`."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(VisionError):
    status_code = 400


class UpstreamContextError(VisionError):
    status_code = 400


class UpstreamAuthError(VisionError):
    status_code = 401


class UpstreamRateLimitError(VisionError):
    status_code = 429


class UpstreamOtherError(VisionError):
    status_code = 500


class InternalEmptyResponseError(VisionError):
    status_code = 500


def err_image_missing() -> ValidationError:
    return ValidationError("Image data not provided")


def err_image_too_large() -> ValidationError:
    return ValidationError("Image size exceeds 20MB limit")


def err_image_not_base64() -> ValidationError:
    return ValidationError("Image data is not valid base64")


def err_empty_response() -> InternalEmptyResponseError:
    return InternalEmptyResponseError("No response content from OpenAI")


# Checked in order against the upstream error message.
_UPSTREAM_MARKERS: list[tuple[str, type[VisionError], str]] = [
    ("maximum context length", UpstreamContextError, "Image is too large or complex to process"),
    ("invalid_api_key", UpstreamAuthError, "Invalid API key"),
    ("rate_limit_exceeded", UpstreamRateLimitError, "Rate limit exceeded"),
]


def classify_upstream_error(exc: BaseException) -> VisionError:
    """Translate a failure raised around the model call into a user-facing error.

    The provider's error taxonomy is not ours, so only substrings of the message are
    inspected. Unrecognized errors keep their own message, or a generic one when they
    have none.
    """
    if isinstance(exc, VisionError):
        return exc

    message = str(exc)
    for marker, error_cls, user_message in _UPSTREAM_MARKERS:
        if marker in message:
            return error_cls(user_message)

    if message:
        return UpstreamOtherError(message)
    return UpstreamOtherError("Failed to analyze the image")
