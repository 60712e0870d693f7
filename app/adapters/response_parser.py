"""Extract image data from Gemini generate_content responses."""

from enum import Enum

from google.genai import types

from app.adapters.base import BlockedError, EmptyResponseError, TextResponseError
from app.adapters.image_base import ImageGenerationResult
from app.constants import DEFAULT_IMAGE_MIME_TYPE, PROVIDER_GEMINI


def find_inline_data(response: types.GenerateContentResponse) -> types.Blob | None:
    """Return the first inline-data blob carrying data, across all candidates."""
    for candidate in response.candidates or []:
        if candidate.content and candidate.content.parts:
            for part in candidate.content.parts:
                if part.inline_data and part.inline_data.data:
                    return part.inline_data
    return None


def block_reason(response: types.GenerateContentResponse) -> str | None:
    """Return the prompt block reason, if the service gave one."""
    feedback = response.prompt_feedback
    if not feedback or not feedback.block_reason:
        return None
    reason = feedback.block_reason
    return reason.value if isinstance(reason, Enum) else str(reason)


def response_text(response: types.GenerateContentResponse) -> str | None:
    """Concatenated text parts of the first candidate, or None if there are none."""
    if not response.candidates:
        return None
    content = response.candidates[0].content
    if not content or not content.parts:
        return None
    texts = [part.text for part in content.parts if part.text and not part.thought]
    return "".join(texts) or None


def parse_image_response(
    response: types.GenerateContentResponse,
    model: str,
) -> ImageGenerationResult:
    """Turn a response into an image result or a descriptive error.

    Checked in order: inline image data, block reason, returned text.

    Raises:
        BlockedError: No image and the prompt was blocked.
        TextResponseError: No image, but the model answered with text.
        EmptyResponseError: Nothing usable at all.
    """
    blob = find_inline_data(response)
    if blob is not None:
        return ImageGenerationResult(
            image_data=blob.data,
            mime_type=blob.mime_type or DEFAULT_IMAGE_MIME_TYPE,
            model=model,
            provider=PROVIDER_GEMINI,
        )

    reason = block_reason(response)
    if reason:
        raise BlockedError(reason)

    text = response_text(response)
    if text:
        raise TextResponseError(text)

    raise EmptyResponseError()
