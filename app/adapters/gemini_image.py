"""Gemini image generation adapter."""

import base64
import binascii
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from google import genai
from google.genai import types

from app.adapters.base import ConfigurationError, GenerationFailedError
from app.adapters.data_uri import strip_data_uri_header
from app.adapters.image_base import ImageAdapter, ImageGenerationResult
from app.adapters.response_parser import parse_image_response
from app.config import settings
from app.constants import MSG_UNKNOWN_ERROR, PROVIDER_GEMINI

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _open_client(api_key: str) -> AsyncIterator[genai.Client]:
    """Client for a single request. Its sync and async connection pools are closed on exit."""
    client = genai.Client(api_key=api_key)
    try:
        yield client
    finally:
        await client.aio.aclose()
        client.close()


class GeminiImageAdapter(ImageAdapter):
    """Adapter for Gemini image generation and editing."""

    def __init__(self, api_key: str | None = None, model: str | None = None):
        """Initialize Gemini image adapter.

        The key is resolved from settings on each call, so a missing key
        only fails the call that needs it.

        Args:
            api_key: Google API key. Falls back to settings if not provided.
            model: Model identifier. Falls back to settings if not provided.
        """
        self._api_key = api_key
        self._model = model

    @property
    def provider_name(self) -> str:
        return PROVIDER_GEMINI

    @property
    def model(self) -> str:
        return self._model or settings.gemini_image_model

    def _resolve_api_key(self) -> str:
        api_key = self._api_key or settings.gemini_api_key
        if not api_key:
            raise ConfigurationError(self.provider_name)
        return api_key

    async def _generate(
        self,
        api_key: str,
        parts: list[types.Part],
        operation: str,
    ) -> ImageGenerationResult:
        """Send one IMAGE-only request and parse the response.

        Any failure of the call itself is wrapped in GenerationFailedError.
        Errors from parsing the response propagate as their own types.
        """
        model = self.model

        try:
            async with _open_client(api_key) as client:
                response = await client.aio.models.generate_content(
                    model=model,
                    contents=types.Content(role="user", parts=parts),
                    config=types.GenerateContentConfig(
                        response_modalities=[types.Modality.IMAGE],
                    ),
                )
        except Exception as e:
            logger.error(f"Gemini {operation} failed: {e}")
            raise GenerationFailedError(str(e) or MSG_UNKNOWN_ERROR, self.provider_name) from e

        return parse_image_response(response, model)

    async def generate_image(self, prompt: str) -> ImageGenerationResult:
        """Generate an image from a text prompt using Gemini.

        Args:
            prompt: Text description of desired image.

        Returns:
            ImageGenerationResult with the generated image.
        """
        api_key = self._resolve_api_key()
        return await self._generate(api_key, [types.Part(text=prompt)], "image generation")

    async def edit_image(
        self,
        image: str,
        mime_type: str,
        prompt: str,
    ) -> ImageGenerationResult:
        """Edit an image with a text instruction using Gemini.

        The image part goes first, followed by the instruction.

        Args:
            image: Source image as a data-URI or bare base64 payload.
            mime_type: Media type of the source image.
            prompt: Instruction describing the edit.

        Returns:
            ImageGenerationResult with the edited image.
        """
        api_key = self._resolve_api_key()

        try:
            image_bytes = base64.b64decode(strip_data_uri_header(image), validate=True)
        except binascii.Error as e:
            logger.error(f"Invalid image payload for editing: {e}")
            raise GenerationFailedError(str(e), self.provider_name) from e

        image_part = types.Part(inline_data=types.Blob(data=image_bytes, mime_type=mime_type))
        return await self._generate(
            api_key,
            [image_part, types.Part(text=prompt)],
            "image editing",
        )
