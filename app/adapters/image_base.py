"""Base interface for image generation adapters."""

import base64
from abc import ABC, abstractmethod
from dataclasses import dataclass

from app.adapters.data_uri import build_data_uri


@dataclass
class ImageGenerationResult:
    """Result from image generation."""

    image_data: bytes  # Raw image bytes
    mime_type: str  # e.g., "image/png"
    model: str
    provider: str

    @property
    def image_base64(self) -> str:
        """Image payload as a base64 string."""
        return base64.b64encode(self.image_data).decode("ascii")

    def to_data_uri(self) -> str:
        """Render the result as a displayable data-URI."""
        return build_data_uri(self.image_data, self.mime_type)


class ImageAdapter(ABC):
    """Abstract base class for image generation adapters."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the provider name (e.g., 'gemini')."""
        ...

    @abstractmethod
    async def generate_image(self, prompt: str) -> ImageGenerationResult:
        """Generate an image from a text prompt.

        Args:
            prompt: Text description of desired image.

        Returns:
            ImageGenerationResult with image data and metadata.

        Raises:
            ConfigurationError: If no credential is configured.
            GenerationFailedError: If the provider call fails.
            BlockedError, TextResponseError, EmptyResponseError: If the
                response carries no image.
        """
        ...

    @abstractmethod
    async def edit_image(
        self,
        image: str,
        mime_type: str,
        prompt: str,
    ) -> ImageGenerationResult:
        """Edit an existing image according to a text prompt.

        Args:
            image: Source image as a data-URI (a bare base64 string also works).
            mime_type: Media type of the source image.
            prompt: Instruction describing the edit.

        Returns:
            ImageGenerationResult with the edited image.

        Raises:
            Same as generate_image.
        """
        ...
