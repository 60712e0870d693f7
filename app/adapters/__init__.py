"""Provider adapters for image generation."""

from app.adapters.base import (
    BlockedError,
    ConfigurationError,
    EmptyResponseError,
    GenerationFailedError,
    ProviderError,
    TextResponseError,
)
from app.adapters.image_base import ImageAdapter, ImageGenerationResult

__all__ = [
    "BlockedError",
    "ConfigurationError",
    "EmptyResponseError",
    "GenerationFailedError",
    "ImageAdapter",
    "ImageGenerationResult",
    "ProviderError",
    "TextResponseError",
]
