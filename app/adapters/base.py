"""Error types shared by the image adapters."""

from app.constants import MSG_API_KEY_MISSING, MSG_NO_IMAGE_DATA, PROVIDER_GEMINI


class ProviderError(Exception):
    """Base exception for provider errors."""

    def __init__(
        self,
        message: str,
        provider: str = PROVIDER_GEMINI,
        retriable: bool = False,
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.provider = provider
        self.retriable = retriable
        self.status_code = status_code


class ConfigurationError(ProviderError):
    """Provider credential is not configured."""

    def __init__(self, provider: str = PROVIDER_GEMINI):
        super().__init__(MSG_API_KEY_MISSING, provider=provider, status_code=500)


class BlockedError(ProviderError):
    """Provider withheld the output on policy grounds."""

    def __init__(self, reason: str, provider: str = PROVIDER_GEMINI):
        super().__init__(f"Request blocked: {reason}.", provider=provider, status_code=400)
        self.reason = reason


class TextResponseError(ProviderError):
    """Provider answered with text where an image was requested."""

    def __init__(self, text: str, provider: str = PROVIDER_GEMINI):
        super().__init__(
            f"Model returned text instead of an image: {text}",
            provider=provider,
            status_code=502,
        )
        self.text = text


class EmptyResponseError(ProviderError):
    """Provider response carried neither image data nor an explanation."""

    def __init__(self, provider: str = PROVIDER_GEMINI):
        super().__init__(MSG_NO_IMAGE_DATA, provider=provider, status_code=502)


class GenerationFailedError(ProviderError):
    """The provider call itself failed (network, auth, quota, bad request)."""

    def __init__(self, detail: str, provider: str = PROVIDER_GEMINI):
        super().__init__(
            f"Failed to generate image: {detail}",
            provider=provider,
            status_code=500,
        )
        self.detail = detail
