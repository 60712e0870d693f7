"""Shared pytest fixtures and configuration.

Integration tests are skipped by default. Run them with:
    pytest --run-integration

IMPORTANT: All tests that reach the Gemini client MUST mock it.
The block_real_gemini_calls fixture (autouse=True) will raise an error if
any test tries to make a real API call without proper mocking.
"""

import base64
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient
from google.genai import types

from app.adapters.image_base import ImageGenerationResult
from app.api.editor import clear_editor_cache, get_editor
from app.constants import GEMINI_IMAGE
from app.main import app
from app.services.editor import EditorController

# Smallest valid PNG (1x1 transparent pixel)
PNG_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII="
)


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="Run integration tests (calls the real Gemini API)",
    )


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: mark test as integration test (calls the real Gemini API)"
    )


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless --run-integration is passed."""
    if config.getoption("--run-integration"):
        return

    skip_integration = pytest.mark.skip(reason="need --run-integration option to run")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)


class RealAPICallError(Exception):
    """Raised when a test tries to make a real API call without proper mocking."""

    pass


def _raise_real_api_error(*args, **kwargs):
    raise RealAPICallError(
        "Test attempted to make a real Gemini API call! "
        "Patch app.adapters.gemini_image.genai or use the mock_image_adapter fixture."
    )


@pytest.fixture(autouse=True)
def block_real_gemini_calls(request):
    """Block real Gemini calls unless the test is marked as integration."""
    if "integration" in request.keywords:
        yield
        return

    with patch("google.genai.Client") as mock_genai:
        mock_genai.return_value.aio.models.generate_content = AsyncMock(
            side_effect=_raise_real_api_error
        )
        mock_genai.return_value.aio.aclose = AsyncMock()
        yield


@pytest.fixture
def image_result():
    """Factory for image generation results."""

    def _create(
        image_data: bytes = PNG_BYTES,
        mime_type: str = "image/png",
    ) -> ImageGenerationResult:
        return ImageGenerationResult(
            image_data=image_data,
            mime_type=mime_type,
            model=GEMINI_IMAGE,
            provider="gemini",
        )

    return _create


@pytest.fixture
def mock_image_adapter(image_result):
    """ImageAdapter whose calls succeed with a 1x1 PNG."""
    adapter = AsyncMock()
    adapter.provider_name = "gemini"
    adapter.generate_image = AsyncMock(return_value=image_result())
    adapter.edit_image = AsyncMock(return_value=image_result())
    return adapter


@pytest.fixture
def editor(mock_image_adapter):
    """Fresh editor controller backed by the mock adapter."""
    return EditorController(mock_image_adapter)


@pytest.fixture
def api_client(editor):
    """FastAPI test client wired to the fixture editor."""
    clear_editor_cache()
    app.dependency_overrides[get_editor] = lambda: editor
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()
    clear_editor_cache()


@pytest.fixture
def make_response():
    """Factory for google.genai GenerateContentResponse objects."""

    def _create(
        parts: list[types.Part] | None = None,
        block_reason: str | None = None,
        candidates: list[types.Candidate] | None = None,
    ) -> types.GenerateContentResponse:
        if candidates is None and parts is not None:
            candidates = [types.Candidate(content=types.Content(role="model", parts=parts))]
        feedback = (
            types.GenerateContentResponsePromptFeedback(block_reason=block_reason)
            if block_reason
            else None
        )
        return types.GenerateContentResponse(candidates=candidates, prompt_feedback=feedback)

    return _create
