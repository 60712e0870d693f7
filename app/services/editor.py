"""Editor session state and the actions that drive it.

One EditorController owns one user's state: the uploaded image, the prompt,
the last result and the last error. Only one generation call can be in
flight per controller; the loading flag is set before the first await, so a
second submit on the same event loop sees it and is rejected.

clear() does not cancel an in-flight call. Each submit and each file
selection is tagged with a counter; a result that comes back after clear()
(or after a newer selection) is dropped.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum

from app.adapters.base import ProviderError
from app.adapters.data_uri import FileSource, encode_file, source_name
from app.adapters.image_base import ImageAdapter
from app.constants import MSG_PROMPT_REQUIRED, MSG_UNKNOWN_ERROR, MSG_UPLOAD_FAILED

logger = logging.getLogger(__name__)


class EditorStatus(str, Enum):
    """Observable state of the editor."""

    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class UploadedImage:
    """Image selected by the user, encoded for preview and transfer."""

    data_uri: str
    mime_type: str
    file_name: str


@dataclass(frozen=True)
class EditorState:
    """Snapshot of the editor session."""

    uploaded_image: UploadedImage | None = None
    prompt: str = ""
    result_image: str | None = None  # data-URI
    is_loading: bool = False
    error: str | None = None

    @property
    def status(self) -> EditorStatus:
        if self.is_loading:
            return EditorStatus.LOADING
        if self.error:
            return EditorStatus.FAILED
        if self.result_image:
            return EditorStatus.SUCCESS
        return EditorStatus.IDLE

    @property
    def can_submit(self) -> bool:
        return bool(self.prompt) and not self.is_loading


def error_message(exc: Exception) -> str:
    """Message shown to the user for a failed action."""
    if isinstance(exc, ProviderError):
        return str(exc)
    # Anything else escaped the adapter unwrapped; still show something
    logger.exception(f"Unexpected error during generation: {exc}")
    return str(exc) or MSG_UNKNOWN_ERROR


class EditorController:
    """Drives the editor state in response to user actions."""

    def __init__(self, adapter: ImageAdapter):
        self._adapter = adapter
        self._state = EditorState()
        # Bumped by clear(); results tagged with an older value are stale
        self._generation = 0
        # Bumped by select_file() and clear(); last selection wins
        self._selection = 0

    @property
    def state(self) -> EditorState:
        return self._state

    @property
    def can_submit(self) -> bool:
        return self._state.can_submit

    def snapshot(self) -> EditorState:
        """Return the current state. EditorState is immutable."""
        return self._state

    async def select_file(self, source: FileSource) -> None:
        """Encode a selected file and make it the current image.

        On failure the error is set and everything else is left as it was.
        """
        self._selection += 1
        ticket = self._selection

        try:
            encoded = await encode_file(source)
        except Exception as e:
            if ticket != self._selection:
                return
            logger.warning(f"Could not load image {source_name(source)!r}: {e}")
            self._state = replace(self._state, error=MSG_UPLOAD_FAILED)
            return

        if ticket != self._selection:
            logger.info(f"Discarding superseded upload {source_name(source)!r}")
            return

        self._state = replace(
            self._state,
            uploaded_image=UploadedImage(
                data_uri=encoded.data_uri,
                mime_type=encoded.mime_type,
                file_name=source_name(source),
            ),
            result_image=None,
            error=None,
        )

    def set_prompt(self, prompt: str) -> None:
        self._state = replace(self._state, prompt=prompt)

    async def submit(self) -> bool:
        """Run one generation for the current prompt and image.

        Returns:
            True if a generation call was dispatched, False if the submit was
            ignored (already loading) or rejected (empty prompt).
        """
        if self._state.is_loading:
            logger.info("Submit ignored: a generation is already in flight")
            return False

        if not self._state.prompt:
            self._state = replace(self._state, error=MSG_PROMPT_REQUIRED)
            return False

        ticket = self._generation
        image = self._state.uploaded_image
        prompt = self._state.prompt
        self._state = replace(self._state, is_loading=True, error=None, result_image=None)

        result_image: str | None = None
        error: str | None = None
        try:
            if image is not None:
                result = await self._adapter.edit_image(image.data_uri, image.mime_type, prompt)
            else:
                result = await self._adapter.generate_image(prompt)
            result_image = result.to_data_uri()
        except Exception as e:
            error = error_message(e)
        finally:
            if ticket == self._generation:
                self._state = replace(
                    self._state,
                    is_loading=False,
                    result_image=result_image,
                    error=error,
                )
            else:
                logger.info("Discarding stale generation result after reset")

        return True

    def clear(self) -> None:
        """Hard reset to the initial state. In-flight work is not cancelled."""
        self._generation += 1
        self._selection += 1
        self._state = EditorState()
