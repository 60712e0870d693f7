"""Editor session API endpoints.

Each route maps one user action onto the process-wide EditorController and
returns the resulting state. Action failures (bad upload, blocked prompt,
provider errors) are part of the state, not HTTP errors.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from pydantic import BaseModel, Field

from app.adapters.gemini_image import GeminiImageAdapter
from app.services.editor import EditorController, EditorState, EditorStatus

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/editor")


class UploadedImageResponse(BaseModel):
    """Currently selected image."""

    data_uri: str = Field(..., description="Image as data:<mime>;base64,<payload>")
    mime_type: str = Field(..., description="MIME type (e.g., image/png)")
    file_name: str = Field(..., description="Original file name")


class EditorStateResponse(BaseModel):
    """Editor state as shown to the user."""

    status: EditorStatus
    uploaded_image: UploadedImageResponse | None = None
    prompt: str = ""
    result_image: str | None = Field(default=None, description="Result as a data-URI")
    is_loading: bool = False
    error: str | None = None
    can_submit: bool = False

    @classmethod
    def from_state(cls, state: EditorState) -> "EditorStateResponse":
        uploaded = state.uploaded_image
        return cls(
            status=state.status,
            uploaded_image=(
                UploadedImageResponse(
                    data_uri=uploaded.data_uri,
                    mime_type=uploaded.mime_type,
                    file_name=uploaded.file_name,
                )
                if uploaded
                else None
            ),
            prompt=state.prompt,
            result_image=state.result_image,
            is_loading=state.is_loading,
            error=state.error,
            can_submit=state.can_submit,
        )


class PromptRequest(BaseModel):
    """Request body for prompt updates."""

    prompt: str = Field(..., description="Text instruction for generation or editing")


# Single-user process: one editor session
_controller: EditorController | None = None


def get_editor() -> EditorController:
    """Get the process-wide editor controller."""
    global _controller
    if _controller is None:
        _controller = EditorController(GeminiImageAdapter())
        logger.info("Created EditorController")
    return _controller


def clear_editor_cache() -> None:
    """Drop the editor controller. Useful for testing."""
    global _controller
    _controller = None


EditorDep = Annotated[EditorController, Depends(get_editor)]


@router.get("", response_model=EditorStateResponse)
async def get_state(editor: EditorDep) -> EditorStateResponse:
    """Return the current editor state."""
    return EditorStateResponse.from_state(editor.snapshot())


@router.post("/image", response_model=EditorStateResponse)
async def select_image(
    editor: EditorDep,
    file: Annotated[UploadFile, File(description="Image to edit")],
) -> EditorStateResponse:
    """Select the image to edit. Any file type is accepted."""
    await editor.select_file(file)
    return EditorStateResponse.from_state(editor.snapshot())


@router.put("/prompt", response_model=EditorStateResponse)
async def set_prompt(request: PromptRequest, editor: EditorDep) -> EditorStateResponse:
    """Replace the prompt text."""
    editor.set_prompt(request.prompt)
    return EditorStateResponse.from_state(editor.snapshot())


@router.post("/submit", response_model=EditorStateResponse)
async def submit(editor: EditorDep) -> EditorStateResponse:
    """Generate (no image selected) or edit (image selected) and wait for the result."""
    if editor.state.is_loading:
        raise HTTPException(
            status_code=409,
            detail="A generation request is already in progress.",
        )
    await editor.submit()
    return EditorStateResponse.from_state(editor.snapshot())


@router.post("/clear", response_model=EditorStateResponse)
async def clear(editor: EditorDep) -> EditorStateResponse:
    """Reset image, prompt, result and error."""
    editor.clear()
    return EditorStateResponse.from_state(editor.snapshot())
