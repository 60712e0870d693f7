"""Application services."""

from app.services.editor import EditorController, EditorState, EditorStatus, UploadedImage

__all__ = ["EditorController", "EditorState", "EditorStatus", "UploadedImage"]
