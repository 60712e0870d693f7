"""API routers for bananchik."""

from fastapi import APIRouter

from app.api.editor import router as editor_router

router = APIRouter()
router.include_router(editor_router, tags=["editor"])

__all__ = ["router"]
