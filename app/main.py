"""
bananchik API Server
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings

# Configure logging for application modules (must be after imports)
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager."""
    logger.info(f"Starting bananchik on port {settings.port}")
    if not settings.gemini_api_key:
        # Non-fatal - every submit reports the missing key until one is set
        logger.warning("GEMINI_API_KEY is not set; image requests will fail")
    yield
    logger.info("Shutting down bananchik")


app = FastAPI(
    title="bananchik",
    description="Generate and edit images from text with Gemini",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": "Welcome to bananchik", "docs": "/docs"}


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Basic liveness check."""
    return {"status": "healthy", "service": "bananchik"}


# Import and include routers (must be after app is created to avoid circular imports)
from app.api import router  # noqa: E402

app.include_router(router, prefix="/api")
