"""Shared constants used across the application."""

# =============================================================================
# Model Constants - SINGLE SOURCE OF TRUTH
# =============================================================================
# Update these when new model versions are released.

GEMINI_IMAGE = "gemini-2.5-flash-image"

PROVIDER_GEMINI = "gemini"

# Media type used when the service returns image data without one
DEFAULT_IMAGE_MIME_TYPE = "image/png"

# Media type used when an upload declares none and the name gives no hint
FALLBACK_MIME_TYPE = "application/octet-stream"


# =============================================================================
# User-facing messages
# =============================================================================
# Surfaced verbatim as the single error string of the editor state.

MSG_API_KEY_MISSING = "API key not configured. Set the GEMINI_API_KEY environment variable."
MSG_PROMPT_REQUIRED = "Please enter a text prompt."
MSG_UPLOAD_FAILED = "Could not load the image. Try another file."
MSG_UNKNOWN_ERROR = "An unknown error occurred."
MSG_NO_IMAGE_DATA = (
    "No image data found in the response. The model could not fulfil the request."
)
