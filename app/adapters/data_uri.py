"""Data-URI encoding for uploaded image files.

Turns a selected file into ``data:<mime>;base64,<payload>`` so it can be
previewed directly and later handed to the provider as inline data.
No size or type validation happens here; the provider may reject the file.
"""

import asyncio
import base64
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from app.constants import FALLBACK_MIME_TYPE


class AsyncReadable(Protocol):
    """Uploaded file as exposed by the web layer (e.g. fastapi.UploadFile)."""

    filename: str | None
    content_type: str | None

    async def read(self, size: int = -1) -> bytes: ...


@dataclass(frozen=True)
class EncodedImage:
    """A file encoded for transfer."""

    data_uri: str
    mime_type: str


def build_data_uri(data: bytes | str, mime_type: str) -> str:
    """Build a data-URI from raw bytes or an already base64-encoded string."""
    if isinstance(data, bytes):
        data = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{data}"


def parse_data_uri(data_uri: str) -> tuple[str, str]:
    """Split a data-URI into (mime_type, base64 payload).

    Raises:
        ValueError: If the string is not a data-URI.
    """
    if not data_uri.startswith("data:") or "," not in data_uri:
        raise ValueError("Not a data URI")
    header, payload = data_uri.split(",", 1)
    mime_type = header[len("data:") :].split(";", 1)[0]
    return mime_type, payload


def strip_data_uri_header(data: str) -> str:
    """Return the base64 payload of a data-URI. Bare payloads pass through."""
    if data.startswith("data:") and "," in data:
        return data.split(",", 1)[1]
    return data


def _resolve_mime_type(content_type: str | None, file_name: str | None) -> str:
    if content_type:
        return content_type
    if file_name:
        guessed, _ = mimetypes.guess_type(file_name)
        if guessed:
            return guessed
    return FALLBACK_MIME_TYPE


def _encode(data: bytes, content_type: str | None, file_name: str | None) -> EncodedImage:
    data_uri = build_data_uri(data, _resolve_mime_type(content_type, file_name))
    mime_type, _ = parse_data_uri(data_uri)
    return EncodedImage(data_uri=data_uri, mime_type=mime_type)


async def encode_upload(upload: AsyncReadable) -> EncodedImage:
    """Encode an uploaded file. Read errors propagate unchanged."""
    data = await upload.read()
    return _encode(data, upload.content_type, upload.filename)


async def encode_path(path: str | Path, content_type: str | None = None) -> EncodedImage:
    """Encode a file from disk. Raises OSError if the file cannot be read."""
    path = Path(path)
    data = await asyncio.to_thread(path.read_bytes)
    return _encode(data, content_type, path.name)


FileSource = AsyncReadable | str | Path


def source_name(source: FileSource) -> str:
    """Display name of a file source."""
    if isinstance(source, (str, Path)):
        return Path(source).name
    return source.filename or ""


async def encode_file(source: FileSource) -> EncodedImage:
    """Encode either an uploaded file or a path on disk."""
    if isinstance(source, (str, Path)):
        return await encode_path(source)
    return await encode_upload(source)
