"""Inline image helpers: data URLs, mime sniffing and chunked base64."""

import base64
import binascii
import io
import logging

from PIL import Image

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 3 * 64 * 1024


def detect_mime_type(data: bytes, default: str = "image/png") -> str:
    """Detect image format from magic bytes."""
    if data[:3] == b'\xff\xd8\xff':
        return "image/jpeg"
    if data[:8] == b'\x89PNG\r\n\x1a\n':
        return "image/png"
    if data[:4] == b'RIFF' and data[8:12] == b'WEBP':
        return "image/webp"
    if data[:6] in (b'GIF87a', b'GIF89a'):
        return "image/gif"
    return default


def is_data_url(value: str | None) -> bool:
    return bool(value) and value.startswith("data:image")


def decode_data_url(data: str) -> bytes:
    """Decode a base64 data URL (or bare base64) into bytes."""
    if data.startswith("data:"):
        # Remove data URL prefix (e.g., "data:image/png;base64,")
        _, encoded = data.split(",", 1)
    else:
        encoded = data
    return base64.b64decode(encoded)


def encode_data_url(data: bytes, mime_type: str | None = None) -> str:
    """Wrap raw image bytes as a data URL."""
    mime_type = mime_type or detect_mime_type(data)
    return f"data:{mime_type};base64,{encode_base64_chunked(data)}"


class ChunkedBase64Encoder:
    """Incremental base64 encoder.

    Bytes are fed in arbitrary pieces; output is produced in blocks of
    ``chunk_size`` input bytes. Leftover bytes that do not fill a 3-byte group
    wait for the next call so that concatenated output equals a one-shot
    encoding of the whole buffer.
    """

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE):
        if chunk_size <= 0 or chunk_size % 3:
            raise ValueError("chunk_size must be a positive multiple of 3")
        self.chunk_size = chunk_size
        self._pending = bytearray()
        self._parts: list[str] = []
        self.total_bytes = 0

    def update(self, data: bytes) -> None:
        self.total_bytes += len(data)
        self._pending.extend(data)
        while len(self._pending) >= self.chunk_size:
            block = bytes(self._pending[:self.chunk_size])
            del self._pending[:self.chunk_size]
            self._parts.append(base64.b64encode(block).decode("ascii"))

    def finish(self) -> str:
        if self._pending:
            self._parts.append(base64.b64encode(bytes(self._pending)).decode("ascii"))
            self._pending.clear()
        return "".join(self._parts)


def encode_base64_chunked(data: bytes, chunk_size: int = DEFAULT_CHUNK_SIZE) -> str:
    """Base64-encode ``data`` one bounded block at a time."""
    encoder = ChunkedBase64Encoder(chunk_size)
    view = memoryview(data)
    for start in range(0, len(view), chunk_size):
        encoder.update(view[start:start + chunk_size].tobytes())
    return encoder.finish()


def normalize_image(raw_bytes: bytes) -> bytes:
    """Convert an uploaded image to PNG using PIL for a consistent format.

    Returns the original bytes if PIL cannot read them.
    """
    try:
        img = Image.open(io.BytesIO(raw_bytes))
        # Convert to RGB if needed (e.g., RGBA, P mode)
        if img.mode in ('RGBA', 'P', 'LA', 'CMYK'):
            img = img.convert('RGB')
        output = io.BytesIO()
        img.save(output, format='PNG')
        return output.getvalue()
    except Exception as e:
        # If conversion fails, return original bytes
        logger.debug("Image normalization skipped: %s", e)
        return raw_bytes


def normalize_data_url(data_url: str | None) -> str | None:
    """Normalize an inbound data URL; undecodable input passes through."""
    if not data_url:
        return None
    try:
        raw = decode_data_url(data_url)
    except (binascii.Error, ValueError):
        return data_url
    normalized = normalize_image(raw)
    if normalized is raw:
        return data_url
    return encode_data_url(normalized, "image/png")
