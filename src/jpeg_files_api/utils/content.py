"""Upload validation helpers: extension check, content sniffing and hashing."""

import hashlib
from typing import Tuple

ALLOWED_EXTENSIONS = (".jpg", ".jpeg")
JPEG_MIME_TYPE = "image/jpeg"
SNIFF_LEN = 512

# (signature, MIME type); matched against the start of the content
_IMAGE_SIGNATURES: Tuple[Tuple[bytes, str], ...] = (
    (b"\xff\xd8\xff", JPEG_MIME_TYPE),
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
    (b"BM", "image/bmp"),
    (b"\x00\x00\x01\x00", "image/x-icon"),
    (b"%PDF-", "application/pdf"),
)

# Control bytes that mark content as binary rather than text
_BINARY_BYTES = frozenset(
    list(range(0x00, 0x09)) + [0x0B] + list(range(0x0E, 0x1B)) + list(range(0x1C, 0x20))
)


def get_extension(filename: str) -> str:
    """
    Return the extension of the last path segment, including the dot.

    Returns "" when the segment has no dot. Case is preserved.
    """
    dot = filename.rfind(".")
    slash = filename.rfind("/")
    if dot <= slash:
        return ""
    return filename[dot:]


def is_allowed_extension(extension: str) -> bool:
    """Only `.jpg` and `.jpeg` are accepted, compared case-sensitively."""
    return extension in ALLOWED_EXTENSIONS


def sniff_content_type(data: bytes) -> str:
    """
    Detect the MIME type of content from at most its first 512 bytes.

    Known image signatures win; otherwise content without binary control bytes
    is text, and everything else is an opaque byte stream.
    """
    head = data[:SNIFF_LEN]
    for signature, mime_type in _IMAGE_SIGNATURES:
        if head.startswith(signature):
            return mime_type
    if any(byte in _BINARY_BYTES for byte in head):
        return "application/octet-stream"
    return "text/plain; charset=utf-8"


def calculate_sha256(content: bytes) -> str:
    """Lowercase hex SHA-256 digest of the content."""
    return hashlib.sha256(content).hexdigest()
