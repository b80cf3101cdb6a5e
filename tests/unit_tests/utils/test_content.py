import hashlib

import pytest

from jpeg_files_api.utils.content import (
    calculate_sha256,
    get_extension,
    is_allowed_extension,
    sniff_content_type,
)
from tests.fixtures.jpeg_fixtures import make_jpeg_bytes


@pytest.mark.parametrize(
    "filename, expected",
    [
        ("photo.jpg", ".jpg"),
        ("photo.jpeg", ".jpeg"),
        ("archive.tar.jpg", ".jpg"),
        ("dir.name/photo", ""),
        ("dir/photo.JPG", ".JPG"),
        (".jpg", ".jpg"),
        ("photo", ""),
        ("", ""),
    ],
)
def test_get_extension(filename, expected):
    assert get_extension(filename) == expected


@pytest.mark.parametrize(
    "extension, allowed",
    [(".jpg", True), (".jpeg", True), (".JPG", False), (".png", False), ("", False), ("jpg", False)],
)
def test_is_allowed_extension(extension, allowed):
    assert is_allowed_extension(extension) is allowed


def test_sniff_jpeg():
    assert sniff_content_type(make_jpeg_bytes()) == "image/jpeg"


def test_sniff_only_looks_at_first_512_bytes():
    content = b"a" * 512 + b"\x00\x01\x02"

    assert sniff_content_type(content) == "text/plain; charset=utf-8"


@pytest.mark.parametrize(
    "content, expected",
    [
        (b"\x89PNG\r\n\x1a\n\x00\x00", "image/png"),
        (b"GIF89a....", "image/gif"),
        (b"%PDF-1.4\n", "application/pdf"),
        (b"hello world", "text/plain; charset=utf-8"),
        (b"", "text/plain; charset=utf-8"),
        (b"\x00\x01\x02\x03", "application/octet-stream"),
    ],
)
def test_sniff_other_content(content, expected):
    assert sniff_content_type(content) == expected


def test_calculate_sha256_is_lowercase_hex():
    digest = calculate_sha256(b"Hello, world!")

    assert digest == hashlib.sha256(b"Hello, world!").hexdigest()
    assert len(digest) == 64
    assert digest == digest.lower()
