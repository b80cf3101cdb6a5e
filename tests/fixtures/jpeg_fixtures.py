"""Fixtures producing real JPEG bytes with Pillow."""
import io

import pytest
from PIL import Image


def make_jpeg_bytes(color=(200, 30, 30), size=(32, 24)) -> bytes:
    """Encode a solid-color image as JPEG."""
    buffer = io.BytesIO()
    Image.new("RGB", size, color=color).save(buffer, format="JPEG")
    return buffer.getvalue()


@pytest.fixture
def jpeg_bytes() -> bytes:
    return make_jpeg_bytes()


@pytest.fixture
def other_jpeg_bytes() -> bytes:
    return make_jpeg_bytes(color=(20, 120, 220), size=(16, 16))
