# Shared fixtures for the PNG encoder tests.
import struct

import numpy as np
import pytest


def split_chunks(png: bytes):
    """Return [(tag, data, stored_crc), ...] for every chunk after the signature."""
    chunks = []
    pos = 8
    while pos < len(png):
        (length,) = struct.unpack(">I", png[pos:pos + 4])
        tag = png[pos + 4:pos + 8]
        data = png[pos + 8:pos + 8 + length]
        (crc,) = struct.unpack(">I", png[pos + 8 + length:pos + 12 + length])
        chunks.append((tag, data, crc))
        pos += 12 + length
    assert pos == len(png), "trailing bytes after last chunk"
    return chunks


@pytest.fixture
def chunk_splitter():
    return split_chunks


@pytest.fixture
def sample_2x2():
    """The 2x2 reference image, row 0 first."""
    return bytes([
        0x00, 0x00, 0x00, 0xFF, 0x10, 0x30, 0x50, 0xFF,
        0x10, 0x30, 0x50, 0xFF, 0x00, 0x00, 0x00, 0x00,
    ])


@pytest.fixture
def gradient_rgba():
    h, w = 5, 7
    y, x = np.mgrid[0:h, 0:w]
    rgba = np.zeros((h, w, 4), dtype=np.uint8)
    rgba[..., 0] = (x * 30) % 256
    rgba[..., 1] = (y * 50) % 256
    rgba[..., 2] = (x + y) * 10
    rgba[..., 3] = 255 - y * 20
    return rgba
