# python/storedpng/encoder.py
# Uncompressed RGBA8 PNG writer: signature, IHDR, IDAT (stored zlib), IEND
# RELEVANT FILES: python/storedpng/crc32.py, python/storedpng/stored_deflate.py, tests/test_encoder.py

from __future__ import annotations

import io
import logging
import struct
from dataclasses import dataclass, field
from typing import Any, BinaryIO, Optional

import numpy as np

from . import _validate
from .config import ROW_ORDER_BOTTOM_UP, ConfigSource, EncoderConfig, load_encoder_config, normalize_row_order
from .crc32 import Crc32
from .stored_deflate import compress

logger = logging.getLogger(__name__)

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"

BIT_DEPTH = 8
COLOR_TYPE_RGBA = 6
COMPRESSION_METHOD = 0
FILTER_METHOD = 0
INTERLACE_METHOD = 0
FILTER_NONE = 0

_MAX_CHUNK_DATA = 0xFFFFFFFF


def _check_tag(tag: bytes) -> bytes:
    if isinstance(tag, str):
        tag = tag.encode("ascii")
    tag = bytes(tag)
    if len(tag) != 4 or not tag.isalpha():
        raise ValueError(f"chunk tag must be 4 ASCII letters, got {tag!r}")
    return tag


def _write_all(sink: BinaryIO, data: bytes) -> None:
    """Write every byte of ``data``, retrying short writes from raw sinks.

    A ``None`` return (buffered or duck-typed sinks) counts as a full write.
    """
    written = sink.write(data)
    if written is None:
        return
    view = memoryview(data)
    while written < len(view):
        if written <= 0:
            raise OSError(f"short write: sink accepted 0 of {len(view)} bytes")
        view = view[written:]
        written = sink.write(view)
        if written is None:
            return


def chunk_crc(tag: bytes, data: bytes) -> int:
    crc = Crc32()
    crc.start()
    crc.update(tag)
    crc.update(data)
    return crc.finalize()


@dataclass(frozen=True)
class Chunk:
    """A PNG chunk; ``crc`` covers ``tag + data``."""

    tag: bytes
    data: bytes = b""
    crc: int = field(init=False)

    def __post_init__(self):
        tag = _check_tag(self.tag)
        data = bytes(self.data)
        if len(data) > _MAX_CHUNK_DATA:
            raise ValueError(f"chunk data too long: {len(data)} bytes")
        object.__setattr__(self, "tag", tag)
        object.__setattr__(self, "data", data)
        object.__setattr__(self, "crc", chunk_crc(tag, data))

    def to_bytes(self) -> bytes:
        return struct.pack(">I", len(self.data)) + self.tag + self.data + struct.pack(">I", self.crc)


def pack_chunk(tag: bytes, data: bytes) -> bytes:
    return Chunk(tag, data).to_bytes()


def ihdr_data(width: int, height: int) -> bytes:
    return struct.pack(
        ">IIBBBBB",
        width,
        height,
        BIT_DEPTH,
        COLOR_TYPE_RGBA,
        COMPRESSION_METHOD,
        FILTER_METHOD,
        INTERLACE_METHOD,
    )


def build_scanlines(pixels: Any, width: int, height: int, row_order: str = ROW_ORDER_BOTTOM_UP) -> bytes:
    """Assemble the filtered scanline stream fed to IDAT.

    With the default ``"bottom-up"`` order the rows are walked from the last
    one in ``pixels`` back to the first, so the decoded image is the input
    flipped vertically. ``"top-down"`` keeps the storage order. Every row is
    prefixed with filter type 0.
    """
    width, height = _validate.size_wh(width, height)
    flat = _validate.pixel_buffer(pixels, width, height)
    rows = flat.reshape(height, width * 4)
    if normalize_row_order(row_order) == ROW_ORDER_BOTTOM_UP:
        rows = rows[::-1]

    out = np.empty((height, 1 + width * 4), dtype=np.uint8)
    out[:, 0] = FILTER_NONE
    out[:, 1:] = rows
    raw = out.tobytes()

    expected = height * (1 + width * 4)
    assert len(raw) == expected, f"scanline size mismatch: {len(raw)} != {expected}"
    logger.debug(f"scanlines: {height} row(s) of {width * 4} bytes, {row_order} order")
    return raw


class PngEncoder:
    """Writes RGBA8 images as PNG files with stored (uncompressed) IDAT data.

    Example:
        encoder = PngEncoder({"row_order": "bottom-up"})
        with open("out.png", "wb") as f:
            encoder.write(f, pixels, 2, 2)
    """

    def __init__(self, config: ConfigSource = None, **overrides):
        self.config: EncoderConfig = load_encoder_config(config, overrides or None)

    def write(self, sink: BinaryIO, pixels: Any, width: int, height: int) -> None:
        """Encode ``pixels`` and write the PNG byte stream to ``sink``.

        Args:
            sink: Object with a ``write(bytes)`` method.
            pixels: RGBA8 buffer of exactly ``width * height * 4`` bytes.
            width: Image width in pixels.
            height: Image height in pixels.

        Raises:
            ValueError: Dimensions or buffer length break the input contract;
                nothing has been written in that case.
            OSError: Propagated unchanged from ``sink.write``, or raised when
                the sink accepts zero bytes of a pending write.
        """
        width, height = _validate.size_wh(width, height)
        flat = _validate.pixel_buffer(pixels, width, height)

        _write_all(sink, PNG_SIGNATURE)
        self._write_chunk(sink, b"IHDR", ihdr_data(width, height))

        scanlines = build_scanlines(flat, width, height, self.config.row_order)
        self._write_chunk(sink, b"IDAT", compress(scanlines, self.config.chunk_size))

        self._write_chunk(sink, b"IEND", b"")

    def encode(self, pixels: Any, width: int, height: int) -> bytes:
        buf = io.BytesIO()
        self.write(buf, pixels, width, height)
        return buf.getvalue()

    @staticmethod
    def _write_chunk(sink: BinaryIO, tag: bytes, data: bytes) -> None:
        chunk = Chunk(tag, data)
        logger.debug(f"chunk {chunk.tag.decode('ascii')}: {len(chunk.data)} bytes, crc=0x{chunk.crc:08x}")
        _write_all(sink, struct.pack(">I", len(chunk.data)))
        _write_all(sink, chunk.tag)
        _write_all(sink, chunk.data)
        _write_all(sink, struct.pack(">I", chunk.crc))


def write(sink: BinaryIO, pixels: Any, width: int, height: int, *, config: Optional[ConfigSource] = None) -> None:
    """Write ``pixels`` to ``sink`` as an uncompressed RGBA8 PNG."""
    PngEncoder(config).write(sink, pixels, width, height)
