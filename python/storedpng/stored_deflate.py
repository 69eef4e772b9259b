# python/storedpng/stored_deflate.py
# zlib stream built only from DEFLATE "stored" blocks (RFC 1950 / RFC 1951 3.2.4)
# Exists so IDAT payloads decode with any stock zlib without compressing anything
# RELEVANT FILES: python/storedpng/adler32.py, python/storedpng/encoder.py, tests/test_stored_deflate.py

from __future__ import annotations

import logging
import struct

from .adler32 import Adler32

logger = logging.getLogger(__name__)

# CM=8 (deflate), CINFO=7 (32K window), no preset dictionary; FCHECK valid.
ZLIB_HEADER = b"\x78\x01"
# Headroom below the 16-bit LEN field limit.
CHUNK_SIZE = 65530
MAX_STORED_BLOCK = 0xFFFF

_BLOCK_HEADER_SIZE = 5
_TRAILER_SIZE = 4


def _check_chunk_size(chunk_size: int) -> int:
    size = int(chunk_size)
    if not (1 <= size <= MAX_STORED_BLOCK):
        raise ValueError(f"chunk_size must be within [1, {MAX_STORED_BLOCK}], got {chunk_size}")
    return size


def num_chunks(length: int, chunk_size: int = CHUNK_SIZE) -> int:
    """Number of stored blocks needed for ``length`` bytes (never less than one)."""
    chunk_size = _check_chunk_size(chunk_size)
    n = length // chunk_size
    if length != n * chunk_size or length == 0:
        n += 1
    return n


def compressed_size(length: int, chunk_size: int = CHUNK_SIZE) -> int:
    return len(ZLIB_HEADER) + _BLOCK_HEADER_SIZE * num_chunks(length, chunk_size) + length + _TRAILER_SIZE


def _block_header(is_last: bool, length: int) -> bytes:
    lo = length & 0xFF
    hi = (length >> 8) & 0xFF
    return struct.pack("<5B", int(is_last), lo, hi, 0xFF - lo, 0xFF - hi)


def compress(data: bytes, chunk_size: int = CHUNK_SIZE) -> bytes:
    """Wrap ``data`` in a zlib stream of uncompressed DEFLATE blocks.

    Args:
        data: Bytes-like payload, possibly empty.
        chunk_size: Maximum payload per stored block, within [1, 65535].

    Returns:
        Header ``78 01``, the stored blocks (the last one flagged final) and the
        big-endian Adler-32 of ``data``.
    """
    chunk_size = _check_chunk_size(chunk_size)
    view = memoryview(bytes(data))
    total = len(view)
    expected = compressed_size(total, chunk_size)

    out = bytearray()
    out += ZLIB_HEADER
    checksum = Adler32()
    blocks = 0
    pos = 0
    while True:
        end = min(total, pos + chunk_size)
        payload = view[pos:end]
        is_last = end == total
        out += _block_header(is_last, end - pos)
        out += payload
        checksum.update(payload)
        blocks += 1
        if is_last:
            break
        pos = end

    out += struct.pack(">I", checksum.finalize())

    assert len(out) == expected, f"stored deflate size mismatch: wrote {len(out)}, expected {expected}"
    logger.debug(f"stored deflate: {total} bytes in {blocks} block(s), {len(out)} bytes out")
    return bytes(out)
