# python/storedpng/crc32.py
# CRC-32 (ISO-HDLC, reflected polynomial 0xEDB88320) used by every PNG chunk
# RELEVANT FILES: python/storedpng/encoder.py, tests/test_checksums.py

from __future__ import annotations

from functools import lru_cache
from typing import Tuple

import numpy as np

CRC32_POLYNOMIAL = 0xEDB88320
CRC32_SEED = 0xFFFFFFFF


@lru_cache(maxsize=None)
def crc_table() -> Tuple[int, ...]:
    """Return the shared 256-entry lookup table.

    Entry ``i`` is ``i`` pushed through eight reflected shift/xor rounds. The
    table is built once per process and handed out as an immutable tuple.
    """
    v = np.arange(256, dtype=np.uint32)
    poly = np.uint32(CRC32_POLYNOMIAL)
    for _ in range(8):
        v = np.where(v & 1, poly ^ (v >> 1), v >> 1).astype(np.uint32)
    return tuple(int(x) for x in v.tolist())


class Crc32:
    """Running CRC-32 with a ``start -> update* -> finalize`` lifecycle.

    Engines are cheap; create one per computation rather than sharing an
    instance between threads. Only the lookup table is shared.
    """

    __slots__ = ("_table", "value")

    def __init__(self) -> None:
        self._table = crc_table()
        self.value = CRC32_SEED

    def start(self) -> "Crc32":
        self.value = CRC32_SEED
        return self

    def update(self, data: bytes) -> "Crc32":
        table = self._table
        value = self.value
        for byte in bytes(data):
            value = table[(value ^ byte) & 0xFF] ^ (value >> 8)
        self.value = value
        return self

    def finalize(self) -> int:
        return self.value ^ CRC32_SEED

    def crc(self, data: bytes) -> int:
        """One-shot CRC of ``data``; resets any previous running value."""
        return self.start().update(data).finalize()


def crc32(data: bytes) -> int:
    return Crc32().crc(data)
