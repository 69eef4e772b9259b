# python/storedpng/adler32.py
# Adler-32 checksum required by the zlib trailer of the IDAT stream
# RELEVANT FILES: python/storedpng/stored_deflate.py, tests/test_checksums.py

from __future__ import annotations

MOD_ADLER = 65521


class Adler32:
    """Running Adler-32 over a byte stream.

    ``b`` is accumulated from the already-updated ``a`` for each byte, so the
    result depends on byte order.
    """

    __slots__ = ("a", "b")

    def __init__(self) -> None:
        self.a = 1
        self.b = 0

    def start(self) -> "Adler32":
        self.a = 1
        self.b = 0
        return self

    def update(self, data: bytes) -> "Adler32":
        a, b = self.a, self.b
        for byte in bytes(data):
            a = (a + byte) % MOD_ADLER
            b = (a + b) % MOD_ADLER
        self.a, self.b = a, b
        return self

    def finalize(self) -> int:
        return (self.b << 16) | self.a

    def crc(self, data: bytes) -> int:
        return self.start().update(data).finalize()


def adler32(data: bytes) -> int:
    return Adler32().crc(data)
