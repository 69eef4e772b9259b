import os
import zlib

import pytest

from storedpng import Adler32, Crc32, adler32, crc32, crc_table
from storedpng.adler32 import MOD_ADLER


def test_crc32_check_value():
    assert crc32(b"123456789") == 0xCBF43926


def test_crc_table_known_entries():
    table = crc_table()
    assert len(table) == 256
    assert table[0] == 0x00000000
    assert table[1] == 0x77073096
    assert table[255] == 0x2D02EF8D
    assert crc_table() is table


@pytest.mark.parametrize("data", [b"", b"a", b"IEND", bytes(range(256)), os.urandom(4096)])
def test_crc32_matches_zlib(data):
    assert crc32(data) == zlib.crc32(data) & 0xFFFFFFFF


def test_crc32_incremental_equals_one_shot():
    engine = Crc32()
    engine.start()
    engine.update(b"IHDR")
    engine.update(b"\x00\x00\x00\x02")
    assert engine.finalize() == crc32(b"IHDR\x00\x00\x00\x02")


def test_crc32_finalize_is_idempotent():
    engine = Crc32()
    assert engine.finalize() == 0
    assert engine.finalize() == 0
    engine.update(b"abc")
    first = engine.finalize()
    assert engine.finalize() == first


def test_crc32_order_sensitive():
    assert crc32(b"ab") != crc32(b"ba")


def test_crc_resets_previous_value():
    engine = Crc32()
    engine.update(b"garbage")
    assert engine.crc(b"123456789") == 0xCBF43926


def test_adler32_check_value():
    assert adler32(b"Wikipedia") == 0x11E60398


@pytest.mark.parametrize("data", [b"", b"\xff" * 6000, bytes(range(256)) * 40, os.urandom(10000)])
def test_adler32_matches_zlib(data):
    assert adler32(data) == zlib.adler32(data)


def test_adler32_empty_is_one():
    assert Adler32().finalize() == 1


def test_adler32_incremental_and_reset():
    engine = Adler32()
    engine.update(b"Wiki").update(b"pedia")
    assert engine.finalize() == 0x11E60398
    assert engine.finalize() == 0x11E60398
    engine.start()
    assert (engine.a, engine.b) == (1, 0)


def test_adler32_sums_stay_reduced():
    engine = Adler32().update(b"\xff" * 100000)
    assert engine.a < MOD_ADLER
    assert engine.b < MOD_ADLER


def test_checksums_accept_non_contiguous_views():
    backing = bytes(range(200))
    strided = memoryview(backing)[::3]
    assert crc32(strided) == zlib.crc32(backing[::3]) & 0xFFFFFFFF
    assert adler32(strided) == zlib.adler32(backing[::3])
