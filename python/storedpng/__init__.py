# python/storedpng/__init__.py
# Public API for the uncompressed RGBA8 PNG encoder
# RELEVANT FILES: python/storedpng/encoder.py, python/storedpng/io.py, tests/test_api.py
"""
storedpng writes RGBA8 pixel buffers as valid PNG files without compressing
them: the IDAT payload is a zlib stream made only of DEFLATE stored blocks.
"""

from .adler32 import Adler32, adler32
from .config import EncoderConfig, load_encoder_config
from .crc32 import Crc32, crc32, crc_table
from .encoder import PNG_SIGNATURE, Chunk, PngEncoder, build_scanlines, ihdr_data, pack_chunk, write
from .io import rgba_to_png_bytes, write_png
from .stored_deflate import compress, compressed_size, num_chunks

__version__ = "0.1.0"

__all__ = [
    "Adler32",
    "adler32",
    "Crc32",
    "crc32",
    "crc_table",
    "compress",
    "compressed_size",
    "num_chunks",
    "Chunk",
    "PNG_SIGNATURE",
    "PngEncoder",
    "build_scanlines",
    "ihdr_data",
    "pack_chunk",
    "write",
    "write_png",
    "rgba_to_png_bytes",
    "EncoderConfig",
    "load_encoder_config",
    "__version__",
]
