from __future__ import annotations
from pathlib import Path
from typing import Any, Tuple

import numpy as np

_MAX_DIM = 0xFFFFFFFF  # IHDR stores width/height as u32

def _as_int(name: str, v) -> int:
    if isinstance(v, bool):
        raise TypeError(f"{name} must be an integer, got bool")
    try:
        i = int(v)
    except Exception as e:
        raise TypeError(f"{name} must be an integer, got {type(v).__name__}") from e
    if i != v:
        raise TypeError(f"{name} must be an integer, got {v!r}")
    return i

def size_wh(width, height) -> Tuple[int, int]:
    w = _as_int("width", width)
    h = _as_int("height", height)
    if w <= 0 or h <= 0:
        raise ValueError("width and height must be > 0")
    if w > _MAX_DIM or h > _MAX_DIM:
        raise ValueError(f"width/height must be <= {_MAX_DIM}")
    return w, h

def png_path(p: str | Path) -> str:
    s = str(p)
    if not s.lower().endswith(".png"):
        raise ValueError("path must end with .png")
    parent = Path(s).resolve().parent
    if not parent.exists():
        raise ValueError(f"directory does not exist: {parent}")
    return s


def pixel_buffer(pixels: Any, width: int, height: int) -> np.ndarray:
    """Flatten an RGBA8 pixel buffer and enforce its exact length.

    Accepts bytes-like objects, flat sequences of ints in [0, 255] and uint8
    numpy arrays (flat, ``(H, W*4)`` or ``(H, W, 4)``).

    Raises:
        TypeError: Array dtype is not uint8.
        ValueError: Length differs from ``width * height * 4``, an array shape
            contradicts ``width``/``height``, or values are out of byte range.
    """
    if isinstance(pixels, np.ndarray):
        if pixels.dtype != np.uint8:
            raise TypeError(f"pixels must be uint8, got {pixels.dtype}")
        if pixels.ndim == 3 and pixels.shape != (height, width, 4):
            raise ValueError(f"expected shape ({height}, {width}, 4) for {width}x{height} RGBA8, got {pixels.shape}")
        if pixels.ndim == 2 and pixels.shape != (height, width * 4):
            raise ValueError(f"expected shape ({height}, {width * 4}) for {width}x{height} RGBA8, got {pixels.shape}")
        if pixels.ndim > 3:
            raise ValueError(f"pixels must be 1D, 2D or 3D, got {pixels.ndim}D")
        flat = np.ascontiguousarray(pixels).reshape(-1)
    elif isinstance(pixels, (bytes, bytearray, memoryview)):
        flat = np.frombuffer(bytes(pixels), dtype=np.uint8)
    else:
        values = np.asarray(list(pixels))
        if values.size and (values.min() < 0 or values.max() > 255):
            raise ValueError("pixel values must be within [0, 255]")
        flat = values.astype(np.uint8).reshape(-1)

    expected = width * height * 4
    if flat.size != expected:
        raise ValueError(
            f"pixel buffer has {flat.size} bytes, expected width*height*4 = {expected} "
            f"for {width}x{height} RGBA8"
        )
    return flat
