# python/storedpng/io.py
# File and in-memory conveniences around the PNG encoder
# - write_png: path or sink, flat buffer or (H, W, 4) array
# - rgba_to_png_bytes: (H, W, 4) uint8 array to PNG bytes
# RELEVANT FILES: python/storedpng/encoder.py, tests/test_io.py

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional, Tuple, Union

import numpy as np

from . import _validate
from .config import ConfigSource
from .encoder import PngEncoder

logger = logging.getLogger(__name__)


def _infer_size(pixels: Any, width: Optional[int], height: Optional[int]) -> Tuple[int, int]:
    if width is not None and height is not None:
        return width, height
    if isinstance(pixels, np.ndarray) and pixels.ndim == 3 and pixels.shape[2] == 4:
        h, w = pixels.shape[:2]
        return (w if width is None else width), (h if height is None else height)
    raise ValueError("width and height are required unless pixels is an (H, W, 4) array")


def write_png(
    target: Union[str, Path, Any],
    pixels: Any,
    width: Optional[int] = None,
    height: Optional[int] = None,
    *,
    config: ConfigSource = None,
) -> None:
    """Write an RGBA8 image as an uncompressed PNG.

    Args:
        target: Output path ending in ``.png`` or an object with ``write()``.
        pixels: Flat RGBA8 buffer, or a uint8 array of shape (H, W, 4).
        width: Image width; inferred from an (H, W, 4) array when omitted.
        height: Image height; inferred from an (H, W, 4) array when omitted.
        config: EncoderConfig, mapping, JSON path, or None for defaults.
    """
    w, h = _infer_size(pixels, width, height)
    encoder = PngEncoder(config)

    if hasattr(target, "write"):
        encoder.write(target, pixels, w, h)
        return

    path = _validate.png_path(target)
    # Encode before the file is created.
    data = encoder.encode(pixels, w, h)
    with open(path, "wb") as f:
        f.write(data)
    logger.info(f"Wrote {w}x{h} PNG ({len(data)} bytes): {path}")


def rgba_to_png_bytes(rgba: np.ndarray, *, config: ConfigSource = None) -> bytes:
    """Convert an (H, W, 4) uint8 array to PNG bytes."""
    if not isinstance(rgba, np.ndarray) or rgba.ndim != 3 or rgba.shape[2] != 4:
        raise ValueError("rgba must be numpy array with shape (H,W,4)")
    height, width = rgba.shape[:2]
    return PngEncoder(config).encode(rgba, width, height)
