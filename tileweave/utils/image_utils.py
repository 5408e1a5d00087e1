# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
TileWeave — Image I/O and Conversion Utilities
Decodes tileset images with OpenCV and normalises them to RGBA uint8,
the layout the edge extractor expects (row-major, 4 channels per pixel).
OpenCV decodes to BGR/BGRA; conversion to RGBA happens only here.
"""

from pathlib import Path

import cv2
import numpy as np

from tileweave.errors import TilesetValidationError


# ─── Load ────────────────────────────────────────────────────────────────────

def load_image_rgba(path: Path) -> np.ndarray:
    """
    Load an image from disk as an RGBA uint8 numpy array (H×W×4).
    Raises TilesetValidationError if the path does not exist or the
    file cannot be decoded as an image.
    """
    path = Path(path)
    if not path.is_file():
        raise TilesetValidationError(f"Tileset image not found: {path}")
    return bytes_to_rgba(path.read_bytes(), label=str(path))


def bytes_to_rgba(data: bytes, label: str = "tileset image") -> np.ndarray:
    """Decode raw encoded image bytes (PNG, JPEG, ...) to RGBA uint8."""
    if not data:
        raise TilesetValidationError(f"The {label} is empty.")
    arr = np.frombuffer(data, dtype=np.uint8)
    # UNCHANGED keeps the alpha channel so transparent tiles stay distinct
    img = cv2.imdecode(arr, cv2.IMREAD_UNCHANGED)
    if img is None:
        raise TilesetValidationError(
            f"The {label} could not be decoded. "
            "The file may be corrupted or in an unsupported format."
        )
    return to_rgba(img)


# ─── Color Space ─────────────────────────────────────────────────────────────

def to_rgba(img: np.ndarray) -> np.ndarray:
    """
    Convert a decoded OpenCV image (gray, BGR, or BGRA; 8 or 16 bit)
    to an RGBA uint8 array. Images without alpha become fully opaque.
    """
    if img.dtype == np.uint16:
        img = (img // 257).astype(np.uint8)
    elif img.dtype != np.uint8:
        raise TilesetValidationError(f"Unsupported image dtype: {img.dtype}")

    if img.ndim == 2:
        return cv2.cvtColor(img, cv2.COLOR_GRAY2RGBA)
    if img.ndim == 3 and img.shape[2] == 1:
        return cv2.cvtColor(img[:, :, 0], cv2.COLOR_GRAY2RGBA)
    if img.ndim == 3 and img.shape[2] == 3:
        return cv2.cvtColor(img, cv2.COLOR_BGR2RGBA)
    if img.ndim == 3 and img.shape[2] == 4:
        return cv2.cvtColor(img, cv2.COLOR_BGRA2RGBA)

    raise TilesetValidationError(f"Unsupported image shape: {img.shape}")


def rgba_to_bgra(img: np.ndarray) -> np.ndarray:
    """Inverse of the RGBA normalisation, for writing with cv2.imwrite."""
    return cv2.cvtColor(img, cv2.COLOR_RGBA2BGRA)


# ─── Save ────────────────────────────────────────────────────────────────────

def save_rgba_png(img: np.ndarray, path: Path) -> None:
    """
    Save an RGBA array as a lossless PNG.
    Creates parent directories if they don't exist.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    if not cv2.imwrite(str(path), rgba_to_bgra(img)):
        raise RuntimeError(f"Failed to write PNG: {path}")
