# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
TileWeave — Tileset Slicer
Cuts an RGBA tileset image into fixed-size square tiles.

Grid:
  cols = W // tile_size, rows = H // tile_size
  Partial tiles along the right and bottom margins are dropped.

Ids are assigned row-major from the top-left corner:
  tile_id = start_id + row * cols + col
"""

from __future__ import annotations

from pathlib import Path

import numpy as np

from tileweave.errors import ConfigurationError, TilesetValidationError
from tileweave.models.tile import Tile
from tileweave.utils.image_utils import load_image_rgba
from tileweave.utils.logger import get_logger

log = get_logger(__name__)


def validate_tile_size(tile_size: int) -> int:
    """Return tile_size if it is a positive integer, else raise."""
    if isinstance(tile_size, bool) or not isinstance(tile_size, (int, np.integer)):
        raise ConfigurationError(
            f"tile_size must be an integer, got {type(tile_size).__name__}"
        )
    if tile_size <= 0:
        raise ConfigurationError(f"tile_size must be positive, got {tile_size}")
    return int(tile_size)


def validate_start_id(start_id: int) -> int:
    """Return start_id if it is a non-negative integer, else raise."""
    if isinstance(start_id, bool) or not isinstance(start_id, (int, np.integer)):
        raise ConfigurationError(
            f"start_id must be an integer, got {type(start_id).__name__}"
        )
    if start_id < 0:
        raise ConfigurationError(f"start_id must be non-negative, got {start_id}")
    return int(start_id)


def grid_shape(image_shape: tuple[int, ...], tile_size: int) -> tuple[int, int]:
    """(n_rows, n_cols) of whole tiles that fit in an image of image_shape."""
    h, w = image_shape[:2]
    return h // tile_size, w // tile_size


def slice_tileset(
    image: np.ndarray,
    tile_size: int,
    start_id: int = 0,
) -> list[Tile]:
    """
    Slice an RGBA tileset into tiles.

    Args:
        image:     (H, W, 4) RGBA uint8 array.
        tile_size: Side length of each square tile in px.
        start_id:  Id given to the top-left tile.

    Returns:
        Tiles in row-major order, each with a read-only (S, S, 4) copy
        of its pixels and its (row, col) grid position.

    Raises:
        ConfigurationError:     tile_size is not a positive integer, or
                                start_id is negative.
        TilesetValidationError: image is not uint8 RGBA or is smaller than
                                one tile.
    """
    tile_size = validate_tile_size(tile_size)
    start_id = validate_start_id(start_id)

    if not isinstance(image, np.ndarray) or image.ndim != 3 or image.shape[2] != 4:
        shape = getattr(image, "shape", None)
        raise TilesetValidationError(
            f"Tileset must be an (H, W, 4) RGBA array, got shape {shape}"
        )
    if image.dtype != np.uint8:
        # Casting would wrap or truncate channel values
        raise TilesetValidationError(
            f"Tileset must be uint8 RGBA, got dtype {image.dtype}. "
            "Normalise it with to_rgba() first."
        )

    n_rows, n_cols = grid_shape(image.shape, tile_size)
    if n_rows == 0 or n_cols == 0:
        h, w = image.shape[:2]
        raise TilesetValidationError(
            f"Tileset ({w}×{h}px) is smaller than a single "
            f"{tile_size}×{tile_size}px tile."
        )

    tiles: list[Tile] = []
    for r in range(n_rows):
        for c in range(n_cols):
            y, x = r * tile_size, c * tile_size
            pixels = image[y:y + tile_size, x:x + tile_size].copy()
            pixels.setflags(write=False)
            tiles.append(Tile(
                tile_id=start_id + r * n_cols + c,
                pixels=pixels,
                grid_pos=(r, c),
            ))

    h, w = image.shape[:2]
    log.debug(
        "tileset_sliced",
        image_size=(w, h),
        grid_shape=(n_rows, n_cols),
        n_tiles=len(tiles),
        dropped_px=(w - n_cols * tile_size, h - n_rows * tile_size),
    )
    return tiles


def load_tileset(path: Path, tile_size: int, start_id: int = 0) -> list[Tile]:
    """Decode a tileset image file and slice it. See slice_tileset."""
    tile_size = validate_tile_size(tile_size)
    image = load_image_rgba(Path(path))
    return slice_tileset(image, tile_size, start_id=start_id)
