# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
TileWeave — Edge Extractor
Converts a tile's 2-D RGBA pixel buffer into four 1-D border sequences.

Border extraction (S = tile_size, buffer indexed [row, col, channel]):
  top[x]    = px[0,   x]
  bottom[x] = px[S-1, x]
  left[y]   = px[y,   0]
  right[y]  = px[y,   S-1]

Order is preserved as it appears in the buffer (left-to-right for
top/bottom, top-to-bottom for left/right); nothing is reversed.

A missing or malformed buffer never fails the run: it yields four
empty sequences, which then fail every comparison they take part in.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Sequence

import numpy as np

from tileweave.models.tile import Side, Tile
from tileweave.utils.logger import get_logger

log = get_logger(__name__)

_CHANNELS = 4


def _frozen(arr: np.ndarray) -> np.ndarray:
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True)
class EdgeColors:
    """Four (S, 4) uint8 border sequences of one tile. Read-only."""
    top: np.ndarray
    bottom: np.ndarray
    left: np.ndarray
    right: np.ndarray

    @classmethod
    def empty(cls) -> EdgeColors:
        return cls(
            top=_frozen(np.empty((0, _CHANNELS), dtype=np.uint8)),
            bottom=_frozen(np.empty((0, _CHANNELS), dtype=np.uint8)),
            left=_frozen(np.empty((0, _CHANNELS), dtype=np.uint8)),
            right=_frozen(np.empty((0, _CHANNELS), dtype=np.uint8)),
        )

    @property
    def is_empty(self) -> bool:
        return len(self.top) == 0

    def side(self, side: Side) -> np.ndarray:
        return getattr(self, Side(side).value)


def _as_pixel_grid(pixels: Any, tile_size: int) -> np.ndarray | None:
    """
    Coerce a pixel buffer to an (S, S, 4) array, or None if malformed.
    Accepts an (S, S, 4) array, a flat row-major S*S*4 sequence, or bytes.
    """
    if pixels is None:
        return None
    if isinstance(tile_size, bool) or not isinstance(tile_size, (int, np.integer)):
        return None
    if tile_size <= 0:
        return None
    tile_size = int(tile_size)

    try:
        if isinstance(pixels, (bytes, bytearray, memoryview)):
            arr = np.frombuffer(pixels, dtype=np.uint8)
        else:
            arr = np.asarray(pixels)
    except (TypeError, ValueError):
        return None

    if arr.dtype.kind not in "uif":
        return None

    expected = tile_size * tile_size * _CHANNELS
    if arr.ndim == 1:
        if arr.size != expected:
            return None
        arr = arr.reshape(tile_size, tile_size, _CHANNELS)
    elif arr.shape != (tile_size, tile_size, _CHANNELS):
        return None

    if arr.dtype.kind == "f" and not np.all(np.isfinite(arr)):
        return None
    if arr.min() < 0 or arr.max() > 255:
        return None
    if arr.dtype.kind == "f" and not np.array_equal(arr, np.round(arr)):
        return None

    return arr


def extract_edges(pixels: Any, tile_size: int) -> EdgeColors:
    """
    Derive the four border sequences of a single tile.

    Args:
        pixels:    RGBA buffer — (S, S, 4) array, flat S*S*4 sequence, or bytes.
        tile_size: Side length S shared by every tile of the run.

    Returns:
        EdgeColors with four (S, 4) uint8 arrays, or EdgeColors.empty()
        if the buffer is missing or malformed. Never raises.
    """
    grid = _as_pixel_grid(pixels, tile_size)
    if grid is None:
        return EdgeColors.empty()

    # Copies so the edges never alias (or pin) the tile's pixel buffer
    return EdgeColors(
        top=_frozen(grid[0, :, :].astype(np.uint8)),
        bottom=_frozen(grid[tile_size - 1, :, :].astype(np.uint8)),
        left=_frozen(grid[:, 0, :].astype(np.uint8)),
        right=_frozen(grid[:, tile_size - 1, :].astype(np.uint8)),
    )


def extract_all_edges(
    tiles: Sequence[Tile],
    tile_size: int,
    max_workers: int = 1,
) -> dict[int, EdgeColors]:
    """
    Extract edges for every tile.

    Each tile is independent, so with max_workers > 1 the work is spread
    over a thread pool. Every tile id is a write-once result slot and
    the returned dict follows input order regardless of worker count.

    Returns:
        Dict mapping tile_id → EdgeColors.
    """
    if max_workers > 1 and len(tiles) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            edges = list(pool.map(lambda t: extract_edges(t.pixels, tile_size), tiles))
    else:
        edges = [extract_edges(t.pixels, tile_size) for t in tiles]

    result = {t.tile_id: e for t, e in zip(tiles, edges)}

    n_empty = sum(1 for e in edges if e.is_empty)
    if n_empty:
        log.debug(
            "tiles_without_edges",
            count=n_empty,
            tile_ids=[t.tile_id for t, e in zip(tiles, edges) if e.is_empty],
        )

    log.debug(
        "edge_extraction_complete",
        n_tiles=len(tiles),
        n_empty=n_empty,
        tile_size=tile_size,
        workers=max_workers,
    )
    return result
