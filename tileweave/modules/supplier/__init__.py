# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
TileWeave — Tile Supplier Module
Public API for turning a tileset image into a tile sequence.
"""

from tileweave.modules.supplier.slicer import (
    grid_shape,
    load_tileset,
    slice_tileset,
    validate_start_id,
    validate_tile_size,
)

__all__ = [
    "validate_tile_size",
    "validate_start_id",
    "grid_shape",
    "slice_tileset",
    "load_tileset",
]
