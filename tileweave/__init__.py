# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
TileWeave — edge-matching tile adjacency builder.

    from tileweave.models.adjacency import MatchConfig
    from tileweave.models.tile import Direction
    from tileweave.modules.adjacency import build_adjacency

    result = build_adjacency(tiles, MatchConfig(tile_size=16))
    result.neighbors_of(0, Direction.RIGHT)
"""

__version__ = "1.0.0"
