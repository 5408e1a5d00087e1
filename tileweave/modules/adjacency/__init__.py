# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
TileWeave — Adjacency Module
Public API for edge comparison and adjacency graph construction.
"""

from tileweave.modules.adjacency.matcher import build_adjacency, match_tile
from tileweave.modules.adjacency.predicate import (
    DEFAULT_MATCH_RATIO_THRESHOLD,
    DEFAULT_TOLERANCE,
    edge_match_ratio,
    edges_match,
    pixel_distances,
)

__all__ = [
    # Predicate
    "DEFAULT_TOLERANCE",
    "DEFAULT_MATCH_RATIO_THRESHOLD",
    "pixel_distances",
    "edge_match_ratio",
    "edges_match",
    # Matcher
    "match_tile",
    "build_adjacency",
]
