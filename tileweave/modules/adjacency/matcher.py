# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
TileWeave — Adjacency Matcher
For every ordered pair of distinct tiles (A, B) and every direction,
records B in A's neighbor list when their touching borders match:

  B right of A  iff  edges_match(A.right,  B.left)
  B below A     iff  edges_match(A.bottom, B.top)
  B left of A   iff  edges_match(A.left,   B.right)
  B above A     iff  edges_match(A.top,    B.bottom)

Directions are evaluated independently, so a pair may satisfy several.
Each relation is stored only on the tile that owns the list; nothing is
mirrored onto B.

O(T² · S) with no pruning. The outer loop over A is the unit of work:
each A's four lists are written only by the task that owns A, so the
loop parallelises without locks and merges back in input order.
"""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Sequence

import numpy as np

from tileweave.errors import ConfigurationError, MatchCancelledError
from tileweave.models.adjacency import AdjacencyResult, MatchConfig
from tileweave.models.tile import Direction, Tile, TileNeighbors
from tileweave.modules.adjacency.predicate import edges_match
from tileweave.modules.edges.extractor import EdgeColors, extract_all_edges
from tileweave.utils.logger import get_logger

log = get_logger(__name__)


def _as_shaped(pixels) -> np.ndarray | None:
    """Nested pixel buffers as an ndarray for shape checks, else None."""
    if isinstance(pixels, np.ndarray):
        return pixels
    if isinstance(pixels, (list, tuple)):
        try:
            return np.asarray(pixels)
        except (TypeError, ValueError):
            return None
    return None


def _validate_tiles(tiles: Sequence[Tile], config: MatchConfig) -> None:
    """
    Boundary checks run before any matching.
    Malformed buffers are not rejected here; they degrade to empty edges.
    Only a square RGBA buffer (ndarray or nested list/tuple) of the wrong
    side length is treated as a tile size mismatch and rejected.
    """
    if not isinstance(config, MatchConfig):
        raise ConfigurationError(
            f"config must be a MatchConfig, got {type(config).__name__}"
        )

    seen: set[int] = set()
    for tile in tiles:
        if tile.tile_id in seen:
            raise ConfigurationError(f"Duplicate tile id: {tile.tile_id}")
        seen.add(tile.tile_id)

        px = _as_shaped(tile.pixels)
        if (
            px is not None
            and px.ndim == 3
            and px.shape[2] == 4
            and px.shape[0] == px.shape[1]
            and px.shape[0] != config.tile_size
        ):
            raise ConfigurationError(
                f"Tile {tile.tile_id} is {px.shape[0]}×{px.shape[1]}px but "
                f"tile_size is {config.tile_size}. All tiles of a run must "
                "share one tile size."
            )


def match_tile(
    tile_id: int,
    edges_by_id: dict[int, EdgeColors],
    order: Sequence[int],
    config: MatchConfig,
) -> TileNeighbors:
    """
    Compute the four neighbor lists of one tile against all others.

    Args:
        tile_id:     Id of the tile that owns the lists (A).
        edges_by_id: tile_id → EdgeColors for every tile of the run.
        order:       Tile ids in input order; lists follow this order.
        config:      Matching parameters.

    Returns:
        Fresh TileNeighbors for tile A.
    """
    neighbors = TileNeighbors()
    own = edges_by_id[tile_id]
    if own.is_empty:
        return neighbors

    for other_id in order:
        if other_id == tile_id:
            continue
        other = edges_by_id[other_id]
        if other.is_empty:
            continue

        for direction in Direction:
            if edges_match(
                own.side(direction.own_side),
                other.side(direction.facing_side),
                tolerance=config.tolerance,
                match_ratio_threshold=config.match_ratio_threshold,
            ):
                neighbors.for_direction(direction).append(other_id)

    return neighbors


def build_adjacency(
    tiles: Sequence[Tile],
    config: MatchConfig,
    cancel_event: threading.Event | None = None,
) -> AdjacencyResult:
    """
    Rebuild the complete adjacency graph for a tile sequence.

    Every tile's neighbor lists are replaced (never appended to), so
    calling this twice on the same tiles yields identical lists.

    Args:
        tiles:        Tiles in supplier order; ids must be unique.
        config:       MatchConfig with tile_size, tolerance, ratio, workers.
        cancel_event: Optional event checked between tiles; when set the
                      build stops with MatchCancelledError.

    Returns:
        AdjacencyResult over the same Tile objects, in input order.

    Raises:
        ConfigurationError:  Invalid config, duplicate ids, or mixed tile sizes.
        MatchCancelledError: cancel_event was set mid-build.
    """
    tiles = list(tiles)
    _validate_tiles(tiles, config)

    for tile in tiles:
        tile.neighbors = TileNeighbors()

    if not tiles:
        log.info("adjacency_build_skipped", reason="no_tiles")
        return AdjacencyResult(tiles=tiles, config=config)

    log.info(
        "adjacency_build_start",
        n_tiles=len(tiles),
        tile_size=config.tile_size,
        tolerance=config.tolerance,
        match_ratio_threshold=config.match_ratio_threshold,
        workers=config.max_workers,
    )

    edges_by_id = extract_all_edges(tiles, config.tile_size, config.max_workers)
    order = [t.tile_id for t in tiles]

    def _work(tile_id: int) -> TileNeighbors:
        if cancel_event is not None and cancel_event.is_set():
            raise MatchCancelledError(
                f"Adjacency build cancelled before tile {tile_id}"
            )
        return match_tile(tile_id, edges_by_id, order, config)

    if config.max_workers > 1 and len(tiles) > 1:
        with ThreadPoolExecutor(max_workers=config.max_workers) as pool:
            results = list(pool.map(_work, order))
    else:
        results = [_work(tile_id) for tile_id in order]

    for tile, neighbors in zip(tiles, results):
        tile.neighbors = neighbors

    result = AdjacencyResult(tiles=tiles, config=config)

    log.info(
        "adjacency_build_complete",
        n_tiles=len(tiles),
        relations=result.edge_count,
        isolated=len(result.isolated_tile_ids()),
    )
    return result
