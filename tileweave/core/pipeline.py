# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
TileWeave — Pipeline Orchestrator
Wires the tile supplier and the adjacency builder for one tileset file:

  1. Configuration (Settings defaults + explicit overrides)
  2. Slicing (decode image, cut into tiles)
  3. Adjacency (edge extraction + pairwise matching)

Runs synchronously; there is no I/O after the image has been decoded.
"""

from __future__ import annotations

import threading
from pathlib import Path

import structlog

from tileweave.config import Settings, get_settings
from tileweave.models.adjacency import AdjacencyResult, MatchConfig
from tileweave.modules.adjacency.matcher import build_adjacency
from tileweave.modules.supplier.slicer import load_tileset
from tileweave.utils.logger import get_logger

log = get_logger(__name__)


def build_tileset_adjacency(
    path: Path,
    tile_size: int,
    settings: Settings | None = None,
    tolerance: float | None = None,
    match_ratio_threshold: float | None = None,
    max_workers: int | None = None,
    cancel_event: threading.Event | None = None,
) -> AdjacencyResult:
    """
    Load a tileset image, slice it, and build its adjacency graph.

    Explicit tolerance / match_ratio_threshold / max_workers override the
    corresponding Settings values; None keeps the setting.

    Raises:
        ConfigurationError:     Invalid tile_size or matching parameters.
        TilesetValidationError: Image missing, undecodable, or too small.
        MatchCancelledError:    cancel_event was set mid-build.
    """
    settings = settings or get_settings()
    structlog.contextvars.bind_contextvars(source=str(path))

    try:
        config = MatchConfig.from_settings(
            tile_size,
            settings,
            tolerance=tolerance,
            match_ratio_threshold=match_ratio_threshold,
            max_workers=max_workers,
        )

        # ── Stage 1: Slicing ─────────────────────────────────────────────────
        log.info("stage_start", stage="slicing")
        tiles = load_tileset(Path(path), config.tile_size)
        log.info("stage_complete", stage="slicing", n_tiles=len(tiles))

        # ── Stage 2: Adjacency ───────────────────────────────────────────────
        log.info("stage_start", stage="adjacency")
        result = build_adjacency(tiles, config, cancel_event=cancel_event)
        log.info("stage_complete", stage="adjacency", relations=result.edge_count)

        return result
    finally:
        structlog.contextvars.clear_contextvars()
