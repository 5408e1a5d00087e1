# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
TileWeave — Command Line Entry Point
Builds the adjacency graph of a tileset image and prints a per-tile
neighbor-count summary:

    tileweave tileset.png --tile-size 16
    python -m tileweave tileset.png --tile-size 16 --tolerance 4 --workers 4
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from tileweave import __version__
from tileweave.config import get_settings
from tileweave.core.pipeline import build_tileset_adjacency
from tileweave.errors import ConfigurationError, TilesetValidationError
from tileweave.models.adjacency import AdjacencyResult
from tileweave.models.tile import Direction
from tileweave.utils.logger import configure_logging, get_logger

log = get_logger(__name__)

EXIT_OK = 0
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tileweave",
        description="Derive directional tile adjacency from a tileset image.",
    )
    parser.add_argument("image", type=Path, help="Tileset image (PNG, JPEG, ...)")
    parser.add_argument(
        "-s", "--tile-size", type=int, required=True,
        help="Side length of each square tile in pixels",
    )
    parser.add_argument(
        "-t", "--tolerance", type=float, default=None,
        help="Max Euclidean RGBA distance per border pixel (default from settings: 2)",
    )
    parser.add_argument(
        "-r", "--match-ratio", type=float, default=None,
        help="Fraction of border pixels that must match (default from settings: 0.98)",
    )
    parser.add_argument(
        "-w", "--workers", type=int, default=None,
        help="Thread pool size for extraction and matching (default: 1)",
    )
    parser.add_argument(
        "--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], default=None,
        help="Overrides TILEWEAVE_LOG_LEVEL",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def format_summary(result: AdjacencyResult) -> str:
    """One line per tile with its neighbor count in each direction."""
    width = len(str(max((t.tile_id for t in result.tiles), default=0)))
    lines = []
    for tile in result.tiles:
        counts = tile.neighbors.counts()
        per_dir = " ".join(f"{d.value}={counts[d]}" for d in Direction)
        lines.append(f"Tile {tile.tile_id:>{width}}  {per_dir}")
    lines.append(
        f"{len(result)} tiles, {result.edge_count} relations, "
        f"{len(result.isolated_tile_ids())} without neighbors"
    )
    return "\n".join(lines)


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    log.info("tileweave_startup", version=__version__, image=str(args.image))

    try:
        result = build_tileset_adjacency(
            args.image,
            args.tile_size,
            settings=get_settings(),
            tolerance=args.tolerance,
            match_ratio_threshold=args.match_ratio,
            max_workers=args.workers,
        )
    except (ConfigurationError, TilesetValidationError) as exc:
        log.warning("tileweave_input_error", error=str(exc), exc_type=type(exc).__name__)
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_USAGE

    print(format_summary(result))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
