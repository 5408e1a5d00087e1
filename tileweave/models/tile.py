# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
TileWeave — Tile Data Models
Pydantic models for a single tile and its four directional neighbor lists.

Neighbor lists hold tile ids, not Tile objects: the collection that owns
all tiles is the arena, and every neighbor entry is an index into it.
That keeps the graph a flat multimap with no ownership cycles.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Side(str, Enum):
    """One border of a tile."""
    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"


class Direction(str, Enum):
    """Where a neighbor sits relative to the tile that owns the list."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def own_side(self) -> Side:
        """Side of the owning tile that touches the neighbor."""
        return _DIRECTION_SIDES[self][0]

    @property
    def facing_side(self) -> Side:
        """Side of the neighbor that touches the owning tile."""
        return _DIRECTION_SIDES[self][1]


# Direction → (own side, neighbor side)
#   B right of A: A.right meets B.left
#   B below A:    A.bottom meets B.top
#   B left of A:  A.left meets B.right
#   B above A:    A.top meets B.bottom
_DIRECTION_SIDES: dict[Direction, tuple[Side, Side]] = {
    Direction.UP: (Side.TOP, Side.BOTTOM),
    Direction.DOWN: (Side.BOTTOM, Side.TOP),
    Direction.LEFT: (Side.LEFT, Side.RIGHT),
    Direction.RIGHT: (Side.RIGHT, Side.LEFT),
}


class TileNeighbors(BaseModel):
    """
    Compatible neighbor tile ids, one ordered list per direction.
    Every list starts empty; order follows the input tile sequence.
    """
    up: list[int] = Field(default_factory=list)
    down: list[int] = Field(default_factory=list)
    left: list[int] = Field(default_factory=list)
    right: list[int] = Field(default_factory=list)

    def for_direction(self, direction: Direction) -> list[int]:
        return getattr(self, Direction(direction).value)

    def counts(self) -> dict[Direction, int]:
        return {d: len(self.for_direction(d)) for d in Direction}

    @property
    def total(self) -> int:
        return len(self.up) + len(self.down) + len(self.left) + len(self.right)


class Tile(BaseModel):
    """
    A single square tile as handed over by the tile supplier.
    Only `neighbors` is ever written after construction, and only by
    the adjacency matcher.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    tile_id: int = Field(..., ge=0, description="Stable id assigned at slicing time")
    # np.ndarray (S×S×4) RGBA uint8, a flat row-major S*S*4 sequence, or bytes
    pixels: Any = Field(None, description="Square RGBA pixel buffer, may be absent")
    grid_pos: tuple[int, int] | None = Field(
        None, description="(row, col) in the source tileset, if sliced from one"
    )
    neighbors: TileNeighbors = Field(default_factory=TileNeighbors)

    @property
    def has_pixels(self) -> bool:
        if self.pixels is None:
            return False
        try:
            return len(self.pixels) > 0
        except TypeError:
            return False
