# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
TileWeave — Adjacency Models
MatchConfig carries every tunable of one adjacency build; AdjacencyResult
wraps the tile sequence after its neighbor lists have been populated.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, ValidationError

from tileweave.config import Settings, get_settings
from tileweave.errors import ConfigurationError
from tileweave.models.tile import Direction, Tile


class MatchConfig(BaseModel):
    """
    Parameters of one adjacency build.
    Defaults: tolerance 2, 98% of border pixels within tolerance.
    """
    model_config = ConfigDict(frozen=True)

    tile_size: int = Field(..., gt=0, description="Side length of every tile in px")
    tolerance: float = Field(2.0, ge=0.0, description="Max per-pixel RGBA distance")
    match_ratio_threshold: float = Field(
        0.98, gt=0.0, le=1.0,
        description="Fraction of border pixels that must be within tolerance",
    )
    max_workers: int = Field(1, ge=1, description="Thread pool size, 1 = sequential")

    @classmethod
    def create(cls, **kwargs) -> MatchConfig:
        """Build a MatchConfig, raising ConfigurationError on invalid values."""
        try:
            return cls(**kwargs)
        except ValidationError as exc:
            raise ConfigurationError(
                f"Invalid match configuration: {exc}"
            ) from exc

    @classmethod
    def from_settings(
        cls,
        tile_size: int,
        settings: Settings | None = None,
        **overrides,
    ) -> MatchConfig:
        """Build a MatchConfig from Settings defaults plus explicit overrides."""
        settings = settings or get_settings()
        values = {
            "tile_size": tile_size,
            "tolerance": settings.tolerance,
            "match_ratio_threshold": settings.match_ratio_threshold,
            "max_workers": settings.max_workers,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls.create(**values)


class AdjacencyResult(BaseModel):
    """
    The full tile sequence (input order) with populated neighbor lists.
    Neighbor ids dereference in O(1) through an id → position index.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    tiles: list[Tile] = Field(default_factory=list)
    config: MatchConfig

    _index: dict[int, int] = PrivateAttr(default_factory=dict)

    def model_post_init(self, context) -> None:
        self._index = {t.tile_id: i for i, t in enumerate(self.tiles)}

    def get_tile(self, tile_id: int) -> Tile:
        """Raises KeyError for unknown ids."""
        return self.tiles[self._index[tile_id]]

    def neighbor_ids(self, tile_id: int, direction: Direction) -> list[int]:
        return list(self.get_tile(tile_id).neighbors.for_direction(direction))

    def neighbors_of(self, tile_id: int, direction: Direction) -> list[Tile]:
        """Dereference a neighbor list into Tile objects, order preserved."""
        return [self.get_tile(nid) for nid in self.neighbor_ids(tile_id, direction)]

    @property
    def edge_count(self) -> int:
        """Total number of directional relations recorded."""
        return sum(t.neighbors.total for t in self.tiles)

    def isolated_tile_ids(self) -> list[int]:
        """Ids of tiles with no neighbor in any direction."""
        return [t.tile_id for t in self.tiles if t.neighbors.total == 0]

    def __len__(self) -> int:
        return len(self.tiles)
