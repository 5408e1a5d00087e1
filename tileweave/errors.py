# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
TileWeave — Error Taxonomy
The matcher itself is total: malformed tiles degrade to "no relation".
The only failures a caller sees are raised at the boundary, before
matching begins, or on explicit cancellation.
"""


class ConfigurationError(ValueError):
    """Raised for an invalid tile_size, tolerance, ratio, or tile set."""


class TilesetValidationError(ValueError):
    """Raised when a tileset image is missing, undecodable, or too small."""


class MatchCancelledError(RuntimeError):
    """Raised when a caller cancels an adjacency build between tiles."""
