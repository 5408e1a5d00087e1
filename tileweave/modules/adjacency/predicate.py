# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
TileWeave — Edge Compatibility Predicate
Decides whether two border sequences are visually compatible.

This is a similarity test, not equality:
  1. Per position i, Euclidean distance between the two RGBA quads
     (each channel in [0, 255]) as 4-D vectors.
  2. Position i matches if distance <= tolerance.
  3. Edges match if the fraction of matching positions is
     >= match_ratio_threshold.

With the defaults (tolerance 2, threshold 0.98) a border with 1% anti-
aliasing noise still matches while one with 3% differing pixels does not.
Edges of differing or zero length never match.
"""

from __future__ import annotations

import numpy as np

DEFAULT_TOLERANCE = 2.0
DEFAULT_MATCH_RATIO_THRESHOLD = 0.98


def pixel_distances(e1: np.ndarray, e2: np.ndarray) -> np.ndarray:
    """
    Per-position Euclidean RGBA distance between two equal-length edges.
    Returns (S,) float64. Caller guarantees equal lengths.
    """
    diff = e1.astype(np.float64) - e2.astype(np.float64)
    return np.sqrt(np.sum(diff * diff, axis=1))


def edge_match_ratio(
    e1: np.ndarray,
    e2: np.ndarray,
    tolerance: float = DEFAULT_TOLERANCE,
) -> float:
    """
    Fraction of positions whose RGBA distance is within tolerance.
    Returns 0.0 for edges of differing or zero length.
    """
    n = len(e1)
    if n == 0 or n != len(e2):
        return 0.0
    matching = int(np.count_nonzero(pixel_distances(e1, e2) <= tolerance))
    return matching / n


def edges_match(
    e1: np.ndarray,
    e2: np.ndarray,
    tolerance: float = DEFAULT_TOLERANCE,
    match_ratio_threshold: float = DEFAULT_MATCH_RATIO_THRESHOLD,
) -> bool:
    """
    True iff at least match_ratio_threshold of the positions of e1 and e2
    lie within tolerance of each other.

    Args:
        e1, e2:                (S, 4) RGBA border sequences.
        tolerance:             Max per-pixel Euclidean RGBA distance.
        match_ratio_threshold: Required fraction of matching positions.
    """
    if len(e1) == 0 or len(e1) != len(e2):
        return False
    return edge_match_ratio(e1, e2, tolerance) >= match_ratio_threshold
