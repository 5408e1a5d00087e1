# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
Phase 4 — Edge compatibility predicate and adjacency matcher tests.
All tests use synthetic solid-colour or hand-painted tiles.
"""

import threading

import numpy as np
import pytest

from tileweave.models.tile import Direction, Tile

RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)
GREEN = (0, 255, 0, 255)


# ─── Helpers ─────────────────────────────────────────────────────────────────

def _solid(color: tuple, size: int = 4) -> np.ndarray:
    px = np.zeros((size, size, 4), dtype=np.uint8)
    px[:] = color
    return px


def _edge(colors: list) -> np.ndarray:
    return np.array(colors, dtype=np.uint8).reshape(-1, 4)


def _config(tile_size: int = 4, **kwargs):
    from tileweave.models.adjacency import MatchConfig
    return MatchConfig.create(tile_size=tile_size, **kwargs)


def _all_ids(tile: Tile) -> list[int]:
    return [nid for d in Direction for nid in tile.neighbors.for_direction(d)]


# ─── Predicate: length guard ─────────────────────────────────────────────────

def test_edges_match_differing_length_false():
    from tileweave.modules.adjacency import edges_match
    a = _edge([RED] * 4)
    b = _edge([RED] * 5)
    assert edges_match(a, b) is False
    assert edges_match(b, a) is False


def test_edges_match_empty_false():
    from tileweave.modules.adjacency import edge_match_ratio, edges_match
    empty = np.empty((0, 4), dtype=np.uint8)
    assert edges_match(empty, empty) is False
    assert edges_match(empty, _edge([RED])) is False
    assert edge_match_ratio(empty, empty) == 0.0


def test_edges_match_identical_true():
    from tileweave.modules.adjacency import edges_match
    assert edges_match(_edge([RED, BLUE, GREEN]), _edge([RED, BLUE, GREEN])) is True


def test_edges_match_different_colors_false():
    from tileweave.modules.adjacency import edges_match
    assert edges_match(_edge([RED] * 4), _edge([BLUE] * 4)) is False


# ─── Predicate: threshold boundary ───────────────────────────────────────────

def _edges_with_matching(n: int, matching: int) -> tuple[np.ndarray, np.ndarray]:
    e1 = _edge([RED] * n)
    e2 = e1.copy()
    e2[matching:] = BLUE
    return e1, e2


def test_threshold_exactly_98_percent_matches():
    from tileweave.modules.adjacency import edge_match_ratio, edges_match
    e1, e2 = _edges_with_matching(100, 98)
    assert edge_match_ratio(e1, e2) == pytest.approx(0.98)
    assert edges_match(e1, e2) is True


def test_threshold_97_percent_does_not_match():
    from tileweave.modules.adjacency import edges_match
    e1, e2 = _edges_with_matching(100, 97)
    assert edges_match(e1, e2) is False


def test_threshold_97_9_percent_does_not_match():
    from tileweave.modules.adjacency import edges_match
    e1, e2 = _edges_with_matching(1000, 979)
    assert edges_match(e1, e2) is False
    e1, e2 = _edges_with_matching(1000, 980)
    assert edges_match(e1, e2) is True


def test_threshold_is_configurable():
    from tileweave.modules.adjacency import edges_match
    e1, e2 = _edges_with_matching(10, 7)
    assert edges_match(e1, e2) is False
    assert edges_match(e1, e2, match_ratio_threshold=0.7) is True
    assert edges_match(e1, e1, match_ratio_threshold=1.0) is True


# ─── Predicate: tolerance boundary ───────────────────────────────────────────

def test_distance_exactly_tolerance_matches():
    from tileweave.modules.adjacency import edges_match, pixel_distances
    e1 = _edge([(10, 10, 10, 255)] * 4)
    e2 = _edge([(12, 10, 10, 255)] * 4)    # distance exactly 2
    assert pixel_distances(e1, e2).tolist() == [2.0] * 4
    assert edges_match(e1, e2, tolerance=2) is True


def test_distance_just_above_tolerance_fails():
    from tileweave.modules.adjacency import edges_match
    e1 = _edge([(10, 10, 10, 255)] * 4)
    e2 = _edge([(12, 10, 10, 254)] * 4)    # sqrt(5) ≈ 2.236
    assert edges_match(e1, e2, tolerance=2) is False
    assert edges_match(e1, e2, tolerance=2.2360) is False
    assert edges_match(e1, e2, tolerance=2.2361) is True


def test_distance_uses_all_four_channels():
    from tileweave.modules.adjacency import edges_match, pixel_distances
    e1 = _edge([(0, 0, 0, 0)])
    e2 = _edge([(3, 0, 0, 4)])             # 3-4-5 triangle via alpha
    assert pixel_distances(e1, e2).tolist() == [5.0]
    assert edges_match(e1, e2, tolerance=5) is True
    assert edges_match(e1, e2, tolerance=4.999) is False


def test_distance_no_uint8_wraparound():
    from tileweave.modules.adjacency import pixel_distances
    e1 = _edge([(0, 0, 0, 255)])
    e2 = _edge([(255, 0, 0, 255)])
    assert pixel_distances(e1, e2).tolist() == [255.0]
    assert pixel_distances(e2, e1).tolist() == [255.0]


def test_noise_within_budget_still_matches():
    from tileweave.modules.adjacency import edges_match
    e1 = _edge([RED] * 100)
    e2 = e1.copy()
    e2[50] = (0, 0, 0, 0)                  # 1% anti-aliasing noise
    assert edges_match(e1, e2) is True


# ─── Matcher: solid colour scenario ──────────────────────────────────────────

def test_red_red_blue_scenario():
    from tileweave.modules.adjacency import build_adjacency

    a = Tile(tile_id=0, pixels=_solid(RED))
    b = Tile(tile_id=1, pixels=_solid(RED))
    c = Tile(tile_id=2, pixels=_solid(BLUE))
    result = build_adjacency([a, b, c], _config())

    for d in Direction:
        assert a.neighbors.for_direction(d) == [1]
        assert b.neighbors.for_direction(d) == [0]
        assert c.neighbors.for_direction(d) == []
    assert result.isolated_tile_ids() == [2]
    assert result.edge_count == 8


# ─── Matcher: self exclusion ─────────────────────────────────────────────────

def test_self_exclusion():
    from tileweave.modules.adjacency import build_adjacency

    tiles = [Tile(tile_id=i, pixels=_solid(RED)) for i in range(4)]
    build_adjacency(tiles, _config())

    for t in tiles:
        assert t.tile_id not in _all_ids(t)
        for d in Direction:
            assert t.neighbors.for_direction(d) == [i for i in range(4) if i != t.tile_id]


def test_single_uniform_tile_has_no_neighbors():
    from tileweave.modules.adjacency import build_adjacency
    tile = Tile(tile_id=0, pixels=_solid(RED))
    build_adjacency([tile], _config())
    assert tile.neighbors.total == 0


# ─── Matcher: direction semantics ────────────────────────────────────────────

def test_direction_independence_right_only():
    from tileweave.modules.adjacency import build_adjacency

    # A: red with a green right column. B: blue with a green left column.
    pa = _solid(RED)
    pa[:, -1] = GREEN
    pb = _solid(BLUE)
    pb[:, 0] = GREEN
    a = Tile(tile_id=0, pixels=pa)
    b = Tile(tile_id=1, pixels=pb)

    build_adjacency([a, b], _config())

    assert a.neighbors.right == [1]
    assert a.neighbors.up == []
    assert a.neighbors.down == []
    assert a.neighbors.left == []
    # B's lists come from B's own comparisons only; B.left vs A.right is
    # the same border pair seen from the other side
    assert b.neighbors.left == [0]
    assert b.neighbors.up == []
    assert b.neighbors.down == []
    assert b.neighbors.right == []


def test_down_uses_bottom_against_top():
    from tileweave.modules.adjacency import build_adjacency

    pa = _solid(RED)
    pa[-1, :] = GREEN          # A's bottom row
    pb = _solid(BLUE)
    pb[0, :] = GREEN           # B's top row
    a = Tile(tile_id=0, pixels=pa)
    b = Tile(tile_id=1, pixels=pb)

    build_adjacency([a, b], _config())

    assert a.neighbors.down == [1]
    assert b.neighbors.up == [0]
    assert a.neighbors.up == a.neighbors.left == a.neighbors.right == []
    assert b.neighbors.down == b.neighbors.left == b.neighbors.right == []


def test_pair_may_satisfy_multiple_directions():
    from tileweave.modules.adjacency import build_adjacency

    # A's right column and bottom row are green; B's left column and top row are green
    pa = _solid(RED)
    pa[:, -1] = GREEN
    pa[-1, :] = GREEN
    pb = _solid(BLUE)
    pb[:, 0] = GREEN
    pb[0, :] = GREEN
    a = Tile(tile_id=0, pixels=pa)
    b = Tile(tile_id=1, pixels=pb)

    build_adjacency([a, b], _config())

    assert a.neighbors.right == [1]
    assert a.neighbors.down == [1]


def test_edges_are_compared_without_reversal():
    from tileweave.modules.adjacency import build_adjacency

    # A.right runs top→bottom red,green,blue,red; B.left holds the reverse
    pa = _solid(BLUE)
    pa[:, -1] = [RED, GREEN, BLUE, RED]
    pb = _solid(GREEN)
    pb[:, 0] = [RED, BLUE, GREEN, RED]
    a = Tile(tile_id=0, pixels=pa)
    b = Tile(tile_id=1, pixels=pb)

    build_adjacency([a, b], _config())
    assert a.neighbors.right == []


# ─── Matcher: ordering, duplicates, determinism ──────────────────────────────

def test_neighbor_order_follows_input_order():
    from tileweave.modules.adjacency import build_adjacency

    ids = [42, 7, 19, 3]
    tiles = [Tile(tile_id=i, pixels=_solid(RED)) for i in ids]
    build_adjacency(tiles, _config())

    assert tiles[0].neighbors.right == [7, 19, 3]
    assert tiles[2].neighbors.up == [42, 7, 3]


def test_identical_tiles_recorded_separately():
    from tileweave.modules.adjacency import build_adjacency

    tiles = [Tile(tile_id=i, pixels=_solid(BLUE)) for i in range(3)]
    build_adjacency(tiles, _config())
    assert tiles[0].neighbors.left == [1, 2]


def _random_palette_tiles(n: int, size: int, seed: int) -> list[Tile]:
    """Tiles built from a 2-colour palette so that many borders coincide."""
    rng = np.random.default_rng(seed)
    palette = np.array([RED, BLUE], dtype=np.uint8)
    tiles = []
    for i in range(n):
        px = np.zeros((size, size, 4), dtype=np.uint8)
        for side in range(4):
            color = palette[rng.integers(0, 2)]
            if side == 0:
                px[0, :] = color
            elif side == 1:
                px[-1, :] = color
            elif side == 2:
                px[:, 0] = color
            else:
                px[:, -1] = color
        tiles.append(Tile(tile_id=i, pixels=px))
    return tiles


def _snapshot(tiles: list[Tile]) -> list[dict]:
    return [t.neighbors.model_dump() for t in tiles]


def test_determinism_repeated_runs():
    from tileweave.modules.adjacency import build_adjacency

    tiles = _random_palette_tiles(20, 5, seed=11)
    build_adjacency(tiles, _config(5))
    first = _snapshot(tiles)
    build_adjacency(tiles, _config(5))
    assert _snapshot(tiles) == first
    assert sum(len(v) for snap in first for v in snap.values()) > 0


def test_parallel_matches_sequential():
    from tileweave.modules.adjacency import build_adjacency

    seq_tiles = _random_palette_tiles(25, 6, seed=5)
    par_tiles = _random_palette_tiles(25, 6, seed=5)
    build_adjacency(seq_tiles, _config(6, max_workers=1))
    build_adjacency(par_tiles, _config(6, max_workers=4))
    assert _snapshot(seq_tiles) == _snapshot(par_tiles)


def test_rebuild_replaces_previous_lists():
    from tileweave.modules.adjacency import build_adjacency

    tiles = [Tile(tile_id=i, pixels=_solid(RED)) for i in range(2)]
    tiles[0].neighbors.up.append(99)
    build_adjacency(tiles, _config())
    build_adjacency(tiles, _config())
    assert tiles[0].neighbors.up == [1]


# ─── Matcher: degradation ────────────────────────────────────────────────────

def test_tile_without_pixels_is_isolated():
    from tileweave.modules.adjacency import build_adjacency

    tiles = [
        Tile(tile_id=0, pixels=_solid(RED)),
        Tile(tile_id=1),
        Tile(tile_id=2, pixels=_solid(RED)),
        Tile(tile_id=3, pixels=np.zeros((4, 5, 4), dtype=np.uint8)),  # malformed
    ]
    result = build_adjacency(tiles, _config())

    for empty_id in (1, 3):
        assert result.get_tile(empty_id).neighbors.total == 0
        for t in tiles:
            assert empty_id not in _all_ids(t)
    assert tiles[0].neighbors.right == [2]


def test_zero_tiles_is_noop():
    from tileweave.modules.adjacency import build_adjacency
    result = build_adjacency([], _config())
    assert len(result) == 0
    assert result.edge_count == 0


def test_result_wraps_same_tile_objects():
    from tileweave.modules.adjacency import build_adjacency
    tiles = [Tile(tile_id=i, pixels=_solid(RED)) for i in range(2)]
    result = build_adjacency(tiles, _config())
    assert [t.tile_id for t in result.tiles] == [0, 1]
    assert result.tiles[0] is tiles[0]
    assert [t.tile_id for t in result.neighbors_of(0, Direction.DOWN)] == [1]


def test_custom_tolerance_relaxes_matching():
    from tileweave.modules.adjacency import build_adjacency

    a = Tile(tile_id=0, pixels=_solid((100, 100, 100, 255)))
    b = Tile(tile_id=1, pixels=_solid((103, 104, 100, 255)))   # distance 5
    build_adjacency([a, b], _config())
    assert a.neighbors.total == 0
    build_adjacency([a, b], _config(tolerance=5))
    assert a.neighbors.right == [1]


# ─── Matcher: boundary errors ────────────────────────────────────────────────

def test_duplicate_ids_rejected():
    from tileweave.errors import ConfigurationError
    from tileweave.modules.adjacency import build_adjacency
    tiles = [Tile(tile_id=1, pixels=_solid(RED)), Tile(tile_id=1, pixels=_solid(RED))]
    with pytest.raises(ConfigurationError):
        build_adjacency(tiles, _config())


def test_mixed_tile_size_rejected():
    from tileweave.errors import ConfigurationError
    from tileweave.modules.adjacency import build_adjacency
    tiles = [Tile(tile_id=0, pixels=_solid(RED, 4)), Tile(tile_id=1, pixels=_solid(RED, 8))]
    with pytest.raises(ConfigurationError):
        build_adjacency(tiles, _config(4))


def test_mixed_tile_size_nested_list_rejected():
    from tileweave.errors import ConfigurationError
    from tileweave.modules.adjacency import build_adjacency
    tiles = [
        Tile(tile_id=0, pixels=_solid(RED, 4)),
        Tile(tile_id=1, pixels=_solid(RED, 8).tolist()),
    ]
    with pytest.raises(ConfigurationError):
        build_adjacency(tiles, _config(4))


def test_nested_list_of_right_size_is_matched():
    from tileweave.modules.adjacency import build_adjacency
    tiles = [
        Tile(tile_id=0, pixels=_solid(RED)),
        Tile(tile_id=1, pixels=_solid(RED).tolist()),
        Tile(tile_id=2, pixels=[[1, 2], [3]]),     # ragged, degrades
    ]
    build_adjacency(tiles, _config())
    assert tiles[0].neighbors.right == [1]
    assert tiles[2].neighbors.total == 0


def test_non_config_rejected():
    from tileweave.errors import ConfigurationError
    from tileweave.modules.adjacency import build_adjacency
    with pytest.raises(ConfigurationError):
        build_adjacency([], {"tile_size": 4})


def test_cancel_event_stops_build():
    from tileweave.errors import MatchCancelledError
    from tileweave.modules.adjacency import build_adjacency

    tiles = [Tile(tile_id=i, pixels=_solid(RED)) for i in range(3)]
    event = threading.Event()
    event.set()
    with pytest.raises(MatchCancelledError):
        build_adjacency(tiles, _config(), cancel_event=event)


def test_unset_cancel_event_does_not_interfere():
    from tileweave.modules.adjacency import build_adjacency
    tiles = [Tile(tile_id=i, pixels=_solid(RED)) for i in range(2)]
    build_adjacency(tiles, _config(), cancel_event=threading.Event())
    assert tiles[0].neighbors.up == [1]


# ─── match_tile work unit ────────────────────────────────────────────────────

def test_match_tile_single_unit():
    from tileweave.modules.adjacency import match_tile
    from tileweave.modules.edges import extract_edges

    edges = {
        0: extract_edges(_solid(RED), 4),
        1: extract_edges(_solid(BLUE), 4),
        2: extract_edges(_solid(RED), 4),
    }
    n = match_tile(0, edges, [0, 1, 2], _config())
    assert n.up == n.down == n.left == n.right == [2]
