import random

import pytest

from zipper.board.metrics import init_metrics
from zipper.board.walls import (
    WallSegment,
    biased_length,
    can_merge,
    candidate_wall,
    max_wall_length,
    merge_walls,
    place_walls,
    route_edges,
    wall_blocks_move,
    wall_blocks_route,
    walls_overlap,
)
from tests.board_test_utils import assert_walls_clean, snake_route


class _FixedRandom:
    def __init__(self, value):
        self.value = value

    def random(self):
        return self.value


def H(x1, x2, y):
    return WallSegment(x1, y, x2, y, True)


def V(x, y1, y2):
    return WallSegment(x, y1, x, y2, False)


def test_blocking_against_snake_route():
    # Snake on 5x5: row 0 runs x=0..4, drops to row 1 at x=4
    _grid, route = snake_route(5)
    edges = route_edges(route)
    assert wall_blocks_route(H(4, 4, 0), edges)
    assert not wall_blocks_route(H(0, 3, 0), edges)
    assert wall_blocks_route(V(0, 0, 0), edges)
    # Row 1 drops to row 2 at x=0
    assert wall_blocks_route(H(0, 0, 1), edges)
    assert not wall_blocks_route(H(1, 4, 1), edges)


def test_wall_blocks_move_geometry():
    h = H(1, 3, 2)
    assert wall_blocks_move(h, (2, 2), (2, 3))
    assert wall_blocks_move(h, (2, 3), (2, 2))
    assert not wall_blocks_move(h, (0, 2), (0, 3))
    assert not wall_blocks_move(h, (2, 1), (2, 2))
    assert not wall_blocks_move(h, (2, 2), (3, 2))
    v = V(0, 0, 1)
    assert wall_blocks_move(v, (0, 1), (1, 1))
    assert not wall_blocks_move(v, (0, 2), (1, 2))
    assert not wall_blocks_move(v, (1, 0), (2, 0))


def test_crossed_edges_match_move_check():
    w = V(2, 1, 3)
    for edge in w.crossed_edges():
        a, b = sorted(edge)
        assert wall_blocks_move(w, a, b)
    assert len(w.crossed_edges()) == w.length == 3


def test_max_wall_length_stops_before_route():
    _grid, route = snake_route(5)
    edges = route_edges(route)
    assert max_wall_length(0, 0, True, 5, edges) == 4
    # Vertical walls at x=0 block row 0's first move immediately
    assert max_wall_length(0, 0, False, 5, edges) == 1


def test_biased_length_range(rng):
    assert biased_length(1, _FixedRandom(0.9)) == 1
    assert biased_length(4, _FixedRandom(0.0)) == 1
    assert biased_length(4, _FixedRandom(0.25)) == 2
    for _ in range(200):
        assert 1 <= biased_length(6, rng) <= 6


def test_candidate_rejects_board_edge_rows():
    _grid, route = snake_route(5)
    edges = route_edges(route)
    rng = random.Random(0)
    assert candidate_wall(2, 4, True, 5, edges, rng) is None
    assert candidate_wall(4, 2, False, 5, edges, rng) is None


def test_overlap_rules():
    assert walls_overlap(H(0, 2, 1), H(2, 4, 1))
    assert not walls_overlap(H(0, 1, 1), H(2, 4, 1))
    assert not walls_overlap(H(0, 2, 1), H(0, 2, 2))
    assert not walls_overlap(H(0, 2, 1), V(1, 0, 3))
    assert walls_overlap(V(3, 0, 2), V(3, 1, 1))


def test_merge_rules():
    assert can_merge(H(0, 1, 1), H(2, 3, 1))
    assert not can_merge(H(0, 1, 1), H(3, 4, 1))
    assert not can_merge(H(0, 1, 1), V(0, 0, 1))
    assert merge_walls([H(0, 1, 1), H(2, 3, 1)]) == [H(0, 3, 1)]
    assert merge_walls([V(2, 4, 5), V(2, 0, 3)]) == [V(2, 0, 5)]


def test_merge_reaches_fixpoint():
    walls = [H(0, 1, 2), H(5, 6, 2), H(2, 4, 2), V(1, 0, 0)]
    merged = merge_walls(walls)
    assert merged == [H(0, 6, 2), V(1, 0, 0)]


def test_merge_is_idempotent():
    walls = [H(0, 1, 2), H(3, 3, 2), V(1, 0, 0), V(1, 2, 4), H(2, 2, 2)]
    once = merge_walls(walls)
    assert merge_walls(once) == once


def test_merge_empty_and_single():
    assert merge_walls([]) == []
    assert merge_walls([V(0, 0, 0)]) == [V(0, 0, 0)]


def test_zero_walls_requested():
    _grid, route = snake_route(5)
    assert place_walls(5, route, 0, random.Random(1)) == []


@pytest.mark.structure
@pytest.mark.parametrize("seed", [1, 2, 3, 4, 5])
def test_placed_walls_are_path_safe_and_merged(seed):
    _grid, route = snake_route(8)
    walls = place_walls(8, route, 6, random.Random(seed))
    assert len(walls) <= 6
    assert_walls_clean(walls, route)


def test_wall_metrics(rng):
    _grid, route = snake_route(6)
    metrics = init_metrics()
    walls = place_walls(6, route, 4, rng, metrics)
    assert metrics["walls_requested"] == 4
    assert 1 <= metrics["wall_attempts"] <= 4 * 50
    assert metrics["walls_after_merge"] == len(walls)
    assert metrics["walls_placed"] >= len(walls)


def test_to_dict_shape():
    assert V(1, 2, 3).to_dict() == {"x1": 1, "y1": 2, "x2": 1, "y2": 3, "horizontal": False}
