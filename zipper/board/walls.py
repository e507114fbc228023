"""Wall placement: random path-safe segments, overlap rejection, merge to fixpoint.

Walls live on cell boundaries. A horizontal wall at ``y1`` spanning ``x1..x2``
sits between rows ``y1`` and ``y1 + 1``; a vertical wall at ``x1`` spanning
``y1..y2`` sits between columns ``x1`` and ``x1 + 1``. A wall blocks a route
edge when the edge crosses that boundary inside the wall's span.
"""
from __future__ import annotations

import math
import random
from typing import Dict, FrozenSet, List, NamedTuple, Optional, Sequence, Set

from .cells import Cell, Coord2D
from .metrics import bump

ATTEMPTS_PER_WALL = 50

Edge = FrozenSet[Coord2D]


class WallSegment(NamedTuple):
    x1: int; y1: int; x2: int; y2: int; horizontal: bool

    @property
    def length(self) -> int:
        return (self.x2 - self.x1 + 1) if self.horizontal else (self.y2 - self.y1 + 1)

    def crossed_edges(self) -> List[Edge]:
        """Every cell-to-cell move this segment obstructs."""
        if self.horizontal:
            return [frozenset(((x, self.y1), (x, self.y1 + 1))) for x in range(self.x1, self.x2 + 1)]
        return [frozenset(((self.x1, y), (self.x1 + 1, y))) for y in range(self.y1, self.y2 + 1)]

    def to_dict(self):
        return {"x1": self.x1, "y1": self.y1, "x2": self.x2, "y2": self.y2, "horizontal": self.horizontal}


def route_edges(route: Sequence[Cell]) -> Set[Edge]:
    return {frozenset((a.pos, b.pos)) for a, b in zip(route, route[1:])}


def wall_blocks_route(wall: WallSegment, edges: Set[Edge]) -> bool:
    return any(e in edges for e in wall.crossed_edges())


def wall_blocks_move(wall: WallSegment, a: Coord2D, b: Coord2D) -> bool:
    """True when moving between orthogonal neighbours a and b crosses wall."""
    (ax, ay), (bx, by) = a, b
    if wall.horizontal:
        if ax != bx or not (wall.x1 <= ax <= wall.x2):
            return False
        return min(ay, by) <= wall.y1 and max(ay, by) >= wall.y1 + 1
    if ay != by or not (wall.y1 <= ay <= wall.y2):
        return False
    return min(ax, bx) <= wall.x1 and max(ax, bx) >= wall.x1 + 1


def _segment(x: int, y: int, horizontal: bool, length: int) -> WallSegment:
    if horizontal:
        return WallSegment(x, y, x + length - 1, y, True)
    return WallSegment(x, y, x, y + length - 1, False)


def max_wall_length(x: int, y: int, horizontal: bool, size: int, edges: Set[Edge]) -> int:
    """Longest segment from (x, y) that stays on the board and blocks no route edge.

    Length 1 is always returned as the floor; the caller re-checks it.
    """
    longest = 1
    start = x if horizontal else y
    length = 2
    while start + length - 1 < size:
        if wall_blocks_route(_segment(x, y, horizontal, length), edges):
            break
        longest = length
        length += 1
    return longest


def biased_length(max_length: int, rng: random.Random) -> int:
    """Draw a length in [1, max_length], favouring short walls (sqrt bias)."""
    if max_length <= 1:
        return 1
    draw = math.pow(rng.random(), 0.5)
    length = int(draw * (max_length - 1)) + 1
    return min(max(length, 1), max_length)


def candidate_wall(x: int, y: int, horizontal: bool, size: int, edges: Set[Edge], rng: random.Random) -> Optional[WallSegment]:
    # Walls on the last row/column would sit on the board edge
    if horizontal and y >= size - 1:
        return None
    if not horizontal and x >= size - 1:
        return None
    length = biased_length(max_wall_length(x, y, horizontal, size, edges), rng)
    return _segment(x, y, horizontal, length)


def walls_overlap(w1: WallSegment, w2: WallSegment) -> bool:
    if w1.horizontal and w2.horizontal:
        return w1.y1 == w2.y1 and not (w1.x2 < w2.x1 or w2.x2 < w1.x1)
    if not w1.horizontal and not w2.horizontal:
        return w1.x1 == w2.x1 and not (w1.y2 < w2.y1 or w2.y2 < w1.y1)
    return False


def can_merge(w1: WallSegment, w2: WallSegment) -> bool:
    """Same orientation, same line, spans overlapping or touching."""
    if w1.horizontal and w2.horizontal and w1.y1 == w2.y1:
        return not (w1.x2 < w2.x1 - 1 or w2.x2 < w1.x1 - 1)
    if not w1.horizontal and not w2.horizontal and w1.x1 == w2.x1:
        return not (w1.y2 < w2.y1 - 1 or w2.y2 < w1.y1 - 1)
    return False


def merge_pair(w1: WallSegment, w2: WallSegment) -> WallSegment:
    if w1.horizontal:
        return WallSegment(min(w1.x1, w2.x1), w1.y1, max(w1.x2, w2.x2), w1.y1, True)
    return WallSegment(w1.x1, min(w1.y1, w2.y1), w1.x1, max(w1.y2, w2.y2), False)


def merge_walls(walls: Sequence[WallSegment]) -> List[WallSegment]:
    """Merge mergeable segments repeatedly until nothing changes.

    Order of first appearance is preserved, so merging an already merged list
    returns it unchanged.
    """
    current = list(walls)
    while True:
        merged: List[WallSegment] = []
        used = [False] * len(current)
        for i, wall in enumerate(current):
            if used[i]:
                continue
            for j in range(i + 1, len(current)):
                if not used[j] and can_merge(wall, current[j]):
                    wall = merge_pair(wall, current[j])
                    used[j] = True
            merged.append(wall)
            used[i] = True
        if len(merged) == len(current):
            return merged
        current = merged


def place_walls(size: int, route: Sequence[Cell], wall_count: int, rng: random.Random, metrics: Optional[Dict] = None) -> List[WallSegment]:
    """Grow up to wall_count path-safe segments, then merge them.

    Gives up silently after ``wall_count * ATTEMPTS_PER_WALL`` attempts, so the
    result may hold fewer walls than requested.
    """
    if metrics is not None:
        metrics['walls_requested'] = wall_count
    if wall_count <= 0:
        return []
    edges = route_edges(route)
    walls: List[WallSegment] = []
    attempts = 0
    max_attempts = wall_count * ATTEMPTS_PER_WALL
    while len(walls) < wall_count and attempts < max_attempts:
        attempts += 1
        x, y = rng.randrange(size), rng.randrange(size)
        orientations = [True, False]
        rng.shuffle(orientations)
        for horizontal in orientations:
            wall = candidate_wall(x, y, horizontal, size, edges, rng)
            if wall is None or wall_blocks_route(wall, edges):
                continue
            if any(walls_overlap(wall, w) for w in walls):
                continue
            walls.append(wall)
            break
    bump(metrics, 'wall_attempts', attempts)
    bump(metrics, 'walls_placed', len(walls))
    merged = merge_walls(walls)
    if metrics is not None:
        metrics['walls_after_merge'] = len(merged)
    return merged
