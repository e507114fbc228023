"""Route search: randomized depth-first search for a Hamiltonian path over the grid.

Neighbours are tried in ascending order of their own remaining (unvisited)
degree, a Warnsdorff-style rule that steers the walk into narrow regions before
they can be cut off. Ties are broken with the injected RNG so repeated calls on
the same configuration yield different routes.

A restart is abandoned after ``size*size*10`` expansions. An attempt makes up
to ``ROUTE_RESTARTS`` restarts from random start cells; the search gives up
with GenerationError after ``ROUTE_ATTEMPTS`` failed attempts.
"""
from __future__ import annotations

import random
from typing import Dict, List, Optional

from ..logging_utils import get_logger
from .cells import DIRECTIONS, Cell, Coord2D, Grid2D, in_bounds
from .errors import GenerationError
from .metrics import bump

ROUTE_ATTEMPTS = 3
ROUTE_RESTARTS = 100
STEP_FACTOR = 10

log = get_logger("zipper.route")


def _remaining_degree(x: int, y: int, visited: List[List[bool]], size: int) -> int:
    count = 0
    for dx, dy in DIRECTIONS:
        nx, ny = x + dx, y + dy
        if in_bounds(nx, ny, size) and not visited[ny][nx]:
            count += 1
    return count


def ranked_neighbors(pos: Coord2D, visited: List[List[bool]], size: int, rng: random.Random) -> List[Coord2D]:
    """Unvisited neighbours of pos, most constrained first, ties shuffled."""
    x, y = pos
    keyed = []
    for dx, dy in DIRECTIONS:
        nx, ny = x + dx, y + dy
        if in_bounds(nx, ny, size) and not visited[ny][nx]:
            keyed.append((_remaining_degree(nx, ny, visited, size), rng.random(), (nx, ny)))
    keyed.sort()
    return [p for _deg, _tie, p in keyed]


def search_from(start: Coord2D, size: int, rng: random.Random, max_steps: int, metrics: Optional[Dict] = None) -> Optional[List[Coord2D]]:
    """One restart: stack-based DFS from start. Returns positions or None.

    Each stack frame holds the untried candidates of the cell at the same depth
    in ``path``; candidates are stored reversed so ``pop()`` yields the best.
    """
    total = size * size
    visited = [[False] * size for _ in range(size)]
    sx, sy = start
    visited[sy][sx] = True
    path: List[Coord2D] = [start]
    steps = 1
    if total == 1:
        return path
    frames = [ranked_neighbors(start, visited, size, rng)[::-1]]
    while frames:
        candidates = frames[-1]
        if not candidates:
            # dead end: unmark and backtrack
            frames.pop()
            bx, by = path.pop()
            visited[by][bx] = False
            continue
        nx, ny = candidates.pop()
        if visited[ny][nx]:
            continue
        steps += 1
        if steps > max_steps:
            bump(metrics, 'route_steps', steps - 1)
            return None
        visited[ny][nx] = True
        path.append((nx, ny))
        if len(path) == total:
            bump(metrics, 'route_steps', steps)
            return path
        frames.append(ranked_neighbors((nx, ny), visited, size, rng)[::-1])
    bump(metrics, 'route_steps', steps)
    return None


def find_hamiltonian(size: int, rng: random.Random, metrics: Optional[Dict] = None) -> Optional[List[Coord2D]]:
    """A single attempt: up to ROUTE_RESTARTS restarts from random start cells."""
    max_steps = size * size * STEP_FACTOR
    for _ in range(ROUTE_RESTARTS):
        bump(metrics, 'route_restarts')
        start = (rng.randrange(size), rng.randrange(size))
        path = search_from(start, size, rng, max_steps, metrics)
        if path is not None:
            return path
    return None


def find_route(grid: Grid2D, rng: random.Random, metrics: Optional[Dict] = None) -> List[Cell]:
    """Return a Hamiltonian path over grid as a list of the grid's own cells.

    Raises GenerationError when every attempt fails.
    """
    size = len(grid)
    for attempt in range(1, ROUTE_ATTEMPTS + 1):
        bump(metrics, 'route_attempts')
        positions = find_hamiltonian(size, rng, metrics)
        if positions is not None:
            return [grid[y][x] for x, y in positions]
        log.warn(event="route_attempt_failed", size=size, attempt=attempt)
    log.error(event="route_search_failed", size=size, attempts=ROUTE_ATTEMPTS)
    raise GenerationError(f"unable to generate valid path in {ROUTE_ATTEMPTS} attempts")


def is_hamiltonian(route: List[Cell], size: int) -> bool:
    """True when route visits every cell once with single orthogonal steps."""
    if len(route) != size * size:
        return False
    if len({c.pos for c in route}) != len(route):
        return False
    for a, b in zip(route, route[1:]):
        if abs(a.x - b.x) + abs(a.y - b.y) != 1:
            return False
    return all(in_bounds(c.x, c.y, size) for c in route)
