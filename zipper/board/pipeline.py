"""Pipeline orchestration for board generation.

Runs the generation phases in order (grid init, route search, checkpoint
placement, wall placement) against a single injected random source and
assembles the resulting Board. Each phase only reads the previous phase's
output, so a seeded ``random.Random`` reproduces a board exactly.
"""
from __future__ import annotations

import os
import random
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..logging_utils import get_logger
from .cells import Cell, Grid2D, init_grid
from .checkpoints import place_checkpoints
from .config import BoardConfig
from .metrics import init_metrics
from .route import find_route
from .walls import WallSegment, place_walls

log = get_logger("zipper.board")


def metrics_enabled_default() -> bool:
    val = os.environ.get('ZIPPER_ENABLE_GENERATION_METRICS', '1').lower()
    return val not in {'0', 'false', 'no', ''}


@dataclass
class Board:
    config: BoardConfig
    grid: Grid2D
    route: List[Cell]
    walls: List[WallSegment]
    seed: Optional[int] = None
    metrics: Dict[str, Any] = field(default_factory=dict)

    @property
    def size(self) -> int:
        return self.config.size

    @property
    def checkpoints(self) -> List[Cell]:
        """Checkpoint cells in route order."""
        return [c for c in self.route if c.is_checkpoint]

    def cell(self, x: int, y: int) -> Cell:
        return self.grid[y][x]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "board": [[c.to_dict() for c in row] for row in self.grid],
            "path": [c.to_dict() for c in self.route],
            "walls": [w.to_dict() for w in self.walls],
            "seed": self.seed,
        }

    def render_ascii(self) -> str:
        """Text rendering: checkpoint orders, '.' for plain cells, '|' and '-' for walls."""
        size = self.size
        blocked_right = set()
        blocked_down = set()
        for w in self.walls:
            for edge in w.crossed_edges():
                a, b = sorted(edge)
                (blocked_down if a[0] == b[0] else blocked_right).add(a)
        lines = []
        for y in range(size):
            row = []
            for x in range(size):
                c = self.grid[y][x]
                row.append(f"{c.checkpoint_order:>2}" if c.is_checkpoint else " .")
                if x < size - 1:
                    row.append("|" if (x, y) in blocked_right else " ")
            lines.append("".join(row))
            if y < size - 1:
                lines.append(" ".join(" -" if (x, y) in blocked_down else "  " for x in range(size)))
        return "\n".join(lines)


def generate_board(config: BoardConfig, rng: Optional[random.Random] = None, *, enable_metrics: Optional[bool] = None) -> Board:
    """Generate a complete board for a validated config.

    When ``rng`` is omitted a ``random.Random`` is seeded from ``config.seed``
    (or a fresh random seed) and that seed is recorded on the Board.
    Raises GenerationError when no route can be found.
    """
    seed = None
    if rng is None:
        seed = config.seed if config.seed is not None else random.randint(0, 2**31 - 1)
        rng = random.Random(seed)
    if enable_metrics is None:
        enable_metrics = metrics_enabled_default()
    metrics: Optional[Dict[str, Any]] = init_metrics() if enable_metrics else None

    if metrics is not None:
        start = time.perf_counter()
        phase_times = {}
        def _phase(label, fn, *a, **k):
            ps = time.perf_counter(); r = fn(*a, **k); pe = time.perf_counter()
            phase_times[label] = int((pe-ps)*1000)
            return r
    else:
        def _phase(label, fn, *a, **k):
            return fn(*a, **k)

    grid = _phase('init_grid', init_grid, config.size)
    route = _phase('route', find_route, grid, rng, metrics)
    _phase('checkpoints', place_checkpoints, route, config.checkpoint_count, rng, metrics)
    walls = _phase('walls', place_walls, config.size, route, config.wall_count, rng, metrics)

    if metrics is not None:
        metrics['wall_density'] = config.wall_density
        metrics['runtime_ms'] = int((time.perf_counter() - start) * 1000)
        metrics['phase_ms'] = phase_times
    board = Board(config=config, grid=grid, route=route, walls=walls, seed=seed, metrics=metrics or {})
    log.info(
        event="board_generated",
        size=config.size,
        checkpoints=config.checkpoint_count,
        walls_requested=config.wall_count,
        walls=len(walls),
        seed=seed,
        runtime_ms=board.metrics.get('runtime_ms'),
    )
    return board
