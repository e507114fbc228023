"""Player solution checking.

A drawn path solves a board when it starts on checkpoint 1, moves one
orthogonal step at a time without crossing a wall or revisiting a cell,
collects checkpoints strictly in order, fills every cell and ends on a
checkpoint. Checkpoints reached out of order make the path invalid outright.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple, Optional, Sequence

from .cells import Coord2D, in_bounds
from .walls import wall_blocks_move

if TYPE_CHECKING:
    from .pipeline import Board


class SolutionResult(NamedTuple):
    valid: bool
    next_expected: int
    reason: Optional[str] = None

    def to_dict(self):
        return {"valid": self.valid, "nextExpected": self.next_expected, "reason": self.reason}


def move_blocked(board: "Board", a: Coord2D, b: Coord2D) -> bool:
    return any(wall_blocks_move(w, a, b) for w in board.walls)


def check_solution(board: "Board", moves: Sequence[Coord2D]) -> SolutionResult:
    size = board.config.size
    final_order = board.config.checkpoint_count + 1
    if not moves:
        return SolutionResult(False, 1, "empty path")
    expected = 1
    seen = set()
    prev = None
    for step, raw in enumerate(moves):
        x, y = int(raw[0]), int(raw[1])
        if not in_bounds(x, y, size):
            return SolutionResult(False, expected, f"step {step} out of bounds")
        if (x, y) in seen:
            return SolutionResult(False, expected, f"step {step} revisits ({x}, {y})")
        if prev is not None:
            if abs(prev[0] - x) + abs(prev[1] - y) != 1:
                return SolutionResult(False, expected, f"step {step} is not adjacent")
            if move_blocked(board, prev, (x, y)):
                return SolutionResult(False, expected, f"step {step} crosses a wall")
        cell = board.grid[y][x]
        if cell.is_checkpoint:
            if cell.checkpoint_order != expected:
                return SolutionResult(False, expected, f"checkpoint {cell.checkpoint_order} reached before {expected}")
            expected += 1
        elif step == 0:
            return SolutionResult(False, expected, "path must start on checkpoint 1")
        seen.add((x, y))
        prev = (x, y)

    if len(seen) != size * size:
        return SolutionResult(False, expected, "not every cell is filled")
    if expected <= final_order:
        return SolutionResult(False, expected, "checkpoints missing")
    last_x, last_y = prev
    if not board.grid[last_y][last_x].is_checkpoint:
        return SolutionResult(False, expected, "path must end on a checkpoint")
    return SolutionResult(True, expected)
