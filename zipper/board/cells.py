from typing import List, Tuple

UNSET_ORDER = -1


class Cell:
    """Lightweight container for a board grid cell."""
    __slots__ = ("x", "y", "is_checkpoint", "checkpoint_order")
    def __init__(self, x: int, y: int, is_checkpoint: bool = False, checkpoint_order: int = UNSET_ORDER):
        self.x = x
        self.y = y
        self.is_checkpoint = is_checkpoint
        self.checkpoint_order = checkpoint_order

    @property
    def pos(self) -> "Coord2D":
        return (self.x, self.y)

    def mark_checkpoint(self, order: int) -> None:
        self.is_checkpoint = True
        self.checkpoint_order = order

    def to_dict(self):
        # Key names match the game client's wire format
        return {"x": self.x, "y": self.y, "gameNode": self.is_checkpoint, "gamePos": self.checkpoint_order}

    def __repr__(self):
        return f"Cell({self.x}, {self.y}, order={self.checkpoint_order})"


Grid2D = List[List[Cell]]
Coord2D = Tuple[int, int]

DIRECTIONS = [(0, 1), (1, 0), (0, -1), (-1, 0)]


def init_grid(size: int) -> Grid2D:
    """Allocate a size x size grid indexed grid[y][x]."""
    return [[Cell(x, y) for x in range(size)] for y in range(size)]


def in_bounds(x: int, y: int, size: int) -> bool:
    return 0 <= x < size and 0 <= y < size
