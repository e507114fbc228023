"""Public board package interface.

The two core operations are ``validate_config`` and ``generate_board``;
everything else is exported for tests and the HTTP layer.
"""

from .cells import Cell, init_grid, UNSET_ORDER  # noqa: F401
from .config import BoardConfig, validate_config, coerce_seed, MIN_SIZE, MAX_SIZE  # noqa: F401
from .errors import ValidationError, GenerationError  # noqa: F401
from .pipeline import Board, generate_board  # noqa: F401
from .route import find_route, is_hamiltonian  # noqa: F401
from .checkpoints import place_checkpoints  # noqa: F401
from .walls import WallSegment, place_walls, merge_walls, route_edges, wall_blocks_route  # noqa: F401
from .solution import SolutionResult, check_solution  # noqa: F401

__all__ = [
    "Board",
    "BoardConfig",
    "Cell",
    "GenerationError",
    "MAX_SIZE",
    "MIN_SIZE",
    "SolutionResult",
    "UNSET_ORDER",
    "ValidationError",
    "WallSegment",
    "check_solution",
    "coerce_seed",
    "find_route",
    "generate_board",
    "init_grid",
    "is_hamiltonian",
    "merge_walls",
    "place_checkpoints",
    "place_walls",
    "route_edges",
    "validate_config",
    "wall_blocks_route",
]
