"""Checkpoint placement along a finished route."""
from __future__ import annotations

import random
from typing import Dict, List, Optional

from .cells import Cell
from .metrics import bump


def checkpoint_indices(route_len: int, checkpoint_count: int, rng: random.Random) -> List[int]:
    """Route indices for checkpoints 1..checkpoint_count+1, in order.

    Start and end are fixed to the route ends. Intermediate checkpoints sit one
    per segment of the interior, nudged forward by up to half a segment so the
    spacing does not look mechanical. Indices are clamped into the interior.
    """
    first, last = 0, route_len - 1
    indices = [first]
    if checkpoint_count > 1:
        available = route_len - 2
        if available > 0:
            segment = max(1, available // (checkpoint_count - 1))
            for k in range(1, checkpoint_count):
                offset = rng.randrange(segment // 2 + 1) if segment > 1 else 0
                idx = 1 + (k - 1) * segment + offset
                if idx >= last:
                    idx = last - 1
                if idx <= first:
                    idx = first + 1
                indices.append(idx)
    indices.append(last)
    return indices


def place_checkpoints(route: List[Cell], checkpoint_count: int, rng: random.Random, metrics: Optional[Dict] = None) -> List[Cell]:
    """Mark checkpoint cells on the route and return them in order."""
    indices = checkpoint_indices(len(route), checkpoint_count, rng)
    placed = []
    for order, idx in enumerate(indices[:-1], start=1):
        route[idx].mark_checkpoint(order)
        placed.append(route[idx])
    route[indices[-1]].mark_checkpoint(checkpoint_count + 1)
    placed.append(route[indices[-1]])
    bump(metrics, 'checkpoints_placed', len(placed))
    return placed
