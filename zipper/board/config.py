import hashlib
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .errors import ValidationError

MIN_SIZE = 5
MAX_SIZE = 20
SEED_MAX_INT = 9223372036854775807


@dataclass(frozen=True)
class BoardConfig:
    size: int = 6
    checkpoint_count: int = 1
    wall_count: int = 0
    seed: Optional[int] = None

    @property
    def wall_density(self) -> float:
        # Derived from size; reported in metrics, not used for placement.
        return 0.04 * self.size


def coerce_seed(raw_seed: Any) -> Optional[int]:
    """Convert a provided seed (int or str) into a bounded 64-bit signed int.

    Returns None for a missing or blank seed so the caller picks a random one.
    Non-numeric strings are hashed, so "daily-puzzle" is a valid stable seed.
    """
    if raw_seed is None:
        return None
    if isinstance(raw_seed, bool):
        raise ValidationError("seed", "seed must be an integer or string")
    if isinstance(raw_seed, int):
        return raw_seed % SEED_MAX_INT
    if isinstance(raw_seed, str):
        s = raw_seed.strip()
        if not s:
            return None
        # non-ASCII digits such as "²" pass isdigit() but not int()
        if s.isascii() and s.isdigit():
            return int(s) % SEED_MAX_INT
        h = hashlib.sha256(s.encode("utf-8")).digest()
        return int.from_bytes(h[:8], "big") % SEED_MAX_INT
    raise ValidationError("seed", "seed must be an integer or string")


def _require_int(raw: Mapping[str, Any], field: str, *aliases: str) -> int:
    for key in (field,) + aliases:
        if key in raw:
            value = raw[key]
            break
    else:
        raise ValidationError(field, f"{field} is required")
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(field, f"{field} must be an integer")
    return value


def validate_config(raw: Mapping[str, Any]) -> BoardConfig:
    """Turn a raw generation request into a validated BoardConfig.

    Accepts the wire keys ``size``, ``nodes``, ``walls`` (or the long forms
    ``checkpoint_count`` / ``wall_count``) and an optional ``seed``.
    Raises ValidationError with a descriptive message on any range violation.
    """
    if not isinstance(raw, Mapping):
        raise ValidationError("__root__", "request must be an object")
    size = _require_int(raw, "size")
    nodes = _require_int(raw, "nodes", "checkpoint_count")
    walls = _require_int(raw, "walls", "wall_count")

    if size < MIN_SIZE or size > MAX_SIZE:
        raise ValidationError("size", f"size must be between {MIN_SIZE} and {MAX_SIZE}, inclusive")
    if nodes < 1:
        raise ValidationError("nodes", "nodes must be at least 1")
    if nodes > size * size - 1:
        raise ValidationError("nodes", f"nodes cannot exceed {size * size - 1} on a {size}x{size} board")
    if walls < 0:
        raise ValidationError("walls", "walls cannot be negative")

    return BoardConfig(size=size, checkpoint_count=nodes, wall_count=walls, seed=coerce_seed(raw.get("seed")))


__all__ = ["BoardConfig", "validate_config", "coerce_seed", "MIN_SIZE", "MAX_SIZE"]
