from typing import Dict


def init_metrics() -> Dict[str, int | float | bool]:
    return {
        'route_attempts': 0,
        'route_restarts': 0,
        'route_steps': 0,
        'checkpoints_placed': 0,
        'wall_attempts': 0,
        'walls_requested': 0,
        'walls_placed': 0,
        'walls_after_merge': 0,
        'wall_density': 0.0,
        'runtime_ms': 0.0,
    }


def bump(metrics, key: str, amount: int = 1) -> None:
    """Increment a counter when metrics are enabled (metrics may be None)."""
    if metrics is not None:
        metrics[key] = metrics.get(key, 0) + amount
