"""Exploration budget for TactSpectre.
The caller may bound how deep forks nest, how many paths are recorded and
how long one exploration runs. `ResourceTracker` carries the counters the
executor updates while walking a function and raises `LimitExceeded` once
a bound is hit.
"""
from __future__ import annotations
import time
from dataclasses import asdict, dataclass
from enum import Enum, auto
from typing import Any
from tactspectre.core.exceptions import TactSpectreError
class ResourceType(Enum):
    PATHS = auto()
    DEPTH = auto()
    TIME = auto()
class LimitExceeded(TactSpectreError):
    """A budget bound was reached.
    Path and time overruns end the whole exploration, so this deliberately
    sits outside the PathError hierarchy; the executor converts a depth
    overrun into a per-path ResourceLimitError on its own.
    """
    def __init__(self, resource_type: ResourceType, current: Any, limit: Any):
        self.resource_type = resource_type
        self.current = current
        self.limit = limit
        super().__init__(f"{resource_type.name} limit exceeded: {current} >= {limit}")
class TimeoutError(LimitExceeded):
    def __init__(self, elapsed: float, limit: float):
        super().__init__(ResourceType.TIME, round(elapsed, 3), limit)
@dataclass
class ResourceSnapshot:
    """Point-in-time copy of the tracker's counters."""
    paths_recorded: int = 0
    max_depth_reached: int = 0
    elapsed_time: float = 0.0
    solver_calls: int = 0
    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
@dataclass
class ResourceLimits:
    """Bounds on one exploration. None means unbounded."""
    max_paths: int | None = None
    max_depth: int | None = None
    timeout_seconds: float | None = None
class ResourceTracker:
    """Counts paths, fork depth and solver calls against `limits`."""
    def __init__(self, limits: ResourceLimits | None = None):
        self.limits = limits or ResourceLimits()
        self._start_time: float | None = None
        self._reset()
    def _reset(self) -> None:
        self._paths_recorded = 0
        self._max_depth_reached = 0
        self._solver_calls = 0
    def start(self) -> None:
        """Zero the counters and restart the clock."""
        self._reset()
        self._start_time = time.perf_counter()
    def snapshot(self) -> ResourceSnapshot:
        return ResourceSnapshot(
            paths_recorded=self._paths_recorded,
            max_depth_reached=self._max_depth_reached,
            elapsed_time=self.elapsed_time,
            solver_calls=self._solver_calls,
        )
    @property
    def elapsed_time(self) -> float:
        """Seconds since `start`, or 0.0 before it was called."""
        if self._start_time is None:
            return 0.0
        return time.perf_counter() - self._start_time
    @property
    def paths_recorded(self) -> int:
        return self._paths_recorded
    @property
    def solver_calls(self) -> int:
        return self._solver_calls
    def check_path_limit(self) -> None:
        """Raise if recording one more path would exceed `max_paths`."""
        limit = self.limits.max_paths
        if limit is not None and self._paths_recorded >= limit:
            raise LimitExceeded(ResourceType.PATHS, self._paths_recorded, limit)
    def check_depth_limit(self, depth: int) -> None:
        """Raise if a fork at `depth` nests deeper than `max_depth`.
        Depth equal to the limit is still allowed.
        """
        limit = self.limits.max_depth
        if limit is not None and depth > limit:
            raise LimitExceeded(ResourceType.DEPTH, depth, limit)
    def check_time_limit(self) -> None:
        limit = self.limits.timeout_seconds
        if limit is not None and self.elapsed_time >= limit:
            raise TimeoutError(self.elapsed_time, limit)
    def record_path(self) -> int:
        self._paths_recorded += 1
        return self._paths_recorded
    def record_depth(self, depth: int) -> None:
        self._max_depth_reached = max(self._max_depth_reached, depth)
    def record_solver_call(self) -> None:
        self._solver_calls += 1
    def get_progress(self) -> dict[str, float]:
        """Usage of each bounded resource, as a percentage of its limit."""
        usage = {
            "paths": (self._paths_recorded, self.limits.max_paths),
            "depth": (self._max_depth_reached, self.limits.max_depth),
            "time": (self.elapsed_time, self.limits.timeout_seconds),
        }
        return {name: used / limit * 100 for name, (used, limit) in usage.items() if limit}
__all__ = [
    "ResourceType",
    "LimitExceeded",
    "TimeoutError",
    "ResourceSnapshot",
    "ResourceLimits",
    "ResourceTracker",
]
