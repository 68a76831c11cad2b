"""
Opt-in hot path profiling for the scanner.

Set RAWJSON_PROFILE in the environment of a non-optimised interpreter to
collect per-function timings; otherwise `profiled` returns the function
untouched and `ProfileContext` does nothing.
"""

import functools
import os
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any
from typing import TypeVar

F = TypeVar("F", bound=Callable[..., Any])

PROFILE_HOT_PATHS = __debug__ and "RAWJSON_PROFILE" in os.environ

_hot_path_stats: dict[str, "HotPathStats"] = {}


@dataclass
class HotPathStats:
    """Accumulated timings for one profiled scanner function."""

    function_name: str
    call_count: int = 0
    total_time_ns: int = 0
    chars_processed: int = 0

    def record_call(self, duration_ns: int, chars: int = 0) -> None:
        self.call_count += 1
        self.total_time_ns += duration_ns
        self.chars_processed += chars

    @property
    def mean_time_ns(self) -> float:
        return self.total_time_ns / self.call_count if self.call_count else 0.0


def _record(name: str, duration_ns: int, chars: int) -> None:
    stats = _hot_path_stats.get(name)
    if stats is None:
        stats = _hot_path_stats[name] = HotPathStats(name)
    stats.record_call(duration_ns, chars)


class ProfileContext:
    """
    Times a block of scanner work under `name`.

    Inert unless profiling was enabled at import time.
    """

    __slots__ = ("chars", "name", "start_time")

    def __init__(self, name: str, chars: int = 0) -> None:
        self.name = name
        self.chars = chars
        self.start_time = 0

    def __enter__(self) -> "ProfileContext":
        if PROFILE_HOT_PATHS:
            self.start_time = time.perf_counter_ns()
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if PROFILE_HOT_PATHS:
            duration = time.perf_counter_ns() - self.start_time
            _record(self.name, duration, self.chars)


def profiled(func: F) -> F:
    """Decorates a scanner method so each call is timed when enabled."""
    if not PROFILE_HOT_PATHS:
        return func

    name = func.__qualname__

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        start = time.perf_counter_ns()
        try:
            return func(*args, **kwargs)
        finally:
            _record(name, time.perf_counter_ns() - start, 0)

    return wrapper  # type: ignore[return-value]


def get_hot_path_stats() -> dict[str, HotPathStats]:
    """Returns a snapshot of the collected statistics."""
    return dict(_hot_path_stats)


def clear_hot_path_stats() -> None:
    _hot_path_stats.clear()


def format_hot_path_report() -> str:
    """Renders the collected statistics as a fixed-width table."""
    lines = [
        f"{'function':<40} {'calls':>10} {'total ms':>10} {'mean ns':>10}"
    ]
    for stats in sorted(
        _hot_path_stats.values(), key=lambda s: s.total_time_ns, reverse=True
    ):
        lines.append(
            f"{stats.function_name:<40} {stats.call_count:>10}"
            f" {stats.total_time_ns / 1e6:>10.3f} {stats.mean_time_ns:>10.0f}"
        )
    return "\n".join(lines)
