"""Timing helpers for generic dispatch calls."""

from __future__ import annotations

import math
import platform
import time
from typing import Any, Callable

import jax


def host_metadata() -> dict[str, Any]:
    return {
        "platform": platform.platform(),
        "python": platform.python_version(),
        "jax": jax.__version__,
        "backend": jax.default_backend(),
    }


def settle(result: object) -> None:
    """Wait for device work behind a dispatch result."""
    if hasattr(result, "block_until_ready"):
        result.block_until_ready()


def time_calls(call: Callable[[], object], repeats: int) -> float:
    """Mean milliseconds per call over ``repeats`` back-to-back calls."""
    start = time.perf_counter()
    for _ in range(repeats):
        settle(call())
    return ((time.perf_counter() - start) / repeats) * 1e3


def calibrate_repeats(call: Callable[[], object], *, target_sample_ms: float, min_repeats: int, max_repeats: int = 200_000) -> int:
    per_call_ms = max(time_calls(call, max(4, min_repeats // 4)), 1e-3)
    wanted = int(math.ceil(max(target_sample_ms, 1.0) / per_call_ms))
    return max(min_repeats, min(wanted, max_repeats))


def percentile(values: list[float], q: float) -> float:
    ordered = sorted(values)
    pos = (len(ordered) - 1) * q
    lo = int(math.floor(pos))
    hi = int(math.ceil(pos))
    return ordered[lo] + (ordered[hi] - ordered[lo]) * (pos - lo)


def mean(values: list[float]) -> float:
    return sum(values) / len(values)


def stddev(values: list[float]) -> float:
    if len(values) < 2:
        return 0.0
    m = mean(values)
    return math.sqrt(sum((v - m) ** 2 for v in values) / (len(values) - 1))
