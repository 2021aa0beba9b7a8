"""Benchmark generic dispatch, identity short-circuits, and datatype methods."""

from __future__ import annotations

import argparse
import json
import time
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from fractions import Fraction
from pathlib import Path
from typing import Callable

import jax
import jax.numpy as jnp

from generic_arith import GenericArithmetic, build_arithmetic, symbols
from _bench_utils import calibrate_repeats, host_metadata, settle, time_calls
from _bench_utils import mean as _mean
from _bench_utils import percentile as _percentile
from _bench_utils import stddev as _stddev


PROFILE_CONFIG: dict[str, dict[str, float | int]] = {
    "quick": {"samples": 3, "warmup": 1, "max_case_seconds": 2.0, "target_sample_ms": 10.0, "min_repeats": 8, "cv_target_pct": 25.0, "max_samples": 7},
    "full": {"samples": 7, "warmup": 2, "max_case_seconds": 20.0, "target_sample_ms": 20.0, "min_repeats": 12, "cv_target_pct": 18.0, "max_samples": 11},
}
SECTIONS = ("native", "identity", "array", "function", "symbolic")


@dataclass(frozen=True)
class BenchCase:
    section: str
    name: str
    build: Callable[[GenericArithmetic, int], Callable[[], object]]


@dataclass(frozen=True)
class BenchRow:
    section: str
    name: str
    n: int
    status: str
    first_call_ms: float | None
    mean_ms: float | None
    stdev_ms: float | None
    cv_pct: float | None
    p50_ms: float | None
    p95_ms: float | None
    repeats: int
    samples: int
    error: str | None


def _sizes_from_arg(raw: str) -> tuple[int, ...]:
    out = tuple(int(part) for part in raw.split(",") if part.strip())
    if not out:
        raise ValueError("at least one size must be provided")
    return out


def _all_cases() -> list[BenchCase]:
    def native_add(arith, n):
        args = tuple(range(1, n + 1))
        return lambda: arith.add(*args)

    def native_rational_div(arith, n):
        args = tuple(Fraction(i, i + 1) for i in range(1, n + 1))
        return lambda: arith.div(*args)

    def native_sin(arith, n):
        return lambda: arith.sin(0.5)

    def identity_add(arith, n):
        args = (0,) * n + ("tail",)
        return lambda: arith.add(*args)

    def identity_mul(arith, n):
        args = (1,) * n
        return lambda: arith.mul(*args)

    def array_add(arith, n):
        x = jnp.arange(n, dtype=jnp.float32)
        return lambda: arith.add(x, x, x)

    def array_matmul(arith, n):
        side = max(2, int(n**0.5))
        m = jnp.eye(side, dtype=jnp.float32) * 2.0
        return lambda: arith.mul(m, m)

    def function_pointwise(arith, n):
        f = arith.add(arith.square(arith.sin), arith.square(arith.cos))
        return lambda: f(0.25)

    def function_sigma(arith, n):
        return lambda: arith.sigma(lambda i: i * i, 0, n)

    def symbolic_build(arith, n):
        x, y = symbols("x y")
        return lambda: arith.add(*((x, y) * max(1, n // 2)))

    return [
        BenchCase("native", "add_integers", native_add),
        BenchCase("native", "div_rationals", native_rational_div),
        BenchCase("native", "sin_real", native_sin),
        BenchCase("identity", "add_zeros", identity_add),
        BenchCase("identity", "mul_ones", identity_mul),
        BenchCase("array", "add_vectors", array_add),
        BenchCase("array", "matmul", array_matmul),
        BenchCase("function", "pointwise", function_pointwise),
        BenchCase("function", "sigma", function_sigma),
        BenchCase("symbolic", "add_chain", symbolic_build),
    ]


def _run_case(
    arith: GenericArithmetic,
    case: BenchCase,
    n: int,
    *,
    samples: int,
    warmup: int,
    max_case_seconds: float,
    target_sample_ms: float,
    min_repeats: int,
    cv_target_pct: float,
    max_samples: int,
) -> BenchRow:
    started = time.perf_counter()

    def _check_deadline() -> None:
        if time.perf_counter() - started > max_case_seconds:
            raise TimeoutError(f"case timed out after {max_case_seconds:.2f}s")

    try:
        call = case.build(arith, n)
        t0 = time.perf_counter()
        settle(call())
        first_ms = (time.perf_counter() - t0) * 1e3
        for _ in range(warmup):
            settle(call())
            _check_deadline()

        repeats = calibrate_repeats(
            call,
            target_sample_ms=target_sample_ms,
            min_repeats=min_repeats,
        )
        per_call_ms: list[float] = []

        def _sample_once() -> None:
            per_call_ms.append(time_calls(call, repeats))
            _check_deadline()

        for _ in range(samples):
            _sample_once()
        while len(per_call_ms) < max_samples:
            m = _mean(per_call_ms)
            sd = _stddev(per_call_ms)
            if m <= 0 or (sd / m) * 100.0 <= cv_target_pct:
                break
            _sample_once()

        mean_ms = _mean(per_call_ms)
        stdev_ms = _stddev(per_call_ms)
        return BenchRow(
            section=case.section,
            name=case.name,
            n=n,
            status="ok",
            first_call_ms=first_ms,
            mean_ms=mean_ms,
            stdev_ms=stdev_ms,
            cv_pct=(stdev_ms / mean_ms) * 100.0 if mean_ms > 0 else 0.0,
            p50_ms=_percentile(per_call_ms, 0.50),
            p95_ms=_percentile(per_call_ms, 0.95),
            repeats=repeats,
            samples=len(per_call_ms),
            error=None,
        )
    except Exception as err:  # pragma: no cover - benchmark resilience
        return BenchRow(
            section=case.section,
            name=case.name,
            n=n,
            status="error",
            first_call_ms=None,
            mean_ms=None,
            stdev_ms=None,
            cv_pct=None,
            p50_ms=None,
            p95_ms=None,
            repeats=0,
            samples=0,
            error=f"{type(err).__name__}: {err}",
        )


def _print_summary(rows: list[BenchRow]) -> None:
    print("dispatch benchmark summary")
    print("section    case                  n      mean(ms)   p95(ms)   cv(%)   status")
    print("--------   ------------------  ------  ---------  --------  ------  ------")
    for row in rows:
        mean_text = "-" if row.mean_ms is None else f"{row.mean_ms:9.4f}"
        p95_text = "-" if row.p95_ms is None else f"{row.p95_ms:8.4f}"
        cv_text = "-" if row.cv_pct is None else f"{row.cv_pct:6.2f}"
        print(f"{row.section:10} {row.name:18} {row.n:6d}  {mean_text:>9}  {p95_text:>8}  {cv_text:>6}  {row.status}")
    print()


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--profile", choices=sorted(PROFILE_CONFIG), default="quick", help="fixed benchmark profile presets")
    parser.add_argument("--ns", default="2,16,256", help="comma-separated operand counts / sizes")
    parser.add_argument("--sections", default=",".join(SECTIONS), help="comma-separated subset of sections")
    parser.add_argument("--samples", type=int, default=None, help="timing samples per case")
    parser.add_argument("--warmup", type=int, default=None, help="warmup rounds before timing")
    parser.add_argument("--max-case-seconds", type=float, default=None, help="soft timeout per benchmark case (seconds)")
    parser.add_argument("--json-out", default="", help="optional path for machine-readable output")
    args = parser.parse_args()

    profile = PROFILE_CONFIG[args.profile]
    samples = int(profile["samples"] if args.samples is None else args.samples)
    warmup = int(profile["warmup"] if args.warmup is None else args.warmup)
    max_case_seconds = float(profile["max_case_seconds"] if args.max_case_seconds is None else args.max_case_seconds)
    max_samples = max(int(profile["max_samples"]), samples)

    ns = _sizes_from_arg(args.ns)
    wanted_sections = {part.strip() for part in args.sections.split(",") if part.strip()}
    unknown = wanted_sections - set(SECTIONS)
    if unknown:
        raise SystemExit(f"Unknown sections: {sorted(unknown)}")

    arith = build_arithmetic()
    cases = [case for case in _all_cases() if case.section in wanted_sections]
    rows: list[BenchRow] = []

    print(f"sizes: {ns}")
    print(f"profile: {args.profile} (samples={samples}, warmup={warmup}, max_case_seconds={max_case_seconds:.2f})")
    print(f"host: backend={jax.default_backend()}")
    print()

    for n in ns:
        for case in cases:
            rows.append(
                _run_case(
                    arith,
                    case,
                    n,
                    samples=samples,
                    warmup=warmup,
                    max_case_seconds=max_case_seconds,
                    target_sample_ms=float(profile["target_sample_ms"]),
                    min_repeats=int(profile["min_repeats"]),
                    cv_target_pct=float(profile["cv_target_pct"]),
                    max_samples=max_samples,
                )
            )
        print(f"completed n={n} ({len(cases)} cases)")

    print()
    _print_summary(rows)

    if args.json_out:
        outpath = Path(args.json_out)
        outpath.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "timestamp_utc": datetime.now(UTC).strftime("%Y%m%dT%H%M%SZ"),
            "sizes": list(ns),
            "profile": args.profile,
            "sections": sorted(wanted_sections),
            "host": host_metadata(),
            "rows": [asdict(row) for row in rows],
        }
        outpath.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        print(f"Wrote JSON: {outpath}")


if __name__ == "__main__":
    main()
