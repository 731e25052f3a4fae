from __future__ import annotations

import math
import time
from collections import defaultdict, deque
from dataclasses import dataclass
from functools import wraps
from typing import Any, Callable, Deque, TypeVar


F = TypeVar("F", bound=Callable[..., Any])


@dataclass(frozen=True)
class OperationSample:
    ts: float
    operation: str
    latency_ms: float
    success: bool


_operation_samples: Deque[OperationSample] = deque(maxlen=10000)
_counters: dict[str, int] = defaultdict(int)


def record_operation(*, operation: str, latency_ms: float, success: bool) -> None:
    # Capture directory call latency and outcome, plus a per-outcome counter.
    _operation_samples.append(
        OperationSample(
            ts=time.time(),
            operation=operation,
            latency_ms=latency_ms,
            success=success,
        )
    )
    increment_counter(f"directory.{operation}.{'ok' if success else 'error'}")


def increment_counter(name: str, value: int = 1) -> None:
    _counters[name] += value


def get_counter(name: str) -> int:
    return _counters.get(name, 0)


def tracked(operation: str) -> Callable[[F], F]:
    # Time a directory operation and record its outcome; errors are re-raised untouched.
    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            started = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception:
                record_operation(
                    operation=operation,
                    latency_ms=(time.perf_counter() - started) * 1000.0,
                    success=False,
                )
                raise
            record_operation(
                operation=operation,
                latency_ms=(time.perf_counter() - started) * 1000.0,
                success=True,
            )
            return result

        return wrapper  # type: ignore[return-value]

    return decorator


def operation_latency_by_name(window_s: int) -> dict[str, dict[str, float]]:
    # Aggregate p95/max per operation for load-test reports.
    cutoff = time.time() - window_s
    by_operation: dict[str, list[float]] = defaultdict(list)
    for sample in _operation_samples:
        if sample.ts < cutoff:
            continue
        by_operation[sample.operation].append(sample.latency_ms)
    result: dict[str, dict[str, float]] = {}
    for operation, latencies in by_operation.items():
        latencies.sort()
        p95_idx = max(0, math.ceil(0.95 * len(latencies)) - 1)
        result[operation] = {
            "p95": latencies[p95_idx],
            "max": latencies[-1],
        }
    return result


def counters_snapshot() -> dict[str, int]:
    # Return a copy of all counters for reporting.
    return dict(_counters)


def reset_counters() -> None:
    # Tests share the module-level state; clear it between cases.
    _counters.clear()
    _operation_samples.clear()
