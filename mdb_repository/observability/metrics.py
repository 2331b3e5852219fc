"""
In-process metrics for repository operations.

Each data-access method decorated with :func:`timed_operation` feeds one
series in the global :class:`MetricsCollector`: call count, duration
extremes and failures. Series are kept in least-recently-used order and
the stalest one is evicted when the collector is full.
"""

import asyncio
import functools
import inspect
import logging
import threading
import time
from collections import OrderedDict
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from ..constants import MAX_METRICS
from .logging import log_operation

logger = logging.getLogger(__name__)

# Counted as failures and re-raised; KeyboardInterrupt and SystemExit are not
_FAILURES = (Exception, asyncio.CancelledError)


@dataclass
class OperationStats:
    """Running totals for one operation name."""

    operation_name: str
    count: int = 0
    error_count: int = 0
    total_duration_ms: float = 0.0
    min_duration_ms: float | None = None
    max_duration_ms: float = 0.0
    last_execution: datetime | None = None

    def add(self, duration_ms: float, success: bool) -> None:
        self.count += 1
        self.error_count += 0 if success else 1
        self.total_duration_ms += duration_ms
        if self.min_duration_ms is None or duration_ms < self.min_duration_ms:
            self.min_duration_ms = duration_ms
        self.max_duration_ms = max(self.max_duration_ms, duration_ms)
        self.last_execution = datetime.now()

    def to_dict(self) -> dict[str, Any]:
        average = self.total_duration_ms / self.count if self.count else 0.0
        error_rate = self.error_count * 100 / self.count if self.count else 0.0
        return {
            "operation": self.operation_name,
            "count": self.count,
            "avg_duration_ms": round(average, 2),
            "min_duration_ms": round(self.min_duration_ms or 0.0, 2),
            "max_duration_ms": round(self.max_duration_ms, 2),
            "error_count": self.error_count,
            "error_rate_percent": round(error_rate, 2),
            "last_execution": self.last_execution.isoformat() if self.last_execution else None,
        }


class MetricsCollector:
    """Thread-safe, bounded store of :class:`OperationStats` series."""

    def __init__(self, max_metrics: int = MAX_METRICS):
        self._series: OrderedDict[str, OperationStats] = OrderedDict()
        self._lock = threading.Lock()
        self._max_metrics = max_metrics

    def record_operation(self, operation_name: str, duration_ms: float, success: bool = True) -> None:
        with self._lock:
            stats = self._series.get(operation_name)
            if stats is None:
                while len(self._series) >= self._max_metrics:
                    self._series.popitem(last=False)
                stats = self._series[operation_name] = OperationStats(operation_name)
            else:
                self._series.move_to_end(operation_name)
            stats.add(duration_ms, success)

    def get_metrics(self, operation_name: str | None = None) -> dict[str, Any]:
        """
        Snapshot of all series.

        Args:
            operation_name: Only include series whose name starts with this prefix
        """
        prefix = operation_name or ""
        with self._lock:
            metrics = {
                name: stats.to_dict()
                for name, stats in self._series.items()
                if name.startswith(prefix)
            }
            total = len(self._series)
        return {
            "timestamp": datetime.now().isoformat(),
            "metrics": metrics,
            "total_operations": total,
        }

    def get_operation_count(self, operation_name: str) -> int:
        with self._lock:
            stats = self._series.get(operation_name)
        return stats.count if stats else 0

    def reset(self) -> None:
        with self._lock:
            self._series.clear()


_collector: MetricsCollector | None = None
_collector_lock = threading.Lock()


def get_metrics_collector() -> MetricsCollector:
    """Process-wide collector, created on first use."""
    global _collector
    if _collector is None:
        with _collector_lock:
            if _collector is None:
                _collector = MetricsCollector()
    return _collector


def record_operation(operation_name: str, duration_ms: float, success: bool = True) -> None:
    get_metrics_collector().record_operation(operation_name, duration_ms, success)


@contextmanager
def _measure(operation_name: str) -> Iterator[None]:
    started = time.perf_counter()
    success = True
    try:
        yield
    except _FAILURES:
        success = False
        raise
    finally:
        elapsed_ms = (time.perf_counter() - started) * 1000
        record_operation(operation_name, elapsed_ms, success)
        log_operation(logger, operation_name, success=success, duration_ms=elapsed_ms)


def timed_operation(operation_name: str) -> Callable[[Callable], Callable]:
    """
    Record duration and outcome of every call under ``operation_name``.

    Works on coroutine functions and plain functions alike::

        @timed_operation("reader.get_by_id")
        async def get_by_id(self, document_type, id, options=None): ...
    """

    def decorator(func: Callable) -> Callable:
        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args, **kwargs):
                with _measure(operation_name):
                    return await func(*args, **kwargs)

            return async_wrapper

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            with _measure(operation_name):
                return func(*args, **kwargs)

        return wrapper

    return decorator
