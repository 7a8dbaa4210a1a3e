"""
Concurrent fan-out of upstream queries for one scrape.
"""

import asyncio
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional, Sequence

from shared.logging import get_logger
from shared.metrics import MetricsCollector

from .accumulator import MetricAccumulator


@dataclass(frozen=True)
class QueryTask:
    """One upstream query bound to the gauge slots it fills.

    ``fetch`` performs the upstream call, ``apply`` writes the result into the
    accumulator, and ``on_failure`` (when given) runs after any failure so a
    task can publish a sentinel instead of leaving its slot unset.
    """

    name: str
    fetch: Callable[[], Awaitable[Any]]
    apply: Callable[[Any, MetricAccumulator], None]
    on_failure: Optional[Callable[[MetricAccumulator], None]] = None


class FanOutCoordinator:
    """Runs every query task concurrently and waits for all of them.

    A failing task never cancels or delays its siblings. Cancelling ``run``
    cancels every task still in flight.
    """

    def __init__(self, query_timeout: float, metrics: Optional[MetricsCollector] = None):
        self.query_timeout = query_timeout
        self.metrics = metrics
        self.logger = get_logger("exporter.coordinator")

    async def run(self, tasks: Sequence[QueryTask], accumulator: MetricAccumulator) -> Dict[str, bool]:
        """Run all tasks; returns success per task name."""
        outcomes = await asyncio.gather(
            *(self._run_task(task, accumulator) for task in tasks),
            return_exceptions=True
        )

        results: Dict[str, bool] = {}
        for task, outcome in zip(tasks, outcomes):
            if isinstance(outcome, BaseException):
                # _run_task already handles Exception; this is a failure inside on_failure
                self.logger.error("Query task crashed", query=task.name, error=str(outcome))
                results[task.name] = False
            else:
                results[task.name] = outcome

        return results

    async def _run_task(self, task: QueryTask, accumulator: MetricAccumulator) -> bool:
        self.logger.debug("Started querying", query=task.name)
        query_start = time.perf_counter()

        try:
            result = await asyncio.wait_for(task.fetch(), timeout=self.query_timeout)
            task.apply(result, accumulator)
        except Exception as exc:
            if isinstance(exc, asyncio.TimeoutError):
                error = f"timed out after {self.query_timeout}s"
            else:
                error = str(exc) or exc.__class__.__name__
            self._record_failure(task, error)
            if task.on_failure is not None:
                task.on_failure(accumulator)
            return False
        finally:
            if self.metrics is not None:
                self.metrics.observe_upstream_query(task.name, time.perf_counter() - query_start)

        self.logger.debug(
            "Finished querying",
            query=task.name,
            request_time=round(time.perf_counter() - query_start, 6)
        )
        return True

    def _record_failure(self, task: QueryTask, error: str) -> None:
        self.logger.error("Upstream query failed", query=task.name, error=error)
        if self.metrics is not None:
            self.metrics.record_upstream_failure(task.name)
