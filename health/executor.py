# ============================================================================
# CHECK RUNNER
# ============================================================================
# EPOCH: 1 - SERVICE DIAGNOSTICS
# STATUS: Core - Batched parallel probe execution
# PURPOSE: Execute every probe with timeouts, isolation and a run deadline
# CREATED: 18 OCT 2026
# ============================================================================
"""
Check Runner

Executes all probes of a dependency graph with:
- Topological batches (sequential between batches)
- Parallel services within a batch (bounded by max_parallel)
- Declared probe order within a service (each probe runs regardless of the
  previous outcome)
- Per-probe timeouts
- One run-wide deadline
- Dependency status computed once a batch completes

Execution Strategy:
1. Plan batches from the dependency graph
2. Execute each batch in parallel, then wait for all of it
3. Flush results into the collector
4. Derive dependency status for the batch's services
5. When the deadline passes, abandon in-flight services and mark every
   later batch without running it
6. Aggregate into a RunSummary
"""

import asyncio
import time
from datetime import datetime, timezone
from typing import Dict, List, Optional, Set
from uuid import uuid4

from core.contracts import DependencyStatus
from core.errors import RunDeadlineExceeded
from core.logging import ComponentType, get_logger, log_checkpoint, log_context
from core.models.report import RunSummary
from core.models.result import CheckResult, DEADLINE_MESSAGE, UNREACHABLE_MESSAGE
from health.aggregator import Aggregator
from health.collector import ReportCollector
from health.core import BoundProbe, ServiceDescriptor
from health.graph import DependencyGraph

logger = get_logger(__name__, ComponentType.RUNNER)


class CheckRunner:
    """
    Runs every service's probes and returns the completed RunSummary.

    A probe failure only ever degrades its own CheckResult; every declared
    service ends with a ServiceReport.
    """

    # Extra time given to a probe before the runner gives up on it
    TIMEOUT_GRACE_SECONDS = 0.5

    def __init__(
        self,
        graph: DependencyGraph,
        run_deadline: float = 120.0,
        max_parallel: int = 10,
        run_id: Optional[str] = None,
        catalog: Optional[str] = None,
        sections: Optional[Dict[str, str]] = None,
        aggregator: Optional[Aggregator] = None,
    ):
        """
        Initialize runner.

        Args:
            graph: Dependency graph of the services to diagnose
            run_deadline: Max total execution time (seconds)
            max_parallel: Max concurrent services per batch
            run_id: Identifier for logs and the summary
            catalog: Catalog id recorded in the summary
            sections: Section id -> display label, passed to the summary
            aggregator: Aggregator instance (default Aggregator())

        Raises:
            ValueError: If max_parallel is below 1
        """
        if max_parallel < 1:
            raise ValueError(f"max_parallel must be at least 1, got {max_parallel}")
        self.graph = graph
        self.run_deadline = run_deadline
        self.max_parallel = max_parallel
        self.run_id = run_id or uuid4().hex[:12]
        self.catalog = catalog
        self.sections = sections or {}
        self.aggregator = aggregator or Aggregator()

    async def run(self) -> RunSummary:
        """Execute all batches and aggregate."""
        start_time = time.monotonic()
        started_at = datetime.now(timezone.utc)
        batches = self.graph.batches()
        cycle_members = self.graph.cycle_members()
        deadline_exceeded = False

        with log_context(run_id=self.run_id, component=ComponentType.RUNNER.value):
            log_checkpoint("run_started", {
                "services": len(self.graph),
                "batches": len(batches),
                "deadline_seconds": self.run_deadline,
            })

            async with ReportCollector(self.graph.services()) as collector:
                for index, batch in enumerate(batches):
                    with log_context(batch=index):
                        remaining = self.run_deadline - (time.monotonic() - start_time)

                        if remaining <= 0:
                            deadline_exceeded = True
                            logger.warning(
                                f"Run deadline ({self.run_deadline}s) exceeded, "
                                f"skipping batch {index}: {batch}"
                            )
                            for name in batch:
                                await collector.submit(name, self._deadline_result())
                        else:
                            log_checkpoint("batch_started", {"services": batch})
                            unfinished = await self._execute_batch(batch, collector, remaining)
                            if unfinished:
                                deadline_exceeded = True

                        await collector.flush()
                        await self._fill_unreachable(batch, collector)
                        self._resolve_dependencies(batch, collector, cycle_members)
                        log_checkpoint("batch_completed", {
                            "services": {
                                name: collector.report(name).status.value for name in batch
                            },
                        })

            duration_ms = (time.monotonic() - start_time) * 1000
            summary = self.aggregator.aggregate(
                collector.reports(),
                diagnostics=self.graph.diagnostics,
                run_id=self.run_id,
                catalog=self.catalog,
                sections=self.sections,
                started_at=started_at,
                duration_ms=duration_ms,
                deadline_exceeded=deadline_exceeded,
            )

            log_checkpoint("run_completed", {
                "overall": summary.overall.value,
                "totals": summary.totals.model_dump(),
                "duration_ms": round(duration_ms, 2),
            })

        return summary

    async def _execute_batch(
        self,
        batch: List[str],
        collector: ReportCollector,
        remaining_timeout: float,
    ) -> List[str]:
        """
        Execute a batch of services in parallel.

        Returns:
            Names of services abandoned at the deadline
        """
        semaphore = asyncio.Semaphore(self.max_parallel)

        async def run_with_semaphore(descriptor: ServiceDescriptor):
            async with semaphore:
                with log_context(service=descriptor.name):
                    await self._run_service(descriptor, collector)

        tasks = {
            asyncio.create_task(run_with_semaphore(self.graph.get(name))): name
            for name in batch
        }

        done, pending = await asyncio.wait(
            tasks.keys(),
            timeout=remaining_timeout,
            return_when=asyncio.ALL_COMPLETED,
        )

        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

        for task in done:
            if task.cancelled():
                continue
            error = task.exception()
            if error is not None:
                name = tasks[task]
                logger.error(f"Service task {name} failed: {error}")
                await collector.submit(name, CheckResult.from_exception(error))

        unfinished = [tasks[task] for task in pending]
        if unfinished:
            logger.warning(
                f"Run deadline ({self.run_deadline}s) exceeded, "
                f"abandoning services: {unfinished}"
            )
            for name in unfinished:
                await collector.submit(name, self._deadline_result())

        return unfinished

    async def _run_service(
        self,
        descriptor: ServiceDescriptor,
        collector: ReportCollector,
    ) -> None:
        """Run one service's probes in declared order."""
        if not descriptor.probes:
            await collector.submit(
                descriptor.name,
                CheckResult.error(UNREACHABLE_MESSAGE, reason="no probes registered"),
            )
            return

        for bound in descriptor.probes:
            with log_context(probe=bound.name):
                result = await self._execute_probe(bound)
            await collector.submit(descriptor.name, result)

    async def _execute_probe(self, bound: BoundProbe) -> CheckResult:
        """Execute a single probe; never raises except on cancellation."""
        start_time = time.monotonic()

        try:
            result = await asyncio.wait_for(
                bound.run(),
                timeout=bound.timeout_seconds + self.TIMEOUT_GRACE_SECONDS,
            )
            logger.debug(
                f"Probe {bound.name}: {result.status.value} ({result.duration_ms:.1f}ms)"
            )
            return result

        except asyncio.TimeoutError:
            logger.warning(f"Probe {bound.name} timed out after {bound.timeout_seconds}s")
            result = CheckResult.timeout(bound.timeout_seconds)

        except Exception as e:
            logger.error(f"Probe {bound.name} failed: {e}")
            result = CheckResult.from_exception(e)

        result.probe = bound.name
        result.duration_ms = (time.monotonic() - start_time) * 1000
        return result

    async def _fill_unreachable(self, batch: List[str], collector: ReportCollector) -> None:
        """Give every service that produced nothing an explicit error."""
        missing = [name for name in batch if not collector.report(name).results]
        for name in missing:
            await collector.submit(name, CheckResult.error(UNREACHABLE_MESSAGE))
        if missing:
            await collector.flush()

    def _resolve_dependencies(
        self,
        batch: List[str],
        collector: ReportCollector,
        cycle_members: Set[str],
    ) -> None:
        for name in batch:
            status = self._dependency_status(name, collector, cycle_members)
            collector.set_dependency_status(name, status)

    def _dependency_status(
        self,
        name: str,
        collector: ReportCollector,
        cycle_members: Set[str],
    ) -> DependencyStatus:
        """Advisory status from direct dependencies; never changes own status."""
        if name in cycle_members or self.graph.unresolved.get(name):
            return DependencyStatus.UNKNOWN

        statuses = []
        for dependency in self.graph.get_dependencies(name):
            report = collector.report(dependency)
            if not report.results:
                return DependencyStatus.UNKNOWN
            statuses.append(report.status)

        return DependencyStatus.from_dependency_statuses(statuses)

    def _deadline_result(self) -> CheckResult:
        error = RunDeadlineExceeded(self.run_deadline)
        return CheckResult.error(
            DEADLINE_MESSAGE,
            exception_type=type(error).__name__,
            deadline_seconds=error.deadline_seconds,
        )


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "CheckRunner",
]
