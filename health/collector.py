# ============================================================================
# REPORT COLLECTOR
# ============================================================================
# EPOCH: 1 - SERVICE DIAGNOSTICS
# STATUS: Core - Single ingestion point for probe results
# PURPOSE: Own the ServiceReport map while a run is in progress
# CREATED: 18 OCT 2026
# ============================================================================
"""
Report Collector

Concurrent service tasks never touch ServiceReports directly. They submit
(service, CheckResult) pairs to an asyncio.Queue; one consumer task drains
the queue and appends to the owning report.

Usage:
    async with ReportCollector(graph.services()) as collector:
        await collector.submit("redis", result)
        await collector.flush()          # all submitted results applied
        collector.report("redis").status
"""

import asyncio
import logging
from typing import Dict, Iterable, List, Optional, Tuple

from core.contracts import DependencyStatus
from core.models.report import ServiceReport
from core.models.result import CheckResult
from health.core import ServiceDescriptor

logger = logging.getLogger(__name__)


class ReportCollector:
    """Queue-fed owner of the per-service reports."""

    def __init__(self, descriptors: Iterable[ServiceDescriptor]):
        self._reports: Dict[str, ServiceReport] = {}
        for descriptor in descriptors:
            self._reports[descriptor.name] = ServiceReport(
                name=descriptor.name,
                section=descriptor.section,
                target=descriptor.target.describe(),
                depends_on=sorted(descriptor.depends_on),
            )
        self._queue: Optional[asyncio.Queue] = None
        self._consumer: Optional[asyncio.Task] = None

    async def __aenter__(self) -> "ReportCollector":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.stop()

    async def start(self) -> None:
        """Start the consumer task."""
        self._queue = asyncio.Queue()
        self._consumer = asyncio.create_task(self._consume())

    async def stop(self) -> None:
        """Drain remaining results and stop the consumer task."""
        if self._consumer is None:
            return
        await self.flush()
        self._consumer.cancel()
        try:
            await self._consumer
        except asyncio.CancelledError:
            pass
        self._consumer = None

    async def submit(self, service: str, result: CheckResult) -> None:
        """Hand a completed result to the collector."""
        if self._queue is None:
            raise RuntimeError("ReportCollector.submit() called before start()")
        await self._queue.put((service, result))

    async def flush(self) -> None:
        """Wait until every submitted result has been applied."""
        if self._queue is not None:
            await self._queue.join()

    async def _consume(self) -> None:
        while True:
            service, result = await self._queue.get()
            try:
                self._apply(service, result)
            finally:
                self._queue.task_done()

    def _apply(self, service: str, result: CheckResult) -> None:
        report = self._reports.get(service)
        if report is None:
            logger.error(f"Dropping result for unregistered service: {service}")
            return
        report.add_result(result)

    def set_dependency_status(self, service: str, status: DependencyStatus) -> None:
        self._reports[service].dependency_status = status

    def report(self, service: str) -> ServiceReport:
        return self._reports[service]

    def reports(self) -> List[ServiceReport]:
        """Reports in registration order."""
        return list(self._reports.values())

    def items(self) -> List[Tuple[str, ServiceReport]]:
        return list(self._reports.items())


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "ReportCollector",
]
