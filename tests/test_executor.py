# ============================================================================
# CHECK RUNNER TESTS
# ============================================================================
# EPOCH: 1 - SERVICE DIAGNOSTICS
# STATUS: Tests - Batched parallel probe execution
# PURPOSE: Verify isolation, timeouts, deadline, ordering and dependencies
# CREATED: 18 OCT 2026
# ============================================================================
"""
Check Runner Tests

Probes here are plain async functions wrapped by ServiceDescriptor.create,
so no containers or network are needed.

Run with:
    pytest tests/test_executor.py -v
"""

import asyncio
import time

import pytest

from core.contracts import CheckStatus, DependencyStatus
from core.models.result import CheckResult, DEADLINE_MESSAGE, TIMEOUT_MESSAGE, UNREACHABLE_MESSAGE
from health.core import ServiceDescriptor
from health.executor import CheckRunner
from health.graph import build_graph
from services.diagnostic_service import run_diagnostics


# ============================================================================
# HELPERS
# ============================================================================

def _run(*descriptors, **kwargs):
    return asyncio.run(CheckRunner(build_graph(descriptors), **kwargs).run())


async def ok(target, timeout):
    return CheckResult.success("ok")


async def warn(target, timeout):
    return CheckResult.warning("slow")


async def fail(target, timeout):
    return CheckResult.error("down")


async def explode(target, timeout):
    raise RuntimeError("probe crashed")


async def hang(target, timeout):
    await asyncio.sleep(3600)


# ============================================================================
# END TO END
# ============================================================================

class TestEndToEnd:
    """Two-service run: redis and an api depending on it."""

    def test_healthy_stack(self):
        summary = _run(
            ServiceDescriptor.create("redis", probes=[ok]),
            ServiceDescriptor.create("api", probes=[ok], depends_on=["redis"]),
        )

        assert summary.overall == CheckStatus.SUCCESS
        assert summary.exit_code == 0
        assert summary.per_service["redis"].status == CheckStatus.SUCCESS
        assert summary.per_service["api"].status == CheckStatus.SUCCESS
        assert summary.per_service["api"].dependency_status == DependencyStatus.HEALTHY
        assert summary.totals.success == 2
        assert summary.totals.total == 2

    def test_failing_dependent_with_healthy_dependency(self):
        summary = _run(
            ServiceDescriptor.create("redis", probes=[ok]),
            ServiceDescriptor.create("api", probes=[fail], depends_on=["redis"]),
        )

        redis = summary.per_service["redis"]
        api = summary.per_service["api"]
        assert redis.status == CheckStatus.SUCCESS
        assert api.status == CheckStatus.ERROR
        assert api.dependency_status == DependencyStatus.HEALTHY
        assert summary.overall == CheckStatus.ERROR
        assert summary.exit_code == 2

    def test_failed_dependency_is_advisory(self):
        """The api stays Success; only its dependency status degrades."""
        summary = _run(
            ServiceDescriptor.create("redis", probes=[fail]),
            ServiceDescriptor.create("api", probes=[ok], depends_on=["redis"]),
        )

        api = summary.per_service["api"]
        assert api.status == CheckStatus.SUCCESS
        assert api.dependency_status == DependencyStatus.DEGRADED_DEPENDENCY
        assert summary.overall == CheckStatus.ERROR
        assert summary.exit_code == 2

    def test_warning_dependency(self):
        summary = _run(
            ServiceDescriptor.create("redis", probes=[warn]),
            ServiceDescriptor.create("api", probes=[ok], depends_on=["redis"]),
        )
        assert summary.per_service["api"].dependency_status == DependencyStatus.DEPENDENCY_WARNING
        assert summary.overall == CheckStatus.WARNING
        assert summary.exit_code == 1

    def test_dependent_still_probed_after_dependency_failure(self):
        calls = []

        async def record(target, timeout):
            calls.append("api")
            return CheckResult.success()

        _run(
            ServiceDescriptor.create("redis", probes=[fail]),
            ServiceDescriptor.create("api", probes=[record], depends_on=["redis"]),
        )
        assert calls == ["api"]


# ============================================================================
# ISOLATION
# ============================================================================

class TestIsolation:
    """A probe fault only affects its own CheckResult."""

    def test_no_probes_is_unreachable(self):
        summary = _run(ServiceDescriptor.create("ghost"))

        results = summary.per_service["ghost"].results
        assert len(results) == 1
        assert results[0].status == CheckStatus.ERROR
        assert results[0].message == UNREACHABLE_MESSAGE

    def test_exception_becomes_error(self):
        summary = _run(
            ServiceDescriptor.create("api", probes=[explode, ok]),
            ServiceDescriptor.create("redis", probes=[ok]),
        )

        api = summary.per_service["api"]
        assert [r.status for r in api.results] == [CheckStatus.ERROR, CheckStatus.SUCCESS]
        assert api.results[0].message == "probe crashed"
        assert api.results[0].details["exception_type"] == "RuntimeError"
        assert summary.per_service["redis"].status == CheckStatus.SUCCESS

    def test_wrong_return_type_becomes_error(self):
        async def sloppy(target, timeout):
            return "PONG"

        summary = _run(ServiceDescriptor.create("redis", probes=[sloppy]))
        result = summary.per_service["redis"].results[0]
        assert result.status == CheckStatus.ERROR
        assert "instead of CheckResult" in result.message

    def test_blocking_probe_runs_in_thread(self):
        def blocking(target, timeout):
            time.sleep(0.01)
            return CheckResult.success("done")

        summary = _run(ServiceDescriptor.create("host", probes=[blocking]))
        assert summary.per_service["host"].results[0].message == "done"

    def test_stuck_blocking_probe_does_not_hold_up_run(self):
        def stuck(target, timeout):
            time.sleep(8)
            return CheckResult.success()

        start = time.monotonic()
        summary = asyncio.run(run_diagnostics(
            [ServiceDescriptor.create("redis", probes=[stuck], timeout_seconds=0.2)],
        ))
        elapsed = time.monotonic() - start

        result = summary.per_service["redis"].results[0]
        assert result.message == TIMEOUT_MESSAGE
        assert elapsed < 3.0

    def test_blocking_probe_exception_becomes_error(self):
        def broken(target, timeout):
            raise OSError("socket closed")

        summary = _run(ServiceDescriptor.create("host", probes=[broken]))
        result = summary.per_service["host"].results[0]
        assert result.status == CheckStatus.ERROR
        assert result.details["exception_type"] == "OSError"


# ============================================================================
# TIMEOUTS & DEADLINE
# ============================================================================

class TestTimeouts:
    """Per-probe timeouts and the run-wide deadline."""

    def test_never_responding_probe_times_out(self):
        start = time.monotonic()
        summary = _run(ServiceDescriptor.create("redis", probes=[hang], timeout_seconds=0.1))
        elapsed = time.monotonic() - start

        result = summary.per_service["redis"].results[0]
        assert result.status == CheckStatus.ERROR
        assert result.message == TIMEOUT_MESSAGE
        assert elapsed < 5.0

    def test_timeout_does_not_stop_later_probes(self):
        summary = _run(ServiceDescriptor.create("redis", probes=[hang, ok], timeout_seconds=0.1))
        statuses = [r.status for r in summary.per_service["redis"].results]
        assert statuses == [CheckStatus.ERROR, CheckStatus.SUCCESS]

    def test_deadline_marks_unfinished_and_later_batches(self):
        later_ran = []

        async def later(target, timeout):
            later_ran.append(True)
            return CheckResult.success()

        start = time.monotonic()
        summary = _run(
            ServiceDescriptor.create("fast", probes=[ok]),
            ServiceDescriptor.create("slow", probes=[hang], timeout_seconds=30),
            ServiceDescriptor.create("dependent", probes=[later], depends_on=["slow"]),
            run_deadline=0.2,
        )
        elapsed = time.monotonic() - start

        assert elapsed < 5.0
        assert summary.deadline_exceeded is True
        assert summary.per_service["fast"].status == CheckStatus.SUCCESS
        assert summary.per_service["slow"].results[-1].message == DEADLINE_MESSAGE
        assert summary.per_service["dependent"].results[0].message == DEADLINE_MESSAGE
        assert later_ran == []
        # Every declared service still has a report
        assert set(summary.per_service) == {"fast", "slow", "dependent"}

    def test_zero_deadline_is_not_replaced_by_default(self):
        summary = asyncio.run(run_diagnostics(
            [ServiceDescriptor.create("redis", probes=[ok])],
            run_deadline=0,
        ))

        assert summary.deadline_exceeded is True
        assert summary.per_service["redis"].results[0].message == DEADLINE_MESSAGE
        assert summary.exit_code == 2


# ============================================================================
# ORDERING & CONCURRENCY
# ============================================================================

class TestOrdering:
    """Batches run in dependency order; probes in declared order."""

    def test_dependency_finishes_before_dependent_starts(self):
        events = []

        async def redis_probe(target, timeout):
            events.append("redis:start")
            await asyncio.sleep(0.05)
            events.append("redis:end")
            return CheckResult.success()

        async def api_probe(target, timeout):
            events.append("api:start")
            return CheckResult.success()

        _run(
            ServiceDescriptor.create("api", probes=[api_probe], depends_on=["redis"]),
            ServiceDescriptor.create("redis", probes=[redis_probe]),
        )
        assert events.index("redis:end") < events.index("api:start")

    def test_probes_run_in_declared_order(self):
        async def first(target, timeout):
            return CheckResult.success()

        async def second(target, timeout):
            return CheckResult.error("x")

        async def third(target, timeout):
            return CheckResult.success()

        summary = _run(ServiceDescriptor.create("svc", probes=[first, second, third]))
        assert [r.probe for r in summary.per_service["svc"].results] == ["first", "second", "third"]

    def test_max_parallel_bounds_concurrency(self):
        active = 0
        peak = 0

        async def busy(target, timeout):
            nonlocal active, peak
            active += 1
            peak = max(peak, active)
            await asyncio.sleep(0.02)
            active -= 1
            return CheckResult.success()

        descriptors = [ServiceDescriptor.create(f"svc{i}", probes=[busy]) for i in range(6)]
        summary = _run(*descriptors, max_parallel=2)

        assert peak <= 2
        assert summary.totals.success == 6

    def test_report_order_follows_registration(self):
        summary = _run(
            ServiceDescriptor.create("api", probes=[ok], depends_on=["redis"]),
            ServiceDescriptor.create("redis", probes=[ok]),
        )
        assert list(summary.per_service) == ["api", "redis"]


# ============================================================================
# CONFIGURATION PROBLEMS
# ============================================================================

class TestConfigurationProblems:
    """Cycles and unknown dependencies degrade gracefully."""

    def test_cycle_still_reports_every_service(self):
        summary = _run(
            ServiceDescriptor.create("a", probes=[ok], depends_on=["b"]),
            ServiceDescriptor.create("b", probes=[ok], depends_on=["c"]),
            ServiceDescriptor.create("c", probes=[ok], depends_on=["a"]),
        )

        assert set(summary.per_service) == {"a", "b", "c"}
        for report in summary.per_service.values():
            assert report.status == CheckStatus.SUCCESS
            assert report.dependency_status == DependencyStatus.UNKNOWN
        assert [d.kind for d in summary.diagnostics] == ["cycle_detected"]

    def test_unknown_dependency_is_unknown_status(self):
        summary = _run(ServiceDescriptor.create("api", probes=[ok], depends_on=["kafka"]))

        api = summary.per_service["api"]
        assert api.status == CheckStatus.SUCCESS
        assert api.dependency_status == DependencyStatus.UNKNOWN
        assert summary.diagnostics[0].kind == "unknown_service"

    @pytest.mark.parametrize("max_parallel", [0, -1])
    def test_max_parallel_below_one_rejected(self, max_parallel):
        graph = build_graph([ServiceDescriptor.create("redis", probes=[ok])])
        with pytest.raises(ValueError):
            CheckRunner(graph, max_parallel=max_parallel)

    def test_zero_max_parallel_is_not_replaced_by_default(self):
        with pytest.raises(ValueError):
            asyncio.run(run_diagnostics(
                [ServiceDescriptor.create("redis", probes=[ok])],
                max_parallel=0,
            ))
