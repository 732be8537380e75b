# ============================================================================
# HEALTH PROBE CORE TYPES
# ============================================================================
# EPOCH: 1 - SERVICE DIAGNOSTICS
# STATUS: Infrastructure - Base classes for probes and service descriptors
# PURPOSE: Probe plugin interface, bound probes and service descriptors
# CREATED: 18 OCT 2026
# ============================================================================
"""
Health Probe Core Types

Defines the probe plugin contract and the runtime service descriptor.

Probe contract:
    async probe(target, timeout) -> CheckResult

observe() is the probe boundary: it enforces the timeout and converts every
fault (timeout, transport, parse, unexpected exception) into a
CheckResult with status ERROR. Nothing raised inside a probe reaches the
runner.

Status Hierarchy (worst wins):
- success: observation as expected
- warning: operational with potential issues
- error: critical failure
"""

import asyncio
import inspect
import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, FrozenSet, Iterable, Optional, Tuple, Union

from core.contracts import CheckStatus
from core.errors import ProbeError, ProbeTimeout
from core.logging import ComponentType, get_logger
from core.models.result import CheckResult
from core.models.target import Target

logger = get_logger(__name__, ComponentType.PROBE)

ProbeCallable = Callable[[Target, float], Union[CheckResult, Awaitable[CheckResult]]]


class ProbePlugin(ABC):
    """
    Base class for probe plugins.

    Subclass and implement probe() to create a new kind of probe.
    Use the @register_probe decorator to make the kind available to
    service catalogs.

    Attributes:
        kind: Registry key used by catalogs
        description: One-line summary for listings

    Example:
        @register_probe("redis_ping")
        class RedisPingProbe(ProbePlugin):
            async def probe(self, target, timeout) -> CheckResult:
                output = await run_command([...], timeout)
                if "PONG" in output.stdout:
                    return CheckResult.success("Redis is running")
                return CheckResult.error("Redis is not responding")
    """

    kind: str = "unnamed"
    description: str = ""

    @abstractmethod
    async def probe(self, target: Target, timeout: float) -> CheckResult:
        """
        Perform one observation.

        May raise ProbeError subclasses; observe() converts them.
        """
        pass

    async def observe(
        self,
        target: Target,
        timeout: float,
        name: Optional[str] = None,
    ) -> CheckResult:
        """Run probe() with a timeout and convert every fault to ERROR."""
        label = name or self.kind
        start_time = time.monotonic()

        try:
            result = await asyncio.wait_for(self.probe(target, timeout), timeout=timeout)
            if not isinstance(result, CheckResult):
                result = CheckResult.error(
                    f"probe returned {type(result).__name__} instead of CheckResult"
                )
        except (asyncio.TimeoutError, ProbeTimeout):
            logger.warning(f"Probe {label} timed out after {timeout}s")
            result = CheckResult.timeout(timeout)
        except ProbeError as e:
            logger.info(f"Probe {label} failed: {e}")
            result = CheckResult.error(
                str(e) or type(e).__name__,
                exception_type=type(e).__name__,
            )
        except Exception as e:
            logger.exception(f"Probe {label} raised unexpectedly: {e}")
            result = CheckResult.from_exception(e)

        result.probe = label
        result.duration_ms = (time.monotonic() - start_time) * 1000
        return result

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind!r})"


def run_in_daemon_thread(fn: Callable[..., Any], *args: Any) -> "asyncio.Future[Any]":
    """
    Run a blocking callable in a daemon thread and return a loop future.

    Cancelling the future abandons the thread; nothing joins it at loop
    shutdown or interpreter exit.
    """
    loop = asyncio.get_running_loop()
    future = loop.create_future()

    def resolve(result: Any, error: Optional[BaseException]) -> None:
        if future.done():
            return
        if error is not None:
            future.set_exception(error)
        else:
            future.set_result(result)

    def worker() -> None:
        result, error = None, None
        try:
            result = fn(*args)
        except BaseException as e:
            error = e
        try:
            loop.call_soon_threadsafe(resolve, result, error)
        except RuntimeError:
            # Loop already closed: the caller gave up on this call
            logger.debug(f"Discarded late result of {getattr(fn, '__name__', fn)}")

    threading.Thread(
        target=worker,
        name=f"probe-{getattr(fn, '__name__', 'call')}",
        daemon=True,
    ).start()
    return future


class FunctionProbe(ProbePlugin):
    """
    Adapts a plain callable to the probe contract.

    Coroutine functions are awaited; blocking functions run in a daemon
    thread so they neither stall the event loop nor outlive their timeout.
    """

    def __init__(self, fn: ProbeCallable, kind: Optional[str] = None):
        self.fn = fn
        self.kind = kind or getattr(fn, "__name__", "function")

    async def probe(self, target: Target, timeout: float) -> CheckResult:
        if inspect.iscoroutinefunction(self.fn):
            return await self.fn(target, timeout)
        return await run_in_daemon_thread(self.fn, target, timeout)


# ============================================================================
# SERVICE DESCRIPTORS
# ============================================================================

@dataclass(frozen=True)
class BoundProbe:
    """A probe plugin bound to its resolved target and timeout."""
    name: str
    plugin: ProbePlugin
    target: Target
    timeout_seconds: float

    async def run(self) -> CheckResult:
        return await self.plugin.observe(self.target, self.timeout_seconds, name=self.name)


@dataclass(frozen=True)
class ServiceDescriptor:
    """
    Static metadata for one logical service under diagnosis.

    Immutable for the duration of a run.
    """
    name: str
    target: Target = field(default_factory=Target)
    probes: Tuple[BoundProbe, ...] = ()
    depends_on: FrozenSet[str] = frozenset()
    section: str = "services"
    description: Optional[str] = None

    @classmethod
    def create(
        cls,
        name: str,
        probes: Iterable[Any] = (),
        depends_on: Iterable[str] = (),
        target: Optional[Target] = None,
        timeout_seconds: float = 10.0,
        section: str = "services",
    ) -> "ServiceDescriptor":
        """
        Build a descriptor from plugins, callables or BoundProbes.

        Convenience for programmatic registries and tests; catalog files go
        through services.catalog_service instead.
        """
        target = target or Target()
        bound = []
        for probe in probes:
            if isinstance(probe, BoundProbe):
                bound.append(probe)
                continue
            plugin = probe if isinstance(probe, ProbePlugin) else FunctionProbe(probe)
            bound.append(BoundProbe(
                name=plugin.kind,
                plugin=plugin,
                target=target,
                timeout_seconds=timeout_seconds,
            ))
        return cls(
            name=name,
            target=target,
            probes=tuple(bound),
            depends_on=frozenset(depends_on),
            section=section,
        )


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "CheckStatus",
    "CheckResult",
    "ProbePlugin",
    "FunctionProbe",
    "run_in_daemon_thread",
    "BoundProbe",
    "ServiceDescriptor",
]
