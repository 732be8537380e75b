# ============================================================================
# CONTAINER PROBES
# ============================================================================
# EPOCH: 1 - SERVICE DIAGNOSTICS
# STATUS: Infrastructure - Container runtime probes
# PURPOSE: Container state, exec commands, connectivity, processes, logs, usage
# CREATED: 18 OCT 2026
# ============================================================================
"""
Container Probes

Probes that talk to the docker CLI:
- container_running: running / stopped / missing
- container_exec: command inside the container succeeds
- container_reachable: container can ping a host
- container_processes: processes matching a pattern are running
- container_logs: recent logs free of error/warn/fail lines
- container_resources: CPU and memory usage below warning thresholds
"""

import re
from typing import List, Optional, Sequence, Tuple, Union

from core.errors import ProbeParseError
from core.models.result import CheckResult
from core.models.target import Target
from health.core import ProbePlugin
from health.probes.process import run_docker
from health.registry import register_probe

DEFAULT_LOG_PATTERNS = ("error", "warn", "fail", "exception")


class ContainerProbe(ProbePlugin):
    """Base for probes that need a container name."""

    def container(self, target: Target) -> str:
        if not target.container:
            raise ValueError(f"{self.kind} requires a container target")
        return target.container


def _argv(command: Union[str, Sequence[str], None]) -> List[str]:
    if command is None:
        return []
    if isinstance(command, str):
        return command.split()
    return [str(c) for c in command]


@register_probe("container_running")
class ContainerRunningProbe(ContainerProbe):
    """Container exists and is running."""

    async def probe(self, target: Target, timeout: float) -> CheckResult:
        name = self.container(target)
        output = await run_docker(
            [
                "inspect",
                "--format",
                "{{.State.Status}}|{{if .State.Health}}{{.State.Health.Status}}{{end}}",
                name,
            ],
            timeout,
        )

        if not output.ok:
            if "no such" in output.stderr.lower():
                return CheckResult.error(f"Container {name} does not exist")
            return CheckResult.error(
                f"Could not inspect container {name}",
                output=output.excerpt(),
            )

        state, _, health = output.stdout.strip().partition("|")
        if state != "running":
            return CheckResult.warning(
                f"Container {name} exists but is not running",
                state=state,
            )
        if health == "unhealthy":
            return CheckResult.warning(
                f"Container {name} is running but reports unhealthy",
                state=state,
                health=health,
            )
        return CheckResult.success(
            f"Container {name} is running",
            state=state,
            health=health or None,
        )


@register_probe("container_exec")
class ContainerExecProbe(ContainerProbe):
    """Command inside the container exits 0 (and prints the expected text)."""

    def __init__(
        self,
        command: Union[str, Sequence[str], None] = None,
        expect: Optional[str] = None,
        success_message: Optional[str] = None,
        failure_message: Optional[str] = None,
    ):
        self.command = _argv(command)
        self.expect = expect
        self.success_message = success_message
        self.failure_message = failure_message

    async def probe(self, target: Target, timeout: float) -> CheckResult:
        name = self.container(target)
        command = self.command or list(target.command or ())
        if not command:
            raise ValueError("container_exec requires a command")

        output = await run_docker(["exec", name, *command], timeout)
        label = " ".join(command)

        if not output.ok:
            return CheckResult.error(
                self.failure_message or f"`{label}` failed in {name} (exit {output.returncode})",
                output=output.excerpt(),
            )
        if self.expect and self.expect not in output.stdout:
            return CheckResult.error(
                self.failure_message or f"`{label}` output did not contain '{self.expect}'",
                output=output.excerpt(),
            )
        return CheckResult.success(self.success_message or f"`{label}` succeeded in {name}")


@register_probe("container_reachable")
class ContainerReachableProbe(ContainerProbe):
    """Container can reach a host over the network (ping)."""

    def __init__(self, host: str, count: int = 1):
        self.host = host
        self.count = count

    async def probe(self, target: Target, timeout: float) -> CheckResult:
        name = self.container(target)
        output = await run_docker(
            ["exec", name, "ping", "-c", str(self.count), self.host],
            timeout,
        )
        if output.ok:
            return CheckResult.success(f"Can reach {self.host} from {name}")
        return CheckResult.error(
            f"Cannot reach {self.host} from {name}",
            output=output.excerpt(),
        )


@register_probe("container_processes")
class ContainerProcessesProbe(ContainerProbe):
    """Processes matching a pattern are running inside the container."""

    def __init__(self, pattern: str = "worker", min_count: int = 1):
        self.pattern = pattern
        self.min_count = min_count

    async def probe(self, target: Target, timeout: float) -> CheckResult:
        name = self.container(target)
        output = await run_docker(["exec", name, "ps", "aux"], timeout)
        if not output.ok:
            return CheckResult.error(
                f"Could not list processes in {name}",
                output=output.excerpt(),
            )

        # Skip the ps header line
        lines = output.stdout.splitlines()[1:]
        count = sum(1 for line in lines if self.pattern in line)
        if count >= self.min_count:
            return CheckResult.success(
                f"{self.pattern.capitalize()} processes running: {count}",
                count=count,
            )
        return CheckResult.error(
            f"No {self.pattern} processes running",
            count=count,
            min_count=self.min_count,
        )


@register_probe("container_logs")
class ContainerLogsProbe(ContainerProbe):
    """Recent container logs contain no error/warn/fail lines."""

    def __init__(
        self,
        tail: int = 50,
        patterns: Sequence[str] = DEFAULT_LOG_PATTERNS,
        keep: int = 5,
    ):
        self.tail = tail
        self.patterns = tuple(patterns)
        self.keep = keep
        self._regex = re.compile("|".join(re.escape(p) for p in self.patterns), re.IGNORECASE)

    async def probe(self, target: Target, timeout: float) -> CheckResult:
        name = self.container(target)
        output = await run_docker(["logs", "--tail", str(self.tail), name], timeout)
        if not output.ok:
            return CheckResult.error(
                f"Could not read logs of {name}",
                output=output.excerpt(),
            )

        # docker logs writes the container's stderr to our stderr
        lines = (output.stdout + "\n" + output.stderr).splitlines()
        matches = [line for line in lines if self._regex.search(line)]
        if matches:
            return CheckResult.warning(
                f"{len(matches)} suspicious line(s) in last {self.tail} log lines of {name}",
                lines=matches[-self.keep:],
            )
        return CheckResult.success(f"No errors in last {self.tail} log lines of {name}")


@register_probe("container_resources")
class ContainerResourcesProbe(ContainerProbe):
    """Container CPU and memory usage below warning thresholds."""

    def __init__(self, cpu_warn_percent: float = 80.0, memory_warn_percent: float = 90.0):
        self.cpu_warn_percent = cpu_warn_percent
        self.memory_warn_percent = memory_warn_percent

    async def probe(self, target: Target, timeout: float) -> CheckResult:
        name = self.container(target)
        output = await run_docker(
            [
                "stats",
                "--no-stream",
                "--format",
                "{{.CPUPerc}}|{{.MemPerc}}|{{.MemUsage}}",
                name,
            ],
            timeout,
        )
        if not output.ok:
            return CheckResult.error(
                f"Could not read resource usage of {name}",
                output=output.excerpt(),
            )

        line = output.stdout.strip().splitlines()[0] if output.stdout.strip() else ""
        cpu, memory, usage = parse_stats_line(line)
        details = {"cpu_percent": cpu, "memory_percent": memory, "memory_usage": usage}

        high = []
        if cpu >= self.cpu_warn_percent:
            high.append(f"CPU {cpu:.1f}%")
        if memory >= self.memory_warn_percent:
            high.append(f"memory {memory:.1f}%")
        if high:
            return CheckResult.warning(
                f"High resource usage in {name}: {', '.join(high)}",
                **details,
            )
        return CheckResult.success(
            f"{name} using CPU {cpu:.1f}%, memory {memory:.1f}% ({usage})",
            **details,
        )


def parse_stats_line(line: str) -> Tuple[float, float, str]:
    """Parse one `CPU%|MEM%|USAGE` line of docker stats output."""
    parts = line.split("|")
    if len(parts) != 3:
        raise ProbeParseError(f"could not parse docker stats output: {line[:80]!r}")
    try:
        cpu = float(parts[0].strip().rstrip("%"))
        memory = float(parts[1].strip().rstrip("%"))
    except ValueError as e:
        raise ProbeParseError(f"could not parse docker stats output: {line[:80]!r}") from e
    return cpu, memory, parts[2].strip()


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "ContainerProbe",
    "ContainerRunningProbe",
    "ContainerExecProbe",
    "ContainerReachableProbe",
    "ContainerProcessesProbe",
    "ContainerLogsProbe",
    "ContainerResourcesProbe",
    "parse_stats_line",
]
