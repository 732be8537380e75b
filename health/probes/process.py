# ============================================================================
# PROBE SUBPROCESS HELPER
# ============================================================================
# EPOCH: 1 - SERVICE DIAGNOSTICS
# STATUS: Infrastructure - Command execution for probes
# PURPOSE: Run CLI commands (docker, nvidia-smi) without blocking the loop
# CREATED: 18 OCT 2026
# ============================================================================
"""
Probe Subprocess Helper

Probes that shell out use run_command(). The blocking subprocess.run call
is moved to the default executor; its own timeout kills the child, so an
abandoned probe does not leave the process running.

Failures are raised as probe errors:
- binary missing / not executable -> ProbeTransportError
- timeout                          -> ProbeTimeout
A non-zero exit code is NOT an error here; probes interpret it.
"""

import asyncio
import functools
import subprocess
from dataclasses import dataclass
from typing import List, Sequence

from core.config import get_defaults
from core.errors import ProbeTimeout, ProbeTransportError

# Docker CLI messages meaning the runtime itself is unavailable
DAEMON_UNAVAILABLE_MARKERS = (
    "Cannot connect to the Docker daemon",
    "error during connect",
    "permission denied while trying to connect",
)


@dataclass
class CommandOutput:
    """Captured result of one command."""
    args: List[str]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def combined(self) -> str:
        return (self.stdout + "\n" + self.stderr).strip()

    def excerpt(self, limit: int = 500) -> str:
        return self.combined[:limit]


async def run_command(args: Sequence[str], timeout: float) -> CommandOutput:
    """
    Run a command and capture its output.

    Raises:
        ProbeTransportError: If the binary cannot be executed
        ProbeTimeout: If the command outlives the timeout
    """
    argv = [str(a) for a in args]
    loop = asyncio.get_running_loop()
    call = functools.partial(
        subprocess.run,
        argv,
        capture_output=True,
        text=True,
        timeout=timeout,
    )

    try:
        completed = await loop.run_in_executor(None, call)
    except subprocess.TimeoutExpired as e:
        raise ProbeTimeout(timeout) from e
    except FileNotFoundError as e:
        raise ProbeTransportError(f"{argv[0]} not found") from e
    except OSError as e:
        raise ProbeTransportError(f"could not run {argv[0]}: {e}") from e

    return CommandOutput(
        args=argv,
        returncode=completed.returncode,
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
    )


def docker_command(*args: str) -> List[str]:
    """Build a docker CLI argv using the configured docker binary."""
    return [get_defaults().catalog.docker_binary, *args]


async def run_docker(args: Sequence[str], timeout: float) -> CommandOutput:
    """
    Run a docker CLI command.

    Raises:
        ProbeTransportError: If the docker runtime is absent or unreachable
    """
    output = await run_command(docker_command(*args), timeout)
    if not output.ok and any(m in output.stderr for m in DAEMON_UNAVAILABLE_MARKERS):
        raise ProbeTransportError(f"container runtime unavailable: {output.stderr.strip()[:200]}")
    return output


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "CommandOutput",
    "run_command",
    "docker_command",
    "run_docker",
]
