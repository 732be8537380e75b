# ============================================================================
# HOST NETWORK & TOOLING PROBES
# ============================================================================
# EPOCH: 1 - SERVICE DIAGNOSTICS
# STATUS: Infrastructure - Host-level probes
# PURPOSE: Port availability and required command-line tools
# CREATED: 18 OCT 2026
# ============================================================================
"""
Host Probes

- port_available: TCP port is free (before startup) or listening (after)
- command_available: required CLI tool is on PATH
"""

import asyncio
import shutil
from typing import Optional

from core.contracts import CheckStatus
from core.models.result import CheckResult
from core.models.target import Target
from health.core import ProbePlugin
from health.registry import register_probe


@register_probe("port_available")
class PortAvailableProbe(ProbePlugin):
    """TCP port is free, or listening when expect_listening is set."""

    def __init__(
        self,
        port: Optional[int] = None,
        host: Optional[str] = None,
        expect_listening: bool = False,
    ):
        self.port = port
        self.host = host
        self.expect_listening = expect_listening

    async def _is_listening(self, host: str, port: int, timeout: float) -> bool:
        try:
            _, writer = await asyncio.wait_for(
                asyncio.open_connection(host, port),
                timeout=timeout,
            )
        except (OSError, asyncio.TimeoutError):
            return False
        writer.close()
        try:
            await writer.wait_closed()
        except OSError:
            pass
        return True

    async def probe(self, target: Target, timeout: float) -> CheckResult:
        port = self.port or target.port
        if port is None:
            raise ValueError("port_available requires a port")
        host = self.host or target.host or "localhost"

        # Leave headroom inside the probe timeout for the result
        listening = await self._is_listening(host, port, timeout * 0.8)

        if self.expect_listening:
            if listening:
                return CheckResult.success(f"Port {port} is listening on {host}", port=port)
            return CheckResult.error(f"Nothing is listening on {host}:{port}", port=port)

        if listening:
            return CheckResult.warning(f"Port {port} is in use on {host}", port=port)
        return CheckResult.success(f"Port {port} is available", port=port)


@register_probe("command_available")
class CommandAvailableProbe(ProbePlugin):
    """Command-line tool is installed and on PATH."""

    def __init__(self, command: str, missing_status: str = "error"):
        self.command = command
        self.missing_status = CheckStatus(missing_status)

    async def probe(self, target: Target, timeout: float) -> CheckResult:
        path = shutil.which(self.command)
        if path:
            return CheckResult.success(f"{self.command} is installed", path=path)
        return CheckResult(
            status=self.missing_status,
            message=f"{self.command} is not installed",
        )


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "PortAvailableProbe",
    "CommandAvailableProbe",
]
