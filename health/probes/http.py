# ============================================================================
# HTTP PROBES
# ============================================================================
# EPOCH: 1 - SERVICE DIAGNOSTICS
# STATUS: Infrastructure - HTTP endpoint probes
# PURPOSE: Health endpoints of API, monitoring and inference services
# CREATED: 18 OCT 2026
# ============================================================================
"""
HTTP Probes

http_health issues one GET against target.url (+ path) and checks:
- the status code (expect_status, default 200)
- optionally that the body contains a substring (expect)

Connection failures raise ProbeTransportError so they are reported as
"cannot connect" errors, not as bad status codes.
"""

from typing import Optional

import httpx

from core.errors import ProbeTimeout, ProbeTransportError
from core.models.result import CheckResult
from core.models.target import Target
from health.core import ProbePlugin
from health.registry import register_probe


def join_url(base: str, path: Optional[str]) -> str:
    if not path:
        return base
    return base.rstrip("/") + "/" + path.lstrip("/")


@register_probe("http_health")
class HttpHealthProbe(ProbePlugin):
    """HTTP endpoint answers with the expected status (and body)."""

    def __init__(
        self,
        path: Optional[str] = None,
        expect: Optional[str] = None,
        expect_status: int = 200,
        method: str = "GET",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.path = path
        self.expect = expect
        self.expect_status = expect_status
        self.method = method.upper()
        self.transport = transport

    async def probe(self, target: Target, timeout: float) -> CheckResult:
        if not target.url:
            raise ValueError("http_health requires a url target")
        url = join_url(target.url, self.path)

        try:
            async with httpx.AsyncClient(timeout=timeout, transport=self.transport) as client:
                response = await client.request(self.method, url)
        except httpx.TimeoutException as e:
            raise ProbeTimeout(timeout) from e
        except httpx.ConnectError as e:
            raise ProbeTransportError(f"Cannot connect to {url}") from e
        except httpx.HTTPError as e:
            raise ProbeTransportError(f"Request to {url} failed: {e}") from e

        elapsed_ms = response.elapsed.total_seconds() * 1000 if response.is_closed else None

        if response.status_code != self.expect_status:
            return CheckResult.error(
                f"{url} returned HTTP {response.status_code}",
                status_code=response.status_code,
                expected_status=self.expect_status,
                body=response.text[:200],
            )
        if self.expect and self.expect not in response.text:
            return CheckResult.error(
                f"{url} response did not contain '{self.expect}'",
                status_code=response.status_code,
                body=response.text[:200],
            )
        return CheckResult.success(
            f"{url} is healthy (HTTP {response.status_code})",
            status_code=response.status_code,
            response_ms=round(elapsed_ms, 2) if elapsed_ms is not None else None,
        )


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "HttpHealthProbe",
    "join_url",
]
