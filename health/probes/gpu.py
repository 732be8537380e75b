# ============================================================================
# GPU PROBES
# ============================================================================
# EPOCH: 1 - SERVICE DIAGNOSTICS
# STATUS: Infrastructure - GPU availability probe
# PURPOSE: nvidia-smi memory usage with a warning threshold
# CREATED: 18 OCT 2026
# ============================================================================
"""
GPU Probes

gpu_memory reads per-GPU memory via nvidia-smi. A host without nvidia-smi
is a WARNING (CPU-only deployments still work), not an error.
"""

import shutil
from typing import List, Tuple

from core.errors import ProbeParseError
from core.models.result import CheckResult
from core.models.target import Target
from health.core import ProbePlugin
from health.probes.process import run_command
from health.registry import register_probe

NVIDIA_SMI = "nvidia-smi"


def parse_memory_csv(text: str) -> List[Tuple[int, int]]:
    """Parse `used, total` rows (MiB) from nvidia-smi CSV output."""
    rows = []
    for line in text.strip().splitlines():
        if not line.strip():
            continue
        try:
            used, total = (int(float(v)) for v in line.split(","))
        except ValueError as e:
            raise ProbeParseError(f"could not parse nvidia-smi output: {line[:80]!r}") from e
        rows.append((used, total))
    if not rows:
        raise ProbeParseError("nvidia-smi reported no GPUs")
    return rows


@register_probe("gpu_memory")
class GpuMemoryProbe(ProbePlugin):
    """GPU present and memory usage under a threshold."""

    def __init__(self, warn_percent: float = 90.0):
        self.warn_percent = warn_percent

    async def probe(self, target: Target, timeout: float) -> CheckResult:
        if shutil.which(NVIDIA_SMI) is None:
            return CheckResult.warning("nvidia-smi not found, GPU might not be available")

        output = await run_command(
            [
                NVIDIA_SMI,
                "--query-gpu=memory.used,memory.total",
                "--format=csv,noheader,nounits",
            ],
            timeout,
        )
        if not output.ok:
            return CheckResult.error("nvidia-smi failed", output=output.excerpt())

        gpus = parse_memory_csv(output.stdout)
        usage = [round(used * 100 / total, 1) if total else 0.0 for used, total in gpus]
        peak = max(usage)

        if peak > self.warn_percent:
            return CheckResult.warning(
                f"GPU memory usage is high: {peak}%",
                usage_percent=usage,
            )
        return CheckResult.success(
            f"GPU memory usage: {peak}% across {len(gpus)} GPU(s)",
            usage_percent=usage,
        )


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "GpuMemoryProbe",
    "parse_memory_csv",
]
