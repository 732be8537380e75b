# ============================================================================
# CLAUDE CONTEXT - BASE CONTRACTS & ENUMS
# ============================================================================
# EPOCH: 1 - SERVICE DIAGNOSTICS
# STATUS: Foundation - Core enums shared by probes, runner and reporters
# PURPOSE: Define check status and dependency status enums
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: CheckStatus, DependencyStatus, TargetKind
# DEPENDENCIES: enum
# ============================================================================
"""
Base contracts for the diagnostics orchestrator.

These enums cross every boundary:
- Probe plugins (produce CheckStatus)
- Runner / Aggregator (fold CheckStatus worst-wins)
- Reporters and CLI (glyphs, exit codes, HTTP codes)
"""

from enum import Enum
from typing import Iterable


# ============================================================================
# STATUS ENUMS
# ============================================================================

class CheckStatus(str, Enum):
    """
    Tri-state result of a single probe.

    Ordering (worst wins):
        SUCCESS < WARNING < ERROR
    """
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"

    @property
    def severity(self) -> int:
        """Numeric rank used for worst-wins folding."""
        return _SEVERITY[self]

    @property
    def glyph(self) -> str:
        """Status glyph used by the text reporter."""
        return _GLYPHS[self]

    @property
    def exit_code(self) -> int:
        """Process exit code for an overall status."""
        return self.severity

    # str comparison would order these alphabetically, so compare by rank
    def __lt__(self, other: "CheckStatus") -> bool:
        return self.severity < CheckStatus(other).severity

    def __le__(self, other: "CheckStatus") -> bool:
        return self.severity <= CheckStatus(other).severity

    def __gt__(self, other: "CheckStatus") -> bool:
        return self.severity > CheckStatus(other).severity

    def __ge__(self, other: "CheckStatus") -> bool:
        return self.severity >= CheckStatus(other).severity

    @classmethod
    def worst(cls, statuses: Iterable["CheckStatus"]) -> "CheckStatus":
        """Aggregate multiple statuses (worst wins, empty is SUCCESS)."""
        return max(statuses, key=lambda s: s.severity, default=cls.SUCCESS)


_SEVERITY = {
    CheckStatus.SUCCESS: 0,
    CheckStatus.WARNING: 1,
    CheckStatus.ERROR: 2,
}

_GLYPHS = {
    CheckStatus.SUCCESS: "✓",
    CheckStatus.WARNING: "⚠",
    CheckStatus.ERROR: "✗",
}


class DependencyStatus(str, Enum):
    """
    Advisory health of a service's direct dependencies.

    Never folded into the service's own CheckStatus.
    """
    HEALTHY = "healthy"                          # All dependencies succeeded
    DEPENDENCY_WARNING = "dependency_warning"    # A dependency has warnings
    DEGRADED_DEPENDENCY = "degraded_dependency"  # A dependency has errors
    UNKNOWN = "unknown"                          # Cycle, dropped edge or no report

    @classmethod
    def from_dependency_statuses(
        cls,
        statuses: Iterable[CheckStatus],
    ) -> "DependencyStatus":
        """Derive dependency status from the statuses of direct dependencies."""
        worst = CheckStatus.worst(statuses)
        if worst == CheckStatus.ERROR:
            return cls.DEGRADED_DEPENDENCY
        if worst == CheckStatus.WARNING:
            return cls.DEPENDENCY_WARNING
        return cls.HEALTHY


class TargetKind(str, Enum):
    """What a Target addresses."""
    CONTAINER = "container"
    COMPOSITE = "composite"    # Container + command
    URL = "url"
    FILE = "file"
    ENDPOINT = "endpoint"      # host:port
    NONE = "none"              # Host-level probes (commands on PATH, GPU)


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "CheckStatus",
    "DependencyStatus",
    "TargetKind",
]
