# ============================================================================
# CLAUDE CONTEXT - CHECK RESULT MODEL
# ============================================================================
# EPOCH: 1 - SERVICE DIAGNOSTICS
# STATUS: Core model - Outcome of one probe observation
# PURPOSE: Tri-state typed result replacing grepped text output
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: CheckResult
# DEPENDENCIES: dataclasses
# ============================================================================
"""
Check Result Model

Every probe returns exactly one CheckResult. Parsing of raw command or HTTP
output stays inside the probe; only the typed status, a message and a
structured details payload leave it.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from core.contracts import CheckStatus

TIMEOUT_MESSAGE = "timeout"
UNREACHABLE_MESSAGE = "target unreachable"
DEADLINE_MESSAGE = "run deadline exceeded"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class CheckResult:
    """Result from a single probe."""
    status: CheckStatus
    message: str = ""
    details: Dict[str, Any] = field(default_factory=dict)
    probe: Optional[str] = None
    duration_ms: float = 0.0
    checked_at: datetime = field(default_factory=_utcnow)

    @classmethod
    def success(cls, message: str = "", **details) -> "CheckResult":
        """Create success result."""
        return cls(status=CheckStatus.SUCCESS, message=message, details=details)

    @classmethod
    def warning(cls, message: str, **details) -> "CheckResult":
        """Create warning result."""
        return cls(status=CheckStatus.WARNING, message=message, details=details)

    @classmethod
    def error(cls, message: str, **details) -> "CheckResult":
        """Create error result."""
        return cls(status=CheckStatus.ERROR, message=message, details=details)

    @classmethod
    def timeout(cls, timeout_seconds: Optional[float] = None) -> "CheckResult":
        """Create the error result for a probe that ran out of time."""
        details = {}
        if timeout_seconds is not None:
            details["timeout_seconds"] = timeout_seconds
        return cls(status=CheckStatus.ERROR, message=TIMEOUT_MESSAGE, details=details)

    @classmethod
    def from_exception(cls, e: Exception) -> "CheckResult":
        """Create error result from exception."""
        return cls(
            status=CheckStatus.ERROR,
            message=str(e) or type(e).__name__,
            details={"exception_type": type(e).__name__},
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON export."""
        result: Dict[str, Any] = {
            "status": self.status.value,
            "message": self.message,
            "duration_ms": round(self.duration_ms, 2),
        }
        if self.probe:
            result["probe"] = self.probe
        if self.details:
            result["details"] = self.details
        return result


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "CheckResult",
    "TIMEOUT_MESSAGE",
    "UNREACHABLE_MESSAGE",
    "DEADLINE_MESSAGE",
]
