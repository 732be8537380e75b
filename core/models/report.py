# ============================================================================
# CLAUDE CONTEXT - REPORT MODELS
# ============================================================================
# EPOCH: 1 - SERVICE DIAGNOSTICS
# STATUS: Core model - Per-service reports and run summary
# PURPOSE: Aggregation model consumed by reporters and the JSON export
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: ServiceReport, StatusTotals, ConfigDiagnostic, RunSummary
# DEPENDENCIES: pydantic
# ============================================================================
"""
Report Models

Key concept:
- ServiceReport = mutable accumulator, one per service, written only by the
  ReportCollector while a run is in progress
- RunSummary = terminal read-only aggregate built once by the Aggregator

ServiceReport.status is always the worst status among the report's own
results. dependency_status is advisory and never changes it.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, computed_field

from core.contracts import CheckStatus, DependencyStatus
from core.models.result import CheckResult


class ServiceReport(BaseModel):
    """Accumulated results for one service."""

    name: str = Field(..., max_length=64)
    section: str = Field(default="services", max_length=64)
    target: str = Field(default="", description="Human label of the service target")
    depends_on: List[str] = Field(default_factory=list)
    results: List[CheckResult] = Field(default_factory=list)
    dependency_status: DependencyStatus = Field(default=DependencyStatus.HEALTHY)

    @computed_field
    @property
    def status(self) -> CheckStatus:
        """Worst status among this service's own results."""
        return CheckStatus.worst(r.status for r in self.results)

    def add_result(self, result: CheckResult) -> None:
        self.results.append(result)

    def count(self, status: CheckStatus) -> int:
        return sum(1 for r in self.results if r.status == status)


class StatusTotals(BaseModel):
    """Counts of CheckResults per status across a run."""

    model_config = {"frozen": True}

    success: int = 0
    warning: int = 0
    error: int = 0

    @computed_field
    @property
    def total(self) -> int:
        return self.success + self.warning + self.error

    def get(self, status: CheckStatus) -> int:
        return getattr(self, status.value)


class ConfigDiagnostic(BaseModel):
    """Structural configuration problem recorded during graph build."""

    model_config = {"frozen": True}

    kind: str = Field(..., max_length=64)
    message: str
    services: List[str] = Field(default_factory=list)

    @classmethod
    def from_error(cls, error: Exception) -> "ConfigDiagnostic":
        """Build from a ConfigError / CycleDetected instance."""
        return cls(
            kind=getattr(error, "kind", type(error).__name__),
            message=str(error),
            services=list(getattr(error, "services", [])),
        )


class RunSummary(BaseModel):
    """
    Final aggregated, read-only result of one diagnostic run.

    Produced once by the Aggregator; consumed by reporters and exporters.
    """

    model_config = {"frozen": True}

    run_id: str = Field(..., max_length=64)
    catalog: Optional[str] = None
    overall: CheckStatus
    totals: StatusTotals
    per_service: Dict[str, ServiceReport] = Field(default_factory=dict)
    diagnostics: List[ConfigDiagnostic] = Field(default_factory=list)
    sections: Dict[str, str] = Field(
        default_factory=dict,
        description="Section id -> display label"
    )
    started_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    duration_ms: float = 0.0
    deadline_exceeded: bool = False

    @property
    def exit_code(self) -> int:
        """0 for success, 1 for warning, 2 for error."""
        return self.overall.exit_code

    def section_label(self, section: str) -> str:
        return self.sections.get(section, section.replace("_", " ").title())

    def services_by_section(self) -> Dict[str, List[ServiceReport]]:
        """Group service reports by section, preserving report order."""
        grouped: Dict[str, List[ServiceReport]] = {}
        for report in self.per_service.values():
            grouped.setdefault(report.section, []).append(report)
        return grouped

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-compatible dictionary."""
        return self.model_dump(mode="json")


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "ServiceReport",
    "StatusTotals",
    "ConfigDiagnostic",
    "RunSummary",
]
