# ============================================================================
# RESULT AGGREGATOR
# ============================================================================
# EPOCH: 1 - SERVICE DIAGNOSTICS
# STATUS: Core - Fold service reports into a run summary
# PURPOSE: Worst-wins overall status and per-status totals
# CREATED: 18 OCT 2026
# ============================================================================
"""
Result Aggregator

Pure fold over ServiceReports:
- overall = worst service status (an empty run is SUCCESS)
- totals  = count of every CheckResult by status, across all services

Deterministic: the same reports always give the same totals. Reports are
deep-copied so the summary does not change if the inputs do.
"""

from datetime import datetime, timezone
from typing import Dict, Iterable, Optional
from uuid import uuid4

from core.contracts import CheckStatus
from core.models.report import ConfigDiagnostic, RunSummary, ServiceReport, StatusTotals


class Aggregator:
    """Builds the terminal RunSummary."""

    @staticmethod
    def totals(reports: Iterable[ServiceReport]) -> StatusTotals:
        """Count CheckResults per status."""
        counts: Dict[CheckStatus, int] = {status: 0 for status in CheckStatus}
        for report in reports:
            for result in report.results:
                counts[result.status] += 1
        return StatusTotals(
            success=counts[CheckStatus.SUCCESS],
            warning=counts[CheckStatus.WARNING],
            error=counts[CheckStatus.ERROR],
        )

    def aggregate(
        self,
        reports: Iterable[ServiceReport],
        diagnostics: Iterable[ConfigDiagnostic] = (),
        run_id: Optional[str] = None,
        catalog: Optional[str] = None,
        sections: Optional[Dict[str, str]] = None,
        started_at: Optional[datetime] = None,
        duration_ms: float = 0.0,
        deadline_exceeded: bool = False,
    ) -> RunSummary:
        """
        Fold reports into a RunSummary.

        Args:
            reports: Completed service reports, in report order
            diagnostics: Configuration diagnostics from graph build
            run_id: Identifier of the run (generated if omitted)
            catalog: Catalog id the run was built from
            sections: Section id -> display label
            started_at: Run start time
            duration_ms: Wall-clock run duration
            deadline_exceeded: Whether the run deadline truncated the run

        Returns:
            Read-only RunSummary
        """
        per_service = {report.name: report.model_copy(deep=True) for report in reports}

        return RunSummary(
            run_id=run_id or uuid4().hex[:12],
            catalog=catalog,
            overall=CheckStatus.worst(r.status for r in per_service.values()),
            totals=self.totals(per_service.values()),
            per_service=per_service,
            diagnostics=list(diagnostics),
            sections=dict(sections or {}),
            started_at=started_at or datetime.now(timezone.utc),
            duration_ms=duration_ms,
            deadline_exceeded=deadline_exceeded,
        )


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "Aggregator",
]
