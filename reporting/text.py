# ============================================================================
# TEXT REPORTER
# ============================================================================
# EPOCH: 1 - SERVICE DIAGNOSTICS
# STATUS: Reporting - Human-scannable terminal report
# PURPOSE: Sections, status lines, dependency context, summary table
# CREATED: 18 OCT 2026
# ============================================================================
"""
Text Reporter

Layout:

    === Core Services ===
    api ✗ error
      ✓ container_running: Container project_aime-api-1 is running
      ✗ http_health: Cannot connect to http://localhost:8000/health
      Dependencies: mongodb ✓, redis ✗ (degraded_dependency)

    === Configuration Diagnostics ===
    ✗ [unknown_service] Unknown service: kafka (dependency of worker)

    === Service Status Summary ===
    <legend>
    <table: Service / Success / Warning / Error>
    Overall: ✗ ERROR
"""

from typing import List, Optional

from core.contracts import CheckStatus, DependencyStatus
from core.models import CheckResult, RunSummary, ServiceReport
from reporting.base import Colors, Reporter

TABLE_RULE = "-" * 62
ROW_FORMAT = "{:<30} {:<10} {:<10} {:<10}"

LEGEND = [
    (CheckStatus.SUCCESS, "Service is functioning normally"),
    (CheckStatus.WARNING, "Service is running but has potential issues"),
    (CheckStatus.ERROR, "Service has critical issues that need attention"),
]

_STATUS_COLORS = {
    CheckStatus.SUCCESS: Colors.GREEN,
    CheckStatus.WARNING: Colors.YELLOW,
    CheckStatus.ERROR: Colors.RED,
}


class TextReporter(Reporter):
    """Terminal report grouped by section."""

    format = "text"

    def __init__(self, color: bool = False, show_details: bool = False):
        self.colors = Colors(color)
        self.show_details = show_details

    def render(self, summary: RunSummary) -> str:
        lines: List[str] = []

        for section, reports in summary.services_by_section().items():
            lines.append(self._heading(summary.section_label(section)))
            for report in reports:
                lines.extend(self._service_lines(report, summary))
            lines.append("")

        if summary.diagnostics:
            lines.append(self._heading("Configuration Diagnostics"))
            for diagnostic in summary.diagnostics:
                text = f"{CheckStatus.ERROR.glyph} [{diagnostic.kind}] {diagnostic.message}"
                lines.append(self._status(text, CheckStatus.ERROR))
            lines.append("")

        lines.extend(self._summary_lines(summary))
        return "\n".join(lines)

    # ------------------------------------------------------------------
    # Pieces
    # ------------------------------------------------------------------

    def _heading(self, title: str) -> str:
        return self.colors.paint(f"=== {title} ===", Colors.BLUE)

    def _status(self, text: str, status: CheckStatus) -> str:
        return self.colors.paint(text, _STATUS_COLORS[status])

    def _result_line(self, result: CheckResult) -> str:
        label = f"{result.probe}: " if result.probe else ""
        text = f"  {result.status.glyph} {label}{result.message or result.status.value}"
        return self._status(text, result.status)

    def _service_lines(self, report: ServiceReport, summary: RunSummary) -> List[str]:
        status = report.status
        lines = [self._status(f"{report.name} {status.glyph} {status.value}", status)]

        for result in report.results:
            lines.append(self._result_line(result))
            if self.show_details and result.details:
                for key, value in result.details.items():
                    lines.append(f"      {key}: {value}")

        dependency_line = self._dependency_line(report, summary)
        if dependency_line:
            lines.append(dependency_line)
        return lines

    def _dependency_line(self, report: ServiceReport, summary: RunSummary) -> Optional[str]:
        """Dependency context; advisory only, never part of the service status."""
        if not report.depends_on and report.dependency_status == DependencyStatus.HEALTHY:
            return None

        parts = []
        for name in report.depends_on:
            dependency = summary.per_service.get(name)
            glyph = dependency.status.glyph if dependency and dependency.results else "?"
            parts.append(f"{name} {glyph}")

        text = f"  Dependencies: {', '.join(parts) or '-'} ({report.dependency_status.value})"
        if report.dependency_status == DependencyStatus.DEGRADED_DEPENDENCY:
            return self.colors.paint(text, Colors.RED)
        if report.dependency_status in (DependencyStatus.DEPENDENCY_WARNING, DependencyStatus.UNKNOWN):
            return self.colors.paint(text, Colors.YELLOW)
        return text

    def _summary_lines(self, summary: RunSummary) -> List[str]:
        lines = [self._heading("Service Status Summary"), "", "Status Legend:"]
        for status, meaning in LEGEND:
            lines.append(self._status(f"{status.glyph} {status.value.capitalize()}", status) + f" - {meaning}")

        lines += ["", "Service Status Overview:", TABLE_RULE]
        lines.append(ROW_FORMAT.format("Service", "Success", "Warning", "Error").rstrip())
        lines.append(TABLE_RULE)
        for name, report in summary.per_service.items():
            lines.append(ROW_FORMAT.format(
                name[:30],
                report.count(CheckStatus.SUCCESS),
                report.count(CheckStatus.WARNING),
                report.count(CheckStatus.ERROR),
            ).rstrip())
        lines.append(TABLE_RULE)

        totals = summary.totals
        lines.append(ROW_FORMAT.format("Total", totals.success, totals.warning, totals.error).rstrip())
        lines.append("")

        if summary.deadline_exceeded:
            lines.append(self._status(
                f"{CheckStatus.ERROR.glyph} Run deadline exceeded; unfinished services are marked as errors",
                CheckStatus.ERROR,
            ))

        overall = summary.overall
        lines.append(self._status(
            f"Overall: {overall.glyph} {overall.value.upper()} "
            f"({len(summary.per_service)} services, {summary.duration_ms:.0f} ms)",
            overall,
        ))
        return lines


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "TextReporter",
]
