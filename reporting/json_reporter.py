# ============================================================================
# JSON REPORTER
# ============================================================================
# EPOCH: 1 - SERVICE DIAGNOSTICS
# STATUS: Reporting - Machine-readable export
# PURPOSE: RunSummary as JSON for CI pipelines and dashboards
# CREATED: 18 OCT 2026
# ============================================================================
"""
JSON Reporter

Serializes RunSummary.to_dict() plus the exit code. Results keep their
structured details payload, so consumers never parse message text.
"""

import json

from core.models import RunSummary
from reporting.base import Reporter


class JsonReporter(Reporter):
    """Machine export of a run summary."""

    format = "json"

    def __init__(self, indent: int = 2):
        self.indent = indent

    def render(self, summary: RunSummary) -> str:
        payload = summary.to_dict()
        payload["exit_code"] = summary.exit_code
        return json.dumps(payload, indent=self.indent, default=str, ensure_ascii=False)


__all__ = [
    "JsonReporter",
]
