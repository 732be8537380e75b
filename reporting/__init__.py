# ============================================================================
# REPORTING MODULE
# ============================================================================
# EPOCH: 1 - SERVICE DIAGNOSTICS
# STATUS: Reporting - RunSummary renderers
# PURPOSE: Text and JSON reports of a diagnostic run
# CREATED: 18 OCT 2026
# ============================================================================
"""
Reporting Module

Usage:
    from reporting import get_reporter

    reporter = get_reporter("text", color=True)
    reporter.write(summary)
"""

from reporting.base import Reporter, Colors
from reporting.text import TextReporter
from reporting.json_reporter import JsonReporter
from reporting.factory import get_reporter

__all__ = [
    "Reporter",
    "Colors",
    "TextReporter",
    "JsonReporter",
    "get_reporter",
]
