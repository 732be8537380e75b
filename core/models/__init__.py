# ============================================================================
# CLAUDE CONTEXT - MODELS MODULE
# ============================================================================
# EPOCH: 1 - SERVICE DIAGNOSTICS
# STATUS: Model exports
# PURPOSE: Central export point for targets, catalog, results and reports
# LAST_REVIEWED: 18 OCT 2026
# ============================================================================
"""
Models Module - Central Export Point

Configuration models (Target, ServiceCatalog) describe what to probe.
Result models (CheckResult, ServiceReport, RunSummary) describe what was
observed. Pydantic models serialize directly for the JSON export.
"""

from core.models.target import Target
from core.models.result import CheckResult
from core.models.service import ServiceCatalog, ServiceConfig, ProbeConfig
from core.models.report import ServiceReport, StatusTotals, ConfigDiagnostic, RunSummary

__all__ = [
    # Configuration
    "Target",
    "ServiceCatalog",
    "ServiceConfig",
    "ProbeConfig",
    # Results
    "CheckResult",
    "ServiceReport",
    "StatusTotals",
    "ConfigDiagnostic",
    "RunSummary",
]
