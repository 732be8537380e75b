# ============================================================================
# CLAUDE CONTEXT - CORE MODULE
# ============================================================================
# EPOCH: 1 - SERVICE DIAGNOSTICS
# STATUS: Core module initialization
# PURPOSE: Export core contracts, errors and models
# LAST_REVIEWED: 18 OCT 2026
# ============================================================================

from core.contracts import CheckStatus, DependencyStatus, TargetKind
from core.models import (
    Target,
    CheckResult,
    ServiceCatalog,
    ServiceConfig,
    ProbeConfig,
    ServiceReport,
    StatusTotals,
    ConfigDiagnostic,
    RunSummary,
)

__all__ = [
    # Enums
    "CheckStatus",
    "DependencyStatus",
    "TargetKind",
    # Models
    "Target",
    "CheckResult",
    "ServiceCatalog",
    "ServiceConfig",
    "ProbeConfig",
    "ServiceReport",
    "StatusTotals",
    "ConfigDiagnostic",
    "RunSummary",
]
