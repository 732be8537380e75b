# ============================================================================
# CONFIGURATION MODULE
# ============================================================================
# EPOCH: 1 - SERVICE DIAGNOSTICS
# STATUS: Core - Configuration and defaults
# PURPOSE: Centralized configuration management
# CREATED: 18 OCT 2026
# ============================================================================
"""
Configuration Module

Provides centralized configuration and defaults for diagnostic runs.
"""

from core.config.defaults import (
    ReportFormat,
    TimeoutDefaults,
    ExecutionDefaults,
    CatalogDefaults,
    ReportDefaults,
    Defaults,
    get_defaults,
    reset_defaults,
)

__all__ = [
    "ReportFormat",
    "TimeoutDefaults",
    "ExecutionDefaults",
    "CatalogDefaults",
    "ReportDefaults",
    "Defaults",
    "get_defaults",
    "reset_defaults",
]
