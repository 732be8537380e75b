# ============================================================================
# SERVICES MODULE
# ============================================================================
# EPOCH: 1 - SERVICE DIAGNOSTICS
# STATUS: Core - Application layer
# PURPOSE: Catalog loading and diagnostic run orchestration
# CREATED: 18 OCT 2026
# ============================================================================
"""
Services Module

Coordinates catalogs, the dependency graph and the check runner.

Usage:
    from services import DiagnosticService

    service = DiagnosticService()
    catalog = service.load_catalog()
    summary = await service.run(catalog)
"""

from .catalog_service import CatalogService
from .diagnostic_service import DiagnosticService, run_diagnostics

__all__ = [
    "CatalogService",
    "DiagnosticService",
    "run_diagnostics",
]
