# ============================================================================
# DIAGNOSTICS ROUTER
# ============================================================================
# EPOCH: 1 - SERVICE DIAGNOSTICS
# STATUS: Infrastructure - FastAPI diagnostics endpoints
# PURPOSE: Run the diagnostic catalog on demand over HTTP
# CREATED: 18 OCT 2026
# ============================================================================
"""
Diagnostics Router

FastAPI router exposing a diagnostic run as JSON.

Endpoints:
    GET /livez                 - Process alive (no probes)
    GET /diagnostics           - Full run of the configured catalog
    GET /diagnostics/{service} - One service plus everything it depends on

Response Codes:
    200 - Overall success
    206 - Overall warning (partial content)
    503 - Overall error, or the catalog could not be loaded
    404 - Unknown service
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from core.contracts import CheckStatus
from core.errors import CatalogLoadError
from core.models import RunSummary
from services.diagnostic_service import DiagnosticService
from __version__ import __version__, BUILD_DATE

logger = logging.getLogger(__name__)

diagnostics_router = APIRouter(tags=["Diagnostics"])


def _status_to_http_code(status: CheckStatus) -> int:
    """Map overall status to HTTP status code."""
    return {
        CheckStatus.SUCCESS: 200,
        CheckStatus.WARNING: 206,  # Partial Content
        CheckStatus.ERROR: 503,  # Service Unavailable
    }[status]


def get_diagnostic_service() -> DiagnosticService:
    """Dependency provider (override in tests)."""
    return DiagnosticService()


def _summary_response(summary: RunSummary) -> JSONResponse:
    body = summary.to_dict()
    body["exit_code"] = summary.exit_code
    body["version"] = __version__
    body["build_date"] = BUILD_DATE
    return JSONResponse(status_code=_status_to_http_code(summary.overall), content=body)


def _catalog_error_response(error: CatalogLoadError) -> JSONResponse:
    logger.error(f"Catalog could not be loaded: {error}")
    return JSONResponse(
        status_code=503,
        content={"error": str(error), "kind": error.kind},
    )


# ============================================================================
# LIVENESS PROBE
# ============================================================================

@diagnostics_router.get("/livez")
async def liveness_probe():
    """Returns 200 while the process is alive. Runs no probes."""
    return {"status": "alive", "version": __version__, "build_date": BUILD_DATE}


# ============================================================================
# FULL RUN
# ============================================================================

@diagnostics_router.get("/diagnostics")
async def run_all_diagnostics(
    service: DiagnosticService = Depends(get_diagnostic_service),
):
    """
    Run every probe of the configured catalog.

    Each request is an independent point-in-time run.
    """
    try:
        catalog = service.load_catalog()
    except CatalogLoadError as e:
        return _catalog_error_response(e)

    summary = await service.run(catalog)
    return _summary_response(summary)


# ============================================================================
# SINGLE SERVICE
# ============================================================================

@diagnostics_router.get("/diagnostics/{service_name}")
async def run_service_diagnostics(
    service_name: str,
    service: DiagnosticService = Depends(get_diagnostic_service),
):
    """
    Run one service's probes, plus the services it depends on so its
    dependency status can be derived.
    """
    try:
        catalog = service.load_catalog()
    except CatalogLoadError as e:
        return _catalog_error_response(e)

    if service_name not in catalog.service_names():
        return JSONResponse(
            status_code=404,
            content={"error": f"Service not found: {service_name}"},
        )

    summary = await service.run(catalog, services=[service_name])
    return _summary_response(summary)


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "diagnostics_router",
    "get_diagnostic_service",
]
