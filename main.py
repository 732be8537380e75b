# ============================================================================
# SERVICE DIAGNOSTICS - HTTP APPLICATION
# ============================================================================
# EPOCH: 1 - SERVICE DIAGNOSTICS
# STATUS: Core - FastAPI application entry point
# PURPOSE: Serve diagnostic runs over HTTP
# CREATED: 18 OCT 2026
# ============================================================================
"""
Service Diagnostics HTTP Application

FastAPI application exposing the diagnostics router. Every request runs
the catalog from scratch; the app keeps no state between runs.

Usage:
    uvicorn main:app --host 0.0.0.0 --port 8080
"""

import os

from fastapi import FastAPI

from __version__ import __version__, BUILD_DATE, EPOCH, CODENAME
from core.logging import configure_logging, get_logger
from health.router import diagnostics_router

configure_logging(
    level=os.environ.get("LOG_LEVEL", "INFO"),
    json_output=os.environ.get("LOG_FORMAT", "").lower() == "json",
)
logger = get_logger(__name__)


def create_app() -> FastAPI:
    """Build the FastAPI application."""
    app = FastAPI(
        title=CODENAME,
        description=f"Epoch {EPOCH} point-in-time service diagnostics",
        version=__version__,
    )

    # No prefix - /livez, /diagnostics, /diagnostics/{service}
    app.include_router(diagnostics_router)

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "service": CODENAME,
            "version": __version__,
            "epoch": EPOCH,
            "build_date": BUILD_DATE,
            "docs": "/docs",
        }

    return app


app = create_app()


# ============================================================================
# MAIN ENTRY POINT
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    host = os.environ.get("HOST", "0.0.0.0")
    port = int(os.environ.get("PORT", "8080"))

    uvicorn.run(
        "main:app",
        host=host,
        port=port,
        reload=os.environ.get("RELOAD", "false").lower() == "true",
    )
