# ============================================================================
# DIAGNOSTIC SERVICE
# ============================================================================
# EPOCH: 1 - SERVICE DIAGNOSTICS
# STATUS: Core - Run orchestration
# PURPOSE: Catalog -> descriptors -> graph -> runner -> RunSummary
# CREATED: 18 OCT 2026
# ============================================================================
"""
Diagnostic Service

Wires the pieces of one diagnostic run together. Shared by the CLI and the
HTTP router. Nothing is cached between runs: every call builds a fresh
graph from the descriptors it is given.
"""

import logging
from pathlib import Path
from typing import Iterable, Optional, Sequence, Union

from core.config import Defaults, get_defaults
from core.models import ConfigDiagnostic, RunSummary, ServiceCatalog
from health.core import ServiceDescriptor
from health.executor import CheckRunner
from health.graph import build_graph
from services.catalog_service import CatalogService

logger = logging.getLogger(__name__)


async def run_diagnostics(
    descriptors: Iterable[ServiceDescriptor],
    diagnostics: Iterable[ConfigDiagnostic] = (),
    run_deadline: Optional[float] = None,
    max_parallel: Optional[int] = None,
    run_id: Optional[str] = None,
    catalog: Optional[str] = None,
    sections: Optional[dict] = None,
) -> RunSummary:
    """
    Run every probe of the given descriptors and return the summary.

    Args:
        descriptors: Services to diagnose, in report order
        diagnostics: Configuration diagnostics found before graph build
        run_deadline: Whole-run deadline (default from configuration)
        max_parallel: Concurrency bound per batch (default from configuration)
        run_id: Identifier for the run
        catalog: Catalog id recorded in the summary
        sections: Section id -> display label

    Returns:
        RunSummary
    """
    defaults = get_defaults()
    graph = build_graph(descriptors)
    graph.diagnostics[:0] = list(diagnostics)

    runner = CheckRunner(
        graph,
        run_deadline=defaults.timeouts.run_deadline_seconds if run_deadline is None else run_deadline,
        max_parallel=defaults.execution.max_parallel if max_parallel is None else max_parallel,
        run_id=run_id,
        catalog=catalog,
        sections=sections,
    )
    return await runner.run()


class DiagnosticService:
    """Runs diagnostics for a service catalog."""

    def __init__(
        self,
        catalog_service: Optional[CatalogService] = None,
        defaults: Optional[Defaults] = None,
    ):
        self.defaults = defaults or get_defaults()
        self.catalog_service = catalog_service or CatalogService(timeouts=self.defaults.timeouts)

    def load_catalog(self, path: Union[str, Path, None] = None) -> ServiceCatalog:
        """Load a catalog (default: configured catalog path)."""
        return self.catalog_service.load(path or self.defaults.catalog.catalog_path)

    async def run(
        self,
        catalog: ServiceCatalog,
        services: Optional[Sequence[str]] = None,
        probe_timeout: Optional[float] = None,
        run_deadline: Optional[float] = None,
        max_parallel: Optional[int] = None,
        run_id: Optional[str] = None,
    ) -> RunSummary:
        """
        Diagnose a catalog.

        Args:
            catalog: Loaded catalog
            services: Restrict to these services (dependencies are included)
            probe_timeout: Default timeout for probes without their own
            run_deadline: Whole-run deadline override
            max_parallel: Concurrency override
            run_id: Identifier for the run

        Raises:
            KeyError: If a requested service is not in the catalog
        """
        if services:
            catalog = catalog.subset(list(services))
            logger.info(f"Restricted run to {catalog.service_names()}")

        descriptors, diagnostics = self.catalog_service.build_descriptors(
            catalog,
            probe_timeout=probe_timeout,
        )

        return await run_diagnostics(
            descriptors,
            diagnostics=diagnostics,
            run_deadline=self.defaults.timeouts.run_deadline_seconds if run_deadline is None else run_deadline,
            max_parallel=self.defaults.execution.max_parallel if max_parallel is None else max_parallel,
            run_id=run_id,
            catalog=catalog.catalog_id,
            sections=catalog.sections,
        )


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "DiagnosticService",
    "run_diagnostics",
]
