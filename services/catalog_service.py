# ============================================================================
# CATALOG SERVICE
# ============================================================================
# EPOCH: 1 - SERVICE DIAGNOSTICS
# STATUS: Core - Service catalog management
# PURPOSE: Load YAML catalogs and build runtime service descriptors
# CREATED: 18 OCT 2026
# ============================================================================
"""
Catalog Service

Loads a service catalog from YAML and turns each ServiceConfig into a
ServiceDescriptor whose probes are resolved through the probe registry.

Probe resolution:
- target  = service target merged with the probe's target override
- timeout = probe timeout_seconds, else the per-kind default
- plugin  = registry.create(kind, **params)

A probe that cannot be resolved (unknown kind, bad params) does not abort
the catalog: it is reported as a ConfigDiagnostic and replaced by a probe
that yields an Error result for its service.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import yaml
from pydantic import ValidationError

from core.config import TimeoutDefaults, get_defaults
from core.errors import CatalogLoadError, ConfigError, InvalidProbeConfigError
from core.models import ConfigDiagnostic, ProbeConfig, ServiceCatalog, ServiceConfig
from core.models.result import CheckResult
from core.models.target import Target
from health.core import BoundProbe, ProbePlugin, ServiceDescriptor
from health.registry import ProbeRegistry, get_registry

logger = logging.getLogger(__name__)


class ConfigErrorProbe(ProbePlugin):
    """Stand-in for a probe whose declaration could not be resolved."""

    kind = "config_error"

    def __init__(self, error: ConfigError):
        self.error = error

    async def probe(self, target: Target, timeout: float) -> CheckResult:
        return CheckResult.error(
            str(self.error),
            exception_type=type(self.error).__name__,
        )


class CatalogService:
    """Service for loading catalogs and building service descriptors."""

    def __init__(
        self,
        registry: Optional[ProbeRegistry] = None,
        timeouts: Optional[TimeoutDefaults] = None,
    ):
        """
        Initialize catalog service.

        Args:
            registry: Probe registry (default: global registry with built-ins)
            timeouts: Timeout defaults (default: from environment)
        """
        if registry is None:
            import health.probes  # noqa: F401  (registers built-in probes)
            registry = get_registry()
        self.registry = registry
        self.timeouts = timeouts or get_defaults().timeouts

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self, path: Union[str, Path, None] = None) -> ServiceCatalog:
        """
        Load a catalog from a YAML file.

        Args:
            path: Catalog file (default: configured catalog path)

        Raises:
            CatalogLoadError: If the file is missing, unreadable or invalid
        """
        path = Path(path) if path else get_defaults().catalog.catalog_path

        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise CatalogLoadError(f"Cannot read catalog {path}: {e}") from e
        except yaml.YAMLError as e:
            raise CatalogLoadError(f"Invalid YAML in catalog {path}: {e}") from e

        catalog = self.parse(data, source=str(path))
        logger.info(
            f"Loaded catalog: {catalog.catalog_id} v{catalog.version} "
            f"({len(catalog.services)} services) from {path}"
        )
        return catalog

    def parse(self, data: Any, source: str = "<memory>") -> ServiceCatalog:
        """
        Validate raw catalog data.

        Raises:
            CatalogLoadError: If the data is not a valid catalog
        """
        if not isinstance(data, dict):
            raise CatalogLoadError(f"Catalog {source} must be a mapping")

        data = dict(data)
        data.setdefault("catalog_id", Path(source).stem if source != "<memory>" else "catalog")
        data.setdefault("name", data["catalog_id"])

        try:
            return ServiceCatalog.model_validate(data)
        except ValidationError as e:
            raise CatalogLoadError(f"Invalid catalog {source}: {e}") from e

    # ------------------------------------------------------------------
    # Descriptor building
    # ------------------------------------------------------------------

    def build_descriptors(
        self,
        catalog: ServiceCatalog,
        probe_timeout: Optional[float] = None,
    ) -> Tuple[List[ServiceDescriptor], List[ConfigDiagnostic]]:
        """
        Build runtime descriptors for every service in the catalog.

        Args:
            catalog: Validated catalog
            probe_timeout: Override for every probe without its own timeout

        Returns:
            (descriptors in catalog order, probe configuration diagnostics)
        """
        descriptors: List[ServiceDescriptor] = []
        diagnostics: List[ConfigDiagnostic] = []

        for service in catalog.services:
            probes = []
            for probe_config in service.probes:
                bound, error = self._bind(service, probe_config, probe_timeout)
                if error is not None:
                    logger.warning(f"Service {service.name}: {error}")
                    diagnostics.append(ConfigDiagnostic.from_error(error))
                probes.append(bound)

            descriptors.append(ServiceDescriptor(
                name=service.name,
                target=service.target,
                probes=tuple(probes),
                depends_on=frozenset(service.depends_on),
                section=service.section,
                description=service.description,
            ))

        return descriptors, diagnostics

    def _bind(
        self,
        service: ServiceConfig,
        probe_config: ProbeConfig,
        probe_timeout: Optional[float],
    ) -> Tuple[BoundProbe, Optional[ConfigError]]:
        """Resolve one probe declaration into a BoundProbe."""
        target = service.target.merge(probe_config.target)
        timeout = (
            probe_config.timeout_seconds
            or probe_timeout
            or self.timeouts.get_timeout(probe_config.kind)
        )

        error: Optional[ConfigError] = None
        try:
            plugin = self.registry.create(
                probe_config.kind,
                service=service.name,
                **probe_config.params,
            )
        except ConfigError as e:
            error = e
        except (TypeError, ValueError) as e:
            error = InvalidProbeConfigError(probe_config.kind, str(e), service=service.name)

        if error is not None:
            plugin = ConfigErrorProbe(error)

        return BoundProbe(
            name=probe_config.display_name,
            plugin=plugin,
            target=target,
            timeout_seconds=timeout,
        ), error

    def list_kinds(self) -> Dict[str, str]:
        """Registered probe kinds with their descriptions."""
        return self.registry.describe()


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "CatalogService",
    "ConfigErrorProbe",
]
