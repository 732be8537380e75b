# ============================================================================
# CLAUDE CONTEXT - SERVICE CATALOG MODELS
# ============================================================================
# EPOCH: 1 - SERVICE DIAGNOSTICS
# STATUS: Core model - Static service configuration
# PURPOSE: Define the services, probes and dependencies loaded from YAML
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: ServiceCatalog, ServiceConfig, ProbeConfig
# DEPENDENCIES: pydantic
# ============================================================================
"""
Service Catalog Models

A ServiceCatalog is the static configuration of one deployment.
It defines:
- What services exist (and which report section they belong to)
- What each service is (its Target)
- Which probes run against it, in order
- Which other services it depends on

Catalogs are loaded from YAML files. The runtime ServiceDescriptor
(health.core) is built from a ServiceConfig once probe kinds are resolved.
"""

from typing import Any, Dict, List, Optional, Set

from pydantic import BaseModel, Field, field_validator

from core.models.target import Target


class ProbeConfig(BaseModel):
    """
    Declaration of one probe against a service.

    kind selects the plugin from the probe registry; params are passed to
    the plugin constructor; target overrides fields of the service target.
    """
    kind: str = Field(..., max_length=64)
    name: Optional[str] = Field(
        default=None,
        max_length=128,
        description="Display name (defaults to kind)"
    )
    timeout_seconds: Optional[float] = Field(default=None, gt=0)
    target: Optional[Target] = None
    params: Dict[str, Any] = Field(default_factory=dict)

    @property
    def display_name(self) -> str:
        return self.name or self.kind


class ServiceConfig(BaseModel):
    """Static configuration of one logical service."""
    name: str = Field(..., max_length=64)
    section: str = Field(default="services", max_length=64)
    description: Optional[str] = None
    target: Target = Field(default_factory=Target)
    depends_on: List[str] = Field(default_factory=list)
    probes: List[ProbeConfig] = Field(default_factory=list)

    @field_validator("depends_on", mode="before")
    @classmethod
    def handle_string_input(cls, v):
        """Allow single string as shorthand for single-item list."""
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        return v


class ServiceCatalog(BaseModel):
    """
    Complete service catalog loaded from YAML.

    Service order in the file is preserved and used for report order.
    """
    catalog_id: str = Field(..., max_length=64)
    name: str = Field(..., max_length=128)
    version: int = Field(default=1, ge=1)
    description: Optional[str] = None

    # Section display labels (section id -> label)
    sections: Dict[str, str] = Field(default_factory=dict)

    services: List[ServiceConfig] = Field(default_factory=list)

    @field_validator("services", mode="before")
    @classmethod
    def handle_mapping_input(cls, v):
        """Accept a mapping of name -> config as written in YAML."""
        if isinstance(v, dict):
            services = []
            for name, config in v.items():
                if config is not None and not isinstance(config, dict):
                    raise ValueError(
                        f"service {name!r} must be a mapping, got {type(config).__name__}"
                    )
                config = dict(config or {})
                config.setdefault("name", name)
                services.append(config)
            return services
        return v

    def get_service(self, name: str) -> ServiceConfig:
        """Get a service config by name."""
        for service in self.services:
            if service.name == name:
                return service
        raise KeyError(f"Service '{name}' not found in catalog '{self.catalog_id}'")

    def service_names(self) -> List[str]:
        return [s.name for s in self.services]

    def subset(self, names: List[str]) -> "ServiceCatalog":
        """
        Restrict the catalog to the named services plus everything they
        transitively depend on.

        Raises:
            KeyError if a requested service does not exist
        """
        by_name = {s.name: s for s in self.services}
        keep: Set[str] = set()
        pending = list(names)
        for name in names:
            if name not in by_name:
                raise KeyError(f"Service '{name}' not found in catalog '{self.catalog_id}'")

        while pending:
            name = pending.pop()
            if name in keep or name not in by_name:
                continue
            keep.add(name)
            pending.extend(by_name[name].depends_on)

        return self.model_copy(
            update={"services": [s for s in self.services if s.name in keep]}
        )


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "ProbeConfig",
    "ServiceConfig",
    "ServiceCatalog",
]
