# ============================================================================
# CLAUDE CONTEXT - ERROR TAXONOMY
# ============================================================================
# EPOCH: 1 - SERVICE DIAGNOSTICS
# STATUS: Foundation - Exception hierarchy
# PURPOSE: Typed failures for probes, configuration and run control
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: DiagnosticsError, ProbeError, ConfigError, CycleDetected, ...
# DEPENDENCIES: none
# ============================================================================
"""
Error taxonomy for the diagnostics orchestrator.

Propagation policy:
- ProbeError subclasses are raised inside probe implementations and are
  converted to CheckResult(status=ERROR) at the probe boundary. They never
  reach the runner or aggregator.
- ConfigError subclasses and CycleDetected are structural problems found
  while building the dependency graph. They are recorded as diagnostics and
  the run continues.
- RunDeadlineExceeded marks services the runner had to abandon.
"""

from typing import List, Optional, Sequence


class DiagnosticsError(Exception):
    """Base class for all diagnostics errors."""


# ============================================================================
# PROBE ERRORS
# ============================================================================

class ProbeError(DiagnosticsError):
    """A single probe observation failed."""


class ProbeTimeout(ProbeError):
    """The probe did not finish within its timeout."""

    def __init__(self, timeout_seconds: Optional[float] = None):
        self.timeout_seconds = timeout_seconds
        super().__init__("timeout")


class ProbeTransportError(ProbeError):
    """Target unreachable (connection refused, runtime absent, ...)."""


class ProbeParseError(ProbeError):
    """Target answered but the response could not be interpreted."""


# ============================================================================
# CONFIGURATION ERRORS
# ============================================================================

class ConfigError(DiagnosticsError):
    """Structural problem in the service configuration."""

    kind = "config_error"

    def __init__(self, message: str, services: Sequence[str] = ()):
        self.services: List[str] = list(services)
        super().__init__(message)


class DuplicateServiceError(ConfigError):
    """A service name was registered twice."""

    kind = "duplicate_service"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Service already registered: {name}", services=[name])


class UnknownServiceError(ConfigError):
    """A dependency references a service that is not registered."""

    kind = "unknown_service"

    def __init__(self, name: str, referenced_by: Optional[str] = None):
        self.name = name
        self.referenced_by = referenced_by
        message = f"Unknown service: {name}"
        if referenced_by:
            message += f" (dependency of {referenced_by})"
        services = [referenced_by] if referenced_by else [name]
        super().__init__(message, services=services)


class UnknownProbeKindError(ConfigError):
    """A probe kind is not present in the probe registry."""

    kind = "unknown_probe_kind"

    def __init__(self, probe_kind: str, service: Optional[str] = None):
        self.probe_kind = probe_kind
        super().__init__(
            f"Unknown probe kind: {probe_kind}",
            services=[service] if service else [],
        )


class InvalidProbeConfigError(ConfigError):
    """A probe declaration does not fit its plugin (bad or missing params)."""

    kind = "invalid_probe_config"

    def __init__(self, probe_kind: str, reason: str, service: Optional[str] = None):
        self.probe_kind = probe_kind
        self.reason = reason
        super().__init__(
            f"Invalid configuration for probe {probe_kind}: {reason}",
            services=[service] if service else [],
        )


class CatalogLoadError(ConfigError):
    """The service catalog could not be read or validated."""

    kind = "catalog_load_error"


class CycleDetected(DiagnosticsError):
    """The dependency graph contains a cycle."""

    kind = "cycle_detected"

    def __init__(self, cycle: Sequence[str]):
        self.cycle: List[str] = list(cycle)
        self.services: List[str] = sorted(set(self.cycle))
        super().__init__(f"Dependency cycle detected: {' -> '.join(self.cycle)}")


# ============================================================================
# RUN CONTROL
# ============================================================================

class RunDeadlineExceeded(DiagnosticsError):
    """The run-wide deadline elapsed before every batch completed."""

    def __init__(self, deadline_seconds: float):
        self.deadline_seconds = deadline_seconds
        super().__init__("run deadline exceeded")


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "DiagnosticsError",
    "ProbeError",
    "ProbeTimeout",
    "ProbeTransportError",
    "ProbeParseError",
    "ConfigError",
    "DuplicateServiceError",
    "UnknownServiceError",
    "UnknownProbeKindError",
    "InvalidProbeConfigError",
    "CatalogLoadError",
    "CycleDetected",
    "RunDeadlineExceeded",
]
