# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================
# EPOCH: 1 - SERVICE DIAGNOSTICS
# STATUS: Core - Default configuration values
# PURPOSE: Centralized defaults for timeouts, execution, catalog, reports
# CREATED: 18 OCT 2026
# ============================================================================
"""
Configuration Defaults

Provides sensible defaults for a diagnostic run.
These can be overridden via environment variables or CLI flags.

Design:
- Immutable dataclasses for defaults
- Environment variable overrides
- Type-safe access
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, Optional

from catalogs import default_catalog_path


class ReportFormat(str, Enum):
    """Output formats understood by the reporters."""
    TEXT = "text"
    JSON = "json"


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class TimeoutDefaults:
    """
    Defaults for probe and run timeouts.

    Per-probe-kind timeout settings.
    """
    # Default probe timeout (seconds)
    probe_timeout_seconds: float = 10.0

    # Whole-run deadline (seconds)
    run_deadline_seconds: float = 120.0

    # Probe kinds that are known to be slow
    probe_timeouts: Dict[str, float] = field(default_factory=lambda: {
        "container_logs": 20.0,
        "gpu_memory": 15.0,
        "mongo_ping": 15.0,
        "mongo_collection": 15.0,
    })

    def get_timeout(self, probe_kind: str) -> float:
        """Get timeout for a probe kind."""
        return self.probe_timeouts.get(probe_kind, self.probe_timeout_seconds)

    @classmethod
    def from_env(cls) -> "TimeoutDefaults":
        """Create from environment variables."""
        return cls(
            probe_timeout_seconds=float(os.getenv("DIAG_PROBE_TIMEOUT", 10.0)),
            run_deadline_seconds=float(os.getenv("DIAG_RUN_DEADLINE", 120.0)),
        )


@dataclass(frozen=True)
class ExecutionDefaults:
    """
    Defaults for the check runner.

    Controls fan-out inside a topological batch.
    """
    max_parallel: int = 10

    @classmethod
    def from_env(cls) -> "ExecutionDefaults":
        """Create from environment variables."""
        return cls(
            max_parallel=int(os.getenv("DIAG_MAX_PARALLEL", 10)),
        )


@dataclass(frozen=True)
class CatalogDefaults:
    """
    Defaults for locating the service catalog and external binaries.
    """
    catalog_path: Path = field(default_factory=default_catalog_path)
    docker_binary: str = "docker"

    @classmethod
    def from_env(cls) -> "CatalogDefaults":
        """Create from environment variables."""
        catalog = os.getenv("DIAG_CATALOG")
        return cls(
            catalog_path=Path(catalog) if catalog else default_catalog_path(),
            docker_binary=os.getenv("DIAG_DOCKER_BIN", "docker"),
        )


@dataclass(frozen=True)
class ReportDefaults:
    """
    Defaults for report rendering.
    """
    format: ReportFormat = ReportFormat.TEXT
    color: bool = False

    @classmethod
    def from_env(cls) -> "ReportDefaults":
        """Create from environment variables."""
        return cls(
            format=ReportFormat(os.getenv("DIAG_REPORT_FORMAT", "text").lower()),
            color=_env_bool("DIAG_COLOR", False),
        )


# ============================================================================
# GLOBAL DEFAULTS INSTANCE
# ============================================================================

@dataclass
class Defaults:
    """Container for all default configurations."""
    timeouts: TimeoutDefaults = field(default_factory=TimeoutDefaults)
    execution: ExecutionDefaults = field(default_factory=ExecutionDefaults)
    catalog: CatalogDefaults = field(default_factory=CatalogDefaults)
    report: ReportDefaults = field(default_factory=ReportDefaults)

    @classmethod
    def from_env(cls) -> "Defaults":
        """Create all defaults from environment variables."""
        return cls(
            timeouts=TimeoutDefaults.from_env(),
            execution=ExecutionDefaults.from_env(),
            catalog=CatalogDefaults.from_env(),
            report=ReportDefaults.from_env(),
        )


_defaults: Optional[Defaults] = None


def get_defaults() -> Defaults:
    """Get global defaults instance."""
    global _defaults
    if _defaults is None:
        _defaults = Defaults.from_env()
    return _defaults


def reset_defaults() -> None:
    """Reset defaults (for testing)."""
    global _defaults
    _defaults = None


# ============================================================================
# EXPORTS
# ============================================================================

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
