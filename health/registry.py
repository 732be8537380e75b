# ============================================================================
# PROBE REGISTRY
# ============================================================================
# EPOCH: 1 - SERVICE DIAGNOSTICS
# STATUS: Infrastructure - Probe plugin registration
# PURPOSE: Register and discover probe kinds by name
# CREATED: 18 OCT 2026
# ============================================================================
"""
Probe Registry

Maps probe kinds (the `kind:` field of a catalog probe) to plugin classes.
The registry holds code, not run state: it is populated at import time by
the @register_probe decorator and never mutated by a run.

Usage:
    # Decorator registration
    @register_probe("container_running")
    class ContainerRunningProbe(ProbePlugin):
        ...

    # Instantiate from catalog config
    registry = get_registry()
    plugin = registry.create("queue_depth", queue="worker_queue", warn_above=100)
"""

import logging
from typing import Any, Dict, List, Optional, Type

from core.errors import UnknownProbeKindError
from health.core import ProbePlugin

logger = logging.getLogger(__name__)


class ProbeRegistry:
    """
    Registry for probe plugin classes.

    Kinds are unique; re-registering a kind replaces the previous class.
    """

    def __init__(self):
        self._kinds: Dict[str, Type[ProbePlugin]] = {}

    def register(self, kind: str, probe_class: Type[ProbePlugin]) -> None:
        """
        Register a probe plugin class under a kind.

        Args:
            kind: Registry key used by catalogs
            probe_class: ProbePlugin subclass
        """
        if kind in self._kinds and self._kinds[kind] is not probe_class:
            logger.warning(f"Overwriting probe kind: {kind}")

        self._kinds[kind] = probe_class
        logger.debug(f"Registered probe kind: {kind} ({probe_class.__name__})")

    def unregister(self, kind: str) -> bool:
        """
        Remove a probe kind.

        Returns:
            True if the kind was removed
        """
        if kind in self._kinds:
            del self._kinds[kind]
            return True
        return False

    def get(self, kind: str) -> Optional[Type[ProbePlugin]]:
        """Get plugin class by kind."""
        return self._kinds.get(kind)

    def create(self, kind: str, service: Optional[str] = None, **params: Any) -> ProbePlugin:
        """
        Instantiate a probe plugin.

        Args:
            kind: Registered probe kind
            service: Service name, for error reporting
            **params: Constructor arguments from the catalog

        Raises:
            UnknownProbeKindError: If the kind is not registered
            TypeError/ValueError: If params do not fit the plugin
        """
        probe_class = self._kinds.get(kind)
        if probe_class is None:
            raise UnknownProbeKindError(kind, service=service)
        return probe_class(**params)

    def kinds(self) -> List[str]:
        """All registered kinds, sorted."""
        return sorted(self._kinds)

    def describe(self) -> Dict[str, str]:
        """Kind -> one-line description."""
        return {kind: self._kinds[kind].description for kind in self.kinds()}

    def __len__(self) -> int:
        return len(self._kinds)

    def __contains__(self, kind: str) -> bool:
        return kind in self._kinds


# ============================================================================
# GLOBAL REGISTRY & DECORATOR
# ============================================================================

_registry: Optional[ProbeRegistry] = None


def get_registry() -> ProbeRegistry:
    """Get the global probe registry (import health.probes for built-ins)."""
    global _registry
    if _registry is None:
        _registry = ProbeRegistry()
    return _registry


def register_probe(kind: str, description: Optional[str] = None):
    """
    Decorator to register a probe plugin class.

    Args:
        kind: Registry key used by catalogs
        description: Override the class description

    Example:
        @register_probe("redis_ping")
        class RedisPingProbe(ProbePlugin):
            async def probe(self, target, timeout) -> CheckResult:
                ...
    """
    def decorator(cls: Type[ProbePlugin]) -> Type[ProbePlugin]:
        cls.kind = kind
        if description is not None:
            cls.description = description
        elif not cls.description and cls.__doc__:
            cls.description = cls.__doc__.strip().splitlines()[0]

        get_registry().register(kind, cls)
        return cls

    return decorator


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "ProbeRegistry",
    "get_registry",
    "register_probe",
]
