# ============================================================================
# HEALTH PROBE MODULE
# ============================================================================
# EPOCH: 1 - SERVICE DIAGNOSTICS
# STATUS: Infrastructure - Probe execution engine
# PURPOSE: Probe plugins, dependency graph, check runner, aggregation
# CREATED: 18 OCT 2026
# ============================================================================
"""
Health Probe Module

Plugin-based diagnostic engine:
- ProbePlugin: Base class for probes (one observation -> one CheckResult)
- ProbeRegistry: Probe kinds by name, used by catalogs
- DependencyGraph: Services and their dependency edges
- CheckRunner: Batched parallel execution with timeouts and a deadline
- Aggregator: Worst-wins fold into a RunSummary

Usage:
    from health import ServiceDescriptor, build_graph, CheckRunner

    redis = ServiceDescriptor.create("redis", probes=[ping_redis])
    api = ServiceDescriptor.create("api", probes=[check_api], depends_on=["redis"])
    summary = await CheckRunner(build_graph([redis, api])).run()

The FastAPI router lives in health.router (import it explicitly).
"""

from health.core import (
    CheckStatus,
    CheckResult,
    ProbePlugin,
    FunctionProbe,
    BoundProbe,
    ServiceDescriptor,
)
from health.registry import (
    ProbeRegistry,
    register_probe,
    get_registry,
)
from health.graph import DependencyGraph, build_graph
from health.collector import ReportCollector
from health.aggregator import Aggregator
from health.executor import CheckRunner

__all__ = [
    # Core types
    "CheckStatus",
    "CheckResult",
    "ProbePlugin",
    "FunctionProbe",
    "BoundProbe",
    "ServiceDescriptor",
    # Registry
    "ProbeRegistry",
    "register_probe",
    "get_registry",
    # Graph
    "DependencyGraph",
    "build_graph",
    # Execution
    "ReportCollector",
    "Aggregator",
    "CheckRunner",
]
