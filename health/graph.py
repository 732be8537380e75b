# ============================================================================
# SERVICE DEPENDENCY GRAPH
# ============================================================================
# EPOCH: 1 - SERVICE DIAGNOSTICS
# STATUS: Core - Dependency resolution and batch planning
# PURPOSE: Order services so dependencies are probed before dependents
# CREATED: 18 OCT 2026
# ============================================================================
"""
Service Dependency Graph

Directed graph over ServiceDescriptors.
An edge (api, redis) means "api requires redis to be healthy".

Features:
- Registration with duplicate / unknown-name detection
- Topological sort (Kahn) with cycle detection
- Batch planning: services whose dependencies sit in earlier batches
- Cycle tolerance: a cycle is reported once; the services it strands run
  together in a final, unordered batch

Structural problems never abort a run. build_graph() turns them into
ConfigDiagnostic entries and marks the affected services so the runner can
give them an `unknown` dependency status.
"""

from collections import defaultdict, deque
from typing import Dict, Iterable, List, Optional, Set

from core.errors import ConfigError, CycleDetected, DuplicateServiceError, UnknownServiceError
from core.logging import ComponentType, get_logger
from core.models.report import ConfigDiagnostic
from health.core import ServiceDescriptor

logger = get_logger(__name__, ComponentType.GRAPH)


class DependencyGraph:
    """
    Dependency graph for one diagnostic run.

    Registration order is kept and used to break ties, so batch plans and
    reports are deterministic.
    """

    def __init__(self):
        self._services: Dict[str, ServiceDescriptor] = {}

        # Service -> services it depends on
        self._dependencies: Dict[str, List[str]] = defaultdict(list)

        # Service -> services that depend on it
        self._dependents: Dict[str, List[str]] = defaultdict(list)

        # Service -> dependency names dropped because they were not registered
        self.unresolved: Dict[str, Set[str]] = defaultdict(set)

        self.diagnostics: List[ConfigDiagnostic] = []
        self.cycle: Optional[CycleDetected] = None

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def add_service(self, descriptor: ServiceDescriptor) -> None:
        """
        Register a service node.

        Raises:
            DuplicateServiceError: If the name is already registered
        """
        if descriptor.name in self._services:
            raise DuplicateServiceError(descriptor.name)
        self._services[descriptor.name] = descriptor

    def add_dependency(self, from_service: str, to_service: str) -> None:
        """
        Add an edge: from_service requires to_service.

        Raises:
            UnknownServiceError: If either name is unregistered
        """
        if from_service not in self._services:
            raise UnknownServiceError(from_service)
        if to_service not in self._services:
            raise UnknownServiceError(to_service, referenced_by=from_service)

        if to_service in self._dependencies[from_service]:
            return
        self._dependencies[from_service].append(to_service)
        self._dependents[to_service].append(from_service)

    def record(self, error: Exception) -> None:
        """Record a structural problem as a diagnostic entry."""
        logger.warning(f"Configuration problem: {error}")
        self.diagnostics.append(ConfigDiagnostic.from_error(error))

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, name: str) -> ServiceDescriptor:
        return self._services[name]

    def services(self) -> List[ServiceDescriptor]:
        """All services in registration order."""
        return list(self._services.values())

    def names(self) -> List[str]:
        return list(self._services)

    def get_dependencies(self, name: str) -> List[str]:
        """Services this service depends on."""
        return list(self._dependencies.get(name, []))

    def get_dependents(self, name: str) -> List[str]:
        """Services that depend on this service."""
        return list(self._dependents.get(name, []))

    def __len__(self) -> int:
        return len(self._services)

    def __contains__(self, name: str) -> bool:
        return name in self._services

    # ------------------------------------------------------------------
    # Ordering
    # ------------------------------------------------------------------

    def topological_order(self) -> List[str]:
        """
        Order services so every dependency precedes its dependents.

        On a cycle, returns the order of the acyclic portion only and records
        CycleDetected once (non-fatal).
        """
        position = {name: i for i, name in enumerate(self._services)}
        in_degree = {name: len(self._dependencies.get(name, [])) for name in self._services}

        queue = deque(name for name in self._services if in_degree[name] == 0)
        sorted_nodes: List[str] = []

        while queue:
            node = queue.popleft()
            sorted_nodes.append(node)

            for dependent in sorted(self._dependents.get(node, []), key=position.get):
                in_degree[dependent] -= 1
                if in_degree[dependent] == 0:
                    queue.append(dependent)

        if len(sorted_nodes) != len(self._services) and self.cycle is None:
            remaining = [n for n in self._services if n not in set(sorted_nodes)]
            self.cycle = CycleDetected(self._find_cycle(remaining))
            self.record(self.cycle)

        return sorted_nodes

    def batches(self) -> List[List[str]]:
        """
        Group services into batches that can be probed concurrently.

        A service lands in the batch after the latest of its dependencies.
        Services stranded by a cycle form one final batch; edges among them
        are ignored for ordering.
        """
        order = self.topological_order()
        level: Dict[str, int] = {}
        for name in order:
            deps = self._dependencies.get(name, [])
            level[name] = 1 + max((level[d] for d in deps), default=-1)

        grouped: Dict[int, List[str]] = defaultdict(list)
        for name in self._services:
            if name in level:
                grouped[level[name]].append(name)

        plan = [grouped[i] for i in sorted(grouped)]

        stranded = [name for name in self._services if name not in level]
        if stranded:
            plan.append(stranded)

        return plan

    def cycle_members(self) -> Set[str]:
        """Services that lie on a dependency cycle."""
        order = set(self.topological_order())
        remaining = [n for n in self._services if n not in order]
        return {n for n in remaining if self._reaches(n, n, set(remaining))}

    def _reaches(self, start: str, goal: str, allowed: Set[str]) -> bool:
        stack = list(self._dependencies.get(start, []))
        seen: Set[str] = set()
        while stack:
            node = stack.pop()
            if node == goal:
                return True
            if node in seen or node not in allowed:
                continue
            seen.add(node)
            stack.extend(self._dependencies.get(node, []))
        return False

    def _find_cycle(self, remaining: List[str]) -> List[str]:
        """Walk dependency edges inside the stranded set until a node repeats."""
        allowed = set(remaining)
        for start in remaining:
            path: List[str] = []
            index: Dict[str, int] = {}
            node: Optional[str] = start
            while node is not None and node not in index:
                index[node] = len(path)
                path.append(node)
                node = next(
                    (d for d in self._dependencies.get(node, []) if d in allowed),
                    None,
                )
            if node is not None:
                return path[index[node]:] + [node]
        return list(remaining)


# ============================================================================
# GRAPH BUILDER
# ============================================================================

def build_graph(descriptors: Iterable[ServiceDescriptor]) -> DependencyGraph:
    """
    Build a dependency graph, recording configuration errors instead of
    raising them.

    - A duplicate service name keeps the first descriptor
    - A dependency on an unknown service is dropped and remembered in
      graph.unresolved
    - A cycle is detected once and recorded

    Args:
        descriptors: Service descriptors in report order

    Returns:
        DependencyGraph instance
    """
    graph = DependencyGraph()

    for descriptor in descriptors:
        try:
            graph.add_service(descriptor)
        except DuplicateServiceError as e:
            graph.record(e)

    for descriptor in graph.services():
        for dependency in sorted(descriptor.depends_on):
            try:
                graph.add_dependency(descriptor.name, dependency)
            except ConfigError as e:
                graph.record(e)
                graph.unresolved[descriptor.name].add(dependency)

    graph.topological_order()
    logger.debug(f"Built dependency graph with {len(graph)} services")
    return graph


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "DependencyGraph",
    "build_graph",
]
