# ============================================================================
# BUILT-IN PROBES
# ============================================================================
# EPOCH: 1 - SERVICE DIAGNOSTICS
# STATUS: Infrastructure - Probe implementations
# PURPOSE: Register every built-in probe kind
# CREATED: 18 OCT 2026
# ============================================================================
"""
Built-in Probes

Container Probes (docker CLI):
- container_running, container_exec, container_reachable,
  container_processes, container_logs, container_resources

HTTP Probes (httpx):
- http_health

Host Probes:
- port_available, command_available

Datastore Probes (CLI inside the container):
- redis_ping, redis_persistence, queue_depth
- mongo_ping, mongo_collection

Filesystem Probes:
- file_exists, directory_exists, file_glob, env_file

GPU Probes:
- gpu_memory

Import this module to register all probes:
    import health.probes
"""

# Import all probe modules to trigger registration
from health.probes.container import (
    ContainerRunningProbe,
    ContainerExecProbe,
    ContainerReachableProbe,
    ContainerProcessesProbe,
    ContainerLogsProbe,
    ContainerResourcesProbe,
)
from health.probes.http import HttpHealthProbe
from health.probes.network import PortAvailableProbe, CommandAvailableProbe
from health.probes.datastore import (
    RedisPingProbe,
    RedisPersistenceProbe,
    QueueDepthProbe,
    MongoPingProbe,
    MongoCollectionProbe,
)
from health.probes.filesystem import (
    FileExistsProbe,
    DirectoryExistsProbe,
    FileGlobProbe,
    EnvFileProbe,
)
from health.probes.gpu import GpuMemoryProbe

__all__ = [
    # Container
    "ContainerRunningProbe",
    "ContainerExecProbe",
    "ContainerReachableProbe",
    "ContainerProcessesProbe",
    "ContainerLogsProbe",
    "ContainerResourcesProbe",
    # HTTP
    "HttpHealthProbe",
    # Host
    "PortAvailableProbe",
    "CommandAvailableProbe",
    # Datastore
    "RedisPingProbe",
    "RedisPersistenceProbe",
    "QueueDepthProbe",
    "MongoPingProbe",
    "MongoCollectionProbe",
    # Filesystem
    "FileExistsProbe",
    "DirectoryExistsProbe",
    "FileGlobProbe",
    "EnvFileProbe",
    # GPU
    "GpuMemoryProbe",
]
