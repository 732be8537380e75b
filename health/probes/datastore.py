# ============================================================================
# DATASTORE PROBES
# ============================================================================
# EPOCH: 1 - SERVICE DIAGNOSTICS
# STATUS: Infrastructure - Redis and MongoDB probes
# PURPOSE: Ping, persistence, queue depth and collection checks
# CREATED: 18 OCT 2026
# ============================================================================
"""
Datastore Probes

Run the datastore's own CLI inside its container (redis-cli, mongosh), so
the diagnostics host needs no client libraries or published ports.

Redis:
- redis_ping: PING answers PONG
- redis_persistence: RDB or AOF persistence is enabled
- queue_depth: list length under a warning threshold

MongoDB:
- mongo_ping: adminCommand ping answers ok
- mongo_collection: a required collection exists
"""

from typing import Optional

from core.errors import ProbeParseError
from core.models.result import CheckResult
from core.models.target import Target
from health.probes.container import ContainerProbe
from health.probes.process import run_docker
from health.registry import register_probe


# ============================================================================
# REDIS
# ============================================================================

@register_probe("redis_ping")
class RedisPingProbe(ContainerProbe):
    """Redis answers PING."""

    async def probe(self, target: Target, timeout: float) -> CheckResult:
        name = self.container(target)
        output = await run_docker(["exec", name, "redis-cli", "ping"], timeout)
        if output.ok and "PONG" in output.stdout:
            return CheckResult.success("Redis is running")
        return CheckResult.error("Redis is not responding", output=output.excerpt())


@register_probe("redis_persistence")
class RedisPersistenceProbe(ContainerProbe):
    """Redis has RDB snapshots or AOF enabled."""

    async def probe(self, target: Target, timeout: float) -> CheckResult:
        name = self.container(target)
        output = await run_docker(["exec", name, "redis-cli", "info", "persistence"], timeout)
        if not output.ok:
            return CheckResult.error("Could not read Redis persistence info", output=output.excerpt())

        info = {}
        for line in output.stdout.splitlines():
            key, sep, value = line.strip().partition(":")
            if sep:
                info[key] = value

        aof = info.get("aof_enabled") == "1"
        rdb = "rdb_last_save_time" in info
        if aof or rdb:
            return CheckResult.success(
                "Redis persistence is enabled",
                aof_enabled=aof,
                rdb_last_save_time=info.get("rdb_last_save_time"),
            )
        return CheckResult.warning("Redis persistence might not be enabled")


@register_probe("queue_depth")
class QueueDepthProbe(ContainerProbe):
    """Redis list used as a work queue is below a size threshold."""

    def __init__(self, queue: str = "worker_queue", warn_above: int = 100):
        self.queue = queue
        self.warn_above = warn_above

    async def probe(self, target: Target, timeout: float) -> CheckResult:
        name = self.container(target)
        output = await run_docker(["exec", name, "redis-cli", "LLEN", self.queue], timeout)
        if not output.ok:
            return CheckResult.error(
                f"Could not read length of queue {self.queue}",
                output=output.excerpt(),
            )

        raw = output.stdout.strip()
        try:
            depth = int(raw)
        except ValueError as e:
            raise ProbeParseError(f"could not parse queue length: {raw[:50]!r}") from e

        if depth > self.warn_above:
            return CheckResult.warning(
                f"Queue {self.queue} is large: {depth} items",
                depth=depth,
                warn_above=self.warn_above,
            )
        return CheckResult.success(f"Queue {self.queue} size: {depth}", depth=depth)


# ============================================================================
# MONGODB
# ============================================================================

@register_probe("mongo_ping")
class MongoPingProbe(ContainerProbe):
    """MongoDB answers adminCommand ping."""

    async def probe(self, target: Target, timeout: float) -> CheckResult:
        name = self.container(target)
        output = await run_docker(
            ["exec", name, "mongosh", "--quiet", "--eval", "db.adminCommand('ping').ok"],
            timeout,
        )
        if output.ok and output.stdout.strip().endswith("1"):
            return CheckResult.success("MongoDB is running")
        return CheckResult.error("MongoDB is not responding", output=output.excerpt())


@register_probe("mongo_collection")
class MongoCollectionProbe(ContainerProbe):
    """A required MongoDB collection exists."""

    def __init__(self, collection: str, database: Optional[str] = None):
        self.collection = collection
        self.database = database

    async def probe(self, target: Target, timeout: float) -> CheckResult:
        name = self.container(target)
        args = ["exec", name, "mongosh", "--quiet"]
        if self.database:
            args.append(self.database)
        args += ["--eval", "db.getCollectionNames().join('\\n')"]

        output = await run_docker(args, timeout)
        if not output.ok:
            return CheckResult.error("Could not list MongoDB collections", output=output.excerpt())

        collections = {line.strip() for line in output.stdout.splitlines() if line.strip()}
        if self.collection in collections:
            return CheckResult.success(f"Collection {self.collection} exists")
        return CheckResult.warning(
            f"Missing required collection: {self.collection}",
            collections=sorted(collections),
        )


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "RedisPingProbe",
    "RedisPersistenceProbe",
    "QueueDepthProbe",
    "MongoPingProbe",
    "MongoCollectionProbe",
]
