# ============================================================================
# CATALOG SERVICE TESTS
# ============================================================================
# EPOCH: 1 - SERVICE DIAGNOSTICS
# STATUS: Tests - Catalog loading and descriptor building
# PURPOSE: Verify YAML loading, probe resolution and configuration errors
# CREATED: 18 OCT 2026
# ============================================================================
"""
Catalog Service Tests

Run with:
    pytest tests/test_catalog_service.py -v
"""

import asyncio
from unittest.mock import patch

import pytest

from catalogs import default_catalog_path
from core.config import CatalogDefaults, TimeoutDefaults, reset_defaults
from core.contracts import CheckStatus
from core.errors import CatalogLoadError
from core.models import ServiceCatalog
from health.probes.datastore import QueueDepthProbe
from services.catalog_service import CatalogService, ConfigErrorProbe
from services.diagnostic_service import DiagnosticService


CATALOG_YAML = """
catalog_id: demo
name: Demo Stack
sections:
  core: Core Services
services:
  redis:
    section: core
    target: {container: demo-redis-1}
    probes:
      - kind: container_running
      - kind: queue_depth
        params: {queue: jobs, warn_above: 5}
  api:
    section: core
    target: {container: demo-api-1, url: "http://localhost:8000"}
    depends_on: redis
    probes:
      - kind: http_health
        name: health endpoint
        timeout_seconds: 3
        params: {path: /health}
      - kind: container_reachable
        target: {container: demo-api-sidecar-1}
        params: {host: redis}
"""


@pytest.fixture
def service():
    timeouts = TimeoutDefaults(probe_timeout_seconds=7.0, probe_timeouts={"queue_depth": 12.0})
    return CatalogService(timeouts=timeouts)


@pytest.fixture
def catalog_file(tmp_path):
    path = tmp_path / "demo.yaml"
    path.write_text(CATALOG_YAML)
    return path


# ============================================================================
# LOADING
# ============================================================================

class TestLoad:
    """YAML -> ServiceCatalog."""

    def test_load(self, service, catalog_file):
        catalog = service.load(catalog_file)
        assert catalog.catalog_id == "demo"
        assert catalog.service_names() == ["redis", "api"]
        assert catalog.sections == {"core": "Core Services"}
        assert catalog.get_service("api").depends_on == ["redis"]

    def test_missing_file(self, service, tmp_path):
        with pytest.raises(CatalogLoadError) as exc_info:
            service.load(tmp_path / "missing.yaml")
        assert "Cannot read catalog" in str(exc_info.value)

    def test_invalid_yaml(self, service, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("services: [unclosed\n")
        with pytest.raises(CatalogLoadError):
            service.load(path)

    def test_not_a_mapping(self, service):
        with pytest.raises(CatalogLoadError):
            service.parse(["redis", "api"])

    def test_schema_violation(self, service):
        with pytest.raises(CatalogLoadError):
            service.parse({"services": {"redis": {"probes": [{"params": {}}]}}})

    @pytest.mark.parametrize("entry", [[1, 2], "redis:6379", 42])
    def test_service_entry_not_a_mapping(self, service, entry):
        with pytest.raises(CatalogLoadError) as exc_info:
            service.parse({"services": {"redis": entry}})
        assert "must be a mapping" in str(exc_info.value)

    def test_empty_service_entry_allowed(self, service):
        catalog = service.parse({"services": {"redis": None}})
        assert catalog.service_names() == ["redis"]

    def test_ids_default_from_source(self, service):
        catalog = service.parse({"services": {}}, source="/etc/diag/staging.yaml")
        assert catalog.catalog_id == "staging"
        assert catalog.name == "staging"

    def test_default_catalog_resolves_every_probe(self):
        service = CatalogService()
        catalog = service.load(default_catalog_path())
        descriptors, diagnostics = service.build_descriptors(catalog)

        assert diagnostics == []
        assert len(descriptors) == len(catalog.services)
        for descriptor in descriptors:
            for bound in descriptor.probes:
                assert not isinstance(bound.plugin, ConfigErrorProbe)


# ============================================================================
# DEFAULT CATALOG LOCATION
# ============================================================================

class TestDefaultCatalog:
    """The bundled catalog is found regardless of the working directory."""

    def test_bundled_file(self):
        path = default_catalog_path()
        assert path.name == "aime.yaml"
        assert path.is_file()
        assert path.parent.name == "catalogs"

    def test_defaults_use_bundled_catalog(self, monkeypatch):
        monkeypatch.delenv("DIAG_CATALOG", raising=False)
        assert CatalogDefaults().catalog_path == default_catalog_path()
        assert CatalogDefaults.from_env().catalog_path == default_catalog_path()

    def test_env_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv("DIAG_CATALOG", str(tmp_path / "site.yaml"))
        assert CatalogDefaults.from_env().catalog_path == tmp_path / "site.yaml"

    def test_load_without_path_from_other_directory(self, monkeypatch, tmp_path):
        monkeypatch.delenv("DIAG_CATALOG", raising=False)
        monkeypatch.chdir(tmp_path)
        reset_defaults()
        try:
            catalog = CatalogService().load()
        finally:
            reset_defaults()
        assert catalog.catalog_id == "aime"



# ============================================================================
# DESCRIPTOR BUILDING
# ============================================================================

class TestBuildDescriptors:
    """ServiceConfig -> ServiceDescriptor with resolved probes."""

    def test_descriptors_in_catalog_order(self, service, catalog_file):
        descriptors, diagnostics = service.build_descriptors(service.load(catalog_file))
        assert [d.name for d in descriptors] == ["redis", "api"]
        assert descriptors[1].depends_on == frozenset({"redis"})
        assert descriptors[1].section == "core"
        assert diagnostics == []

    def test_params_reach_plugin(self, service, catalog_file):
        descriptors, _ = service.build_descriptors(service.load(catalog_file))
        plugin = descriptors[0].probes[1].plugin
        assert isinstance(plugin, QueueDepthProbe)
        assert plugin.queue == "jobs"
        assert plugin.warn_above == 5

    def test_display_names(self, service, catalog_file):
        descriptors, _ = service.build_descriptors(service.load(catalog_file))
        assert [p.name for p in descriptors[1].probes] == ["health endpoint", "container_reachable"]

    def test_probe_target_override(self, service, catalog_file):
        descriptors, _ = service.build_descriptors(service.load(catalog_file))
        api = descriptors[1]
        assert api.probes[0].target.container == "demo-api-1"
        assert api.probes[1].target.container == "demo-api-sidecar-1"
        # Unset override fields fall through to the service target
        assert api.probes[1].target.url == "http://localhost:8000"

    def test_timeout_precedence(self, service, catalog_file):
        catalog = service.load(catalog_file)

        descriptors, _ = service.build_descriptors(catalog)
        redis, api = descriptors
        assert redis.probes[0].timeout_seconds == 7.0    # default
        assert redis.probes[1].timeout_seconds == 12.0   # per-kind
        assert api.probes[0].timeout_seconds == 3.0      # probe

        descriptors, _ = service.build_descriptors(catalog, probe_timeout=1.5)
        redis, api = descriptors
        assert redis.probes[0].timeout_seconds == 1.5
        assert redis.probes[1].timeout_seconds == 1.5
        assert api.probes[0].timeout_seconds == 3.0

    def test_unknown_kind_becomes_diagnostic_and_error(self, service):
        catalog = service.parse({
            "services": {
                "kafka": {"probes": [{"kind": "kafka_lag"}, {"kind": "command_available", "params": {"command": "sh"}}]},
            },
        })
        descriptors, diagnostics = service.build_descriptors(catalog)

        assert [d.kind for d in diagnostics] == ["unknown_probe_kind"]
        assert diagnostics[0].services == ["kafka"]
        probes = descriptors[0].probes
        assert isinstance(probes[0].plugin, ConfigErrorProbe)
        # Remaining probes of the service are still built
        assert not isinstance(probes[1].plugin, ConfigErrorProbe)

        result = asyncio.run(probes[0].run())
        assert result.status == CheckStatus.ERROR
        assert "kafka_lag" in result.message
        assert result.probe == "kafka_lag"

    def test_bad_params_become_diagnostic(self, service):
        catalog = service.parse({
            "services": {
                "redis": {"probes": [{"kind": "queue_depth", "params": {"queue_name": "x"}}]},
                "host": {"probes": [{"kind": "command_available", "params": {"command": "jq", "missing_status": "fatal"}}]},
            },
        })
        descriptors, diagnostics = service.build_descriptors(catalog)

        assert [d.kind for d in diagnostics] == ["invalid_probe_config", "invalid_probe_config"]
        assert [d.services for d in diagnostics] == [["redis"], ["host"]]
        assert all(isinstance(d.probes[0].plugin, ConfigErrorProbe) for d in descriptors)

    def test_list_kinds(self, service):
        kinds = service.list_kinds()
        assert "redis_ping" in kinds
        assert kinds["file_exists"] == "File exists."


# ============================================================================
# DIAGNOSTIC SERVICE
# ============================================================================

class TestDiagnosticService:
    """Catalog -> RunSummary."""

    def _catalog(self):
        return ServiceCatalog.model_validate({
            "catalog_id": "host",
            "name": "Host",
            "sections": {"host": "System Requirements"},
            "services": {
                "tools": {
                    "section": "host",
                    "probes": [
                        {"kind": "command_available", "params": {"command": "docker"}},
                        {"kind": "command_available", "params": {"command": "jq", "missing_status": "warning"}},
                    ],
                },
                "broken": {"probes": [{"kind": "kafka_lag"}]},
                "other": {"depends_on": ["tools"], "probes": []},
            },
        })

    def _run(self, **kwargs):
        service = DiagnosticService()
        with patch("health.probes.network.shutil.which", side_effect=lambda c: "/usr/bin/docker" if c == "docker" else None):
            return asyncio.run(service.run(self._catalog(), **kwargs))

    def test_full_run(self):
        summary = self._run(run_id="run-1")

        assert summary.run_id == "run-1"
        assert summary.catalog == "host"
        assert summary.sections == {"host": "System Requirements"}
        assert summary.per_service["tools"].status == CheckStatus.WARNING
        assert summary.per_service["broken"].status == CheckStatus.ERROR
        assert summary.overall == CheckStatus.ERROR
        assert [d.kind for d in summary.diagnostics] == ["unknown_probe_kind"]

    def test_restricted_run_includes_dependencies(self):
        summary = self._run(services=["other"])
        assert list(summary.per_service) == ["tools", "other"]

    def test_restricted_run_unknown_service(self):
        with pytest.raises(KeyError):
            self._run(services=["kafka"])
