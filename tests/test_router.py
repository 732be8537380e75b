# ============================================================================
# DIAGNOSTICS ROUTER TESTS
# ============================================================================
# EPOCH: 1 - SERVICE DIAGNOSTICS
# STATUS: Tests - HTTP endpoints
# PURPOSE: Verify status code mapping, 404s and catalog failures
# CREATED: 18 OCT 2026
# ============================================================================
"""
Diagnostics Router Tests

Uses FastAPI TestClient with the DiagnosticService dependency overridden
by a mock.

Run with:
    pytest tests/test_router.py -v
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from core.contracts import CheckStatus
from core.errors import CatalogLoadError
from core.models import CheckResult, ServiceCatalog, ServiceReport
from health.aggregator import Aggregator
from health.router import diagnostics_router, get_diagnostic_service
from main import create_app
from services.catalog_service import CatalogService


# ============================================================================
# FIXTURES
# ============================================================================

def _summary(status):
    report = ServiceReport(name="redis")
    report.add_result(CheckResult(status=status, message=status.value))
    return Aggregator().aggregate([report], run_id="http-run")


def _service_mock(status=CheckStatus.SUCCESS):
    service = MagicMock()
    service.load_catalog.return_value = ServiceCatalog.model_validate({
        "catalog_id": "test",
        "name": "Test",
        "services": {"redis": {}, "api": {"depends_on": "redis"}},
    })
    service.run = AsyncMock(return_value=_summary(status))
    return service


def _client(service):
    app = FastAPI()
    app.include_router(diagnostics_router)
    app.dependency_overrides[get_diagnostic_service] = lambda: service
    return TestClient(app)


# ============================================================================
# FULL RUN
# ============================================================================

class TestFullRun:
    """GET /diagnostics."""

    @pytest.mark.parametrize("status,code", [
        (CheckStatus.SUCCESS, 200),
        (CheckStatus.WARNING, 206),
        (CheckStatus.ERROR, 503),
    ])
    def test_status_mapping(self, status, code):
        response = _client(_service_mock(status)).get("/diagnostics")
        assert response.status_code == code
        assert response.json()["overall"] == status.value
        assert response.json()["exit_code"] == status.exit_code

    def test_body(self):
        body = _client(_service_mock()).get("/diagnostics").json()
        assert body["run_id"] == "http-run"
        assert body["per_service"]["redis"]["status"] == "success"
        assert "version" in body

    def test_catalog_error(self):
        service = _service_mock()
        service.load_catalog.side_effect = CatalogLoadError("Cannot read catalog x.yaml")

        response = _client(service).get("/diagnostics")
        assert response.status_code == 503
        assert response.json() == {"error": "Cannot read catalog x.yaml", "kind": "catalog_load_error"}
        service.run.assert_not_called()

    def test_service_entry_not_a_mapping(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("catalog_id: bad\nservices:\n  redis: [1, 2]\n")
        service = _service_mock()
        service.load_catalog.side_effect = lambda: CatalogService().load(path)

        response = _client(service).get("/diagnostics")
        assert response.status_code == 503
        assert response.json()["kind"] == "catalog_load_error"
        service.run.assert_not_called()


# ============================================================================
# SINGLE SERVICE
# ============================================================================

class TestSingleService:
    """GET /diagnostics/{service}."""

    def test_runs_requested_service(self):
        service = _service_mock()
        response = _client(service).get("/diagnostics/api")

        assert response.status_code == 200
        assert service.run.call_args.kwargs["services"] == ["api"]

    def test_unknown_service(self):
        service = _service_mock()
        response = _client(service).get("/diagnostics/kafka")

        assert response.status_code == 404
        assert "kafka" in response.json()["error"]
        service.run.assert_not_called()


# ============================================================================
# APPLICATION
# ============================================================================

class TestApplication:
    """main.create_app wiring."""

    def test_livez(self):
        response = TestClient(create_app()).get("/livez")
        assert response.status_code == 200
        assert response.json()["status"] == "alive"

    def test_root(self):
        body = TestClient(create_app()).get("/").json()
        assert body["docs"] == "/docs"
