# ============================================================================
# CONTRACT & MODEL TESTS
# ============================================================================
# EPOCH: 1 - SERVICE DIAGNOSTICS
# STATUS: Tests - Status enums, targets, check results
# PURPOSE: Verify worst-wins ordering and the immutable value types
# CREATED: 18 OCT 2026
# ============================================================================
"""
Contract & Model Tests

Run with:
    pytest tests/test_contracts.py -v
"""

import itertools

import pytest
from pydantic import ValidationError

from core.contracts import CheckStatus, DependencyStatus, TargetKind
from core.models import CheckResult, ServiceCatalog, Target
from core.models.result import TIMEOUT_MESSAGE


S, W, E = CheckStatus.SUCCESS, CheckStatus.WARNING, CheckStatus.ERROR


# ============================================================================
# CHECK STATUS
# ============================================================================

class TestCheckStatus:
    """Worst-wins ordering, exit codes and glyphs."""

    def test_ordering_by_severity(self):
        assert S < W < E
        assert E > W > S
        assert max([W, E, S]) == E

    def test_ordering_is_not_alphabetical(self):
        # "error" < "success" alphabetically
        assert E > S
        assert sorted([E, S, W]) == [S, W, E]

    def test_worst_of_empty_is_success(self):
        assert CheckStatus.worst([]) == S

    def test_worst_wins(self):
        assert CheckStatus.worst([S, S]) == S
        assert CheckStatus.worst([S, W, S]) == W
        assert CheckStatus.worst([W, E, S]) == E

    def test_worst_is_monotonic(self):
        """Adding a result never makes the fold better."""
        for length in range(0, 4):
            for statuses in itertools.product([S, W, E], repeat=length):
                before = CheckStatus.worst(statuses)
                for extra in (S, W, E):
                    after = CheckStatus.worst(list(statuses) + [extra])
                    assert after >= before
                    assert after >= extra

    def test_exit_codes(self):
        assert S.exit_code == 0
        assert W.exit_code == 1
        assert E.exit_code == 2

    def test_glyphs(self):
        assert S.glyph == "✓"
        assert W.glyph == "⚠"
        assert E.glyph == "✗"


# ============================================================================
# DEPENDENCY STATUS
# ============================================================================

class TestDependencyStatus:
    """Derivation from direct dependency statuses."""

    def test_no_dependencies_is_healthy(self):
        assert DependencyStatus.from_dependency_statuses([]) == DependencyStatus.HEALTHY

    def test_all_success_is_healthy(self):
        assert DependencyStatus.from_dependency_statuses([S, S]) == DependencyStatus.HEALTHY

    def test_warning_dependency(self):
        assert (
            DependencyStatus.from_dependency_statuses([S, W])
            == DependencyStatus.DEPENDENCY_WARNING
        )

    def test_error_dominates_warning(self):
        assert (
            DependencyStatus.from_dependency_statuses([W, E, S])
            == DependencyStatus.DEGRADED_DEPENDENCY
        )


# ============================================================================
# TARGET
# ============================================================================

class TestTarget:
    """Target kinds, merging and immutability."""

    def test_kinds(self):
        assert Target().kind == TargetKind.NONE
        assert Target(container="redis").kind == TargetKind.CONTAINER
        assert Target(container="redis", command=["redis-cli", "ping"]).kind == TargetKind.COMPOSITE
        assert Target(url="http://localhost:8000").kind == TargetKind.URL
        assert Target(path=".env").kind == TargetKind.FILE
        assert Target(host="localhost", port=6379).kind == TargetKind.ENDPOINT

    def test_command_string_is_split(self):
        target = Target(container="backup", command="ls -l /backups")
        assert target.command == ("ls", "-l", "/backups")

    def test_merge_applies_set_fields_only(self):
        base = Target(container="project_aime-api-1", url="http://localhost:8000")
        merged = base.merge(Target(url="http://localhost:9000"))
        assert merged.container == "project_aime-api-1"
        assert merged.url == "http://localhost:9000"
        # Original unchanged
        assert base.url == "http://localhost:8000"

    def test_merge_none_returns_same(self):
        base = Target(container="redis")
        assert base.merge(None) is base

    def test_frozen(self):
        target = Target(container="redis")
        with pytest.raises(ValidationError):
            target.container = "mongodb"

    def test_port_range_validated(self):
        with pytest.raises(ValidationError):
            Target(port=70000)

    def test_describe(self):
        assert Target(container="redis").describe() == "redis"
        assert Target(port=6379).describe() == "localhost:6379"
        assert Target().describe() == "host"


# ============================================================================
# CHECK RESULT
# ============================================================================

class TestCheckResult:
    """Factories and export."""

    def test_factories(self):
        assert CheckResult.success("ok").status == S
        assert CheckResult.warning("hmm").status == W
        assert CheckResult.error("bad").status == E

    def test_details_are_structured(self):
        result = CheckResult.warning("Queue is large", depth=150, warn_above=100)
        assert result.details == {"depth": 150, "warn_above": 100}

    def test_timeout(self):
        result = CheckResult.timeout(2.0)
        assert result.status == E
        assert result.message == TIMEOUT_MESSAGE
        assert result.details["timeout_seconds"] == 2.0

    def test_from_exception(self):
        result = CheckResult.from_exception(RuntimeError("boom"))
        assert result.status == E
        assert result.message == "boom"
        assert result.details["exception_type"] == "RuntimeError"

    def test_from_exception_without_message(self):
        result = CheckResult.from_exception(KeyError())
        assert result.message == "KeyError"

    def test_to_dict(self):
        result = CheckResult.success("Redis is running")
        result.probe = "redis_ping"
        data = result.to_dict()
        assert data["status"] == "success"
        assert data["probe"] == "redis_ping"
        assert "details" not in data


# ============================================================================
# SERVICE CATALOG
# ============================================================================

class TestServiceCatalog:
    """Catalog model parsing and subsetting."""

    def _catalog(self):
        return ServiceCatalog.model_validate({
            "catalog_id": "test",
            "name": "Test",
            "services": {
                "redis": {"target": {"container": "redis"}},
                "mongodb": {},
                "api": {"depends_on": ["redis", "mongodb"]},
                "nginx": {"depends_on": "api"},
                "grafana": None,
            },
        })

    def test_mapping_form_keeps_order_and_names(self):
        catalog = self._catalog()
        assert catalog.service_names() == ["redis", "mongodb", "api", "nginx", "grafana"]

    def test_string_depends_on(self):
        assert self._catalog().get_service("nginx").depends_on == ["api"]

    def test_subset_pulls_in_dependencies(self):
        subset = self._catalog().subset(["nginx"])
        assert subset.service_names() == ["redis", "mongodb", "api", "nginx"]

    def test_subset_unknown_service(self):
        with pytest.raises(KeyError):
            self._catalog().subset(["kafka"])
