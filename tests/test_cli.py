# ============================================================================
# CLI TESTS
# ============================================================================
# EPOCH: 1 - SERVICE DIAGNOSTICS
# STATUS: Tests - diagnose.py entry point
# PURPOSE: Verify exit codes, output sinks and flag handling
# CREATED: 18 OCT 2026
# ============================================================================
"""
CLI Tests

Catalogs here only use command_available probes with shutil.which
patched, so runs are fast and host-independent.

Run with:
    pytest tests/test_cli.py -v
"""

import json
from unittest.mock import patch

import pytest

import diagnose


CATALOG_YAML = """
catalog_id: cli
name: CLI Test
services:
  tools:
    probes:
      - kind: command_available
        params: {command: docker}
      - kind: command_available
        params: {command: nvidia-smi, missing_status: warning}
  api:
    depends_on: [tools]
    probes:
      - kind: command_available
        params: {command: curl}
"""


@pytest.fixture
def catalog(tmp_path):
    path = tmp_path / "cli.yaml"
    path.write_text(CATALOG_YAML)
    return str(path)


def _which(installed):
    return patch(
        "health.probes.network.shutil.which",
        side_effect=lambda command: f"/usr/bin/{command}" if command in installed else None,
    )


# ============================================================================
# EXIT CODES
# ============================================================================

class TestExitCodes:
    """0 success, 1 warning, 2 error."""

    def test_all_success(self, catalog, capsys):
        with _which({"docker", "nvidia-smi", "curl"}):
            code = diagnose.main(["--catalog", catalog, "--color", "never"])
        assert code == 0
        assert "Overall: ✓ SUCCESS" in capsys.readouterr().out

    def test_warning(self, catalog, capsys):
        with _which({"docker", "curl"}):
            code = diagnose.main(["--catalog", catalog, "--color", "never"])
        assert code == 1
        assert "Overall: ⚠ WARNING" in capsys.readouterr().out

    def test_error(self, catalog, capsys):
        with _which({"docker", "nvidia-smi"}):
            code = diagnose.main(["--catalog", catalog, "--color", "never"])
        assert code == 2
        assert "api ✗ error" in capsys.readouterr().out

    def test_missing_catalog(self, tmp_path, capsys):
        code = diagnose.main(["--catalog", str(tmp_path / "missing.yaml")])
        assert code == 2
        assert capsys.readouterr().out == ""

    def test_service_entry_not_a_mapping(self, tmp_path, capsys):
        path = tmp_path / "bad.yaml"
        path.write_text("catalog_id: bad\nservices:\n  redis: [1, 2]\n")
        code = diagnose.main(["--catalog", str(path)])
        assert code == 2
        assert capsys.readouterr().out == ""

    def test_unknown_service(self, catalog):
        with _which({"docker"}):
            assert diagnose.main(["--catalog", catalog, "--service", "kafka"]) == 2


# ============================================================================
# OUTPUT
# ============================================================================

class TestOutput:
    """Formats, sinks and service selection."""

    def test_json_to_file(self, catalog, tmp_path, capsys):
        output = tmp_path / "report.json"
        with _which({"docker", "nvidia-smi", "curl"}):
            code = diagnose.main(["--catalog", catalog, "--format", "json", "--output", str(output)])

        data = json.loads(output.read_text(encoding="utf-8"))
        assert code == 0
        assert data["exit_code"] == 0
        assert data["catalog"] == "cli"
        assert list(data["per_service"]) == ["tools", "api"]
        assert capsys.readouterr().out == ""

    def test_service_selection(self, catalog, capsys):
        with _which({"docker", "nvidia-smi"}):
            code = diagnose.main(["--catalog", catalog, "--service", "tools", "--format", "json"])
        data = json.loads(capsys.readouterr().out)
        assert code == 0
        assert list(data["per_service"]) == ["tools"]

    def test_list_probes(self, capsys):
        assert diagnose.main(["--list-probes"]) == 0
        out = capsys.readouterr().out
        assert "redis_ping" in out
        assert "http_health" in out

    def test_invalid_format_rejected(self):
        with pytest.raises(SystemExit):
            diagnose.main(["--format", "xml"])

    @pytest.mark.parametrize("flags", [
        ["--max-parallel", "0"],
        ["--max-parallel", "-3"],
        ["--probe-timeout", "0"],
        ["--deadline", "-1"],
    ])
    def test_out_of_range_numbers_rejected(self, flags):
        with pytest.raises(SystemExit) as exc_info:
            diagnose.main(flags)
        assert exc_info.value.code == 2

    def test_zero_deadline_reports_every_service(self, catalog, capsys):
        with _which({"docker", "nvidia-smi", "curl"}):
            code = diagnose.main(["--catalog", catalog, "--deadline", "0", "--format", "json"])
        data = json.loads(capsys.readouterr().out)
        assert code == 2
        assert data["deadline_exceeded"] is True
        assert list(data["per_service"]) == ["tools", "api"]


# ============================================================================
# COLOUR
# ============================================================================

class TestColor:
    """--color auto|always|never."""

    def test_always(self):
        assert diagnose._use_color("always", None) is True
        assert diagnose._use_color("always", "report.txt") is True

    def test_never(self):
        assert diagnose._use_color("never", None) is False

    def test_auto_off_for_files(self):
        assert diagnose._use_color("auto", "report.txt") is False

    def test_auto_follows_tty(self):
        with patch("diagnose.sys.stdout") as stdout:
            stdout.isatty.return_value = False
            assert diagnose._use_color("auto", None) is False
