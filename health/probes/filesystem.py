# ============================================================================
# FILESYSTEM PROBES
# ============================================================================
# EPOCH: 1 - SERVICE DIAGNOSTICS
# STATUS: Infrastructure - Local file and configuration probes
# PURPOSE: Required files, directories, model files and .env variables
# CREATED: 18 OCT 2026
# ============================================================================
"""
Filesystem Probes

Local, fast checks against the diagnostics host:
- file_exists / directory_exists
- file_glob: at least min_count files match a set of patterns
- env_file: .env file exists and defines the required variables

Paths come from the probe params or target.path.
"""

from pathlib import Path
from typing import Dict, List, Optional, Sequence

from core.contracts import CheckStatus
from core.models.result import CheckResult
from core.models.target import Target
from health.core import ProbePlugin
from health.registry import register_probe


class PathProbe(ProbePlugin):
    """
    Base for probes that check a filesystem path.

    Precedence: params.path, then target.path, then default_path.
    """

    default_path: Optional[str] = None

    def __init__(self, path: Optional[str] = None):
        self.path = path

    def resolve(self, target: Target) -> Path:
        path = self.path or target.path or self.default_path
        if not path:
            raise ValueError(f"{self.kind} requires a path")
        return Path(path).expanduser()


@register_probe("file_exists")
class FileExistsProbe(PathProbe):
    """File exists."""

    async def probe(self, target: Target, timeout: float) -> CheckResult:
        path = self.resolve(target)
        if path.is_file():
            return CheckResult.success(f"File {path} exists")
        return CheckResult.error(f"File {path} is missing")


@register_probe("directory_exists")
class DirectoryExistsProbe(PathProbe):
    """Directory exists."""

    async def probe(self, target: Target, timeout: float) -> CheckResult:
        path = self.resolve(target)
        if path.is_dir():
            return CheckResult.success(f"Directory {path} exists")
        return CheckResult.error(f"Directory {path} is missing")


@register_probe("file_glob")
class FileGlobProbe(PathProbe):
    """Directory contains files matching the given patterns."""

    def __init__(
        self,
        path: Optional[str] = None,
        patterns: Sequence[str] = ("*",),
        recursive: bool = True,
        min_count: int = 1,
        label: str = "matching",
    ):
        super().__init__(path)
        self.patterns = [patterns] if isinstance(patterns, str) else list(patterns)
        self.recursive = recursive
        self.min_count = min_count
        self.label = label

    async def probe(self, target: Target, timeout: float) -> CheckResult:
        path = self.resolve(target)
        if not path.is_dir():
            return CheckResult.error(f"Directory {path} is missing")

        matches = set()
        for pattern in self.patterns:
            found = path.rglob(pattern) if self.recursive else path.glob(pattern)
            matches.update(p for p in found if p.is_file())

        count = len(matches)
        if count >= self.min_count:
            return CheckResult.success(f"Found {count} {self.label} files", count=count)
        return CheckResult.warning(
            f"No {self.label} files found in {path}",
            count=count,
            patterns=self.patterns,
        )


def parse_env_file(text: str) -> Dict[str, str]:
    """Parse KEY=VALUE lines, ignoring blanks and comments."""
    values: Dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("export "):
            line = line[len("export "):]
        key, sep, value = line.partition("=")
        if sep:
            values[key.strip()] = value.strip().strip("'\"")
    return values


@register_probe("env_file")
class EnvFileProbe(PathProbe):
    """Environment file exists and sets every required variable."""

    default_path = ".env"

    def __init__(
        self,
        path: Optional[str] = None,
        required: Sequence[str] = (),
        missing_status: str = "error",
    ):
        super().__init__(path)
        self.required = list(required)
        self.missing_status = CheckStatus(missing_status)

    async def probe(self, target: Target, timeout: float) -> CheckResult:
        path = self.resolve(target)
        if not path.is_file():
            return CheckResult(status=self.missing_status, message=f"{path} file is missing")

        values = parse_env_file(path.read_text())
        missing: List[str] = [key for key in self.required if key not in values]
        if missing:
            return CheckResult(
                status=self.missing_status,
                message=f"Missing variables in {path.name}: {', '.join(missing)}",
                details={"missing": missing},
            )
        return CheckResult.success(
            f"{path.name} defines {len(self.required)} required variable(s)",
            required=self.required,
        )


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "PathProbe",
    "FileExistsProbe",
    "DirectoryExistsProbe",
    "FileGlobProbe",
    "EnvFileProbe",
    "parse_env_file",
]
