# ============================================================================
# CLAUDE CONTEXT - TARGET MODEL
# ============================================================================
# EPOCH: 1 - SERVICE DIAGNOSTICS
# STATUS: Core model - What a probe observes
# PURPOSE: Immutable address of a container, URL, file or endpoint
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: Target
# DEPENDENCIES: pydantic
# ============================================================================
"""
Target Model

A Target identifies what a probe contacts:
- a container name
- a URL
- a file path
- a host/port endpoint
- a composite (container + command)

Services declare one Target; each probe may override individual fields
(e.g. the api service targets its container, its http_health probe adds a
URL). Targets are frozen once constructed.
"""

from typing import Optional, Tuple

from pydantic import BaseModel, Field, field_validator

from core.contracts import TargetKind


class Target(BaseModel):
    """Immutable address of the thing being probed."""

    model_config = {"frozen": True}

    container: Optional[str] = Field(default=None, max_length=128)
    url: Optional[str] = Field(default=None, max_length=2048)
    path: Optional[str] = Field(default=None, max_length=4096)
    host: Optional[str] = Field(default=None, max_length=255)
    port: Optional[int] = Field(default=None, ge=1, le=65535)
    command: Optional[Tuple[str, ...]] = Field(
        default=None,
        description="argv executed inside the container (composite target)"
    )

    @field_validator("command", mode="before")
    @classmethod
    def handle_string_command(cls, v):
        """Allow a single string as shorthand for a whitespace-split argv."""
        if isinstance(v, str):
            return tuple(v.split())
        return v

    @property
    def kind(self) -> TargetKind:
        """Derive what this target addresses."""
        if self.container and self.command:
            return TargetKind.COMPOSITE
        if self.container:
            return TargetKind.CONTAINER
        if self.url:
            return TargetKind.URL
        if self.path:
            return TargetKind.FILE
        if self.port is not None:
            return TargetKind.ENDPOINT
        return TargetKind.NONE

    def merge(self, override: Optional["Target"]) -> "Target":
        """Return a new Target with the override's set fields applied."""
        if override is None:
            return self
        updates = override.model_dump(exclude_none=True)
        if not updates:
            return self
        return self.model_copy(update=updates)

    def describe(self) -> str:
        """Short human label for logs and reports."""
        if self.kind == TargetKind.COMPOSITE:
            return f"{self.container}: {' '.join(self.command or ())}"
        if self.container:
            return self.container
        if self.url:
            return self.url
        if self.path:
            return self.path
        if self.port is not None:
            return f"{self.host or 'localhost'}:{self.port}"
        return "host"


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "Target",
]
