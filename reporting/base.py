# ============================================================================
# REPORTER BASE
# ============================================================================
# EPOCH: 1 - SERVICE DIAGNOSTICS
# STATUS: Reporting - Abstract reporter
# PURPOSE: Render a RunSummary to text for a sink (stdout, file, HTTP)
# CREATED: 18 OCT 2026
# ============================================================================
"""
Reporter Base

Reporters are pure: render() turns a RunSummary into a string and never
runs probes or changes the summary. write() is a convenience for sinks.
"""

import sys
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, TextIO, Union

from core.models import RunSummary


class Reporter(ABC):
    """Abstract base for run reporters."""

    # Format name used by get_reporter()
    format: str = "unnamed"

    @abstractmethod
    def render(self, summary: RunSummary) -> str:
        """
        Render a run summary.

        Args:
            summary: Completed, read-only run summary

        Returns:
            Rendered report
        """
        pass

    def write(
        self,
        summary: RunSummary,
        destination: Union[str, Path, TextIO, None] = None,
    ) -> None:
        """
        Render and write a report.

        Args:
            summary: Run summary
            destination: File path, open stream, or None for stdout
        """
        text = self.render(summary)
        if not text.endswith("\n"):
            text += "\n"

        if destination is None:
            sys.stdout.write(text)
            sys.stdout.flush()
        elif isinstance(destination, (str, Path)):
            Path(destination).write_text(text, encoding="utf-8")
        else:
            destination.write(text)


# ============================================================================
# ANSI COLOURS
# ============================================================================

class Colors:
    """ANSI escape codes; empty strings when colour is off."""

    RED = "\033[0;31m"
    GREEN = "\033[0;32m"
    YELLOW = "\033[1;33m"
    BLUE = "\033[0;34m"
    RESET = "\033[0m"

    def __init__(self, enabled: bool = False):
        self.enabled = enabled

    def paint(self, text: str, code: Optional[str]) -> str:
        if not self.enabled or not code:
            return text
        return f"{code}{text}{self.RESET}"


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "Reporter",
    "Colors",
]
