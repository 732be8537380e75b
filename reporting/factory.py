# ============================================================================
# REPORTER FACTORY
# ============================================================================
# EPOCH: 1 - SERVICE DIAGNOSTICS
# STATUS: Reporting - Reporter selection
# PURPOSE: Pick a reporter from the configured output format
# CREATED: 18 OCT 2026
# ============================================================================

import logging
from typing import Union

from core.config import ReportFormat
from reporting.base import Reporter
from reporting.json_reporter import JsonReporter
from reporting.text import TextReporter

logger = logging.getLogger(__name__)


def get_reporter(fmt: Union[str, ReportFormat] = ReportFormat.TEXT, color: bool = False) -> Reporter:
    """
    Create the reporter for an output format.

    Args:
        fmt: "text" or "json"
        color: ANSI colour for the text reporter

    Returns:
        Reporter instance

    Raises:
        ValueError if the format is unknown
    """
    fmt = ReportFormat(fmt)

    if fmt == ReportFormat.JSON:
        logger.debug("Using JSON reporter")
        return JsonReporter()

    logger.debug(f"Using text reporter (color={color})")
    return TextReporter(color=color)


__all__ = [
    "get_reporter",
]
