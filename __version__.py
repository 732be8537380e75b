# ============================================================================
# VERSION - SERVICE DIAGNOSTICS
# ============================================================================
# EPOCH: 1 - SERVICE DIAGNOSTICS
# ============================================================================
"""
Version information for the service diagnostics orchestrator.

This is the single source of truth for the application version.
Updated manually for each release.
"""
# Version format: major.minor.patch.build
# Criteria for 0.2 - default catalog covers every original check
__version__ = "0.2.0.1"
__version_info__ = tuple(int(x) for x in __version__.split("."))

# Build metadata
BUILD_DATE = "2026-10-18"

EPOCH = 1
CODENAME = "Service Diagnostics"
