# ============================================================================
# BUNDLED SERVICE CATALOGS
# ============================================================================
# EPOCH: 1 - SERVICE DIAGNOSTICS
# STATUS: Data - Catalog files shipped with the package
# PURPOSE: Locate bundled catalog YAML in a checkout or an installed wheel
# CREATED: 18 OCT 2026
# ============================================================================
"""
Bundled Service Catalogs

Catalog YAML files are package data of this package, so they resolve the
same way from a source checkout and from site-packages.
"""

from importlib.resources import files
from pathlib import Path

DEFAULT_CATALOG = "aime.yaml"


def catalog_path(name: str) -> Path:
    """Path of a bundled catalog file."""
    return Path(str(files(__name__).joinpath(name)))


def default_catalog_path() -> Path:
    """Path of the catalog used when none is configured."""
    return catalog_path(DEFAULT_CATALOG)


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "DEFAULT_CATALOG",
    "catalog_path",
    "default_catalog_path",
]
