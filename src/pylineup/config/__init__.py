"""Configuration helpers for position catalogs and team settings."""

from .positions import (
    DEFAULT_CATALOG,
    PositionCatalog,
    get_catalog,
    iter_catalogs,
    resolve_catalog,
)
from .settings import (
    TeamSettings,
    default_catalog_name,
    default_innings,
    default_max_consecutive_males,
)

__all__ = [
    "DEFAULT_CATALOG",
    "PositionCatalog",
    "TeamSettings",
    "default_catalog_name",
    "default_innings",
    "default_max_consecutive_males",
    "get_catalog",
    "iter_catalogs",
    "resolve_catalog",
]
