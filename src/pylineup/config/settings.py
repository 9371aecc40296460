"""Team-level lineup settings with environment-driven defaults."""

from __future__ import annotations

import logging
import os
from typing import Any

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


logger = logging.getLogger(__name__)

_INNINGS_ENV = "PYLINEUP_INNINGS"
_MAX_MALES_ENV = "PYLINEUP_MAX_CONSECUTIVE_MALES"
_CATALOG_ENV = "PYLINEUP_CATALOG"

_INNINGS_DEFAULT = 7
_MAX_MALES_DEFAULT = 3
_CATALOG_DEFAULT = "softball"


def _env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    return value


def default_innings() -> int:
    return _env_int(_INNINGS_ENV, _INNINGS_DEFAULT, min_value=1)


def default_max_consecutive_males() -> int:
    return _env_int(_MAX_MALES_ENV, _MAX_MALES_DEFAULT, min_value=1)


def default_catalog_name() -> str:
    return os.getenv(_CATALOG_ENV, _CATALOG_DEFAULT).strip() or _CATALOG_DEFAULT


class TeamSettings(BaseModel):
    """Per-team generation options.

    ``ideal_lineup`` and ``ideal_positioning`` are kept exactly as stored
    (structured or JSON text); the builders parse them leniently.
    """

    ideal_lineup: Any = Field(default=None, alias="idealLineup")
    ideal_positioning: Any = Field(default=None, alias="idealPositioning")
    max_consecutive_males: int = Field(
        default_factory=default_max_consecutive_males, ge=1, alias="maxConsecutiveMales"
    )
    innings: int = Field(default_factory=default_innings, ge=1)
    catalog: str = Field(default_factory=default_catalog_name)

    model_config = ConfigDict(frozen=True, populate_by_name=True)
