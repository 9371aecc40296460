"""Persist and load team lineup profiles."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from pylineup.config import TeamSettings, get_catalog


logger = logging.getLogger(__name__)


def _profile_int(key: str, raw: Any) -> Optional[int]:
    if raw is None or raw == "":
        return None
    try:
        value = int(raw)
    except (TypeError, ValueError):
        logger.warning("Invalid int for %s in team profile: %r; using default", key, raw)
        return None
    if value < 0:
        logger.warning("Negative %s in team profile: %d; using default", key, value)
        return None
    return value


@dataclass
class TeamProfile:
    ideal_lineup: Any = None
    ideal_positioning: Any = None
    max_male_batters: Optional[int] = None
    innings: Optional[int] = None
    catalog: Optional[str] = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def load(cls, path: Path) -> "TeamProfile":
        data = json.loads(path.read_text(encoding="utf-8"))
        prefs = data.get("prefs") or {}
        max_males = data.get("maxMaleBatters", prefs.get("maxMaleBatters"))
        catalog = data.get("catalog")
        if catalog is not None and not isinstance(catalog, str):
            logger.warning("Invalid catalog in team profile: %r; using default", catalog)
            catalog = None
        known = {"idealLineup", "idealPositioning", "maxMaleBatters", "innings", "catalog", "prefs"}
        return cls(
            ideal_lineup=data.get("idealLineup"),
            ideal_positioning=data.get("idealPositioning"),
            max_male_batters=_profile_int("maxMaleBatters", max_males),
            innings=_profile_int("innings", data.get("innings")),
            catalog=catalog,
            extra={key: value for key, value in data.items() if key not in known},
        )

    def save(self, path: Path) -> None:
        payload: dict[str, Any] = dict(self.extra)
        payload.update(
            {
                "idealLineup": self.ideal_lineup,
                "idealPositioning": self.ideal_positioning,
                "maxMaleBatters": self.max_male_batters,
                "innings": self.innings,
                "catalog": self.catalog,
            }
        )
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    def to_settings(self, **overrides: Any) -> TeamSettings:
        """Build settings from the profile; ``None`` overrides are ignored."""

        values: dict[str, Any] = {
            "ideal_lineup": self.ideal_lineup,
            "ideal_positioning": self.ideal_positioning,
        }
        # teams without the rule store 0; keep the default then
        max_males = _profile_int("maxMaleBatters", self.max_male_batters)
        if max_males:
            values["max_consecutive_males"] = max_males
        innings = _profile_int("innings", self.innings)
        if innings:
            values["innings"] = innings
        if self.catalog:
            try:
                values["catalog"] = get_catalog(self.catalog).name
            except KeyError:
                logger.warning("Unknown catalog in team profile: %s; using default", self.catalog)
        values.update({key: value for key, value in overrides.items() if value is not None})
        return TeamSettings(**values)
