"""Fielding position catalogs for supported game formats."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Optional, Tuple


@dataclass(frozen=True)
class PositionCatalog:
    name: str
    positions: Tuple[str, ...]
    initials: Mapping[str, str]
    pitcher: Optional[str] = "Pitcher"

    def __contains__(self, position: object) -> bool:
        return position in self.positions

    def __len__(self) -> int:
        return len(self.positions)

    def index(self, position: str) -> int:
        """Catalog order of ``position``; unknown codes sort last."""

        try:
            return self.positions.index(position)
        except ValueError:
            return len(self.positions)


_CATALOGS: Dict[str, PositionCatalog] = {
    "SOFTBALL": PositionCatalog(
        name="softball",
        positions=(
            "Pitcher",
            "Catcher",
            "First Base",
            "Second Base",
            "Third Base",
            "Shortstop",
            "Left Field",
            "Left Center Field",
            "Right Center Field",
            "Right Field",
        ),
        initials={
            "Pitcher": "P",
            "Catcher": "C",
            "First Base": "1B",
            "Second Base": "2B",
            "Third Base": "3B",
            "Shortstop": "SS",
            "Left Field": "LF",
            "Left Center Field": "LC",
            "Right Center Field": "RC",
            "Right Field": "RF",
        },
    ),
    "BASEBALL": PositionCatalog(
        name="baseball",
        positions=(
            "Pitcher",
            "Catcher",
            "First Base",
            "Second Base",
            "Third Base",
            "Shortstop",
            "Left Field",
            "Center Field",
            "Right Field",
        ),
        initials={
            "Pitcher": "P",
            "Catcher": "C",
            "First Base": "1B",
            "Second Base": "2B",
            "Third Base": "3B",
            "Shortstop": "SS",
            "Left Field": "LF",
            "Center Field": "CF",
            "Right Field": "RF",
        },
    ),
}

DEFAULT_CATALOG = "softball"


def iter_catalogs() -> Iterable[PositionCatalog]:
    """Return an iterator of all configured catalogs."""

    return _CATALOGS.values()


def get_catalog(name: str | None = None) -> PositionCatalog:
    """Fetch a catalog by name, raising KeyError if missing."""

    key = (name or DEFAULT_CATALOG).upper()
    if key not in _CATALOGS:
        raise KeyError(f"No position catalog configured for name={name!r}")
    return _CATALOGS[key]


def resolve_catalog(catalog: PositionCatalog | str | None) -> PositionCatalog:
    if isinstance(catalog, PositionCatalog):
        return catalog
    return get_catalog(catalog)
