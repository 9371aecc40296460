"""Canonical player models shared across the builders, ingest and API layers."""

from __future__ import annotations

from enum import Enum
from typing import Any, Tuple

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


OUT = "Out"


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"

    @classmethod
    def coerce(cls, value: Any) -> "Gender":
        """Map loosely formatted gender values onto the enum, defaulting to OTHER."""

        if isinstance(value, Gender):
            return value
        if isinstance(value, str):
            token = value.strip().lower()
            if token in {"male", "m"}:
                return cls.MALE
            if token in {"female", "f"}:
                return cls.FEMALE
        return cls.OTHER


def _ordered_unique(value: Any) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        value = [value]
    elif not isinstance(value, (list, tuple, set, frozenset)):
        raise ValueError(f"expected a list of position names, got {type(value).__name__}")
    seen: list[str] = []
    for item in value:
        if isinstance(item, str) and item and item not in seen:
            seen.append(item)
    return tuple(seen)


class Player(BaseModel):
    """Roster entry as supplied by the team's roster source.

    Field aliases match the stored roster documents (``$id``, ``firstName``...)
    so records can be validated straight from that payload.
    """

    player_id: str = Field(..., min_length=1, alias="$id")
    first_name: str = Field(default="", alias="firstName")
    last_name: str = Field(default="", alias="lastName")
    gender: Gender = Gender.OTHER
    preferred_positions: Tuple[str, ...] = Field(default=(), alias="preferredPositions")
    disliked_positions: Tuple[str, ...] = Field(default=(), alias="dislikedPositions")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @field_validator("gender", mode="before")
    @classmethod
    def _coerce_gender(cls, value: Any) -> Gender:
        return Gender.coerce(value)

    @field_validator("preferred_positions", "disliked_positions", mode="before")
    @classmethod
    def _normalize_positions(cls, value: Any) -> Tuple[str, ...]:
        return _ordered_unique(value)

    @property
    def is_male(self) -> bool:
        return self.gender is Gender.MALE

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip() or self.player_id


class FieldedPlayer(BaseModel):
    """Player identity plus one position (or ``Out``) per inning."""

    player_id: str = Field(..., alias="$id")
    first_name: str = Field(default="", alias="firstName")
    last_name: str = Field(default="", alias="lastName")
    gender: Gender = Gender.OTHER
    positions: Tuple[str, ...] = ()

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @property
    def out_count(self) -> int:
        return sum(1 for position in self.positions if position == OUT)

    @field_validator("gender", mode="before")
    @classmethod
    def _coerce_gender(cls, value: Any) -> Gender:
        return Gender.coerce(value)
