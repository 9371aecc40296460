from __future__ import annotations

from typing import Any, List, Literal

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from pylineup.config import (
    TeamSettings,
    default_catalog_name,
    default_innings,
    default_max_consecutive_males,
)
from pylineup.models import FieldedPlayer, Player


class BattingOrderRequest(BaseModel):
    players: List[Player]
    ideal_lineup: Any = Field(default=None, alias="idealLineup")
    max_consecutive_males: int = Field(
        default_factory=default_max_consecutive_males, ge=1, alias="maxConsecutiveMales"
    )

    model_config = ConfigDict(populate_by_name=True)


class FieldingChartRequest(BaseModel):
    players: List[Player]
    innings: int = Field(default_factory=default_innings, ge=1, le=20)
    ideal_positioning: Any = Field(default=None, alias="idealPositioning")
    catalog: str = Field(default_factory=default_catalog_name)

    model_config = ConfigDict(populate_by_name=True)


class LineupRequest(BaseModel):
    players: List[Player]
    settings: TeamSettings = Field(default_factory=TeamSettings)


class CandidateCheckRequest(BaseModel):
    lineup: List[FieldedPlayer]
    innings: int = Field(default_factory=default_innings, ge=1, le=20)
    catalog: str = Field(default_factory=default_catalog_name)
    roster_ids: List[str] | None = Field(default=None, alias="rosterIds")
    min_players: int | None = Field(default=None, ge=0, alias="minPlayers")

    model_config = ConfigDict(populate_by_name=True)


class BattingOrderResponse(BaseModel):
    players: List[Player]


class FieldingChartResponse(BaseModel):
    innings: int
    max_outs: int
    players: List[FieldedPlayer]
    unfilled: List[List[str]]


class LineupIssueResponse(BaseModel):
    code: str
    message: str
    severity: Literal["error", "warning"]
    inning: int | None = None
    position: str | None = None
    player_ids: List[str] = Field(default_factory=list)


class InningReportResponse(BaseModel):
    inning: int
    duplicates: List[LineupIssueResponse]
    missing: List[str]


class LineupValidationResponse(BaseModel):
    ok: bool
    batting_errors: List[LineupIssueResponse]
    fielding_errors: List[InningReportResponse]
    summary: List[str]


class LineupResponse(BaseModel):
    batting_order: List[Player]
    fielding_chart: FieldingChartResponse
    validation: LineupValidationResponse


class CandidateCheckResponse(BaseModel):
    accepted: bool
    reasons: List[str]
    issues: List[LineupIssueResponse]


class PositionCatalogResponse(BaseModel):
    name: str
    positions: List[str]
    initials: dict[str, str]
    pitcher: str | None = None
