"""Pydantic models for API I/O."""

from .lineup import (
    BattingOrderRequest,
    BattingOrderResponse,
    CandidateCheckRequest,
    CandidateCheckResponse,
    FieldingChartRequest,
    FieldingChartResponse,
    InningReportResponse,
    LineupIssueResponse,
    LineupRequest,
    LineupResponse,
    LineupValidationResponse,
    PositionCatalogResponse,
)

__all__ = [
    "BattingOrderRequest",
    "BattingOrderResponse",
    "CandidateCheckRequest",
    "CandidateCheckResponse",
    "FieldingChartRequest",
    "FieldingChartResponse",
    "InningReportResponse",
    "LineupIssueResponse",
    "LineupRequest",
    "LineupResponse",
    "LineupValidationResponse",
    "PositionCatalogResponse",
]
