"""REST API for lineup generation."""

from __future__ import annotations

import logging
import os
from dataclasses import asdict

from fastapi import FastAPI, HTTPException, Query

from pylineup.api.schemas import (
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
from pylineup.config import PositionCatalog, default_catalog_name, get_catalog
from pylineup.lineup import (
    FieldingChart,
    LineupIssue,
    LineupReport,
    build_batting_order,
    build_fielding_chart,
    build_lineup,
    check_candidate_lineup,
    validate_lineup,
)


logger = logging.getLogger("uvicorn.error")


def _catalog_or_400(name: str | None) -> PositionCatalog:
    try:
        return get_catalog(name)
    except KeyError as exc:
        raise HTTPException(status_code=400, detail=f"Unknown position catalog: {name}") from exc


def _issue_response(issue: LineupIssue) -> LineupIssueResponse:
    return LineupIssueResponse(**asdict(issue))


def _chart_response(chart: FieldingChart) -> FieldingChartResponse:
    return FieldingChartResponse(
        innings=chart.innings,
        max_outs=chart.max_outs,
        players=list(chart.players),
        unfilled=[list(open_positions) for open_positions in chart.unfilled],
    )


def _report_response(report: LineupReport) -> LineupValidationResponse:
    return LineupValidationResponse(
        ok=report.ok,
        batting_errors=[_issue_response(issue) for issue in report.batting_errors],
        fielding_errors=[
            InningReportResponse(
                inning=inning.inning,
                duplicates=[_issue_response(issue) for issue in inning.duplicates],
                missing=list(inning.missing),
            )
            for inning in report.fielding_errors
        ],
        summary=list(report.summary),
    )


def create_app() -> FastAPI:
    app = FastAPI(title="pylineup")

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/positions", response_model=PositionCatalogResponse)
    async def positions(catalog: str | None = Query(None)) -> PositionCatalogResponse:
        resolved = _catalog_or_400(catalog or default_catalog_name())
        return PositionCatalogResponse(
            name=resolved.name,
            positions=list(resolved.positions),
            initials=dict(resolved.initials),
            pitcher=resolved.pitcher,
        )

    @app.post("/batting-order", response_model=BattingOrderResponse)
    async def batting_order(request: BattingOrderRequest) -> BattingOrderResponse:
        order = build_batting_order(
            request.players,
            ideal_lineup=request.ideal_lineup,
            max_consecutive_males=request.max_consecutive_males,
        )
        return BattingOrderResponse(players=order)

    @app.post("/fielding-chart", response_model=FieldingChartResponse)
    async def fielding_chart(request: FieldingChartRequest) -> FieldingChartResponse:
        catalog = _catalog_or_400(request.catalog)
        chart = build_fielding_chart(
            request.players,
            innings=request.innings,
            ideal_positioning=request.ideal_positioning,
            catalog=catalog,
        )
        return _chart_response(chart)

    @app.post("/lineups", response_model=LineupResponse)
    async def lineups(request: LineupRequest) -> LineupResponse:
        settings = request.settings
        catalog = _catalog_or_400(settings.catalog)
        lineup = build_lineup(request.players, settings)
        report = validate_lineup(
            list(lineup.fielding_chart.players),
            max_consecutive_males=settings.max_consecutive_males,
            innings=settings.innings,
            catalog=catalog,
        )
        logger.info(
            "Built lineup for %d players over %d innings (%d summary notes)",
            len(request.players),
            settings.innings,
            len(report.summary),
        )
        return LineupResponse(
            batting_order=lineup.batting_order,
            fielding_chart=_chart_response(lineup.fielding_chart),
            validation=_report_response(report),
        )

    @app.post("/lineups/check", response_model=CandidateCheckResponse)
    async def check_lineup(request: CandidateCheckRequest) -> CandidateCheckResponse:
        catalog = _catalog_or_400(request.catalog)
        check = check_candidate_lineup(
            request.lineup,
            innings=request.innings,
            catalog=catalog,
            roster_ids=request.roster_ids,
            min_players=request.min_players,
        )
        if not check.accepted:
            logger.info("Rejected proposed lineup: %s", "; ".join(check.reasons))
        return CandidateCheckResponse(
            accepted=check.accepted,
            reasons=list(check.reasons),
            issues=[_issue_response(issue) for issue in check.issues],
        )

    return app


def run() -> None:
    import uvicorn

    uvicorn.run(
        create_app(),
        host=os.getenv("PYLINEUP_HOST", "127.0.0.1"),
        port=int(os.getenv("PYLINEUP_PORT", "8000")),
    )
