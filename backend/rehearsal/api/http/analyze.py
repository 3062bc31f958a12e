"""HTTP endpoints for talking-point and presentation-flow generation."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from rehearsal.api.http.dependencies import get_talking_point_service
from rehearsal.domains.documents.service import compose_generation_context
from rehearsal.domains.scenarios.catalog import require_scenario
from rehearsal.domains.talking_points.service import TalkingPointService
from rehearsal.schemas.talking_points import (
    FlowRequest,
    FlowResult,
    GenerationContextFields,
    TalkingPointsRequest,
    TalkingPointsResult,
)

router = APIRouter(prefix="/api/v1/analyze", tags=["analyze"])


def _resolve_context(request: GenerationContextFields) -> str | None:
    if request.context and request.context.strip():
        return request.context
    if request.scenario_id:
        scenario = require_scenario(request.scenario_id)
        return compose_generation_context(
            scenario.base_prompt,
            request.extra_details,
            request.document_text,
        )
    return None


@router.post("/talking-points", response_model=TalkingPointsResult)
async def generate_talking_points(
    request: TalkingPointsRequest,
    service: TalkingPointService = Depends(get_talking_point_service),
) -> TalkingPointsResult:
    return await service.generate_points(
        _resolve_context(request),
        presentational=request.presentational,
        count_min=request.count_min,
        count_max=request.count_max,
    )


@router.post("/flow", response_model=FlowResult)
async def generate_flow(
    request: FlowRequest,
    service: TalkingPointService = Depends(get_talking_point_service),
) -> FlowResult:
    return await service.generate_flow(
        _resolve_context(request),
        presentational=request.presentational,
        sections_min=request.sections_min,
        sections_max=request.sections_max,
    )
