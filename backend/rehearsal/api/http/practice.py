"""HTTP endpoints exposing the response engine, pacing and scoring."""

from __future__ import annotations

import random
from datetime import UTC, datetime

from fastapi import APIRouter, Depends, Query

from rehearsal.ai.agents.composer import ResponseComposer
from rehearsal.ai.agents.context import AgentPromptContext
from rehearsal.api.http.dependencies import get_record_store
from rehearsal.domains.practice import pacing
from rehearsal.domains.practice.records import InMemorySessionRecordStore, SessionRecord
from rehearsal.domains.scenarios.catalog import parse_difficulty, require_scenario
from rehearsal.schemas.practice import (
    DelayResponse,
    RespondRequest,
    RespondResponse,
    ScoreRequest,
    ScoreResponse,
    SessionRecordCreate,
    SessionRecordResponse,
)
from rehearsal.schemas.scenario import AgentResponse

router = APIRouter(prefix="/api/v1/practice", tags=["practice"])


@router.post("/respond", response_model=RespondResponse)
async def respond(request: RespondRequest) -> RespondResponse:
    """Compose the next agent line for a transcript."""
    scenario = require_scenario(request.scenario_id)
    agent = request.agent.to_agent()
    context = AgentPromptContext(
        scenario_base_prompt=scenario.base_prompt,
        user_extras=request.user_extras,
        talking_points=[p.to_talking_point() for p in request.talking_points],
        presentational=scenario.presentational,
    )
    composer = ResponseComposer(random.Random(request.seed) if request.seed is not None else None)
    composed = composer.compose_with_trace(
        scenario.type,
        agent,
        request.difficulty or scenario.difficulty,
        request.history,
        context,
    )
    point = composed.talking_point
    return RespondResponse(
        text=composed.text,
        strategy=composed.strategy,
        talking_point_id=point.id if point else None,
        talking_point_text=point.text if point else None,
        agent=AgentResponse.from_agent(agent),
    )


@router.post("/score", response_model=ScoreResponse)
async def score_session(request: ScoreRequest) -> ScoreResponse:
    return ScoreResponse(
        score=pacing.score(request.user_message_count, request.elapsed_seconds, request.difficulty),
        difficulty=request.difficulty,
    )


@router.get("/delay/{difficulty}", response_model=DelayResponse)
async def response_delay(difficulty: str) -> DelayResponse:
    """Sample one reaction-time delay for the tier."""
    tier = parse_difficulty(difficulty)
    return DelayResponse(difficulty=tier, delay_ms=pacing.response_delay(tier))


@router.post("/records", response_model=SessionRecordResponse, status_code=201)
async def save_record(
    request: SessionRecordCreate,
    store: InMemorySessionRecordStore = Depends(get_record_store),
) -> SessionRecordResponse:
    """Score a finished session and keep its record."""
    scenario = require_scenario(request.scenario_id)
    record = SessionRecord(
        scenario_id=scenario.id,
        date=datetime.now(UTC).isoformat(),
        score=pacing.score(request.user_message_count, request.duration_seconds, request.difficulty),
        duration=request.duration_seconds,
        difficulty=request.difficulty.value,
    )
    store.save(record)
    return SessionRecordResponse(**record.to_dict())


@router.get("/records", response_model=list[SessionRecordResponse])
async def list_records(
    scenario_id: str | None = Query(default=None),
    store: InMemorySessionRecordStore = Depends(get_record_store),
) -> list[SessionRecordResponse]:
    return [SessionRecordResponse(**r.to_dict()) for r in store.records(scenario_id)]
