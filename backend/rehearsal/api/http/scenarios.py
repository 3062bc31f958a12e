"""HTTP endpoints for the scenario catalog."""

from __future__ import annotations

import random

from fastapi import APIRouter

from rehearsal.domains.scenarios.catalog import list_scenarios, require_scenario, select_agents
from rehearsal.schemas.scenario import (
    AgentDrawRequest,
    AgentDrawResponse,
    AgentResponse,
    ScenarioResponse,
)

router = APIRouter(prefix="/api/v1/scenarios", tags=["scenarios"])


@router.get("", response_model=list[ScenarioResponse])
async def get_scenarios() -> list[ScenarioResponse]:
    return [ScenarioResponse.from_scenario(s) for s in list_scenarios()]


@router.get("/{scenario_id}", response_model=ScenarioResponse)
async def get_scenario_detail(scenario_id: str) -> ScenarioResponse:
    return ScenarioResponse.from_scenario(require_scenario(scenario_id))


@router.post("/{scenario_id}/agents", response_model=AgentDrawResponse)
async def draw_agents(
    scenario_id: str,
    request: AgentDrawRequest | None = None,
) -> AgentDrawResponse:
    """Draw the scenario's participants from the persona pool."""
    request = request or AgentDrawRequest()
    scenario = require_scenario(scenario_id)
    rng = random.Random(request.seed) if request.seed is not None else None
    agents = select_agents(scenario, rng, id_prefix=request.id_prefix)
    return AgentDrawResponse(
        scenario_id=scenario.id,
        agents=[AgentResponse.from_agent(a) for a in agents],
    )
