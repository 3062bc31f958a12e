"""Scenario catalog and persona pool."""

from rehearsal.domains.scenarios.catalog import (
    PERSONA_POOL,
    SCENARIOS,
    Agent,
    Difficulty,
    Persona,
    Scenario,
    ScenarioType,
    Vibe,
    get_scenario,
    list_scenarios,
    parse_difficulty,
    parse_scenario_type,
    require_scenario,
    select_agents,
)

__all__ = [
    "PERSONA_POOL",
    "SCENARIOS",
    "Agent",
    "Difficulty",
    "Persona",
    "Scenario",
    "ScenarioType",
    "Vibe",
    "get_scenario",
    "list_scenarios",
    "parse_difficulty",
    "parse_scenario_type",
    "require_scenario",
    "select_agents",
]
