"""Talking-point and presentation-flow generation."""

import logging
import time

from rehearsal.ai.providers.base import LLMMessage, LLMProvider
from rehearsal.domains.talking_points.parsing import (
    clamp_section_range,
    normalize_flow,
    normalize_points,
    parse_flow,
    parse_points,
)
from rehearsal.exceptions import GenerationParseError, MissingFieldError
from rehearsal.schemas.talking_points import FlowResult, TalkingPointsResult

logger = logging.getLogger("talking_points")

RAW_OUTPUT_PREVIEW_CHARS = 1000

POINTS_PROMPT = """You are an expert speech coach.
Given the CONTEXT, produce {count_min}-{count_max} talking points, phrased as analytical questions, with importance weights.

Rules:
- Each point: {{ "text": string (<= 140 chars), "importance": integer 1-5 }}.
- Importance 5 = must-cover; 1 = nice-to-have.
- Avoid duplicates; combine overlapping ideas; keep language audience-appropriate.
- {mode}
- Return ONLY valid JSON with shape: {{ "points": RawPoint[] }}.

CONTEXT:
{context}"""

POINTS_MODE_PRESENTATIONAL = (
    "This is a presentational scenario. Prioritize an arc: objective, key sections, "
    "transitions, and conclusion."
)
POINTS_MODE_INTERACTIVE = (
    "This is an interactive scenario. Prioritize goal-oriented, conversational points "
    "and checkpoints."
)

FLOW_PROMPT = """You are an expert presentation coach.
Given the CONTEXT, produce a clean, concise presentation flow with an intro, {sections_min}-{sections_max} body sections, a conclusion, and a short Q&A plan.

Rules:
- Each unit has: {{ "title": string (<= 80 chars), "goals": string[] with 2-4 short bullets (<= 100 chars each) }}.
- Sections should be audience-appropriate and non-overlapping; use clear transitions implicitly by section ordering.
- {mode}
- Return ONLY valid JSON with shape: {{ "flow": {{ "intro": {{...}}, "sections": RawFlowSection[], "conclusion": {{...}}, "qa": {{...}} }} }}.

CONTEXT:
{context}"""

FLOW_MODE_PRESENTATIONAL = (
    "This is a presentational scenario. Emphasize clarity, scaffolding, and logical structure."
)
FLOW_MODE_INTERACTIVE = "This is an interactive scenario. Keep the structure brief and flexible."


class TalkingPointService:
    """Turns a free-text description of a talk into points and a flow.

    Args:
        llm_provider: Generative provider used for both outputs
        model_id: Model override passed to the provider
        count_min: Default lower bound on generated points
        count_max: Default upper bound on generated points
        sections_min: Default lower bound on flow body sections
        sections_max: Default upper bound on flow body sections
    """

    def __init__(
        self,
        llm_provider: LLMProvider,
        model_id: str | None = None,
        *,
        count_min: int = 8,
        count_max: int = 15,
        sections_min: int = 2,
        sections_max: int = 4,
    ):
        self.llm = llm_provider
        self.model_id = model_id
        self.count_min = count_min
        self.count_max = count_max
        self.sections_min = sections_min
        self.sections_max = sections_max

    async def generate_points(
        self,
        context: str | None,
        presentational: bool = False,
        count_min: int | None = None,
        count_max: int | None = None,
    ) -> TalkingPointsResult:
        """Generate importance-weighted talking points for the context.

        Raises:
            MissingFieldError: If the context is blank
            GenerationParseError: If the model output holds no usable points
        """
        if not context or not context.strip():
            raise MissingFieldError("context")

        count_min = count_min if count_min is not None else self.count_min
        count_max = count_max if count_max is not None else self.count_max

        prompt = POINTS_PROMPT.format(
            count_min=count_min,
            count_max=count_max,
            mode=POINTS_MODE_PRESENTATIONAL if presentational else POINTS_MODE_INTERACTIVE,
            context=context,
        )
        content, model = await self._generate(prompt, operation="talking_points")

        raw = parse_points(content)
        if raw is None:
            raise self._parse_error("Failed to parse talking points from model output.", content)

        points = normalize_points(raw, count_min, count_max)
        logger.info(
            "Talking points generated",
            extra={
                "service": "talking_points",
                "operation": "talking_points",
                "model_id": model,
                "metadata": {"parsed": len(raw), "returned": len(points)},
            },
        )
        return TalkingPointsResult(points=points, meta={"model": model, "count": len(points)})

    async def generate_flow(
        self,
        context: str | None,
        presentational: bool = True,
        sections_min: int | None = None,
        sections_max: int | None = None,
    ) -> FlowResult:
        """Generate an intro / body / conclusion / Q&A flow for the context.

        Raises:
            MissingFieldError: If the context is blank
            GenerationParseError: If the model output holds no flow object
        """
        if not context or not context.strip():
            raise MissingFieldError("context")

        minimum, maximum = clamp_section_range(
            sections_min if sections_min is not None else self.sections_min,
            sections_max if sections_max is not None else self.sections_max,
        )

        prompt = FLOW_PROMPT.format(
            sections_min=minimum,
            sections_max=maximum,
            mode=FLOW_MODE_PRESENTATIONAL if presentational else FLOW_MODE_INTERACTIVE,
            context=context,
        )
        content, model = await self._generate(prompt, operation="flow")

        raw = parse_flow(content)
        if raw is None:
            raise self._parse_error("Failed to parse flow from model output.", content)

        flow = normalize_flow(raw, minimum, maximum)
        logger.info(
            "Presentation flow generated",
            extra={
                "service": "talking_points",
                "operation": "flow",
                "model_id": model,
                "metadata": {"sections": len(flow.sections)},
            },
        )
        return FlowResult(flow=flow, meta={"model": model})

    async def _generate(self, prompt: str, operation: str) -> tuple[str, str]:
        start_time = time.time()
        response = await self.llm.generate(
            [LLMMessage(role="user", content=prompt)],
            model=self.model_id,
        )
        logger.debug(
            "Generation call complete",
            extra={
                "service": "talking_points",
                "operation": operation,
                "provider": self.llm.name,
                "model_id": response.model,
                "latency_ms": int((time.time() - start_time) * 1000),
            },
        )
        return response.content, response.model

    def _parse_error(self, message: str, content: str) -> GenerationParseError:
        logger.warning(
            message,
            extra={
                "service": "talking_points",
                "provider": self.llm.name,
                "status": "parse_failed",
            },
        )
        return GenerationParseError(
            self.llm.name,
            message,
            details={"raw": (content or "")[:RAW_OUTPUT_PREVIEW_CHARS]},
        )
