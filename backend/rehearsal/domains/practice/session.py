"""Live practice session: timers, rolling agent responses and the final record.

A session owns every task it starts. ``end()`` cancels them synchronously, so
no agent line can land after the session has ended.
"""

from __future__ import annotations

import asyncio
import logging
import random
import time
import uuid
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum

from rehearsal.ai.agents.composer import ResponseComposer
from rehearsal.ai.agents.context import USER_LABEL, AgentPromptContext, TalkingPoint, Turn
from rehearsal.ai.agents.tracker import remaining_points
from rehearsal.domains.practice.pacing import response_delay, score
from rehearsal.domains.practice.records import SessionRecord, SessionRecordStore
from rehearsal.domains.scenarios.catalog import (
    Agent,
    Difficulty,
    Scenario,
    parse_difficulty,
    select_agents,
)
from rehearsal.domains.voice.service import SpeechRequest, SpeechService
from rehearsal.exceptions import SessionStateError

logger = logging.getLogger("practice.session")


class SessionStatus(str, Enum):
    PENDING = "pending"
    ACTIVE = "active"
    ENDED = "ended"


@dataclass(frozen=True)
class Message:
    """One line of the session transcript."""

    speaker: str
    text: str
    is_user: bool = False
    agent_id: str | None = None
    id: str = field(default_factory=lambda: f"msg-{uuid.uuid4().hex[:12]}")
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def to_turn(self) -> Turn:
        return Turn(speaker=self.speaker, text=self.text, is_user=self.is_user)


MessageCallback = Callable[[Message], None]


class PracticeSession:
    """Runs one practice conversation between the user and drawn agents.

    Args:
        scenario: The scenario being practiced
        difficulty: Tier for pacing and scoring; defaults to the scenario's own
        user_extras: Free text (notes, extracted documents) read by the composer
        talking_points: Points to steer the conversation; truncated to
            ``talking_points_limit``
        duration_seconds: Session length. ``None`` uses the scenario duration,
            0 disables the timer
        composer: Response composer; built on ``rng`` when omitted
        rng: Random source for agent draws, speaker choice and delays
        speech: Optional speech service that voices every agent line
        store: Optional store receiving the final record
        on_message: Called synchronously with every appended message
        greeting_delay_seconds: Delay before the first agent greets the user
        response_delay_seconds: Override for the reaction-time delay, mostly
            for tests. Receives the difficulty, returns seconds
        clock: Monotonic clock used for elapsed time
    """

    def __init__(
        self,
        scenario: Scenario,
        *,
        difficulty: Difficulty | str | None = None,
        user_extras: str = "",
        talking_points: Sequence[TalkingPoint] = (),
        duration_seconds: float | None = None,
        composer: ResponseComposer | None = None,
        rng: random.Random | None = None,
        speech: SpeechService | None = None,
        store: SessionRecordStore | None = None,
        on_message: MessageCallback | None = None,
        greeting_delay_seconds: float = 2.0,
        talking_points_limit: int = 20,
        response_delay_seconds: Callable[[Difficulty], float] | None = None,
        clock: Callable[[], float] = time.monotonic,
        session_id: str | None = None,
    ):
        self.id = session_id or uuid.uuid4().hex[:12]
        self.scenario = scenario
        self.difficulty = parse_difficulty(difficulty or scenario.difficulty)
        self.duration_seconds = (
            scenario.duration_seconds if duration_seconds is None else max(0, duration_seconds)
        )
        self.context = AgentPromptContext(
            scenario_base_prompt=scenario.base_prompt,
            user_extras=user_extras or "",
            talking_points=tuple(talking_points)[: max(0, talking_points_limit)],
            presentational=scenario.presentational,
        )

        self._rng = rng or random.Random()
        self._composer = composer or ResponseComposer(self._rng)
        self._speech = speech
        self._store = store
        self._on_message = on_message
        self._greeting_delay = greeting_delay_seconds
        self._response_delay = response_delay_seconds or self._default_response_delay
        self._clock = clock

        self.status = SessionStatus.PENDING
        self.agents: list[Agent] = []
        self.messages: list[Message] = []
        self.record: SessionRecord | None = None
        self._started_at: float | None = None
        self._ended_at: float | None = None
        self._pending_response: asyncio.Task | None = None
        self._tasks: set[asyncio.Task] = set()

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------
    @property
    def elapsed_seconds(self) -> float:
        if self._started_at is None:
            return 0.0
        end = self._ended_at if self._ended_at is not None else self._clock()
        return max(0.0, end - self._started_at)

    @property
    def user_message_count(self) -> int:
        return sum(1 for m in self.messages if m.is_user)

    @property
    def has_pending_response(self) -> bool:
        return self._pending_response is not None and not self._pending_response.done()

    def history(self) -> list[str]:
        """Transcript flattened to ``"Speaker: text"`` lines."""
        return [m.to_turn().render() for m in self.messages]

    def remaining_talking_points(self) -> list[TalkingPoint]:
        return remaining_points(self.context.talking_points, self.history())

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self) -> list[Agent]:
        """Draw agents, schedule the greeting and start the session timer.

        Must be called from a running event loop.
        """
        if self.status is not SessionStatus.PENDING:
            raise SessionStateError(self.status.value, "start")

        self.agents = select_agents(self.scenario, self._rng, id_prefix=f"{self.id}-agent")
        self.status = SessionStatus.ACTIVE
        self._started_at = self._clock()

        if self.agents:
            self._spawn(self._greet_after(self._greeting_delay))
        if self.duration_seconds > 0:
            self._spawn(self._end_after(self.duration_seconds))

        logger.info(
            "Practice session started",
            extra={
                "service": "practice",
                "session_id": self.id,
                "scenario_id": self.scenario.id,
                "difficulty": self.difficulty.value,
                "metadata": {
                    "agents": [a.persona_id for a in self.agents],
                    "duration_seconds": self.duration_seconds,
                    "talking_points": len(self.context.talking_points),
                },
            },
        )
        return self.agents

    def send_user_message(self, text: str) -> Message | None:
        """Append a user line and schedule the next agent response.

        Blank input is ignored and returns None.
        """
        if self.status is not SessionStatus.ACTIVE:
            raise SessionStateError(self.status.value, "send_user_message")
        if not text or not text.strip():
            return None

        message = Message(speaker=USER_LABEL, text=text, is_user=True, agent_id="user")
        self._append(message)
        self._schedule_response()
        return message

    def end(self) -> SessionRecord:
        """End the session, cancel every pending task and save the record.

        Calling ``end()`` again returns the same record.
        """
        if self.status is SessionStatus.ENDED and self.record is not None:
            return self.record
        if self.status is SessionStatus.PENDING:
            raise SessionStateError(self.status.value, "end")

        self.status = SessionStatus.ENDED
        self._ended_at = self._clock()

        current = asyncio.current_task() if _loop_running() else None
        for task in list(self._tasks):
            if task is not current and not task.done():
                task.cancel()
        self._tasks.clear()
        self._pending_response = None

        if self._speech is not None:
            self._speech.stop_all()

        duration = int(self.elapsed_seconds)
        final_score = score(self.user_message_count, duration, self.difficulty)
        self.record = SessionRecord(
            scenario_id=self.scenario.id,
            date=datetime.now(UTC).isoformat(),
            score=final_score,
            duration=duration,
            difficulty=self.difficulty.value,
        )
        if self._store is not None:
            self._store.save(self.record)

        logger.info(
            "Practice session ended",
            extra={
                "service": "practice",
                "session_id": self.id,
                "scenario_id": self.scenario.id,
                "difficulty": self.difficulty.value,
                "score": final_score,
                "duration_ms": duration * 1000,
                "metadata": {"user_messages": self.user_message_count},
            },
        )
        return self.record

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _default_response_delay(self, difficulty: Difficulty) -> float:
        return response_delay(difficulty, self._rng) / 1000.0

    def _spawn(self, coro) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def _schedule_response(self) -> None:
        if self.status is not SessionStatus.ACTIVE or not self.agents:
            return
        if self._pending_response is not None and not self._pending_response.done():
            self._pending_response.cancel()

        agent = self._rng.choice(self.agents)
        delay = self._response_delay(self.difficulty)
        logger.debug(
            "Agent response scheduled",
            extra={
                "service": "practice",
                "session_id": self.id,
                "agent_id": agent.id,
                "delay_ms": int(delay * 1000),
            },
        )
        self._pending_response = self._spawn(self._respond_after(agent, delay))

    async def _greet_after(self, delay: float) -> None:
        await asyncio.sleep(delay)
        if self.status is not SessionStatus.ACTIVE:
            return
        agent = self.agents[0]
        self._add_agent_message(agent, self._composer.greeting(agent))

    async def _respond_after(self, agent: Agent, delay: float) -> None:
        await asyncio.sleep(delay)
        if self._pending_response is asyncio.current_task():
            self._pending_response = None
        if self.status is not SessionStatus.ACTIVE:
            return

        text = self._composer.compose(
            self.scenario.type,
            agent,
            self.difficulty,
            self.history(),
            self.context,
        )
        self._add_agent_message(agent, text)
        self._schedule_response()

    async def _end_after(self, seconds: float) -> None:
        await asyncio.sleep(seconds)
        if self.status is SessionStatus.ACTIVE:
            self.end()

    def _add_agent_message(self, agent: Agent, text: str) -> None:
        message = Message(speaker=agent.name, text=text, agent_id=agent.id)
        if not self._append(message):
            return
        if self._speech is not None:
            self._spawn(
                self._speech.speak(
                    SpeechRequest(text=text, voice_id=agent.voice_id, agent_id=agent.id)
                )
            )

    def _append(self, message: Message) -> bool:
        if self.status is not SessionStatus.ACTIVE:
            return False
        self.messages.append(message)
        if self._on_message is not None:
            self._on_message(message)
        return True


def _loop_running() -> bool:
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return False
    return True
