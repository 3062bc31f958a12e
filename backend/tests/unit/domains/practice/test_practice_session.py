"""Tests for the live practice session."""

import asyncio
import random

import pytest

from rehearsal.ai.agents.composer import GREETING
from rehearsal.ai.agents.context import TalkingPoint
from rehearsal.ai.providers.tts.stub import StubTTSProvider
from rehearsal.domains.practice.records import InMemorySessionRecordStore
from rehearsal.domains.practice.session import PracticeSession, SessionStatus
from rehearsal.domains.scenarios.catalog import SCENARIOS, Difficulty
from rehearsal.domains.voice.service import SpeechService
from rehearsal.domains.voice.speech_queue import SpeechQueue
from rehearsal.exceptions import SessionStateError
from tests.doubles import RecordingBackend, settle

NEVER = 3600.0


class FakeClock:
    def __init__(self, now: float = 100.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


def scripted_delays(*values: float):
    """Delay function replaying ``values`` and then repeating the last one."""
    remaining = list(values)

    def delay(_difficulty: Difficulty) -> float:
        if len(remaining) > 1:
            return remaining.pop(0)
        return remaining[0]

    return delay


def make_session(scenario_id: str = "classroom", **overrides) -> PracticeSession:
    options = {
        "rng": random.Random(0),
        "greeting_delay_seconds": NEVER,
        "response_delay_seconds": scripted_delays(NEVER),
        "duration_seconds": 0,
    }
    options.update(overrides)
    return PracticeSession(SCENARIOS[scenario_id], **options)


class TestLifecycle:
    """Test start/end transitions."""

    @pytest.mark.asyncio
    async def test_start_draws_agents(self):
        """Starting draws the scenario's participants and activates the session."""
        session = make_session("de-escalation", session_id="s1")

        agents = session.start()

        assert session.status is SessionStatus.ACTIVE
        assert len(agents) == 3
        assert [a.id for a in agents] == ["s1-agent-0", "s1-agent-1", "s1-agent-2"]
        session.end()

    @pytest.mark.asyncio
    async def test_start_twice_raises(self):
        """A session can only be started once."""
        session = make_session()
        session.start()

        with pytest.raises(SessionStateError):
            session.start()
        session.end()

    def test_end_before_start_raises(self):
        """Ending a session that never started is rejected."""
        with pytest.raises(SessionStateError):
            make_session().end()

    def test_send_before_start_raises(self):
        """Messages are only accepted while active."""
        with pytest.raises(SessionStateError):
            make_session().send_user_message("hello")

    @pytest.mark.asyncio
    async def test_end_is_idempotent(self):
        """A second end() returns the stored record without saving again."""
        store = InMemorySessionRecordStore()
        session = make_session(store=store)
        session.start()

        first = session.end()
        second = session.end()

        assert first is second
        assert len(store.records()) == 1

    @pytest.mark.asyncio
    async def test_send_after_end_raises(self):
        """The transcript is closed once the session ends."""
        session = make_session()
        session.start()
        session.end()

        with pytest.raises(SessionStateError):
            session.send_user_message("too late")

    @pytest.mark.asyncio
    async def test_difficulty_defaults_to_scenario(self):
        """Without an override the scenario's difficulty applies."""
        assert make_session("job-interview").difficulty is Difficulty.HARD
        assert make_session("job-interview", difficulty="easy").difficulty is Difficulty.EASY


class TestGreeting:
    """Test the opening line."""

    @pytest.mark.asyncio
    async def test_first_agent_greets(self):
        """The first drawn agent greets the user after the greeting delay."""
        session = make_session(greeting_delay_seconds=0)
        agents = session.start()
        await settle()

        assert len(session.messages) == 1
        greeting = session.messages[0]
        assert greeting.agent_id == agents[0].id
        assert greeting.speaker == agents[0].name
        assert greeting.text.endswith(GREETING)
        session.end()

    @pytest.mark.asyncio
    async def test_end_cancels_pending_greeting(self):
        """No greeting lands after the session has ended."""
        session = make_session(greeting_delay_seconds=0.01)
        session.start()
        session.end()
        await asyncio.sleep(0.05)

        assert session.messages == []


class TestResponses:
    """Test scheduling of agent responses."""

    @pytest.mark.asyncio
    async def test_user_message_triggers_response(self):
        """An agent answers after the delay and the next response is queued."""
        session = make_session(response_delay_seconds=scripted_delays(0, NEVER))
        session.start()

        sent = session.send_user_message("I enjoy building teams")
        await settle()

        assert sent.is_user is True
        assert [m.is_user for m in session.messages] == [True, False]
        assert session.messages[1].agent_id in {a.id for a in session.agents}
        assert session.has_pending_response is True
        session.end()
        assert session.has_pending_response is False

    @pytest.mark.asyncio
    async def test_new_user_message_replaces_pending_response(self):
        """At most one agent response is pending at a time."""
        session = make_session(response_delay_seconds=scripted_delays(NEVER, 0, NEVER))
        session.start()

        session.send_user_message("first")
        first_pending = session._pending_response
        session.send_user_message("second")
        await settle()

        assert first_pending.cancelled()
        assert sum(1 for m in session.messages if not m.is_user) == 1
        session.end()

    @pytest.mark.asyncio
    async def test_blank_message_is_ignored(self):
        """Whitespace-only input is neither recorded nor answered."""
        session = make_session()
        session.start()

        assert session.send_user_message("   ") is None
        assert session.messages == []
        assert session.has_pending_response is False
        session.end()

    @pytest.mark.asyncio
    async def test_agents_steer_to_talking_points(self):
        """The response targets the top unaddressed talking point."""
        session = make_session(
            response_delay_seconds=scripted_delays(0, NEVER),
            talking_points=[TalkingPoint(text="budget overview", importance=5, id="tp-1")],
        )
        session.start()

        session.send_user_message("hello everyone")
        await settle()

        assert '"budget overview"' in session.messages[-1].text
        session.end()

    @pytest.mark.asyncio
    async def test_remaining_points_shrink_as_they_are_covered(self):
        """Points mentioned in the transcript drop out of the remaining list."""
        session = make_session(
            talking_points=[
                TalkingPoint(text="budget overview", importance=5),
                TalkingPoint(text="hiring plans", importance=3),
            ]
        )
        session.start()
        session.send_user_message("Our budget is on track")

        assert [p.text for p in session.remaining_talking_points()] == ["hiring plans"]
        session.end()

    @pytest.mark.asyncio
    async def test_on_message_callback(self):
        """Every appended message is reported to the callback."""
        seen = []
        session = make_session(on_message=seen.append)
        session.start()
        session.send_user_message("hello")

        assert [m.text for m in seen] == ["hello"]
        session.end()

    def test_talking_points_are_capped(self):
        """Only the first twenty talking points are kept."""
        points = [TalkingPoint(text=f"point {i}") for i in range(25)]
        session = make_session(talking_points=points)

        assert len(session.context.talking_points) == 20
        assert session.context.talking_points[-1].text == "point 19"


class TestRecord:
    """Test the final session record."""

    @pytest.mark.asyncio
    async def test_record_scores_session(self):
        """The record carries the computed score and whole-second duration."""
        clock = FakeClock(100.0)
        store = InMemorySessionRecordStore()
        session = make_session("classroom", clock=clock, store=store)
        session.start()
        for i in range(5):
            session.send_user_message(f"answer {i}")
        clock.now = 160.7

        record = session.end()

        assert record.scenario_id == "classroom"
        assert record.duration == 60
        assert record.difficulty == "medium"
        assert record.score == 173
        assert store.records() == [record]

    @pytest.mark.asyncio
    async def test_timer_ends_session(self):
        """The session ends itself when its duration elapses."""
        store = InMemorySessionRecordStore()
        session = make_session(duration_seconds=0.02, store=store)
        session.start()

        await asyncio.sleep(0.1)

        assert session.status is SessionStatus.ENDED
        assert len(store.records()) == 1

    @pytest.mark.asyncio
    async def test_zero_duration_disables_timer(self):
        """A zero duration leaves the session open."""
        session = make_session(duration_seconds=0)
        session.start()
        await asyncio.sleep(0.02)

        assert session.status is SessionStatus.ACTIVE
        session.end()


class TestSpeech:
    """Test speech output from a session."""

    @pytest.mark.asyncio
    async def test_agent_lines_are_spoken_in_their_voice(self):
        """Each agent line is synthesized with the agent's voice and queued."""
        provider = StubTTSProvider()
        backend = RecordingBackend()
        speech = SpeechService(provider, queue=SpeechQueue(backend))
        session = make_session(greeting_delay_seconds=0, speech=speech)
        agents = session.start()
        await settle(10)

        assert provider.calls == [(session.messages[0].text, agents[0].voice_id)]
        assert backend.finished == [session.messages[0].text]
        session.end()

    @pytest.mark.asyncio
    async def test_end_stops_playback(self):
        """Ending the session silences the queue."""
        backend = RecordingBackend(block=True)
        queue = SpeechQueue(backend)
        speech = SpeechService(StubTTSProvider(), queue=queue)
        session = make_session(greeting_delay_seconds=0, speech=speech)
        session.start()
        await settle(10)
        assert queue.is_playing is True

        session.end()

        assert queue.is_playing is False
        assert backend.stop_calls == 1
