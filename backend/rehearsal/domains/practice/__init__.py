"""Practice domain: pacing, scoring, live sessions and session records."""

from rehearsal.domains.practice.pacing import (
    BASE_DELAY_MS,
    DELAY_JITTER_MS,
    DIFFICULTY_MULTIPLIER,
    response_delay,
    score,
)
from rehearsal.domains.practice.records import (
    InMemorySessionRecordStore,
    SessionRecord,
    SessionRecordStore,
)
from rehearsal.domains.practice.session import Message, PracticeSession, SessionStatus

__all__ = [
    "BASE_DELAY_MS",
    "DELAY_JITTER_MS",
    "DIFFICULTY_MULTIPLIER",
    "InMemorySessionRecordStore",
    "Message",
    "PracticeSession",
    "SessionRecord",
    "SessionRecordStore",
    "SessionStatus",
    "response_delay",
    "score",
]
