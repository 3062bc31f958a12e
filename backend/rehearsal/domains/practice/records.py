"""Completed-session records kept for the lifetime of the process."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, Protocol

logger = logging.getLogger("practice")


@dataclass(frozen=True)
class SessionRecord:
    scenario_id: str
    date: str  # ISO-8601
    score: int
    duration: int  # seconds
    difficulty: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class SessionRecordStore(Protocol):
    def save(self, record: SessionRecord) -> None: ...

    def records(self, scenario_id: str | None = None) -> list[SessionRecord]: ...


class InMemorySessionRecordStore:
    """Append-only in-memory store; one record per completed session."""

    def __init__(self) -> None:
        self._records: list[SessionRecord] = []

    def save(self, record: SessionRecord) -> None:
        self._records.append(record)
        logger.info(
            "Session record saved",
            extra={
                "service": "practice",
                "operation": "record.save",
                "scenario_id": record.scenario_id,
                "score": record.score,
                "difficulty": record.difficulty,
            },
        )

    def records(self, scenario_id: str | None = None) -> list[SessionRecord]:
        if scenario_id is None:
            return list(self._records)
        return [r for r in self._records if r.scenario_id == scenario_id]
