"""Owned FIFO queue of agent utterances awaiting playback.

One queue belongs to one practice session. At most one utterance plays at a
time; the next one starts when the current one finishes, fails or is skipped.
"""

import asyncio
import logging
from collections import deque
from dataclasses import dataclass
from typing import Protocol

logger = logging.getLogger("voice.queue")


@dataclass
class Utterance:
    """A synthesized line waiting to be played."""

    text: str
    audio: bytes = b""
    media_type: str = "audio/mpeg"
    voice_id: str | None = None
    agent_id: str | None = None


class PlaybackBackend(Protocol):
    """Where queued audio actually goes (a speaker, a websocket, a test double)."""

    async def play(self, item: Utterance) -> None:
        """Play one utterance, returning when playback has finished."""
        ...

    def stop(self) -> None:
        """Halt whatever is currently audible."""
        ...


class SpeechQueue:
    """Sequential playback of utterances through a backend."""

    def __init__(self, backend: PlaybackBackend):
        self._backend = backend
        self._pending: deque[Utterance] = deque()
        self._current: Utterance | None = None
        self._playback: asyncio.Task | None = None
        self._worker: asyncio.Task | None = None
        self._idle = asyncio.Event()
        self._idle.set()

    @property
    def pending(self) -> list[Utterance]:
        """Utterances queued behind the current one."""
        return list(self._pending)

    @property
    def current(self) -> Utterance | None:
        return self._current

    @property
    def is_playing(self) -> bool:
        return self._current is not None

    def enqueue(self, item: Utterance) -> None:
        """Append an utterance; playback starts immediately when idle.

        Must be called from a running event loop.
        """
        self._pending.append(item)
        self._idle.clear()
        if self._worker is None or self._worker.done():
            self._worker = asyncio.get_running_loop().create_task(self._drain())

    def skip_current(self) -> bool:
        """Stop the current utterance and move on to the next one."""
        if self._playback is None or self._playback.done():
            return False
        self._playback.cancel()
        self._backend.stop()
        logger.debug(
            "Skipped current utterance",
            extra={"service": "voice", "agent_id": self._current.agent_id if self._current else None},
        )
        return True

    def stop_all(self) -> None:
        """Cancel current playback and drop everything pending."""
        dropped = len(self._pending)
        self._pending.clear()
        if self._worker is not None and not self._worker.done():
            self._worker.cancel()
        was_playing = self._current is not None
        self._worker = None
        self._playback = None
        self._current = None
        self._idle.set()
        if was_playing:
            self._backend.stop()
        logger.debug(
            "Speech queue stopped",
            extra={"service": "voice", "metadata": {"dropped": dropped, "was_playing": was_playing}},
        )

    async def join(self) -> None:
        """Wait until the queue is empty and nothing is playing."""
        await self._idle.wait()

    def _owns_state(self) -> bool:
        return self._worker is asyncio.current_task()

    async def _drain(self) -> None:
        try:
            while self._pending and self._owns_state():
                item = self._pending.popleft()
                self._current = item
                self._playback = asyncio.create_task(self._backend.play(item))
                try:
                    await self._playback
                except asyncio.CancelledError:
                    # Worker cancellation (stop_all) propagates; a skipped
                    # playback task just moves on to the next item.
                    if asyncio.current_task().cancelling():
                        raise
                except Exception as exc:
                    logger.warning(
                        "Utterance playback failed",
                        extra={
                            "service": "voice",
                            "agent_id": item.agent_id,
                            "error": str(exc),
                        },
                    )
                finally:
                    if self._owns_state():
                        self._current = None
                        self._playback = None
        finally:
            if self._owns_state():
                self._worker = None
                self._idle.set()
