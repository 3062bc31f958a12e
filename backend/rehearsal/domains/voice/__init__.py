"""Voice domain: speech synthesis and playback queueing."""

from rehearsal.domains.voice.service import SpeechRequest, SpeechService
from rehearsal.domains.voice.speech_queue import PlaybackBackend, SpeechQueue, Utterance

__all__ = [
    "PlaybackBackend",
    "SpeechQueue",
    "SpeechRequest",
    "SpeechService",
    "Utterance",
]
