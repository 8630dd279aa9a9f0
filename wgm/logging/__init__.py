"""Event logging and game transcripts."""

from wgm.logging.game_logger import GameLogger
from wgm.logging.formats import LogEntry, EventType
from wgm.logging.transcript import (
    FileTranscriptStore,
    GameTranscript,
    TranscriptPlayer,
    TranscriptStore,
)

__all__ = [
    "GameLogger",
    "LogEntry",
    "EventType",
    "FileTranscriptStore",
    "GameTranscript",
    "TranscriptPlayer",
    "TranscriptStore",
]
