"""Event log record for one Werewolf game."""

from enum import Enum, auto
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from datetime import datetime

from wgm.core.utils import safe_json_dumps


class EventType(Enum):
    """What happened. Names are written to the JSONL log."""

    # Lifecycle
    GAME_START = auto()
    ROLE_ASSIGNMENT = auto()
    ROUND_START = auto()
    PHASE_CHANGE = auto()
    GAME_END = auto()

    # Night
    PLAYER_ACTION = auto()
    INVESTIGATION_RESULT = auto()
    NIGHT_RESULT = auto()

    # Day and voting
    ANNOUNCEMENT = auto()
    PLAYER_SPEAK = auto()
    VOTE_CAST = auto()
    ELECTION_RESULT = auto()
    PLAYER_ELIMINATED = auto()

    # Failures
    AGENT_ERROR = auto()
    ERROR = auto()
    WARNING = auto()


@dataclass
class LogEntry:
    """One line of the event log.

    ``round_number`` and ``phase`` are stamped by the logger from the last
    round/phase change it saw, so entries can be grouped without the engine
    passing them around.
    """

    timestamp: datetime
    event_type: EventType
    game_id: str
    round_number: int
    phase: Optional[str] = None
    data: Dict[str, Any] = field(default_factory=dict)
    player_id: Optional[int] = None
    is_private: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.name,
            "game_id": self.game_id,
            "round_number": self.round_number,
            "phase": self.phase,
            "data": self.data,
            "player_id": self.player_id,
            "is_private": self.is_private,
        }

    def to_json(self) -> str:
        return safe_json_dumps(self.to_dict(), ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LogEntry":
        return cls(
            timestamp=datetime.fromisoformat(data["timestamp"]),
            event_type=EventType[data["event_type"]],
            game_id=data["game_id"],
            round_number=data.get("round_number", 0),
            phase=data.get("phase"),
            data=data.get("data", {}),
            player_id=data.get("player_id"),
            is_private=data.get("is_private", False),
        )
