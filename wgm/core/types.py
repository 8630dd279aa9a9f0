"""Common types and enums used across the game master."""

from enum import Enum
from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field
from datetime import datetime


# Seat id used for moderator / system announcements
SYSTEM_SEAT = -1


class Role(Enum):
    """Player roles in Werewolf."""

    VILLAGER = "villager"
    WEREWOLF = "werewolf"
    SEER = "seer"
    WITCH = "witch"


class Team(Enum):
    """Teams in Werewolf."""

    VILLAGE = "village"
    WEREWOLVES = "werewolves"


class GamePhase(Enum):
    """Game phases.

    PREPARING is left once by ``start()``; NIGHT -> DAY -> VOTING cycles until
    a win condition forces ENDED, which is terminal.
    """

    PREPARING = "preparing"
    NIGHT = "night"
    DAY = "day"
    VOTING = "voting"
    ENDED = "ended"


class WinCondition(Enum):
    """Derived outcome of the current alive-role counts."""

    ONGOING = "ongoing"
    WEREWOLVES_WIN = "werewolves_win"
    VILLAGERS_WIN = "villagers_win"


class SpeechKind(Enum):
    """Kinds of entries in the speech log."""

    PLAYER = "player"
    SYSTEM = "system"
    NIGHT_ACTION = "night_action"


class DeathCause(Enum):
    """Why a seat died."""

    WEREWOLF_KILL = "werewolf_kill"
    POISON = "poison"
    VOTE = "vote"


@dataclass(frozen=True)
class PlayerInfo:
    """Public view of a seat."""

    id: int
    is_alive: bool

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {"id": self.id, "isAlive": self.is_alive}


@dataclass(frozen=True)
class Speech:
    """One entry in the append-only speech log.

    Attributes:
        player_id: Speaking seat, or SYSTEM_SEAT for announcements
        content: What was said
        kind: Player utterance, system announcement or night action record
        thinking: Private reasoning attached by the decision agent
        trace_id: External trace id of the decision call
    """

    player_id: int
    content: str
    kind: SpeechKind = SpeechKind.PLAYER
    thinking: Optional[str] = None
    trace_id: Optional[str] = None

    @property
    def is_public(self) -> bool:
        """Night action records are kept for audit only."""
        return self.kind != SpeechKind.NIGHT_ACTION

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        data = {
            "playerId": self.player_id,
            "content": self.content,
            "type": self.kind.value,
        }
        if self.thinking is not None:
            data["thinking"] = self.thinking
        if self.trace_id is not None:
            data["traceId"] = self.trace_id
        return data


@dataclass(frozen=True)
class Vote:
    """A single vote cast during a voting phase."""

    voter_id: int
    target_id: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {"voterId": self.voter_id, "targetId": self.target_id}


@dataclass(frozen=True)
class InvestigationResult:
    """Seer-private record of one night's investigation."""

    target: int
    is_good: bool

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {"target": self.target, "isGood": self.is_good}


@dataclass
class GameSummary:
    """Terminal summary, finalized exactly once when the game ends."""

    game_id: str
    winner: Team
    win_condition: WinCondition
    reason: str
    surviving_players: List[int]
    num_rounds: int
    duration_seconds: float
    finished_at: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        """Convert summary to dictionary."""
        return {
            "game_id": self.game_id,
            "winner": self.winner.value,
            "win_condition": self.win_condition.value,
            "reason": self.reason,
            "surviving_players": list(self.surviving_players),
            "num_rounds": self.num_rounds,
            "duration_seconds": self.duration_seconds,
            "finished_at": self.finished_at.isoformat(),
        }


# Type aliases for common patterns
PlayerID = int
Round = int
AllSpeeches = Dict[Round, List[Speech]]
AllVotes = Dict[Round, List[Vote]]
InvestigatedPlayers = Dict[Round, InvestigationResult]
