"""Type definitions for the Werewolf engine.

Covers the decision-agent request/response shapes, the per-role seat state
and the transient night/vote records the rules operate on.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

from wgm.core.types import (
    AllSpeeches,
    AllVotes,
    DeathCause,
    GamePhase,
    InvestigatedPlayers,
    InvestigationResult,
    PlayerInfo,
    Role,
)


def _optional_seat(value: Any) -> Optional[int]:
    """Seat ids arrive as ints; 0, None and negatives mean "no target"."""
    if value is None or isinstance(value, bool):
        return None
    try:
        seat = int(value)
    except (TypeError, ValueError):
        return None
    return seat if seat > 0 else None


# ---------------------------------------------------------------------------
# Decision-agent responses
# ---------------------------------------------------------------------------

@dataclass
class SpeechResponse:
    """Public utterance produced during the day."""
    speech: str
    thinking: Optional[str] = None
    trace_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SpeechResponse":
        return cls(
            speech=str(data["speech"]),
            thinking=data.get("thinking"),
            trace_id=data.get("traceId"),
        )


@dataclass
class VoteResponse:
    """Vote produced during the voting phase."""
    target: Optional[int]
    reason: str = ""
    thinking: Optional[str] = None
    trace_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VoteResponse":
        return cls(
            target=_optional_seat(data.get("target")),
            reason=data.get("reason", ""),
            thinking=data.get("thinking"),
            trace_id=data.get("traceId"),
        )


@dataclass
class WerewolfAbilityResponse:
    """Night kill declaration. ``action`` is "kill" or "idle"."""
    action: str
    target: Optional[int] = None
    reason: str = ""
    thinking: Optional[str] = None
    trace_id: Optional[str] = None

    @property
    def is_kill(self) -> bool:
        return self.action == "kill" and self.target is not None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WerewolfAbilityResponse":
        return cls(
            action=data.get("action", "idle"),
            target=_optional_seat(data.get("target")),
            reason=data.get("reason", ""),
            thinking=data.get("thinking"),
            trace_id=data.get("traceId"),
        )


@dataclass
class SeerAbilityResponse:
    """Night investigation declaration."""
    target: Optional[int]
    action: str = "investigate"
    reason: str = ""
    thinking: Optional[str] = None
    trace_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SeerAbilityResponse":
        return cls(
            target=_optional_seat(data.get("target")),
            action=data.get("action", "investigate"),
            reason=data.get("reason", ""),
            thinking=data.get("thinking"),
            trace_id=data.get("traceId"),
        )


@dataclass
class WitchAbilityResponse:
    """Potion declaration. ``action`` is "using" or "idle"."""
    action: str
    heal_target: Optional[int] = None
    poison_target: Optional[int] = None
    heal_reason: str = ""
    poison_reason: str = ""
    thinking: Optional[str] = None
    trace_id: Optional[str] = None

    @property
    def is_using(self) -> bool:
        return self.action == "using" and (
            self.heal_target is not None or self.poison_target is not None
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WitchAbilityResponse":
        return cls(
            action=data.get("action", "idle"),
            heal_target=_optional_seat(data.get("healTarget")),
            poison_target=_optional_seat(data.get("poisonTarget")),
            heal_reason=data.get("healReason", ""),
            poison_reason=data.get("poisonReason", ""),
            thinking=data.get("thinking"),
            trace_id=data.get("traceId"),
        )


AbilityResponse = Union[WerewolfAbilityResponse, SeerAbilityResponse, WitchAbilityResponse]

ABILITY_RESPONSE_TYPES = {
    Role.WEREWOLF: WerewolfAbilityResponse,
    Role.SEER: SeerAbilityResponse,
    Role.WITCH: WitchAbilityResponse,
}


@dataclass(frozen=True)
class StartGameParams:
    """Sent to every seat once, when the game starts."""
    game_id: str
    player_id: int
    role: Role
    teammates: Tuple[int, ...] = ()
    personality: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "gameId": self.game_id,
            "playerId": self.player_id,
            "role": self.role.value,
            "teammates": list(self.teammates),
        }
        if self.personality:
            data["personality"] = self.personality
        return data


# ---------------------------------------------------------------------------
# Read-only contexts handed to decision agents
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PlayerContext:
    """Snapshot every seat receives. Built from deep copies of engine state."""
    player_id: int
    round: int
    current_phase: GamePhase
    alive_players: Tuple[PlayerInfo, ...]
    all_speeches: AllSpeeches
    all_votes: AllVotes

    def living_ids(self) -> List[int]:
        return [p.id for p in self.alive_players if p.is_alive]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "playerId": self.player_id,
            "round": self.round,
            "currentPhase": self.current_phase.value,
            "alivePlayers": [p.to_dict() for p in self.alive_players],
            "allSpeeches": {
                str(r): [s.to_dict() for s in speeches]
                for r, speeches in self.all_speeches.items()
            },
            "allVotes": {
                str(r): [v.to_dict() for v in votes]
                for r, votes in self.all_votes.items()
            },
        }


@dataclass(frozen=True)
class WerewolfContext(PlayerContext):
    teammates: Tuple[int, ...] = ()
    last_kill_target: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["teammates"] = list(self.teammates)
        data["lastKillTarget"] = self.last_kill_target
        return data


@dataclass(frozen=True)
class SeerContext(PlayerContext):
    investigated_players: InvestigatedPlayers = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["investigatedPlayers"] = {
            str(r): result.to_dict() for r, result in self.investigated_players.items()
        }
        return data


@dataclass(frozen=True)
class WitchContext(PlayerContext):
    killed_tonight: Optional[int] = None
    heal_used: bool = False
    poison_used: bool = False

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["killedTonight"] = self.killed_tonight
        data["potionUsed"] = {"heal": self.heal_used, "poison": self.poison_used}
        return data


# ---------------------------------------------------------------------------
# Role-tagged seat state
# ---------------------------------------------------------------------------

@dataclass
class WolfPack:
    """Werewolf-only knowledge: fellow werewolves."""
    teammates: List[int] = field(default_factory=list)


@dataclass
class SeerNotebook:
    """Seer-only investigation history, keyed by round."""
    investigations: Dict[int, InvestigationResult] = field(default_factory=dict)


@dataclass
class WitchPotions:
    """Single-use potions. Each field is set at most once per game."""
    heal_used_on: Optional[int] = None
    poison_used_on: Optional[int] = None

    @property
    def has_heal(self) -> bool:
        return self.heal_used_on is None

    @property
    def has_poison(self) -> bool:
        return self.poison_used_on is None


RoleState = Union[WolfPack, SeerNotebook, WitchPotions, None]


# ---------------------------------------------------------------------------
# Night / vote records
# ---------------------------------------------------------------------------

@dataclass
class NightIntentions:
    """Declared night actions, cleared every night."""
    werewolf_target: Optional[int] = None
    seer_target: Optional[int] = None
    heal_target: Optional[int] = None
    poison_target: Optional[int] = None


@dataclass
class NightResolution:
    """Outcome of one night.

    Attributes:
        deaths: Dead seats in resolution order (werewolf kill first)
        causes: Seat -> cause of death
        saved: Seat healed from the werewolf attack, if any
        witch_rejected: The witch declared heal and poison on the same seat
    """
    deaths: List[int] = field(default_factory=list)
    causes: Dict[int, DeathCause] = field(default_factory=dict)
    saved: Optional[int] = None
    witch_rejected: bool = False

    @property
    def peaceful(self) -> bool:
        return not self.deaths


@dataclass
class VoteResult:
    """Outcome of one voting phase."""
    eliminated: Optional[int] = None
    counts: Dict[int, int] = field(default_factory=dict)
    max_votes: int = 0

    @property
    def no_votes(self) -> bool:
        return not self.counts

    @property
    def tied(self) -> bool:
        return not self.no_votes and self.eliminated is None
