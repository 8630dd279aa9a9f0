"""Core components shared by the engine, agents and tooling."""

from wgm.core.base_agent import BaseAgent
from wgm.core.types import (
    SYSTEM_SEAT,
    DeathCause,
    GamePhase,
    GameSummary,
    InvestigationResult,
    PlayerInfo,
    Role,
    Speech,
    SpeechKind,
    Team,
    Vote,
    WinCondition,
)
from wgm.core.exceptions import (
    WGMException,
    InvalidTransitionError,
    PhaseInProgressError,
    InvalidActionError,
    AgentError,
    ConfigurationError,
    TranscriptError,
)
from wgm.core.utils import seed_everything, get_timestamp, generate_game_id

__all__ = [
    "BaseAgent",
    "SYSTEM_SEAT",
    "DeathCause",
    "GamePhase",
    "GameSummary",
    "InvestigationResult",
    "PlayerInfo",
    "Role",
    "Speech",
    "SpeechKind",
    "Team",
    "Vote",
    "WinCondition",
    "WGMException",
    "InvalidTransitionError",
    "PhaseInProgressError",
    "InvalidActionError",
    "AgentError",
    "ConfigurationError",
    "TranscriptError",
    "seed_everything",
    "get_timestamp",
    "generate_game_id",
]
