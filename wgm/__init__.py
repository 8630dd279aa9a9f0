"""Werewolf Game Master - phase state machine and round resolution for Werewolf games."""

__version__ = "0.1.0"

from wgm.core.base_agent import BaseAgent
from wgm.core.types import GamePhase, Role, Team, WinCondition
from wgm.core.exceptions import (
    WGMException,
    InvalidTransitionError,
    PhaseInProgressError,
    InvalidActionError,
    AgentError,
)
from wgm.engine.config import GameConfig
from wgm.engine.game_master import GameMaster
from wgm.engine.registry import GameRegistry

__all__ = [
    "__version__",
    "BaseAgent",
    "GamePhase",
    "Role",
    "Team",
    "WinCondition",
    "WGMException",
    "InvalidTransitionError",
    "PhaseInProgressError",
    "InvalidActionError",
    "AgentError",
    "GameConfig",
    "GameMaster",
    "GameRegistry",
]
