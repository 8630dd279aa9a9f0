"""Werewolf game engine."""

from wgm.engine.config import DEFAULT_ROLE_TABLE, GameConfig, get_role_counts
from wgm.engine.game_master import GameMaster
from wgm.engine.player import Player
from wgm.engine.registry import GameRegistry
from wgm.engine.state import GameState, SpeechLog
from wgm.engine.rules import (
    NIGHT_ORDER,
    assign_roles,
    check_win_condition,
    resolve_night,
    tally_votes,
)
from wgm.engine.types import (
    NightIntentions,
    NightResolution,
    PlayerContext,
    SeerAbilityResponse,
    SeerContext,
    SpeechResponse,
    StartGameParams,
    VoteResponse,
    VoteResult,
    WerewolfAbilityResponse,
    WerewolfContext,
    WitchAbilityResponse,
    WitchContext,
)

__all__ = [
    "DEFAULT_ROLE_TABLE",
    "GameConfig",
    "get_role_counts",
    "GameMaster",
    "Player",
    "GameRegistry",
    "GameState",
    "SpeechLog",
    "NIGHT_ORDER",
    "assign_roles",
    "check_win_condition",
    "resolve_night",
    "tally_votes",
    "NightIntentions",
    "NightResolution",
    "PlayerContext",
    "SeerAbilityResponse",
    "SeerContext",
    "SpeechResponse",
    "StartGameParams",
    "VoteResponse",
    "VoteResult",
    "WerewolfAbilityResponse",
    "WerewolfContext",
    "WitchAbilityResponse",
    "WitchContext",
]
