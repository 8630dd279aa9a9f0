"""Shared helpers for the test suite."""

from typing import Any, Dict, List, Optional, Sequence

import pytest

from wgm.agents.baselines.scripted_agent import ScriptedAgent
from wgm.core.exceptions import TranscriptError
from wgm.core.types import Role, SpeechKind
from wgm.engine.config import GameConfig
from wgm.engine.game_master import GameMaster
from wgm.logging.transcript import GameTranscript, TranscriptStore


W, S, WI, V = Role.WEREWOLF, Role.SEER, Role.WITCH, Role.VILLAGER

# Seats 1-2 werewolves, 3 seer, 4 witch, 5-8 villagers
EIGHT_SEATS = [W, W, S, WI, V, V, V, V]


class RecordingStore(TranscriptStore):
    """Transcript store that keeps every save in memory."""

    def __init__(self, fail: bool = False):
        self.saved: List[GameTranscript] = []
        self.fail = fail

    async def save(self, transcript: GameTranscript) -> None:
        if self.fail:
            raise TranscriptError("disk full")
        self.saved.append(transcript)


def make_game(
    roles: Sequence[Role] = EIGHT_SEATS,
    scripts: Optional[Dict[int, Dict[str, Any]]] = None,
    store: Optional[TranscriptStore] = None,
    **config_kwargs,
) -> GameMaster:
    """Build a game with one ScriptedAgent per seat and fixed roles.

    ``scripts`` maps seat id to ScriptedAgent keyword arguments
    (speeches / votes / abilities / delay).
    """
    scripts = scripts or {}
    config_kwargs.setdefault("decision_timeout", 1.0)
    agents = [
        ScriptedAgent(player_id=seat, **scripts.get(seat, {}))
        for seat in range(1, len(roles) + 1)
    ]
    return GameMaster(
        agents,
        config=GameConfig(**config_kwargs),
        game_id="test_game",
        transcript_store=store,
        role_assignment=list(roles),
    )


def alive_ids(game: GameMaster) -> List[int]:
    return [p.id for p in game.alive_players]


def system_messages(game: GameMaster) -> List[str]:
    return [s.content for _, s in game.state.speeches if s.kind == SpeechKind.SYSTEM]


@pytest.fixture
def store():
    return RecordingStore()
