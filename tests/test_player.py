"""Tests for the Player seat wrapper."""

import pytest

from wgm.agents.baselines.scripted_agent import ScriptedAgent
from wgm.core.exceptions import InvalidActionError
from wgm.core.types import GamePhase, InvestigationResult, Role, Team
from wgm.engine.player import Player, initial_role_state
from wgm.engine.types import (
    PlayerContext,
    SeerAbilityResponse,
    SeerNotebook,
    SpeechResponse,
    VoteResponse,
    WerewolfAbilityResponse,
    WitchAbilityResponse,
    WitchPotions,
    WolfPack,
)
from wgm.logging.formats import EventType
from wgm.logging.game_logger import GameLogger


def make_context(player_id: int = 1) -> PlayerContext:
    return PlayerContext(
        player_id=player_id,
        round=1,
        current_phase=GamePhase.DAY,
        alive_players=(),
        all_speeches={},
        all_votes={},
    )


class TestRoleState:

    def test_state_per_role(self):
        assert isinstance(initial_role_state(Role.WEREWOLF), WolfPack)
        assert isinstance(initial_role_state(Role.SEER), SeerNotebook)
        assert isinstance(initial_role_state(Role.WITCH), WitchPotions)
        assert initial_role_state(Role.VILLAGER) is None

    def test_wrong_role_accessor_raises(self):
        player = Player(1, Role.VILLAGER, ScriptedAgent(1))
        with pytest.raises(InvalidActionError):
            player.potions
        with pytest.raises(InvalidActionError):
            player.notebook

    def test_team(self):
        assert Player(1, Role.WEREWOLF, ScriptedAgent(1)).team == Team.WEREWOLVES
        assert Player(2, Role.SEER, ScriptedAgent(2)).team == Team.VILLAGE


class TestMutations:

    def test_kill_is_monotonic(self):
        player = Player(1, Role.VILLAGER, ScriptedAgent(1))

        assert player.kill() is True
        assert player.kill() is False
        assert player.is_alive is False
        assert player.info().is_alive is False

    def test_potions_are_single_use(self):
        witch = Player(4, Role.WITCH, ScriptedAgent(4))

        assert witch.use_heal(3) is True
        assert witch.use_heal(5) is False
        assert witch.potions.heal_used_on == 3

        assert witch.use_poison(2) is True
        assert witch.use_poison(6) is False
        assert witch.potions.poison_used_on == 2

    def test_record_investigation(self):
        seer = Player(3, Role.SEER, ScriptedAgent(3))
        seer.record_investigation(1, InvestigationResult(target=1, is_good=False))

        assert seer.notebook.investigations[1].target == 1


class TestAgentCalls:

    @pytest.mark.asyncio
    async def test_start_game_sets_teammates(self):
        agent = ScriptedAgent(1)
        wolf = Player(1, Role.WEREWOLF, agent)

        assert await wolf.start_game("g1", [1, 2]) is True
        assert wolf.pack.teammates == [2]
        assert agent.role == Role.WEREWOLF
        assert agent.start_params.game_id == "g1"

    @pytest.mark.asyncio
    async def test_speak_passes_through(self):
        player = Player(1, Role.VILLAGER, ScriptedAgent(1, speeches=["hello"]))
        result = await player.speak(make_context())

        assert isinstance(result, SpeechResponse)
        assert result.speech == "hello"

    @pytest.mark.asyncio
    async def test_timeout_becomes_abstention(self):
        logger = GameLogger(game_id="t")
        agent = ScriptedAgent(1, votes=[2], delay=0.5)
        player = Player(1, Role.VILLAGER, agent, decision_timeout=0.05, logger=logger)

        assert await player.vote(make_context()) is None
        assert player.stats["timeouts"] == 1
        assert len(logger.get_entries(EventType.AGENT_ERROR, include_private=True)) == 1

    @pytest.mark.asyncio
    async def test_exception_becomes_abstention(self):
        player = Player(1, Role.VILLAGER, ScriptedAgent(1, votes=[RuntimeError("boom")]))

        assert await player.vote(make_context()) is None
        assert player.stats["failures"] == 1

    @pytest.mark.asyncio
    async def test_malformed_response_becomes_abstention(self):
        agent = ScriptedAgent(1, abilities=[VoteResponse(target=2)])
        wolf = Player(1, Role.WEREWOLF, agent)
        await wolf.start_game("g1", [1])

        assert await wolf.use_ability(make_context()) is None
        assert wolf.stats["failures"] == 1

    @pytest.mark.asyncio
    async def test_speech_must_be_text(self):
        logger = GameLogger(game_id="t")
        agent = ScriptedAgent(1, speeches=[SpeechResponse(speech=None)])
        player = Player(1, Role.VILLAGER, agent, logger=logger)

        assert await player.speak(make_context()) is None
        assert player.stats["failures"] == 1
        error = logger.get_entries(EventType.AGENT_ERROR, include_private=True)[0]
        assert "speech" in error.data["error"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("target", [True, "2", 2.0])
    async def test_vote_target_must_be_int(self, target):
        player = Player(1, Role.VILLAGER, ScriptedAgent(1, votes=[VoteResponse(target=target)]))

        assert await player.vote(make_context()) is None
        assert player.stats["failures"] == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("role,response", [
        (Role.WEREWOLF, WerewolfAbilityResponse(action="kill", target=True)),
        (Role.WEREWOLF, WerewolfAbilityResponse(action=None, target=3)),
        (Role.SEER, SeerAbilityResponse(target="3")),
        (Role.WITCH, WitchAbilityResponse(action="using", heal_target=False)),
        (Role.WITCH, WitchAbilityResponse(action="using", poison_target=[4])),
    ])
    async def test_ability_targets_must_be_seats(self, role, response):
        player = Player(1, role, ScriptedAgent(1, abilities=[response]))
        await player.start_game("g1")

        assert await player.use_ability(make_context()) is None
        assert player.stats["failures"] == 1

    @pytest.mark.asyncio
    async def test_abstaining_target_is_well_formed(self):
        player = Player(1, Role.VILLAGER, ScriptedAgent(1, votes=[VoteResponse(target=None)]))

        result = await player.vote(make_context())

        assert result is not None and result.target is None
        assert player.stats["failures"] == 0

    @pytest.mark.asyncio
    async def test_villager_has_no_ability(self):
        agent = ScriptedAgent(5, abilities=[3])
        villager = Player(5, Role.VILLAGER, agent)

        assert await villager.use_ability(make_context(5)) is None
        assert agent.contexts == []

    @pytest.mark.asyncio
    async def test_werewolf_ability(self):
        agent = ScriptedAgent(1, abilities=[4])
        wolf = Player(1, Role.WEREWOLF, agent)
        await wolf.start_game("g1", [1])

        result = await wolf.use_ability(make_context())
        assert isinstance(result, WerewolfAbilityResponse)
        assert result.is_kill and result.target == 4
