"""Scripted agent that replays canned responses."""

import asyncio
from collections import deque
from typing import Any, Dict, Iterable, List, Optional

from wgm.core.base_agent import BaseAgent
from wgm.core.types import Role
from wgm.engine.types import (
    AbilityResponse,
    PlayerContext,
    SeerAbilityResponse,
    SpeechResponse,
    StartGameParams,
    VoteResponse,
    WerewolfAbilityResponse,
    WitchAbilityResponse,
)


class ScriptedAgent(BaseAgent):
    """Agent whose answers are queued up front.

    Each call kind pops from its own queue. Queue entries may be:
        - a response object, returned as-is
        - an int, shorthand for a vote / kill / investigation target
        - a str, shorthand for a speech
        - None, the agent abstains
        - an Exception instance, raised to model a broken agent

    An exhausted queue abstains. ``delay`` (seconds) is awaited before every
    answer, which lets tests model a stalled agent against the decision
    timeout. Every context received is kept in ``contexts``.
    """

    def __init__(
        self,
        player_id: int,
        speeches: Iterable[Any] = (),
        votes: Iterable[Any] = (),
        abilities: Iterable[Any] = (),
        delay: float = 0.0,
        name: Optional[str] = None,
        personality: Optional[str] = None,
        config: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(player_id=player_id, name=name, personality=personality, config=config)
        self.speeches = deque(speeches)
        self.votes = deque(votes)
        self.abilities = deque(abilities)
        self.delay = delay

        self.start_params: Optional[StartGameParams] = None
        self.contexts: List[PlayerContext] = []

    async def start_game(self, params: StartGameParams) -> None:
        await super().start_game(params)
        self.start_params = params

    async def speak(self, context: PlayerContext) -> Optional[SpeechResponse]:
        entry = await self._next(self.speeches, context)
        if isinstance(entry, str):
            return SpeechResponse(speech=entry)
        return entry

    async def vote(self, context: PlayerContext) -> Optional[VoteResponse]:
        entry = await self._next(self.votes, context)
        if isinstance(entry, int):
            return VoteResponse(target=entry)
        return entry

    async def use_ability(self, context: PlayerContext) -> Optional[AbilityResponse]:
        entry = await self._next(self.abilities, context)
        if not isinstance(entry, int):
            return entry
        match self.role:
            case Role.WEREWOLF:
                return WerewolfAbilityResponse(action="kill", target=entry)
            case Role.SEER:
                return SeerAbilityResponse(target=entry)
            case Role.WITCH:
                return WitchAbilityResponse(action="using", heal_target=entry)
            case _:
                return None

    async def _next(self, queue: deque, context: PlayerContext) -> Any:
        self.contexts.append(context)
        if self.delay:
            await asyncio.sleep(self.delay)
        if not queue:
            return None
        entry = queue.popleft()
        if isinstance(entry, Exception):
            raise entry
        return entry

    def reset(self) -> None:
        super().reset()
        self.start_params = None
        self.contexts.clear()
