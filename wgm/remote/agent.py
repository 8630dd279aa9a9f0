"""Decision agent backed by the remote player service."""

from typing import Any, Callable, Dict, Optional, TypeVar

from wgm.core.base_agent import BaseAgent
from wgm.core.exceptions import AgentError
from wgm.engine.types import (
    ABILITY_RESPONSE_TYPES,
    AbilityResponse,
    PlayerContext,
    SpeechResponse,
    StartGameParams,
    VoteResponse,
)
from wgm.remote.client import PlayerServiceClient

T = TypeVar("T")


def parse_response(data: Dict[str, Any], parser: Callable[[Dict[str, Any]], T], kind: str) -> T:
    """Turn a decoded JSON body into a typed response.

    Raises:
        AgentError: If required fields are missing or have the wrong type
    """
    try:
        return parser(data)
    except (KeyError, TypeError, ValueError) as e:
        raise AgentError(f"Malformed {kind} response: {e}", details={"response": data})


class RemoteAgent(BaseAgent):
    """Forwards every decision to ``/api/players/{id}/...``.

    Errors surface as exceptions; the engine's Player wrapper turns them into
    abstentions.
    """

    def __init__(
        self,
        player_id: int,
        client: PlayerServiceClient,
        name: Optional[str] = None,
        personality: Optional[str] = None,
        config: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(player_id=player_id, name=name, personality=personality, config=config)
        self.client = client

    async def start_game(self, params: StartGameParams) -> None:
        await super().start_game(params)
        await self.client.start_game(params.player_id, params.to_dict())

    async def speak(self, context: PlayerContext) -> Optional[SpeechResponse]:
        data = await self.client.speak(context.player_id, context.to_dict())
        return parse_response(data, SpeechResponse.from_dict, "speak")

    async def vote(self, context: PlayerContext) -> Optional[VoteResponse]:
        data = await self.client.vote(context.player_id, context.to_dict())
        return parse_response(data, VoteResponse.from_dict, "vote")

    async def use_ability(self, context: PlayerContext) -> Optional[AbilityResponse]:
        response_type = ABILITY_RESPONSE_TYPES.get(self.role)
        if response_type is None:
            return None
        data = await self.client.use_ability(context.player_id, context.to_dict())
        return parse_response(data, response_type.from_dict, "use-ability")
