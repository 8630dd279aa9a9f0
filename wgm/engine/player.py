"""Seat handle wrapping one decision agent."""

import asyncio
from typing import Any, Awaitable, Dict, Optional

from wgm.core.base_agent import BaseAgent
from wgm.core.exceptions import InvalidActionError
from wgm.core.types import InvestigationResult, PlayerInfo, Role, Team
from wgm.engine.rules import get_team_for_role
from wgm.engine.types import (
    ABILITY_RESPONSE_TYPES,
    AbilityResponse,
    PlayerContext,
    RoleState,
    SeerAbilityResponse,
    SeerNotebook,
    SpeechResponse,
    StartGameParams,
    VoteResponse,
    WerewolfAbilityResponse,
    WitchAbilityResponse,
    WitchPotions,
    WolfPack,
)
from wgm.logging.game_logger import GameLogger


def initial_role_state(role: Role) -> RoleState:
    """Build the state carried by a seat of the given role."""
    match role:
        case Role.WEREWOLF:
            return WolfPack()
        case Role.SEER:
            return SeerNotebook()
        case Role.WITCH:
            return WitchPotions()
        case _:
            return None


def _is_seat(value: Any) -> bool:
    """Seat fields hold an int or None. bool is rejected: True == 1."""
    return value is None or (isinstance(value, int) and not isinstance(value, bool))


def malformed_field(result: Any) -> Optional[str]:
    """Name of the first field of a response with the wrong type, if any."""
    match result:
        case SpeechResponse(speech=speech) if not isinstance(speech, str):
            return "speech"
        case VoteResponse(target=target) if not _is_seat(target):
            return "target"
        case WerewolfAbilityResponse(action=action) if not isinstance(action, str):
            return "action"
        case WerewolfAbilityResponse(target=target) if not _is_seat(target):
            return "target"
        case SeerAbilityResponse(target=target) if not _is_seat(target):
            return "target"
        case WitchAbilityResponse(action=action) if not isinstance(action, str):
            return "action"
        case WitchAbilityResponse(heal_target=heal) if not _is_seat(heal):
            return "heal_target"
        case WitchAbilityResponse(poison_target=poison) if not _is_seat(poison):
            return "poison_target"
    return None


class Player:
    """One seat in the game.

    The seat owns its alive flag and role state, but only the game master
    mutates them. Every agent call goes through ``_ask`` which enforces the
    decision timeout and turns any failure into None (abstention).
    """

    def __init__(
        self,
        player_id: int,
        role: Role,
        agent: BaseAgent,
        decision_timeout: Optional[float] = 30.0,
        logger: Optional[GameLogger] = None,
        verbose: bool = False,
    ):
        """Initialize a seat.

        Args:
            player_id: Seat id (1-indexed)
            role: Role for the whole game
            agent: Decision agent answering for this seat
            decision_timeout: Seconds before a call counts as abstention
            logger: Optional GameLogger for agent failures
            verbose: Print agent failures to the console
        """
        self._id = player_id
        self._role = role
        self.agent = agent
        self.decision_timeout = decision_timeout
        self.logger = logger
        self.verbose = verbose

        self.is_alive = True
        self.state: RoleState = initial_role_state(role)

        self.stats: Dict[str, int] = {"calls": 0, "failures": 0, "timeouts": 0}

    @property
    def id(self) -> int:
        return self._id

    @property
    def role(self) -> Role:
        return self._role

    @property
    def team(self) -> Team:
        return get_team_for_role(self._role)

    @property
    def name(self) -> str:
        return self.agent.name

    def info(self) -> PlayerInfo:
        return PlayerInfo(id=self._id, is_alive=self.is_alive)

    # ------------------------------------------------------------------
    # Role-tagged state accessors
    # ------------------------------------------------------------------

    @property
    def potions(self) -> WitchPotions:
        if not isinstance(self.state, WitchPotions):
            raise InvalidActionError(f"Player {self._id} is not the witch")
        return self.state

    @property
    def notebook(self) -> SeerNotebook:
        if not isinstance(self.state, SeerNotebook):
            raise InvalidActionError(f"Player {self._id} is not the seer")
        return self.state

    @property
    def pack(self) -> WolfPack:
        if not isinstance(self.state, WolfPack):
            raise InvalidActionError(f"Player {self._id} is not a werewolf")
        return self.state

    # ------------------------------------------------------------------
    # Mutations (game master only)
    # ------------------------------------------------------------------

    def kill(self) -> bool:
        """Mark the seat dead. Returns True only on the first call."""
        if not self.is_alive:
            return False
        self.is_alive = False
        return True

    def use_heal(self, target: int) -> bool:
        """Spend the heal potion on ``target``. False if already spent."""
        potions = self.potions
        if not potions.has_heal:
            return False
        potions.heal_used_on = target
        return True

    def use_poison(self, target: int) -> bool:
        """Spend the poison potion on ``target``. False if already spent."""
        potions = self.potions
        if not potions.has_poison:
            return False
        potions.poison_used_on = target
        return True

    def record_investigation(self, round_number: int, result: InvestigationResult) -> None:
        self.notebook.investigations[round_number] = result

    # ------------------------------------------------------------------
    # Decision-agent calls
    # ------------------------------------------------------------------

    async def start_game(self, game_id: str, teammates=()) -> bool:
        """Tell the agent its role (and werewolf teammates)."""
        if isinstance(self.state, WolfPack):
            self.state.teammates = [t for t in teammates if t != self._id]
        params = StartGameParams(
            game_id=game_id,
            player_id=self._id,
            role=self._role,
            teammates=tuple(teammates),
            personality=self.agent.personality,
        )
        result = await self._ask("start_game", self.agent.start_game(params), expected=None)
        return result is not _FAILED

    async def speak(self, context: PlayerContext) -> Optional[SpeechResponse]:
        result = await self._ask("speak", self.agent.speak(context), expected=SpeechResponse)
        return None if result is _FAILED else result

    async def vote(self, context: PlayerContext) -> Optional[VoteResponse]:
        result = await self._ask("vote", self.agent.vote(context), expected=VoteResponse)
        return None if result is _FAILED else result

    async def use_ability(self, context: PlayerContext) -> Optional[AbilityResponse]:
        expected = ABILITY_RESPONSE_TYPES.get(self._role)
        if expected is None:
            return None
        result = await self._ask("use_ability", self.agent.use_ability(context), expected=expected)
        return None if result is _FAILED else result

    async def _ask(self, kind: str, call: Awaitable[Any], expected: Optional[type]) -> Any:
        """Await one agent call with timeout; failures become _FAILED."""
        self.stats["calls"] += 1
        try:
            if self.decision_timeout is None:
                result = await call
            else:
                result = await asyncio.wait_for(call, timeout=self.decision_timeout)
        except asyncio.TimeoutError:
            self.stats["timeouts"] += 1
            self._report(kind, f"timed out after {self.decision_timeout}s")
            return _FAILED
        except Exception as e:
            self.stats["failures"] += 1
            self._report(kind, f"{type(e).__name__}: {e}")
            return _FAILED

        if expected is not None and result is not None:
            if not isinstance(result, expected):
                self.stats["failures"] += 1
                self._report(kind, f"malformed response of type {type(result).__name__}")
                return _FAILED
            field_name = malformed_field(result)
            if field_name is not None:
                self.stats["failures"] += 1
                value = getattr(result, field_name)
                self._report(kind, f"malformed {field_name} {value!r} in {type(result).__name__}")
                return _FAILED
        return result

    def _report(self, kind: str, error: str) -> None:
        if self.verbose:
            print(f"      ⚠️  Player {self._id} {kind} failed: {error}")
        if self.logger:
            self.logger.log_agent_error(self._id, kind, error)

    def __str__(self) -> str:
        status = "alive" if self.is_alive else "dead"
        return f"Player({self._id}, {self._role.value}, {status})"

    def __repr__(self) -> str:
        return self.__str__()


class _Failed:
    """Sentinel distinguishing a failed call from a deliberate None."""

    def __repr__(self) -> str:
        return "<failed>"


_FAILED = _Failed()
