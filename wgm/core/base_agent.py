"""Base agent class for all decision-agent implementations."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from wgm.core.types import PlayerID, Role

if TYPE_CHECKING:
    from wgm.engine.types import (
        AbilityResponse,
        PlayerContext,
        SpeechResponse,
        StartGameParams,
        VoteResponse,
    )


class BaseAgent(ABC):
    """Abstract base class for all decision agents.

    An agent decides what one seat says, votes and does at night. Every call
    is awaited by the game master and may return None to abstain. Agents
    only ever receive read-only context snapshots.
    """

    def __init__(
        self,
        player_id: PlayerID,
        name: Optional[str] = None,
        personality: Optional[str] = None,
        config: Optional[Dict[str, Any]] = None,
    ):
        """Initialize agent.

        Args:
            player_id: Seat this agent plays (1-indexed)
            name: Human-readable name for the agent
            personality: Optional personality hint forwarded at game start
            config: Configuration dictionary for the agent
        """
        self.player_id = player_id
        self.name = name or f"Agent_{player_id}"
        self.personality = personality
        self.config = config or {}

        # Filled in by start_game()
        self.game_id: Optional[str] = None
        self.role: Optional[Role] = None
        self.teammates: List[PlayerID] = []

        self.metadata: Dict[str, Any] = {}

    async def start_game(self, params: "StartGameParams") -> None:
        """Receive role and (werewolves only) teammates at game start.

        Args:
            params: Start-of-game parameters
        """
        self.game_id = params.game_id
        self.role = params.role
        self.teammates = list(params.teammates)

    @abstractmethod
    async def speak(self, context: "PlayerContext") -> Optional["SpeechResponse"]:
        """Produce a public utterance for the day discussion.

        Args:
            context: Read-only game snapshot

        Returns:
            SpeechResponse, or None to stay silent
        """
        pass

    @abstractmethod
    async def vote(self, context: "PlayerContext") -> Optional["VoteResponse"]:
        """Choose a seat to eliminate.

        Args:
            context: Read-only game snapshot

        Returns:
            VoteResponse, or None to abstain
        """
        pass

    async def use_ability(self, context: "PlayerContext") -> Optional["AbilityResponse"]:
        """Declare a night action.

        Villagers have no ability, so the default is to do nothing.

        Args:
            context: Role-specific read-only snapshot

        Returns:
            Role-specific ability response, or None to abstain
        """
        return None

    def reset(self) -> None:
        """Reset agent state for a new game."""
        self.game_id = None
        self.role = None
        self.teammates = []
        self.metadata.clear()

    def get_stats(self) -> Dict[str, Any]:
        """Get statistics about this agent's behavior."""
        return {
            "player_id": self.player_id,
            "name": self.name,
            "role": self.role.value if self.role else None,
            "metadata": self.metadata,
        }

    def __str__(self) -> str:
        """String representation of the agent."""
        return f"{self.__class__.__name__}(id={self.player_id}, name={self.name})"

    def __repr__(self) -> str:
        """Repr representation of the agent."""
        return self.__str__()
