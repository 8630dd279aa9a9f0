"""Registry of running games, keyed by game id."""

from typing import Dict, List, Optional, Sequence

from wgm.core.base_agent import BaseAgent
from wgm.core.exceptions import ConfigurationError
from wgm.engine.config import GameConfig
from wgm.engine.game_master import GameMaster


class GameRegistry:
    """Holds GameMaster instances so several games can run side by side."""

    def __init__(self, default_config: Optional[GameConfig] = None):
        self.default_config = default_config or GameConfig()
        self._games: Dict[str, GameMaster] = {}

    def create_game(
        self,
        agents: Sequence[BaseAgent],
        config: Optional[GameConfig] = None,
        game_id: Optional[str] = None,
        **kwargs,
    ) -> GameMaster:
        """Create and register a new game.

        Raises:
            ConfigurationError: If a game with the same id is registered
        """
        if game_id is not None and game_id in self._games:
            raise ConfigurationError(f"Game {game_id} already exists")

        game = GameMaster(agents, config=config or self.default_config, game_id=game_id, **kwargs)
        self._games[game.game_id] = game
        return game

    def get(self, game_id: str) -> Optional[GameMaster]:
        return self._games.get(game_id)

    def remove(self, game_id: str) -> bool:
        return self._games.pop(game_id, None) is not None

    def list_ids(self) -> List[str]:
        return list(self._games)

    def __len__(self) -> int:
        return len(self._games)

    def __contains__(self, game_id: str) -> bool:
        return game_id in self._games
