"""Configuration for the Werewolf game master."""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Dict, Optional, Union

import yaml

from wgm.core.exceptions import ConfigurationError
from wgm.core.types import Role


# Seat count -> role counts used when no explicit composition is configured
DEFAULT_ROLE_TABLE: Dict[int, Dict[Role, int]] = {
    4: {Role.WEREWOLF: 1, Role.SEER: 1, Role.WITCH: 1, Role.VILLAGER: 1},
    5: {Role.WEREWOLF: 1, Role.SEER: 1, Role.WITCH: 1, Role.VILLAGER: 2},
    6: {Role.WEREWOLF: 2, Role.SEER: 1, Role.WITCH: 1, Role.VILLAGER: 2},
    7: {Role.WEREWOLF: 2, Role.SEER: 1, Role.WITCH: 1, Role.VILLAGER: 3},
    8: {Role.WEREWOLF: 2, Role.SEER: 1, Role.WITCH: 1, Role.VILLAGER: 4},
    9: {Role.WEREWOLF: 3, Role.SEER: 1, Role.WITCH: 1, Role.VILLAGER: 4},
    10: {Role.WEREWOLF: 3, Role.SEER: 1, Role.WITCH: 1, Role.VILLAGER: 5},
    11: {Role.WEREWOLF: 3, Role.SEER: 1, Role.WITCH: 1, Role.VILLAGER: 6},
    12: {Role.WEREWOLF: 4, Role.SEER: 1, Role.WITCH: 1, Role.VILLAGER: 6},
}


def get_role_counts(n_players: int) -> Dict[Role, int]:
    """Return the default role composition for a seat count.

    Raises:
        ConfigurationError: If the seat count has no default composition
    """
    if n_players not in DEFAULT_ROLE_TABLE:
        raise ConfigurationError(
            f"No default role table for {n_players} players",
            details={"supported": sorted(DEFAULT_ROLE_TABLE)},
        )
    return dict(DEFAULT_ROLE_TABLE[n_players])


def _parse_role_counts(raw: Dict[Union[str, Role], int]) -> Dict[Role, int]:
    counts = {}
    for key, value in raw.items():
        role = key if isinstance(key, Role) else Role(str(key).lower())
        counts[role] = int(value)
    return counts


@dataclass
class GameConfig:
    """Configuration for one game.

    Attributes:
        role_counts: Explicit role composition (defaults to DEFAULT_ROLE_TABLE)
        decision_timeout: Seconds to wait for any single decision-agent call
            before treating the seat as having abstained
        announcement_delay: Pause after each night role prompt, for narration
        max_rounds: Safety cap for run_to_completion()
        seed: Random seed for role assignment
        verbose: Print progress lines to the console
        log_private: Whether the GameLogger keeps private events
        log_dir: Directory for JSONL event logs (None for memory-only)
        transcript_dir: Directory for finalized game transcripts
    """
    role_counts: Optional[Dict[Role, int]] = None
    decision_timeout: float = 30.0
    announcement_delay: float = 0.0
    max_rounds: int = 50
    seed: Optional[int] = None
    verbose: bool = False
    log_private: bool = True
    log_dir: Optional[str] = None
    transcript_dir: Optional[str] = None

    def __post_init__(self):
        """Validate values."""
        if self.role_counts is not None:
            try:
                self.role_counts = _parse_role_counts(self.role_counts)
            except ValueError as e:
                raise ConfigurationError(f"Unknown role in role_counts: {e}")
            if any(count < 0 for count in self.role_counts.values()):
                raise ConfigurationError("Role counts cannot be negative")
            if self.role_counts.get(Role.WEREWOLF, 0) < 1:
                raise ConfigurationError("Need at least 1 werewolf")
        if self.decision_timeout is not None and self.decision_timeout <= 0:
            raise ConfigurationError("decision_timeout must be positive")
        if self.announcement_delay < 0:
            raise ConfigurationError("announcement_delay cannot be negative")
        if self.max_rounds < 1:
            raise ConfigurationError("max_rounds must be at least 1")

    def resolve_role_counts(self, n_players: int) -> Dict[Role, int]:
        """Role composition for ``n_players`` seats.

        Raises:
            ConfigurationError: If the composition does not fit the seat count
        """
        if self.role_counts is None:
            return get_role_counts(n_players)

        total = sum(self.role_counts.values())
        if total != n_players:
            raise ConfigurationError(
                f"role_counts cover {total} seats but the game has {n_players}",
                details={"role_counts": {r.value: c for r, c in self.role_counts.items()}},
            )
        return dict(self.role_counts)

    @classmethod
    def from_dict(cls, data: Dict) -> "GameConfig":
        """Build a config from a plain dict, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "GameConfig":
        """Load a config from a YAML file.

        Raises:
            ConfigurationError: If the file is missing or malformed
        """
        path = Path(path)
        if not path.exists():
            raise ConfigurationError(f"Config file not found: {path}")
        with open(path, 'r') as f:
            yaml_config = yaml.safe_load(f) or {}
        if not isinstance(yaml_config, dict):
            raise ConfigurationError(f"Config file must contain a mapping: {path}")
        return cls.from_dict(yaml_config)
